"""
Settings loader with priority: CLI > env > TOML > defaults
"""
import os
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, Any, Optional

from ...core.constants import (
    CONFIG_PATH,
    SETTINGS_PATH,
    DEFAULT_RSYNC,
    DEFAULT_SSH,
    DEFAULT_SHELL,
)
from ...core.exceptions import ConfigError


@dataclass
class Settings:
    """Tool settings (not the server configuration)"""
    config_path: str = CONFIG_PATH
    rsync: str = DEFAULT_RSYNC
    ssh: str = DEFAULT_SSH
    askpass: bool = True
    show_status: bool = True
    default_shell: str = DEFAULT_SHELL
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """
        Build settings, ignoring unknown keys and None values.
        
        Raises:
            ConfigError: If a value has the wrong type
        """
        values = {}
        for f in fields(cls):
            value = data.get(f.name)
            if value is None:
                continue
            if isinstance(f.default, bool):
                values[f.name] = _as_bool(f.name, value)
            elif isinstance(value, (str, int)) and not isinstance(value, bool):
                values[f.name] = str(value)
            else:
                raise ConfigError(f"Setting '{f.name}' must be a string, got {value!r}")
        return cls(**values)


TRUE_VALUES = ("true", "yes", "on", "1")
FALSE_VALUES = ("false", "no", "off", "0")


def _as_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        if value.strip().lower() in TRUE_VALUES:
            return True
        if value.strip().lower() in FALSE_VALUES:
            return False
    raise ConfigError(f"Setting '{name}' must be a boolean, got {value!r}")


class ConfigLoader:
    """Settings loader with priority support"""
    
    def __init__(self):
        self._env_prefix = "WWSYNC_"
    
    def load_toml(self, path: Path) -> Dict[str, Any]:
        """Load TOML settings file"""
        if not path.exists():
            raise ConfigError(f"Settings file not found: {path}")
        
        try:
            return tomllib.loads(path.read_text(encoding='utf-8'))
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Failed to parse TOML settings: {e}") from e
    
    def load_env(self) -> Dict[str, Any]:
        """Load settings from environment variables"""
        config = {}
        
        env_mappings = {
            "WWSYNC_CONFIG": "config_path",
            "WWSYNC_RSYNC": "rsync",
            "WWSYNC_SSH": "ssh",
            "WWSYNC_ASKPASS": "askpass",
            "WWSYNC_SHOW_STATUS": "show_status",
            "WWSYNC_DEFAULT_SHELL": "default_shell",
        }
        
        for env_key, config_key in env_mappings.items():
            value = os.getenv(env_key)
            if value:
                config[config_key] = self._convert_value(value)
        
        return config
    
    def _convert_value(self, value: str) -> Any:
        """Convert string value to appropriate type"""
        if value.lower() in TRUE_VALUES:
            return True
        if value.lower() in FALSE_VALUES:
            return False
        
        try:
            return int(value)
        except ValueError:
            pass
        
        return value
    
    def merge_configs(self, *configs: Dict[str, Any]) -> Dict[str, Any]:
        """Later configs override earlier ones"""
        result: Dict[str, Any] = {}
        for config in configs:
            result.update({k: v for k, v in config.items() if v is not None})
        return result
    
    def load(
        self,
        toml_path: Optional[Path] = None,
        cli_overrides: Optional[Dict[str, Any]] = None,
        use_env: bool = True,
    ) -> Settings:
        """
        Load settings.
        
        Args:
            toml_path: Settings file; the default location is used when it
                exists and no path is given
            cli_overrides: CLI parameter overrides (highest priority)
            use_env: Whether to load from environment variables
        
        Returns:
            Merged Settings
        """
        configs = []
        
        if toml_path is not None:
            configs.append(self.load_toml(Path(toml_path).expanduser()))
        else:
            default_path = Path(SETTINGS_PATH).expanduser()
            if default_path.exists():
                configs.append(self.load_toml(default_path))
        
        if use_env:
            env_config = self.load_env()
            if env_config:
                configs.append(env_config)
        
        if cli_overrides:
            configs.append(cli_overrides)
        
        return Settings.from_dict(self.merge_configs(*configs))
