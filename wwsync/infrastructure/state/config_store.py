"""
File-based storage of the sync configuration
"""
import json
from pathlib import Path
from typing import Optional

from ...core.constants import CONFIG_PATH, CONFIG_JSON_INDENT
from ...core.exceptions import ConfigError
from ...core.logging import get_logger
from ...domain.config.models import WWConfig

logger = get_logger(__name__)


class ConfigStore:
    """
    JSON configuration file storage.
    
    A missing file reads as an empty configuration and is not created
    until something is saved.
    """
    
    def __init__(self, path: Optional[Path] = None):
        """
        Initialize config store.
        
        Args:
            path: Configuration file (default: ~/.wwsync)
        """
        self.path = Path(path or CONFIG_PATH).expanduser()
    
    def load(self) -> WWConfig:
        """Load configuration, empty if the file doesn't exist"""
        if not self.path.exists():
            logger.debug(f"{self.path} not found, using empty configuration")
            return WWConfig()
        
        try:
            text = self.path.read_text(encoding='utf-8')
        except UnicodeDecodeError as e:
            raise ConfigError(".wwsync file is corrupted (invalid JSON).") from e
        except OSError as e:
            raise ConfigError(f"Cannot read {self.path}: {e.strerror or e}") from e
        
        try:
            return WWConfig.from_dict(json.loads(text))
        except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as e:
            raise ConfigError(".wwsync file is corrupted (invalid JSON).") from e
    
    def save(self, config: WWConfig) -> None:
        """Write configuration"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(config.to_dict(), indent=CONFIG_JSON_INDENT),
            encoding='utf-8',
        )
        logger.debug(f"Saved configuration to {self.path}")
