"""
Mapping resolver - picks the server and mapping for a local folder
"""
from dataclasses import dataclass
from typing import Callable, List, Optional

from ...core.constants import EXAMPLE_SERVER_ALIAS
from ...core.interfaces import PromptProvider
from ...core.logging import get_logger
from ...core.utils import normalize_path, list_ssh_hosts
from ...domain.session import SessionState
from .models import WWConfig, ServerConfig, Mapping

logger = get_logger(__name__)

ADD_NEW_SERVER = "Add new server..."
ENTER_ADDRESS_MANUALLY = "Enter address manually..."


@dataclass
class ServerSelection:
    config: WWConfig
    alias: str


@dataclass
class MappingSelection:
    config: WWConfig
    mapping: Mapping


def find_servers_for_path(config: WWConfig, local_path: str) -> List[str]:
    """Aliases having a mapping whose local folder is local_path"""
    normalized = normalize_path(local_path)
    matches = []
    
    for name, server in config.servers.items():
        if any(normalize_path(m.local) == normalized for m in server.mappings):
            matches.append(name)
    return matches


def find_mapping(server: ServerConfig, local_path: str) -> Optional[Mapping]:
    normalized = normalize_path(local_path)
    for mapping in server.mappings:
        if normalize_path(mapping.local) == normalized:
            return mapping
    return None


class MappingResolver:
    """
    Interactive server/mapping selection.
    
    Every question goes through the PromptProvider; a dismissed prompt
    aborts the selection and the methods return None. New servers and
    mappings are persisted through save_config as soon as they exist.
    """
    
    def __init__(
        self,
        prompts: PromptProvider,
        session: SessionState,
        save_config: Callable[[WWConfig], None],
        ssh_hosts: Callable[[], List[str]] = list_ssh_hosts,
    ):
        """
        Initialize resolver.
        
        Args:
            prompts: User interaction
            session: Session cache of server choices
            save_config: Persists the configuration after a change
            ssh_hosts: Source of ~/.ssh/config aliases offered as addresses
        """
        self.prompts = prompts
        self.session = session
        self.save_config = save_config
        self.ssh_hosts = ssh_hosts
    
    # --------------------
    # Server selection
    # --------------------
    def select_server(self, config: WWConfig, current_path: str) -> Optional[ServerSelection]:
        server_names = list(config.servers)
        
        if not server_names:
            if self.prompts.confirm("No .wwsync configuration found. Create one?", default=True):
                return self.create_server(config)
            return None
        
        if server_names == [EXAMPLE_SERVER_ALIAS]:
            if self.prompts.confirm("Only example configuration found. Create a new server?", default=True):
                return self.create_server(config)
        
        cached = self.session.get(current_path)
        if cached and cached in config.servers:
            logger.debug(f"Using session server '{cached}' for {current_path}")
            return ServerSelection(config, cached)
        
        matching = find_servers_for_path(config, current_path)
        
        if len(matching) == 1:
            self.session.set(current_path, matching[0])
            return ServerSelection(config, matching[0])
        
        if len(matching) > 1:
            picked = self._pick_server(
                config, matching,
                "Multiple servers found for this folder. Select one:",
            )
            if picked is None:
                return None
            if picked == ADD_NEW_SERVER:
                return self.create_server(config)
            
            if self.prompts.confirm("Remember this choice for the session?", default=True):
                self.session.set(current_path, picked)
            return ServerSelection(config, picked)
        
        if len(server_names) == 1:
            return ServerSelection(config, server_names[0])
        
        candidates = [name for name in server_names if name != EXAMPLE_SERVER_ALIAS]
        picked = self._pick_server(config, candidates, "Select a server:")
        if picked is None:
            return None
        if picked == ADD_NEW_SERVER:
            return self.create_server(config)
        return ServerSelection(config, picked)
    
    def _pick_server(self, config: WWConfig, names: List[str], message: str) -> Optional[str]:
        labels = {f"{name} ({config.servers[name].host})": name for name in names}
        choice = self.prompts.choose(message, [*labels, ADD_NEW_SERVER])
        if choice is None or choice == ADD_NEW_SERVER:
            return choice
        return labels[choice]
    
    def create_server(self, config: WWConfig) -> Optional[ServerSelection]:
        """Ask for alias and address, store the new server"""
        alias = None
        while alias is None:
            answer = self.prompts.prompt("Enter server alias (e.g. production, staging)")
            if answer is None:
                return None
            answer = answer.strip()
            if not answer:
                self.prompts.info("Server alias is required")
            elif answer in config.servers:
                self.prompts.info("Server with this name already exists")
            else:
                alias = answer
        
        host = self._ask_host()
        if not host:
            return None
        
        config.servers[alias] = ServerConfig(host=host, mappings=[])
        self.save_config(config)
        self.prompts.info(f"Server '{alias}' added to configuration.")
        logger.info(f"Added server '{alias}' ({host})")
        
        return ServerSelection(config, alias)
    
    def _ask_host(self) -> Optional[str]:
        hosts = self.ssh_hosts()
        if hosts:
            choice = self.prompts.choose(
                "Select a host from ~/.ssh/config:",
                [*hosts, ENTER_ADDRESS_MANUALLY],
            )
            if choice is None:
                return None
            if choice != ENTER_ADDRESS_MANUALLY:
                return choice
        
        while True:
            host = self.prompts.prompt("Enter connection address (e.g. user@192.168.1.10)")
            if host is None:
                return None
            if host.strip():
                return host.strip()
            self.prompts.info("Host address is required")
    
    # --------------------
    # Mapping selection
    # --------------------
    def select_or_create_mapping(
        self,
        config: WWConfig,
        alias: str,
        current_path: str,
    ) -> Optional[MappingSelection]:
        server = config.servers[alias]
        
        existing = find_mapping(server, current_path)
        if existing:
            return MappingSelection(config, existing)
        
        self.prompts.info(
            f"No sync configuration found for this folder on '{alias}'. Let's create one."
        )
        
        remote = None
        while not remote:
            answer = self.prompts.prompt("Enter remote destination path (e.g. /var/www/my-app)")
            if answer is None:
                return None
            remote = answer.strip()
            if not remote:
                self.prompts.info("Remote path is required")
        
        excludes_input = self.prompts.prompt(
            "Enter exclusions separated by commas (e.g. .git, node_modules)",
            default="",
        )
        excludes = parse_excludes(excludes_input or "")
        
        mapping = Mapping(local=current_path, remote=remote, excludes=excludes)
        server.mappings.append(mapping)
        self.save_config(config)
        self.prompts.info("Configuration saved!")
        
        return MappingSelection(config, mapping)


def parse_excludes(text: str) -> List[str]:
    """Split a comma-separated exclusion list, dropping blanks"""
    return [part.strip() for part in text.split(",") if part.strip()]
