"""
Sync domain service - resolve, relay credentials, orchestrate
"""
from dataclasses import dataclass
from typing import Callable, Optional, TYPE_CHECKING

from ...core.cancellation import CancellationToken
from ...core.exceptions import AskPassError, SyncError
from ...core.logging import get_logger
from ..askpass import AskPassRelay, AskPassword
from ..config import MappingResolver, ServerConfig, Mapping
from ..session import SessionState
from .models import SyncTarget, ExecutionOutcome
from .orchestrator import SyncOrchestrator, ConfirmCallback

if TYPE_CHECKING:
    from ...infrastructure.state.config_store import ConfigStore

logger = get_logger(__name__)


@dataclass
class ResolvedTarget:
    """Server and mapping chosen for a local folder"""
    alias: str
    server: ServerConfig
    mapping: Mapping
    
    def to_target(self) -> SyncTarget:
        return SyncTarget(
            local_root=self.mapping.local,
            remote_root=self.mapping.remote,
            host=self.server.host,
            exclude_patterns=tuple(self.mapping.excludes),
        )


class SyncService:
    """
    Sync service - the whole safe/full sync use case.
    
    Resolves the server and mapping for a folder, starts the credential
    relay around the rsync invocations and hands back the orchestrator's
    outcome. No dependency on Typer or Rich; UI comes in through the
    resolver's PromptProvider and the callbacks.
    """
    
    def __init__(
        self,
        store: "ConfigStore",
        resolver: MappingResolver,
        orchestrator: SyncOrchestrator,
        session: SessionState,
        ask_password: Optional[AskPassword] = None,
        on_target: Optional[Callable[[ResolvedTarget], None]] = None,
        on_outcome: Optional[Callable[[ExecutionOutcome], None]] = None,
    ):
        """
        Initialize sync service.
        
        Args:
            store: Configuration storage (load/save)
            resolver: Server and mapping selection
            orchestrator: Runs rsync
            session: Session context shared with the resolver and relay
            ask_password: Enables the credential relay when given
            on_target: Callback once the target is resolved
            on_outcome: Callback with the final outcome
        """
        self.store = store
        self.resolver = resolver
        self.orchestrator = orchestrator
        self.session = session
        self.ask_password = ask_password
        self.on_target = on_target
        self.on_outcome = on_outcome
    
    def resolve(self, current_path: str) -> Optional[ResolvedTarget]:
        """
        Pick server and mapping for current_path.
        
        Returns:
            None if the user aborted any of the questions
        """
        config = self.store.load()
        
        selection = self.resolver.select_server(config, current_path)
        if selection is None:
            return None
        
        server = selection.config.servers.get(selection.alias)
        if server is None:
            raise SyncError(f"Unknown server alias: {selection.alias}")
        
        mapping_selection = self.resolver.select_or_create_mapping(
            selection.config, selection.alias, current_path
        )
        if mapping_selection is None:
            return None
        
        return ResolvedTarget(
            alias=selection.alias,
            server=server,
            mapping=mapping_selection.mapping,
        )
    
    def sync(
        self,
        current_path: str,
        mirror: bool,
        confirm: Optional[ConfirmCallback] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Optional[ExecutionOutcome]:
        """
        Execute safe (mirror=False) or full (mirror=True) sync.
        
        Returns:
            Outcome, or None if target resolution was aborted
        
        Raises:
            SyncError: If a full sync is requested without confirm
            ConfigError: If the configuration file is corrupted
        """
        if mirror and confirm is None:
            raise SyncError("Full sync requires a confirmation callback")
        
        resolved = self.resolve(current_path)
        if resolved is None:
            logger.debug("Target resolution aborted by user")
            return None
        
        if self.on_target:
            self.on_target(resolved)
        
        target = resolved.to_target()
        relay = (
            AskPassRelay(self.session, self.ask_password, cancel_token)
            if self.ask_password else None
        )
        env = None
        
        try:
            if relay:
                try:
                    env = relay.prepare()
                except AskPassError as e:
                    logger.warning(f"{e}; continuing without password relay")
            
            if mirror:
                outcome = self.orchestrator.run_mirroring(target, confirm, cancel_token, env)
            else:
                outcome = self.orchestrator.run_non_destructive(target, cancel_token, env)
        finally:
            if relay:
                relay.cleanup()
        
        if self.on_outcome:
            self.on_outcome(outcome)
        return outcome
