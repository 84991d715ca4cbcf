"""
Per-invocation wiring of settings, session and services
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ...core.interfaces import OutputSink, PromptProvider
from ...domain.config import MappingResolver
from ...domain.session import SessionState
from ...domain.sync import SyncOrchestrator, SyncService
from ...infrastructure.state import ConfigStore
from ..config.loader import Settings
from .output import RichOutputSink
from .prompts import RichPromptProvider


@dataclass
class AppContext:
    """Everything a command needs; one SessionState per process"""
    settings: Settings = field(default_factory=Settings)
    session: SessionState = field(default_factory=SessionState)
    prompts: RichPromptProvider = field(default_factory=RichPromptProvider)
    sink: OutputSink = field(default_factory=RichOutputSink)
    
    @property
    def store(self) -> ConfigStore:
        return ConfigStore(Path(self.settings.config_path))
    
    def resolver(self, prompts: Optional[PromptProvider] = None) -> MappingResolver:
        return MappingResolver(
            prompts=prompts or self.prompts,
            session=self.session,
            save_config=self.store.save,
        )
    
    def sync_service(self, prompts: Optional[PromptProvider] = None) -> SyncService:
        """
        Wire a SyncService; prompts replaces the console prompts for the
        resolver and the password relay (e.g. an interruptible wrapper).
        """
        prompts = prompts or self.prompts
        
        def ask_password(prompt: str) -> Optional[str]:
            return prompts.prompt(prompt, password=True)
        
        orchestrator = SyncOrchestrator(sink=self.sink, executable=self.settings.rsync)
        return SyncService(
            store=self.store,
            resolver=self.resolver(prompts),
            orchestrator=orchestrator,
            session=self.session,
            ask_password=ask_password if self.settings.askpass else None,
        )
    