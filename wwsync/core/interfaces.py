"""
Core interfaces for dependency injection
"""
from abc import ABC, abstractmethod
from typing import Optional, Sequence


class PromptProvider(ABC):
    """User prompt interface"""
    
    @abstractmethod
    def prompt(self, message: str, default: Optional[str] = None, password: bool = False) -> Optional[str]:
        """Prompt user for input, None if the user dismissed the prompt"""
        pass
    
    @abstractmethod
    def confirm(self, message: str, default: bool = False) -> bool:
        """Prompt user for confirmation"""
        pass
    
    @abstractmethod
    def choose(self, message: str, options: Sequence[str]) -> Optional[str]:
        """Let the user pick one of options, None if dismissed"""
        pass
    
    def info(self, message: str) -> None:
        """Display info message"""
        pass


class OutputSink(ABC):
    """Destination for live command output (the output channel)"""
    
    @abstractmethod
    def write(self, text: str) -> None:
        """Append raw text as it arrives"""
        pass
    
    def write_line(self, text: str = "") -> None:
        """Append a full line"""
        self.write(text + "\n")


class NullSink(OutputSink):
    """Sink that discards everything"""
    
    def write(self, text: str) -> None:
        pass


class BufferSink(OutputSink):
    """Sink that keeps everything in memory"""
    
    def __init__(self):
        self.chunks: list[str] = []
    
    def write(self, text: str) -> None:
        self.chunks.append(text)
    
    @property
    def text(self) -> str:
        return "".join(self.chunks)
