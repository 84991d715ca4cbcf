"""
Rich-based user prompts
"""
from typing import Optional, Sequence
from rich.console import Console
from rich.prompt import Prompt, Confirm

from ...core.interfaces import PromptProvider
from ...core.logging import get_stdout_console


class RichPromptProvider(PromptProvider):
    """
    Rich-based prompt provider.
    
    Ctrl-C or end of input dismisses a prompt: prompt() and choose()
    return None, confirm() returns False.
    """
    
    def __init__(self, console: Optional[Console] = None):
        self.console = console or get_stdout_console()
    
    def prompt(self, message: str, default: Optional[str] = None, password: bool = False) -> Optional[str]:
        """Prompt user for input"""
        try:
            return Prompt.ask(message, password=password, default=default, console=self.console)
        except (KeyboardInterrupt, EOFError):
            self.console.print()
            return None
    
    def confirm(self, message: str, default: bool = False) -> bool:
        """Prompt user for confirmation"""
        try:
            return Confirm.ask(message, default=default, console=self.console)
        except (KeyboardInterrupt, EOFError):
            self.console.print()
            return False
    
    def choose(self, message: str, options: Sequence[str]) -> Optional[str]:
        """Numbered menu, returns the picked option"""
        if not options:
            return None
        
        self.console.print(f"[bold]{message}[/bold]")
        for index, option in enumerate(options, start=1):
            self.console.print(f"  [cyan]{index}[/cyan]) {option}", highlight=False)
        
        choices = [str(i) for i in range(1, len(options) + 1)]
        try:
            answer = Prompt.ask("Select", choices=choices, console=self.console)
        except (KeyboardInterrupt, EOFError):
            self.console.print()
            return None
        return options[int(answer) - 1]
    
    def info(self, message: str) -> None:
        """Display info message"""
        self.console.print(f"[cyan]ℹ[/cyan] {message}")
    
    def error(self, message: str) -> None:
        """Display error message"""
        self.console.print(f"[red]✗[/red] {message}")
