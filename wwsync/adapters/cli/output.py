"""
Console output channel
"""
from typing import Optional

from rich.console import Console

from ...core.interfaces import OutputSink
from ...core.logging import get_stdout_console


class RichOutputSink(OutputSink):
    """
    Writes rsync output to the console's file untouched.
    
    Rich rendering would drop the carriage returns rsync -P uses to redraw
    its progress line, so only the target file is taken from the console.
    """
    
    def __init__(self, console: Optional[Console] = None):
        self.console = console or get_stdout_console()
    
    def write(self, text: str) -> None:
        stream = self.console.file
        stream.write(text)
        stream.flush()
