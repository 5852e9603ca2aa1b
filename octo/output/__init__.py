"""Console output for the CLI."""

from .console import ConsoleProtocol, MockConsole, OutputRecord, RichConsole, Style

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]
