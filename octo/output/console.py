"""Console output abstraction.

Services report progress through ``ConsoleProtocol`` rather than printing
directly, so the same workflow code runs against Rich in production and
against ``MockConsole`` in tests. Everything is written to standard output;
build agents capture a single stream.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    DIM = auto()  # progress detail, shown with --verbose
    HEADER = auto()


class ConsoleProtocol(Protocol):
    """Styled text output used by commands and services."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...

    def debug(self, message: str) -> None:
        """Print a dimmed progress line, only when verbose output is enabled."""
        ...


class RichConsole:
    """Production console backed by Rich."""

    def __init__(self, *, verbose: bool = False) -> None:
        # Import Rich lazily to keep `--help` fast
        from rich.console import Console

        # Server messages are printed as-is: never wrapped, never read as markup.
        self._console = Console(highlight=False, soft_wrap=True)
        self.verbose = verbose
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.DIM: "dim",
            Style.HEADER: "blue bold",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._style_map.get(style, "")
        if rich_style:
            self._console.print(message, style=rich_style, markup=False)
        else:
            self._console.print(message, markup=False)

    def _prefixed(self, prefix: str, style: str, message: str) -> None:
        from rich.text import Text

        self._console.print(Text.assemble((prefix, style), " ", message))

    def success(self, message: str) -> None:
        self._prefixed("OK", "green", message)

    def error(self, message: str) -> None:
        self._prefixed("error:", "red bold", message)

    def header(self, message: str) -> None:
        self._console.print(message, style="blue bold", markup=False)

    def debug(self, message: str) -> None:
        if self.verbose:
            self.print(message, Style.DIM)


@dataclass
class OutputRecord:
    """A single line captured by MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console that captures output for assertions.

    Debug lines are always captured so tests can check progress reporting.
    """

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def header(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    def debug(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.DIM))

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_success(self) -> bool:
        return any(o.style == Style.SUCCESS for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]

    def count(self, style: Style) -> int:
        return sum(1 for o in self.outputs if o.style == style)
