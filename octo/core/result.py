"""Result type for the resolve -> build -> submit chain.

Every remote lookup and every create call returns either ``Ok(value)`` or
``Err(error)``. Callers short-circuit on the first ``Err``:

    project = find_project_by_name(client, "Checkout")
    if isinstance(project, Err):
        return project
    release = build_release(client, project.value, "1.2.3", None, console=console)

Pattern matching works as well:

    match find_environment_by_name(client, "Staging"):
        case Ok(environment):
            ...
        case Err(error):
            console.error(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful step carrying its value."""

    value: T

    def unwrap(self) -> T:
        return self.value

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed step carrying its error."""

    error: E

    def unwrap(self) -> None:
        """Raises ValueError: an Err carries no value."""
        raise ValueError(f"called unwrap on Err: {self.error}")

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Union[Ok[T], Err[E]]
