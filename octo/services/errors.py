from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

OctopusErrorKind = Literal[
    "missing_parameter",
    "not_found",
    "remote_failure",
    "invalid_config",
]


@dataclass(frozen=True, slots=True)
class OctopusError:
    """Failure of a release or promote workflow step.

    ``detail`` holds verbatim diagnostics from the server (its error list or
    raw response body) and is printed as-is under the message.
    """

    kind: OctopusErrorKind
    message: str
    hint: str | None = None
    detail: str | None = None


def not_found(entity: str, key: str, *, hint: str | None = None) -> OctopusError:
    return OctopusError(kind="not_found", message=f"{entity} not found: {key}", hint=hint)


def missing_parameter(label: str) -> OctopusError:
    return OctopusError(
        kind="missing_parameter",
        message=f"{label} parameter must be passed.",
    )


def invalid_config(message: str, path: Path | None = None) -> OctopusError:
    return OctopusError(
        kind="invalid_config",
        message=message,
        hint=f"config file: {path}" if path is not None else None,
    )
