"""Process exit codes.

The release and promote commands are used from build pipelines, which only
distinguish success from failure. Every failure (missing parameter, lookup
miss, remote error) therefore exits with the same code.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands. Values are stable."""

    OK = 0
    FAILURE = 1
