"""Typed configuration loading.

The server URL, API key and request timeout can be stored in ``octo.toml`` so
pipelines do not have to repeat them on every invocation:

    [server]
    url = "https://octopus.example.com"
    api_key = "API-XXXXXXXX"
    timeout = 30

Command-line options and environment variables take precedence over the file.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_number, get_str, get_table

__all__ = [
    "Config",
    "ServerConfig",
    "ConfigError",
    "load_config",
    "load_config_or_default",
    "DEFAULT_CONFIG_FILENAME",
    "DEFAULT_TIMEOUT_SECONDS",
]

DEFAULT_CONFIG_FILENAME = "octo.toml"
DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Connection settings for the Octopus Deploy server."""

    url: str | None = None
    api_key: str | None = None
    timeout: float = DEFAULT_TIMEOUT_SECONDS


@dataclass(frozen=True, slots=True)
class Config:
    server: ServerConfig = field(default_factory=ServerConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        server: StrDict = get_table(data, "server") or {}

        timeout = get_number(server, "timeout")
        if timeout is not None and timeout <= 0:
            raise ValueError(f"server.timeout must be positive, got {timeout}")

        return cls(
            server=ServerConfig(
                url=get_str(server, "url"),
                api_key=get_str(server, "api_key"),
                timeout=timeout or DEFAULT_TIMEOUT_SECONDS,
            )
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to the config file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Like load_config, but a missing file yields the default Config.

    A file that exists but cannot be parsed is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
