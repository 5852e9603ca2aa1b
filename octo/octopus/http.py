"""HTTP transport for the Octopus Deploy REST API.

This module provides:
- HttpClient: Protocol for JSON requests (injectable for tests)
- RealHttpClient: urllib implementation authenticating with an API key
- MockHttpClient: canned responses keyed by method and path
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from http.client import HTTPException
from typing import Any, Protocol, runtime_checkable
from urllib.parse import urlsplit

from octo import __version__
from octo.core.config import DEFAULT_TIMEOUT_SECONDS
from octo.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "RealHttpClient",
    "MockHttpClient",
    "HttpError",
]

API_KEY_HEADER = "X-Octopus-ApiKey"


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Reason phrase or transport error
        body: Raw response body, when the server sent one
    """

    url: str
    status: int
    message: str
    body: str | None = None

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """JSON request/response operations against one server.

    Paths are server-relative (``/api/projects/all``) and may carry a query
    string.
    """

    def get_json(self, path: str) -> Result[Any, HttpError]: ...

    def post_json(self, path: str, body: dict[str, Any]) -> Result[Any, HttpError]: ...

    def close(self) -> None: ...


class RealHttpClient:
    """HTTP client using urllib with a single opener per session.

    Args:
        server: Base URL of the Octopus server (trailing slash allowed)
        api_key: Value sent in the X-Octopus-ApiKey header
        timeout: Per-request timeout in seconds
    """

    def __init__(
        self,
        server: str,
        api_key: str,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        user_agent: str = f"octo/{__version__}",
    ) -> None:
        self.server = server.rstrip("/")
        self.timeout = timeout
        self._headers = {
            API_KEY_HEADER: api_key,
            "Accept": "application/json",
            "User-Agent": user_agent,
        }
        self._opener: urllib.request.OpenerDirector | None = urllib.request.build_opener(
            urllib.request.HTTPSHandler(context=ssl.create_default_context())
        )

    def url_for(self, path: str) -> str:
        """Build an absolute URL, tolerating links that already carry the server's base path."""
        base_path = urlsplit(self.server).path.rstrip("/")
        if base_path and path.startswith(base_path + "/"):
            path = path[len(base_path) :]
        if not path.startswith("/"):
            path = "/" + path
        return self.server + path

    def _request(
        self, method: str, path: str, body: dict[str, Any] | None = None
    ) -> Result[Any, HttpError]:
        url = self.url_for(path)
        if self._opener is None:
            return Err(HttpError(url=url, status=0, message="Session is closed"))

        headers = dict(self._headers)
        data: bytes | None = None
        if body is not None:
            data = json.dumps(body).encode("utf-8")
            headers["Content-Type"] = "application/json"

        try:
            req = urllib.request.Request(url, data=data, headers=headers, method=method)
            with self._opener.open(req, timeout=self.timeout) as response:
                raw: bytes = response.read()
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason), body=_read_body(e)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except HTTPException as e:
            return Err(HttpError(url=url, status=0, message=f"Malformed response: {e!r}"))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

        if not raw:
            return Ok(None)
        try:
            return Ok(json.loads(raw.decode("utf-8")))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))

    def get_json(self, path: str) -> Result[Any, HttpError]:
        return self._request("GET", path)

    def post_json(self, path: str, body: dict[str, Any]) -> Result[Any, HttpError]:
        return self._request("POST", path, body)

    def close(self) -> None:
        if self._opener is not None:
            self._opener.close()
            self._opener = None


def _read_body(error: urllib.error.HTTPError) -> str | None:
    try:
        raw = error.read()
    except OSError:
        return None
    if not raw:
        return None
    return raw.decode("utf-8", errors="replace")


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        http = MockHttpClient()
        http.set_json("GET", "/api/projects/all", [{"Id": "Projects-1", "Name": "Checkout"}])
        result = http.get_json("/api/projects/all")
    """

    def __init__(self) -> None:
        self._responses: dict[tuple[str, str], Any] = {}
        self.calls: list[tuple[str, str]] = []
        self.bodies: list[dict[str, Any]] = []
        self.closed = False

    def set_json(self, method: str, path: str, response: Any) -> None:
        """Set the response (JSON value or HttpError) for method + path."""
        self._responses[(method, path)] = response

    def _respond(self, method: str, path: str) -> Result[Any, HttpError]:
        self.calls.append((method, path))
        key = (method, path)
        if key not in self._responses:
            return Err(HttpError(url=path, status=404, message="Not Found (mock)"))
        response = self._responses[key]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def get_json(self, path: str) -> Result[Any, HttpError]:
        return self._respond("GET", path)

    def post_json(self, path: str, body: dict[str, Any]) -> Result[Any, HttpError]:
        self.bodies.append(body)
        return self._respond("POST", path)

    def close(self) -> None:
        self.closed = True
