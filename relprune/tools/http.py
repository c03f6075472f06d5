"""HTTP client abstraction for the release API.

This module provides:
- HttpClient: Protocol for HTTP operations (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing
"""

from __future__ import annotations

import http.client
import json
import ssl
import urllib.error
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from relprune import __version__
from relprune.core.result import Err, Ok, Result
from relprune.core.structured import as_str_dict, get_str

__all__ = [
    "HttpClient",
    "RealHttpClient",
    "MockHttpClient",
    "HttpError",
    "DEFAULT_USER_AGENT",
]

DEFAULT_USER_AGENT = f"relprune/{__version__}"


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations.

    Lets tests swap in ``MockHttpClient`` so no real release is ever touched.
    """

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Result[object, HttpError]:
        """Send a request and decode the JSON body.

        Args:
            method: HTTP verb ("GET", "DELETE", ...)
            url: Absolute URL
            headers: Extra request headers

        Returns:
            Ok with the decoded body (None for an empty body), or Err with HttpError
        """
        ...


class RealHttpClient:
    """Real HTTP client using urllib.

    Handles:
    - HTTPS with system certificates
    - JSON decoding (empty bodies such as 204 decode to None)
    - Timeout handling
    """

    def __init__(self, timeout: float = 30.0, user_agent: str = DEFAULT_USER_AGENT) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def _send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str] | None,
    ) -> Result[bytes, HttpError]:
        merged = {"User-Agent": self.user_agent, "Content-Type": "application/json"}
        if headers:
            merged.update(headers)
        try:
            req = urllib.request.Request(url, headers=merged, method=method)
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(response.read())
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=_error_message(e)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except http.client.HTTPException as e:
            # Truncated bodies and malformed status lines.
            return Err(HttpError(url=url, status=0, message=str(e) or type(e).__name__))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Result[object, HttpError]:
        result = self._send(method, url, headers)
        if isinstance(result, Err):
            return result

        body = result.value
        if not body.strip():
            return Ok(None)
        try:
            data: object = json.loads(body.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))
        return Ok(data)


def _error_message(error: urllib.error.HTTPError) -> str:
    """Prefer the API's own ``message`` field over the bare reason phrase."""
    try:
        payload: object = json.loads(error.read().decode("utf-8"))
    except (OSError, ValueError):
        return str(error.reason)
    data = as_str_dict(payload)
    message = get_str(data, "message") if data is not None else None
    return message or str(error.reason)


class MockHttpClient:
    """Mock HTTP client for testing.

    Responses are keyed by (method, url). Unknown keys answer 404, like the
    real API does for a missing release.

    Usage:
        client = MockHttpClient()
        client.set_response("GET", url, [{"id": 1, "tag_name": "v1"}])
        client.set_response("DELETE", url, HttpError(url=url, status=403, message="nope"))
    """

    def __init__(self) -> None:
        self._responses: dict[tuple[str, str], object | HttpError] = {}
        self.calls: list[tuple[str, str]] = []
        self.headers: list[dict[str, str]] = []

    def set_response(self, method: str, url: str, response: object | HttpError) -> None:
        """Set the decoded body (or error) returned for method + url."""
        self._responses[(method.upper(), url)] = response

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Result[object, HttpError]:
        key = (method.upper(), url)
        self.calls.append(key)
        self.headers.append(dict(headers or {}))

        if key not in self._responses:
            return Err(HttpError(url=url, status=404, message="Not Found (mock)"))

        response = self._responses[key]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def calls_for(self, method: str) -> list[str]:
        """URLs requested with the given method, in call order."""
        return [url for m, url in self.calls if m == method.upper()]
