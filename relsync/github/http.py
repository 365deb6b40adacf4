"""HTTP transport for the GitHub REST API.

This module provides:
- HttpClient: Protocol for HTTP operations (injectable for tests)
- RealHttpClient: Real implementation using urllib, with token auth and retry
- MockHttpClient: Mock implementation for testing
"""

from __future__ import annotations

import json
import re
import ssl
import urllib.error
import urllib.request
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from time import sleep
from typing import Protocol, runtime_checkable

from relsync import __version__
from relsync.core.result import Err, Ok, Result
from relsync.core.structured import as_str_dict, get_str
from relsync.github.timeouts import (
    API_TIMEOUT_SECONDS,
    RETRY_AFTER_CAP_SECONDS,
    RETRY_ATTEMPTS,
    RETRY_DELAY_SECONDS,
)

__all__ = [
    "HttpClient",
    "HttpCall",
    "HttpError",
    "HttpResponse",
    "MockHttpClient",
    "RealHttpClient",
    "TRANSIENT_STATUSES",
]

TRANSIENT_STATUSES = frozenset({429, 500, 502, 503, 504})
_IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "PUT", "PATCH", "DELETE"})
_NEXT_LINK = re.compile(r'<([^>]+)>\s*;\s*rel="next"')


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

    @property
    def is_transient(self) -> bool:
        return self.status == 0 or self.status in TRANSIENT_STATUSES

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@dataclass(frozen=True, slots=True)
class HttpResponse:
    status: int
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)
    url: str = ""

    def header(self, name: str) -> str | None:
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

    def json(self) -> Result[object, HttpError]:
        if not self.body:
            return Ok(None)
        try:
            return Ok(json.loads(self.body.decode("utf-8")))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=self.url, status=0, message=f"JSON parse error: {e}"))

    def next_link(self) -> str | None:
        """Return the rel="next" URL from the Link header, if any."""
        link = self.header("Link")
        if not link:
            return None
        match = _NEXT_LINK.search(link)
        return match.group(1) if match else None


@dataclass(frozen=True, slots=True)
class HttpCall:
    """One request as seen by MockHttpClient."""

    method: str
    url: str
    json_body: object | None = None
    data: bytes | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    timeout: float | None = None


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations.

    Implementations return ``Err(HttpError)`` for any non-2xx status and for
    network failures; they never raise.
    """

    def request(
        self,
        method: str,
        url: str,
        *,
        json_body: object | None = None,
        data: bytes | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> Result[HttpResponse, HttpError]:
        """Perform one request.

        Args:
            method: HTTP verb
            url: Absolute URL
            json_body: Object serialized as the JSON request body
            data: Raw request body (used for asset uploads)
            headers: Extra headers, merged over the defaults
            timeout: Per-request timeout override in seconds

        Returns:
            Ok with the response, or Err with HttpError
        """
        ...


def _error_message(body: bytes, fallback: str) -> str:
    # GitHub error bodies look like {"message": "...", "errors": [...]}
    try:
        obj: object = json.loads(body.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return fallback
    data = as_str_dict(obj)
    if data is None:
        return fallback
    message = get_str(data, "message")
    errors = data.get("errors")
    if message and errors:
        return f"{message}: {json.dumps(errors)}"
    return message or fallback


def _retry_after_seconds(headers: Mapping[str, str] | None) -> float | None:
    if not headers:
        return None
    for key, value in headers.items():
        if key.lower() == "retry-after":
            try:
                return min(float(value), RETRY_AFTER_CAP_SECONDS)
            except ValueError:
                return None
    return None


class RealHttpClient:
    """HTTP client using urllib against the GitHub REST API.

    Handles:
    - Token authentication and GitHub media type headers
    - JSON request bodies and raw upload bodies
    - Bounded retry on 429/5xx (all methods) and network errors (idempotent methods)
    """

    def __init__(
        self,
        token: str,
        *,
        timeout: float = API_TIMEOUT_SECONDS,
        retry_attempts: int = RETRY_ATTEMPTS,
        retry_delay: float = RETRY_DELAY_SECONDS,
        user_agent: str = f"relsync/{__version__}",
        sleeper: Callable[[float], None] = sleep,
    ) -> None:
        self.timeout = timeout
        self.retry_attempts = max(1, retry_attempts)
        self.retry_delay = retry_delay
        self.user_agent = user_agent
        self._token = token
        self._sleep = sleeper
        self._ssl_context = ssl.create_default_context()

    def _default_headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self._token}",
            "User-Agent": self.user_agent,
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def _send(
        self,
        method: str,
        url: str,
        body: bytes | None,
        headers: dict[str, str],
        timeout: float,
    ) -> tuple[Result[HttpResponse, HttpError], dict[str, str] | None]:
        req = urllib.request.Request(url, data=body, headers=headers, method=method)
        try:
            with urllib.request.urlopen(req, timeout=timeout, context=self._ssl_context) as resp:
                return (
                    Ok(
                        HttpResponse(
                            status=resp.status,
                            body=resp.read(),
                            headers=dict(resp.headers.items()),
                            url=url,
                        )
                    ),
                    None,
                )
        except urllib.error.HTTPError as e:
            payload = e.read() if e.fp is not None else b""
            err_headers = dict(e.headers.items()) if e.headers is not None else None
            message = _error_message(payload, str(e.reason))
            return Err(HttpError(url=url, status=e.code, message=message)), err_headers
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason))), None
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out")), None
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e))), None

    def request(
        self,
        method: str,
        url: str,
        *,
        json_body: object | None = None,
        data: bytes | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> Result[HttpResponse, HttpError]:
        method = method.upper()
        merged = self._default_headers()
        body = data
        if json_body is not None:
            body = json.dumps(json_body).encode("utf-8")
            merged["Content-Type"] = "application/json"
        if headers:
            merged.update(headers)

        result: Result[HttpResponse, HttpError] = Err(
            HttpError(url=url, status=0, message="request not attempted")
        )
        for attempt in range(self.retry_attempts):
            result, err_headers = self._send(method, url, body, merged, timeout or self.timeout)
            if isinstance(result, Ok):
                return result

            error = result.error
            # network errors may have reached the server; only resend idempotent calls
            retryable = error.is_transient and (error.status != 0 or method in _IDEMPOTENT_METHODS)
            if not retryable or attempt == self.retry_attempts - 1:
                return result

            delay = _retry_after_seconds(err_headers)
            self._sleep(delay if delay is not None else self.retry_delay * (attempt + 1))

        return result


class MockHttpClient:
    """Mock HTTP client for testing.

    Responses are queued per (method, url); each request consumes the next
    queued response, and the last one is reused once the queue runs dry.

    Usage:
        client = MockHttpClient()
        client.add_json("GET", "https://api.github.com/repos/o/r/tags", [{"name": "v1"}])
        result = client.request("GET", "https://api.github.com/repos/o/r/tags")
    """

    def __init__(self) -> None:
        self._responses: dict[tuple[str, str], list[HttpResponse | HttpError]] = {}
        self.calls: list[HttpCall] = []

    def add(self, method: str, url: str, response: HttpResponse | HttpError) -> None:
        self._responses.setdefault((method.upper(), url), []).append(response)

    def add_json(
        self,
        method: str,
        url: str,
        payload: object,
        *,
        status: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        body = json.dumps(payload).encode("utf-8")
        self.add(
            method,
            url,
            HttpResponse(status=status, body=body, headers=dict(headers or {}), url=url),
        )

    def request(
        self,
        method: str,
        url: str,
        *,
        json_body: object | None = None,
        data: bytes | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> Result[HttpResponse, HttpError]:
        method = method.upper()
        self.calls.append(
            HttpCall(
                method=method,
                url=url,
                json_body=json_body,
                data=data,
                headers=dict(headers or {}),
                timeout=timeout,
            )
        )

        queue = self._responses.get((method, url))
        if not queue:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def calls_for(self, method: str) -> list[HttpCall]:
        return [c for c in self.calls if c.method == method.upper()]
