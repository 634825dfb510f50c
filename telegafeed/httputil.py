"""A small HTTP client abstraction and a clock helper."""

from __future__ import annotations

import http
import urllib.error
import urllib.parse
import urllib.request
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class HttpResponse:
    """A complete HTTP response."""

    status: int
    reason: str = ""
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def status_text(self) -> str:
        """Status code followed by the reason phrase."""
        reason = self.reason
        if not reason:
            try:
                reason = http.HTTPStatus(self.status).phrase
            except ValueError:
                reason = ""
        return f"{self.status} {reason}".strip()


class HttpStatusError(Exception):
    """Raised when a response does not carry status 200."""

    def __init__(self, response: HttpResponse) -> None:
        super().__init__(f"status code does not indicate success: {response.status_text}")
        self.response = response


class HttpClient(ABC):
    """Performs HTTP requests."""

    @abstractmethod
    def request(self, method: str, url: str) -> HttpResponse:
        """Send a request and return the response, whatever its status."""


class UrllibHttpClient(HttpClient):
    """HTTP client backed by the standard library."""

    def __init__(self, timeout: float = 10.0) -> None:
        self.timeout = timeout

    def request(self, method: str, url: str) -> HttpResponse:
        req = urllib.request.Request(url, method=method)
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                return HttpResponse(
                    status=resp.status,
                    reason=resp.reason or "",
                    body=resp.read(),
                    headers=dict(resp.headers.items()),
                )
        except urllib.error.HTTPError as exc:
            with exc:
                headers = dict(exc.headers.items()) if exc.headers else {}
                return HttpResponse(
                    status=exc.code,
                    reason=str(exc.reason or ""),
                    body=exc.read(),
                    headers=headers,
                )


def fetch(client: HttpClient, method: str, url: str) -> HttpResponse:
    """Request ``url`` and return the response; raise HttpStatusError unless it is 200."""
    urllib.parse.urlsplit(url)
    response = client.request(method, url)
    if response.status != http.HTTPStatus.OK:
        raise HttpStatusError(response)
    return response


def now_utc() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(timezone.utc)