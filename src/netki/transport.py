"""HTTP transport for the Netki partner API.

Every call is signed for the client's credential mode, sent once, and its
JSON envelope checked. Server-reported failures become :class:`APIError`.
"""

from __future__ import annotations

import http.client
import json
import logging
import urllib.error
import urllib.request
from typing import Any, Callable, Optional

from netki.credentials import CredentialContext
from netki.errors import APIError, ResponseFormatError, TransportError, UnsupportedMethodError
from netki.http_signatures import request_headers
from netki.types import HttpResponse

log = logging.getLogger(__name__)

SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE")
HTTP_NO_CONTENT = 204
HTTP_MULTIPLE_CHOICES = 300

Fetcher = Callable[[str, str, dict[str, str], Optional[bytes]], HttpResponse]


def _resolve_url(value: str, base: str) -> str:
    if value.startswith("http://") or value.startswith("https://"):
        return value
    return f"{base.rstrip('/')}/{value.lstrip('/')}"


def _decode(raw: bytes) -> str:
    # undecodable bytes must not hide the HTTP status from parse_envelope
    return raw.decode("utf-8", errors="replace")


def urllib_fetcher(timeout: float | None = None) -> Fetcher:
    """Fetcher backed by ``urllib.request``.

    HTTP error statuses come back as responses so their envelope can be read;
    anything that prevents a response is a :class:`TransportError`.
    """

    def fetch(url: str, method: str, headers: dict[str, str], body: bytes | None) -> HttpResponse:
        request = urllib.request.Request(url, method=method, headers=headers, data=body)
        kwargs: dict[str, Any] = {}
        if timeout is not None:
            kwargs["timeout"] = timeout
        try:
            try:
                with urllib.request.urlopen(request, **kwargs) as response:
                    return HttpResponse(status=response.status, body=_decode(response.read()))
            except urllib.error.HTTPError as error:
                return HttpResponse(status=error.code, body=_decode(error.read()))
        except (urllib.error.URLError, http.client.HTTPException, OSError) as error:
            raise TransportError(f"HTTP Request Failed: {error}") from error

    return fetch


def _failure_messages(raw: Any) -> list[str] | None:
    if not isinstance(raw, list):
        return None
    messages: list[str] = []
    for entry in raw:
        if isinstance(entry, dict):
            messages.append(str(entry.get("message", "")))
        else:
            messages.append(str(entry))
    return messages


def parse_envelope(method: str, response: HttpResponse) -> str:
    """Check a response envelope and return the raw body on success."""
    if method == "DELETE" and response.status == HTTP_NO_CONTENT:
        return ""

    try:
        data = json.loads(response.body)
    except json.JSONDecodeError as error:
        if response.status >= HTTP_MULTIPLE_CHOICES:
            raise APIError(f"HTTP {response.status}", status=response.status) from error
        raise ResponseFormatError(f"Response is not valid JSON: {error}") from error

    if not isinstance(data, dict):
        if response.status >= HTTP_MULTIPLE_CHOICES:
            raise APIError(f"HTTP {response.status}", status=response.status)
        raise ResponseFormatError("Response JSON must be an object")

    if response.status >= HTTP_MULTIPLE_CHOICES or data.get("success") is not True:
        message = data.get("message")
        error = APIError(
            str(message) if message is not None else f"HTTP {response.status}",
            failures=_failure_messages(data.get("failures")),
            status=response.status,
        )
        log.warning("Netki API error (HTTP %s): %s", response.status, error)
        raise error

    return response.body


class Transport:
    def __init__(
        self,
        credentials: CredentialContext,
        api_url: str,
        *,
        fetcher: Fetcher | None = None,
        timeout: float | None = None,
    ):
        self.credentials = credentials
        self.api_url = api_url
        self._fetcher = fetcher or urllib_fetcher(timeout)

    def send(self, method: str, path: str, body: str | None = None) -> str:
        if method not in SUPPORTED_METHODS:
            raise UnsupportedMethodError(f"Unsupported HTTP Method: {method}")

        url = _resolve_url(path, self.api_url)
        data = body.encode("utf-8") if body is not None else None

        headers = dict(request_headers(self.credentials, method, url, data))
        if data is not None:
            headers["Content-Type"] = "application/json"

        log.debug("%s %s", method, url)
        response = self._fetcher(url, method, headers, data)
        log.debug("%s %s -> HTTP %s", method, url, response.status)
        return parse_envelope(method, response)

    def send_json(self, method: str, path: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        """Send ``payload`` as JSON and decode the response object."""
        body = json.dumps(payload) if payload is not None else None
        raw = self.send(method, path, body)
        return json.loads(raw) if raw else {}
