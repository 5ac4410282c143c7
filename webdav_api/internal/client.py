"""HTTP transport for the WebDAV client."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from .. import debug
from .internal import TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
MAX_ERROR_TEXT = 1024


def normalize_url(url: str) -> str:
    """Escape spaces and turn backslashes into slashes."""
    return url.replace(" ", "%20").replace("\\", "/")


def parse_headers(headers: Sequence[str]) -> httpx.Headers:
    """Parse ``"Name: value"`` header lines, keeping repeated names.

    Raises:
        ValueError: If a line has no colon
    """
    pairs: list[tuple[str, str]] = []
    for line in headers:
        name, sep, value = line.partition(":")
        if not sep or not name.strip():
            raise ValueError(f"webdav: invalid header line {line!r}")
        pairs.append((name.strip(), value.strip()))
    return httpx.Headers(pairs)


def _error_text(resp: httpx.Response) -> str:
    content_type = resp.headers.get("content-type", "text/plain")
    if not (content_type.startswith("text/") or "xml" in content_type):
        return resp.reason_phrase

    text = resp.text[:MAX_ERROR_TEXT].strip()
    if len(resp.text) > MAX_ERROR_TEXT:
        text += " […]"
    return text


class Transport:
    """Sends single HTTP requests and returns response bodies."""

    def __init__(
        self,
        http_client: httpx.Client | None = None,
        auth: httpx.Auth | tuple[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize transport.

        Args:
            http_client: HTTP client to use; when given it is used as-is and
                its own TLS settings apply
            auth: Credentials sent with every request
            timeout: Request timeout in seconds
        """
        self._injected = http_client is not None
        self.http_client = http_client
        self._verify: bool | None = None
        self.auth = auth
        self.timeout = timeout

    def _get_http_client(self, verify_tls: bool) -> httpx.Client:
        """Get or create the HTTP client for a TLS verification mode."""
        if self._injected:
            return self.http_client  # type: ignore[return-value]

        if self.http_client is not None and self._verify != verify_tls:
            self.http_client.close()
            self.http_client = None

        if self.http_client is None:
            self.http_client = httpx.Client(verify=verify_tls, timeout=self.timeout)
            self._verify = verify_tls
        return self.http_client

    def send(
        self,
        method: str,
        url: str,
        headers: Sequence[str] = (),
        body: bytes | None = None,
        verify_tls: bool = True,
    ) -> bytes:
        """Send one request.

        Args:
            method: HTTP method
            url: Absolute request URL
            headers: Header lines, ``"Name: value"``
            body: Request body
            verify_tls: Whether to verify the server certificate

        Returns:
            Response body

        Raises:
            TransportError: On network failure or a non-2xx response
        """
        url = normalize_url(url)
        req_headers = parse_headers(headers)
        client = self._get_http_client(verify_tls)

        if logger.isEnabledFor(logging.DEBUG):
            debug.log_request(method, url, req_headers, body)

        kwargs: dict[str, Any] = {"content": body, "headers": req_headers}
        if self.auth is not None:
            kwargs["auth"] = self.auth

        try:
            resp = client.request(method, url, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"{method} {url}: {e}") from e

        if logger.isEnabledFor(logging.DEBUG):
            debug.log_response(resp.status_code, resp.headers, resp.content)

        if resp.status_code // 100 != 2:
            raise TransportError(_error_text(resp), resp.status_code)

        return resp.content

    def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self.http_client is not None and not self._injected:
            self.http_client.close()
            self.http_client = None
