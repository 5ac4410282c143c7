"""WebDAV client implementation.

Usage::

    with Client("https://example.com/remote.php/webdav/") as client:
        client.set_login(user, password)
        client.create_folder("NewDirectoryName")
        client.upload_file(local_path, "NewDirectoryName/Image.jpg")
        client.move_file("NewDirectoryName/Image.jpg", "NewDirectoryName/ImageRenamed.jpg")
        client.read_contents("NewDirectoryName/")
        client.delete("NewDirectoryName")
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit, urlunsplit

import httpx

from .config import ClientConfig
from .internal import Depth, Transport, depth_to_string, normalize_url
from .internal import elements as elem
from .internal.client import DEFAULT_TIMEOUT
from .internal.xml_utils import iter_events
from .listing import DirectoryEntry, interpret
from .tree import build_tree

logger = logging.getLogger(__name__)


class Client:
    """WebDAV client for a single remote service."""

    def __init__(
        self,
        url: str,
        port: int | None = None,
        http_client: httpx.Client | None = None,
        properties: Iterable[str] = elem.DEFAULT_PROPERTIES,
        timeout: float = DEFAULT_TIMEOUT,
        namespaces: Mapping[str, str] | None = None,
    ):
        """Initialize WebDAV client.

        Args:
            url: Base URL of the WebDAV service
            port: Port to connect to, overriding the one in ``url``
            http_client: HTTP client to use (creates default if None)
            properties: Prefixed property names requested by read_contents
            timeout: Request timeout in seconds
            namespaces: Extra prefix to namespace URI mappings for properties
                outside the DAV namespace, e.g. ``{"oc": "http://owncloud.org/ns"}``

        Raises:
            ValueError: If a property uses a prefix with no known namespace
        """
        self._url = url
        self.port = port
        self.namespaces = {**(namespaces or {}), **elem.NS}
        self.properties = tuple(properties)
        elem.check_properties(self.properties, self.namespaces)
        self.ignore_ssl = False
        self.user: str | None = None
        self.password: str | None = None
        self.transport = Transport(http_client, timeout=timeout)
        self._contents: list[DirectoryEntry] = []

    @classmethod
    def from_config(cls, config: ClientConfig, http_client: httpx.Client | None = None) -> Client:
        """Create a client from a ClientConfig."""
        client = cls(
            config.url,
            port=config.port,
            http_client=http_client,
            properties=config.properties,
            timeout=config.timeout,
            namespaces=config.namespaces,
        )
        if config.user is not None and config.password is not None:
            client.set_login(config.user, config.password)
        return client.set_ignore_ssl(config.ignore_ssl)

    def set_login(self, user: str, password: str) -> Client:
        """Set credentials used for HTTP Basic authentication."""
        self.user = user
        self.password = password
        self.transport.auth = httpx.BasicAuth(user, password)
        return self

    def has_login(self) -> bool:
        """Check if credentials were given."""
        return self.user is not None and self.password is not None

    def set_ignore_ssl(self, ignore: bool = True) -> Client:
        """Enable or disable skipping TLS certificate verification."""
        self.ignore_ssl = ignore
        return self

    @property
    def url(self) -> str:
        """Base URL with exactly one trailing slash and the configured port.

        Raises:
            ValueError: If a port is configured but the URL has no host
        """
        result = self._url.rstrip("/") + "/"
        if self.port is None:
            return result

        parts = urlsplit(result)
        if not parts.hostname:
            raise ValueError(f"webdav: cannot apply port to URL without host: {self._url!r}")

        host = parts.hostname
        if ":" in host:
            host = f"[{host}]"
        userinfo = parts.netloc.rpartition("@")[0]
        netloc = f"{userinfo}@{host}:{self.port}" if userinfo else f"{host}:{self.port}"
        return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))

    def resolve_href(self, href: str) -> str:
        """Resolve a path relative to the base URL."""
        return self.url + href

    @property
    def contents(self) -> list[DirectoryEntry]:
        """Entries of the last folder read with read_contents."""
        return list(self._contents)

    def _send(
        self, method: str, href: str, headers: list[str] | None = None, body: bytes | None = None
    ) -> bytes:
        url = self.resolve_href(href)
        logger.debug("%s %s", method, url)
        return self.transport.send(
            method, url, headers or [], body=body, verify_tls=not self.ignore_ssl
        )

    def upload_file(self, local_path: str | os.PathLike[str], remote_href: str) -> None:
        """Upload a local file.

        Args:
            local_path: Path of the local file
            remote_href: Remote path, relative to the base URL
        """
        content = Path(local_path).read_bytes()
        self._send("PUT", remote_href, body=content)

    def delete(self, remote_href: str) -> None:
        """Delete a remote file or folder.

        Args:
            remote_href: Remote path, relative to the base URL
        """
        self._send("DELETE", remote_href)

    def move_file(self, old_href: str, new_href: str) -> None:
        """Move (or rename) a remote file.

        Args:
            old_href: Current remote path
            new_href: New remote path
        """
        destination = normalize_url(self.resolve_href(new_href))
        self._send("MOVE", old_href, headers=[f"Destination: {destination}"])

    def create_folder(self, folder_href: str) -> None:
        """Create a remote folder.

        Args:
            folder_href: Remote path of the folder
        """
        self._send("MKCOL", folder_href)

    def read_contents(
        self, folder_href: str = "", properties: Iterable[str] | None = None
    ) -> list[DirectoryEntry]:
        """List a remote folder.

        The listing replaces the one kept from the previous call.

        Args:
            folder_href: Remote folder path, relative to the base URL
            properties: Prefixed property names, defaults to the client's

        Returns:
            Entries of the folder, without the folder itself

        Raises:
            TransportError: If the request fails
            StructuralError: If the response is not a well-formed XML tree
            ValueError: If a property uses a prefix with no known namespace
        """
        props = tuple(properties) if properties is not None else self.properties
        request_body = elem.propfind_body(props, self.namespaces)
        headers = [
            f"Depth: {depth_to_string(Depth.ONE)}",
            "Content-Type: text/xml; charset=utf-8",
        ]
        body = self._send("PROPFIND", folder_href, headers=headers, body=request_body)

        entries = interpret(build_tree(iter_events(body, self.namespaces)), props)
        logger.debug("Read %d entries from %r", len(entries), folder_href)
        self._contents = entries
        return self.contents

    def does_content_exist(self, href: str) -> bool:
        """Check the last listing for an entry with exactly this relative href.

        Folders are listed with a trailing slash, so ``"sub/"`` matches a
        folder where ``"sub"`` does not.
        """
        return any(entry.href == href for entry in self._contents)

    def close(self) -> None:
        """Close the client."""
        self.transport.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
