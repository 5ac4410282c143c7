"""Client configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from .internal.client import DEFAULT_TIMEOUT
from .internal.elements import DEFAULT_PROPERTIES


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes")


def _parse_namespaces(value: str) -> dict[str, str]:
    namespaces = {}
    for pair in value.split(","):
        if not pair.strip():
            continue
        prefix, sep, uri = pair.partition("=")
        if not sep or not prefix.strip() or not uri.strip():
            raise ValueError(f"webdav: invalid namespace mapping {pair!r}")
        namespaces[prefix.strip()] = uri.strip()
    return namespaces


@dataclass
class ClientConfig:
    """Configuration for a WebDAV client.

    ``properties`` are the prefixed property names requested by, and copied
    out of, folder listings.
    ``namespaces`` maps extra prefixes used in ``properties`` to namespace
    URIs; the DAV namespace is always available as ``d``.
    """

    url: str
    port: int | None = None
    user: str | None = None
    password: str | None = None
    ignore_ssl: bool = False
    timeout: float = DEFAULT_TIMEOUT
    properties: tuple[str, ...] = field(default=DEFAULT_PROPERTIES)
    namespaces: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Construct a ClientConfig from environment variables.

        Required environment variables:
            WEBDAV_API_URL: Base URL of the WebDAV service.

        Optional environment variables:
            WEBDAV_API_PORT: Port to connect to.
            WEBDAV_API_USER: User name for Basic authentication.
            WEBDAV_API_PASSWORD: Password for Basic authentication.
            WEBDAV_API_IGNORE_SSL: Skip certificate verification (1/true/yes).
            WEBDAV_API_TIMEOUT: Request timeout in seconds (default: 30).
            WEBDAV_API_PROPERTIES: Comma separated property names.
            WEBDAV_API_NAMESPACES: Comma separated prefix=URI pairs.

        Raises:
            KeyError: If WEBDAV_API_URL is not set
            ValueError: If a numeric variable or namespace mapping cannot be parsed
        """
        port = os.getenv("WEBDAV_API_PORT")
        properties = os.getenv("WEBDAV_API_PROPERTIES")
        namespaces = os.getenv("WEBDAV_API_NAMESPACES", "")

        return cls(
            url=os.environ["WEBDAV_API_URL"],
            port=int(port) if port else None,
            user=os.getenv("WEBDAV_API_USER"),
            password=os.getenv("WEBDAV_API_PASSWORD"),
            ignore_ssl=_parse_bool(os.getenv("WEBDAV_API_IGNORE_SSL", "")),
            timeout=float(os.getenv("WEBDAV_API_TIMEOUT", str(DEFAULT_TIMEOUT))),
            properties=(
                tuple(p.strip() for p in properties.split(",") if p.strip())
                if properties
                else DEFAULT_PROPERTIES
            ),
            namespaces=_parse_namespaces(namespaces),
        )
