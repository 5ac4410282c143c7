"""Low-level helpers and errors for the WebDAV client."""

from __future__ import annotations

from enum import IntEnum
from http import HTTPStatus


class Depth(IntEnum):
    """Depth indicates whether a request applies to the resource's members.

    Defined in RFC 4918 section 10.2.
    """

    ZERO = 0  # Request applies only to the resource
    ONE = 1  # Request applies to resource and its internal members only
    INFINITY = -1  # Request applies to resource and all of its members


def depth_to_string(d: Depth) -> str:
    """Format the depth."""
    if d == Depth.ZERO:
        return "0"
    elif d == Depth.ONE:
        return "1"
    elif d == Depth.INFINITY:
        return "infinity"
    else:
        raise ValueError("webdav: invalid Depth value")


class WebDAVError(Exception):
    """Base class for every error raised by webdav_api."""


class TransportError(WebDAVError):
    """The HTTP transport failed or the server answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.status_code is None:
            return f"webdav: transport error: {self.message}"

        try:
            text = HTTPStatus(self.status_code).phrase
        except ValueError:
            text = "Unknown"

        s = f"{self.status_code} {text}"
        if self.message:
            return f"{s}: {self.message}"
        return s


class StructuralError(WebDAVError):
    """XML events do not describe a well-formed tree."""


class MissingDataError(WebDAVError):
    """Expected multistatus structure is absent from a response."""
