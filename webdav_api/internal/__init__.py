"""Low-level WebDAV building blocks."""

from . import elements
from .client import Transport, normalize_url
from .internal import (
    Depth,
    MissingDataError,
    StructuralError,
    TransportError,
    WebDAVError,
    depth_to_string,
)

__all__ = [
    "elements",
    "Transport",
    "normalize_url",
    "Depth",
    "MissingDataError",
    "StructuralError",
    "TransportError",
    "WebDAVError",
    "depth_to_string",
]
