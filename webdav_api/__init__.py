"""A Python client library for WebDAV file services."""

from .client import Client
from .config import ClientConfig
from .internal import MissingDataError, StructuralError, TransportError, WebDAVError
from .listing import DirectoryEntry, interpret
from .tree import EventKind, Node, ParseEvent, build_tree

__version__ = "0.1.0"

__all__ = [
    "Client",
    "ClientConfig",
    "DirectoryEntry",
    "EventKind",
    "MissingDataError",
    "Node",
    "ParseEvent",
    "StructuralError",
    "TransportError",
    "WebDAVError",
    "build_tree",
    "interpret",
]
