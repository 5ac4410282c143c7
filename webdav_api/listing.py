"""Interpretation of PROPFIND multistatus trees as directory listings."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from .internal import elements as elem
from .internal.internal import MissingDataError
from .tree import Node

logger = logging.getLogger(__name__)


def property_key(name: str) -> str:
    """Derive the key a property is stored under in a DirectoryEntry.

    The namespace prefix, a leading ``get`` and a trailing ``-bytes`` are
    dropped and hyphens become underscores, e.g. ``d:getetag`` -> ``etag``
    and ``d:quota-used-bytes`` -> ``quota_used``.
    """
    key = name.rpartition(":")[2]
    if key.startswith("get") and len(key) > 3:
        key = key[3:]
    if key.endswith("-bytes"):
        key = key[: -len("-bytes")]
    return key.replace("-", "_")


@dataclass
class DirectoryEntry:
    """One resource of a folder listing."""

    full_href: str
    href: str
    is_dir: bool = False
    properties: dict[str, str] = field(default_factory=dict)

    @property
    def resourcetype(self) -> str | None:
        return self.properties.get(property_key(elem.RESOURCE_TYPE))

    @property
    def content_type(self) -> str | None:
        return self.properties.get(property_key(elem.GET_CONTENT_TYPE))

    @property
    def last_modified(self) -> str | None:
        return self.properties.get(property_key(elem.GET_LAST_MODIFIED))

    @property
    def content_length(self) -> str | None:
        return self.properties.get(property_key(elem.GET_CONTENT_LENGTH))

    @property
    def quota_used(self) -> str | None:
        return self.properties.get(property_key(elem.QUOTA_USED_BYTES))

    @property
    def quota_available(self) -> str | None:
        return self.properties.get(property_key(elem.QUOTA_AVAILABLE_BYTES))

    @property
    def etag(self) -> str | None:
        return self.properties.get(property_key(elem.GET_ETAG))


def find_responses(root: Node, strict: bool = False) -> list[Node]:
    """Locate the ``d:response`` nodes of a multistatus document.

    Args:
        root: Document root returned by build_tree
        strict: Raise instead of returning an empty list when the
            structure is missing

    Returns:
        Response nodes in document order

    Raises:
        MissingDataError: If strict and there is no multistatus/response
    """
    multistatus = root.first(elem.MULTISTATUS)
    responses = multistatus.get(elem.RESPONSE) if multistatus is not None else []

    if not responses:
        if strict:
            raise MissingDataError("webdav: response has no multistatus/response entries")
        logger.debug("No %s entries found, treating listing as empty", elem.RESPONSE)

    return responses


def strip_prefix(full_href: str, start_dir: str) -> str:
    """Make an href relative to the queried folder.

    Hrefs that do not start with ``start_dir`` are returned unchanged.
    """
    if full_href.startswith(start_dir):
        return full_href[len(start_dir) :]
    return full_href


def _props(response: Node) -> Node | None:
    propstat = response.first(elem.PROPSTAT)
    if propstat is None:
        return None
    return propstat.first(elem.PROP)


def _is_collection(props: Node | None) -> bool:
    if props is None:
        return False
    resource_type = props.first(elem.RESOURCE_TYPE)
    return resource_type is not None and bool(resource_type.get(elem.COLLECTION))


def interpret(root: Node, property_names: Iterable[str] = elem.DEFAULT_PROPERTIES) -> list[DirectoryEntry]:
    """Convert a PROPFIND multistatus tree into directory entries.

    The first response describes the queried folder itself. Its href is
    stripped from the following hrefs and it is left out of the result.

    Args:
        root: Document root returned by build_tree
        property_names: Prefixed names of the properties to copy

    Returns:
        Entries in the order the server listed them
    """
    property_names = list(property_names)
    responses = find_responses(root)
    if not responses:
        return []

    start_href = responses[0].first(elem.HREF)
    start_dir = start_href.value if start_href is not None and start_href.value else ""

    entries: list[DirectoryEntry] = []
    for response in responses[1:]:
        href_node = response.first(elem.HREF)
        if href_node is None or href_node.value is None:
            logger.warning("Skipping %s without %s", elem.RESPONSE, elem.HREF)
            continue

        full_href = href_node.value
        href = strip_prefix(full_href, start_dir)
        if start_dir and href == full_href:
            logger.warning("href %r is not below queried folder %r", full_href, start_dir)

        props = _props(response)
        properties: dict[str, str] = {}
        if props is not None:
            for name in property_names:
                node = props.first(name)
                if node is not None and node.value is not None:
                    properties[property_key(name)] = node.value

        entries.append(
            DirectoryEntry(
                full_href=full_href,
                href=href,
                is_dir=_is_collection(props),
                properties=properties,
            )
        )

    return entries
