"""WebDAV XML vocabulary and request bodies."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from lxml import etree

# WebDAV namespace
NAMESPACE = "DAV:"
PREFIX = "d"
NS = {PREFIX: NAMESPACE}

# Element names as they appear in parse events
MULTISTATUS = "d:multistatus"
RESPONSE = "d:response"
HREF = "d:href"
PROPSTAT = "d:propstat"
PROP = "d:prop"
COLLECTION = "d:collection"

# Properties
RESOURCE_TYPE = "d:resourcetype"
GET_CONTENT_TYPE = "d:getcontenttype"
GET_LAST_MODIFIED = "d:getlastmodified"
GET_CONTENT_LENGTH = "d:getcontentlength"
QUOTA_USED_BYTES = "d:quota-used-bytes"
QUOTA_AVAILABLE_BYTES = "d:quota-available-bytes"
GET_ETAG = "d:getetag"

DEFAULT_PROPERTIES: tuple[str, ...] = (
    RESOURCE_TYPE,
    GET_CONTENT_TYPE,
    GET_LAST_MODIFIED,
    GET_CONTENT_LENGTH,
    QUOTA_USED_BYTES,
    QUOTA_AVAILABLE_BYTES,
    GET_ETAG,
)


def clark_name(name: str, namespaces: Mapping[str, str] = NS) -> str:
    """Convert a prefixed name such as ``d:getetag`` to ``{DAV:}getetag``.

    Args:
        name: Prefixed or bare element name
        namespaces: Prefix to namespace URI mapping

    Returns:
        Name in lxml's Clark notation

    Raises:
        ValueError: If the prefix is not in ``namespaces``
    """
    prefix, sep, local = name.partition(":")
    if not sep:
        return name
    if prefix not in namespaces:
        raise ValueError(f"webdav: unknown namespace prefix in {name!r}")
    return f"{{{namespaces[prefix]}}}{local}"


def check_properties(properties: Iterable[str], namespaces: Mapping[str, str] = NS) -> None:
    """Check that every property prefix maps to a namespace.

    Raises:
        ValueError: If a prefix is not in ``namespaces``
    """
    for name in properties:
        clark_name(name, namespaces)


def propfind_body(properties: Iterable[str], namespaces: Mapping[str, str] = NS) -> bytes:
    """Build a PROPFIND request body asking for the given properties.

    Args:
        properties: Prefixed property names
        namespaces: Prefix to namespace URI mapping, must contain the DAV namespace

    Returns:
        Serialized XML document
    """
    root = etree.Element(f"{{{NAMESPACE}}}propfind", nsmap=dict(namespaces))
    prop = etree.SubElement(root, f"{{{NAMESPACE}}}prop")
    for name in properties:
        etree.SubElement(prop, clark_name(name, namespaces))

    return etree.tostring(root, encoding="utf-8", xml_declaration=True, pretty_print=False)
