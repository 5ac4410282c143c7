"""XML tokenizer producing flat parse events for the tree builder."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from io import BytesIO

from lxml import etree

from ..tree import EventKind, ParseEvent
from .elements import NS
from .internal import StructuralError

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"


def prefixed_name(name: str, element: etree._Element, reverse_ns: Mapping[str, str]) -> str:
    """Render a Clark-notation name as ``prefix:local``.

    Known namespaces always use their configured prefix so lookups do not
    depend on the prefix the server picked. Other namespaces keep the
    document's prefix, and names in a default namespace lose it.

    Args:
        name: Tag or attribute name, e.g. ``{DAV:}href``
        element: Element the name belongs to, used for its in-scope prefixes
        reverse_ns: Namespace URI to prefix mapping

    Returns:
        Prefixed name, e.g. ``d:href``
    """
    if not name.startswith("{"):
        return name

    uri, _, local = name[1:].partition("}")
    prefix = reverse_ns.get(uri)
    if prefix is None:
        prefix = next((p for p, u in element.nsmap.items() if u == uri and p), None)

    if prefix:
        return f"{prefix}:{local}"
    return local


def _element_text(element: etree._Element) -> str | None:
    """Collect the character data directly inside an element."""
    parts = [element.text or ""]
    for child in element:
        parts.append(child.tail or "")
    text = "".join(parts)

    # Whitespace-only text nodes are skipped
    if not text.strip():
        return None
    return text


def iter_events(xml: bytes, namespaces: Mapping[str, str] = NS) -> Iterator[ParseEvent]:
    """Tokenize an XML document into open/text/close events.

    Tag names are case-sensitive. The text of an element is reported right
    before its close event, at the element's own level.

    Args:
        xml: Raw XML document
        namespaces: Prefix to namespace URI mapping used to name tags

    Yields:
        Parse events in document order

    Raises:
        StructuralError: If the document is not well-formed XML
    """
    reverse_ns = {XML_NAMESPACE: "xml"}
    reverse_ns.update((uri, prefix) for prefix, uri in namespaces.items())

    level = 0
    try:
        context = etree.iterparse(
            BytesIO(xml),
            events=("start", "end"),
            resolve_entities=False,
            no_network=True,
            remove_comments=True,
            remove_pis=True,
        )
        for action, element in context:
            if not isinstance(element.tag, str):
                continue

            tag = prefixed_name(element.tag, element, reverse_ns)

            if action == "start":
                level += 1
                attributes = {
                    prefixed_name(key, element, reverse_ns): value
                    for key, value in element.attrib.items()
                }
                yield ParseEvent(EventKind.OPEN, tag, level, attributes=attributes)
                continue

            text = _element_text(element)
            if text is not None:
                yield ParseEvent(EventKind.TEXT, tag, level, text=text)
            yield ParseEvent(EventKind.CLOSE, tag, level)
            level -= 1

            # Only the tail is still needed, by the parent's text
            element.clear(keep_tail=True)
    except etree.XMLSyntaxError as e:
        raise StructuralError(f"webdav: malformed XML: {e}") from e
