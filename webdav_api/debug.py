"""Debug logging utilities for the WebDAV client."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from lxml import etree

logger = logging.getLogger("webdav_api")

MAX_PREVIEW = 200


def format_xml(xml_bytes: bytes | str) -> str:
    """Format XML with proper indentation.

    Args:
        xml_bytes: XML content as bytes or string

    Returns:
        Pretty-formatted XML string, or the input decoded as-is if it is not XML
    """
    if isinstance(xml_bytes, str):
        xml_bytes = xml_bytes.encode("utf-8")

    try:
        parser = etree.XMLParser(remove_blank_text=True, resolve_entities=False, no_network=True)
        root = etree.fromstring(xml_bytes, parser)
    except etree.XMLSyntaxError:
        return xml_bytes.decode("utf-8", errors="replace")
    return etree.tostring(root, pretty_print=True, encoding="unicode")


def is_xml_content(content_type: str | None) -> bool:
    """Check if content type is XML."""
    if not content_type:
        return False

    xml_types = ["application/xml", "text/xml"]
    return any(xml_type in content_type.lower() for xml_type in xml_types)


def _log_body(body: bytes, content_type: str | None) -> None:
    if is_xml_content(content_type):
        formatted = format_xml(body)
        for line in formatted.split("\n"):
            if line.strip():
                logger.debug("  %s", line)
    else:
        preview = body[:MAX_PREVIEW].decode("utf-8", errors="replace")
        logger.debug("  [%d bytes] %s", len(body), preview)
        if len(body) > MAX_PREVIEW:
            logger.debug("  ... (%d more bytes)", len(body) - MAX_PREVIEW)


def log_request(method: str, url: str, headers: Mapping[str, str], body: bytes | None) -> None:
    """Log an outgoing HTTP request.

    Args:
        method: HTTP method
        url: Request URL
        headers: Request headers
        body: Request body (if any)
    """
    logger.debug(">>> %s %s", method, url)
    for header, value in headers.items():
        if header.lower() == "authorization":
            value = "[REDACTED]"
        logger.debug("  %s: %s", header, value)

    if body:
        _log_body(body, headers.get("Content-Type"))


def log_response(status_code: int, headers: Mapping[str, str], body: bytes | None) -> None:
    """Log an incoming HTTP response.

    Args:
        status_code: HTTP status code
        headers: Response headers
        body: Response body (if any)
    """
    logger.debug("<<< %d", status_code)

    interesting_headers = ["Content-Type", "Content-Length", "ETag", "DAV"]
    for header in interesting_headers:
        value = headers.get(header)
        if value:
            logger.debug("  %s: %s", header, value)

    if body:
        _log_body(body, headers.get("Content-Type"))


def setup_debug_logging() -> None:
    """Send webdav_api debug logs to stderr."""
    logger.setLevel(logging.DEBUG)

    handler = logging.StreamHandler()
    handler.setLevel(logging.DEBUG)

    # Messages are formatted by the helpers above
    formatter = logging.Formatter("%(message)s")
    handler.setFormatter(formatter)

    logger.addHandler(handler)

    # Prevent propagation to avoid duplicate logs
    logger.propagate = False
