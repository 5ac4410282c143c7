"""Tests for the transport, XML vocabulary and debug helpers."""

import logging

import httpx
import pytest
from lxml import etree

from webdav_api import debug
from webdav_api.internal import Transport, normalize_url
from webdav_api.internal.client import parse_headers
from webdav_api.internal.elements import clark_name, propfind_body
from webdav_api.internal.internal import Depth, TransportError, depth_to_string


def test_normalize_url():
    """Test that spaces and backslashes are fixed."""
    assert normalize_url("https://h/a b\\c.txt") == "https://h/a%20b/c.txt"


def test_parse_headers():
    """Test parsing of header lines."""
    headers = parse_headers(["Destination: https://h/x:y", "Depth:1"])

    assert headers["Destination"] == "https://h/x:y"
    assert headers["depth"] == "1"


def test_parse_headers_invalid():
    """Test that a line without colon is rejected."""
    with pytest.raises(ValueError):
        parse_headers(["Destination"])


def test_depth_to_string():
    assert depth_to_string(Depth.ZERO) == "0"
    assert depth_to_string(Depth.ONE) == "1"
    assert depth_to_string(Depth.INFINITY) == "infinity"


def test_transport_error_str():
    """Test error formatting with and without status code."""
    assert str(TransportError("gone", 404)) == "404 Not Found: gone"
    assert str(TransportError("", 599)) == "599 Unknown"
    assert str(TransportError("timed out")) == "webdav: transport error: timed out"


def test_transport_returns_body():
    """Test that a 2xx response body is returned."""
    http_client = httpx.Client(
        transport=httpx.MockTransport(lambda request: httpx.Response(207, content=b"<x/>"))
    )
    transport = Transport(http_client)

    assert transport.send("PROPFIND", "https://h/dav/", ["Depth: 1"]) == b"<x/>"


def test_transport_truncates_error_text():
    """Test that long error bodies are truncated."""
    http_client = httpx.Client(
        transport=httpx.MockTransport(
            lambda request: httpx.Response(
                500, text="x" * 5000, headers={"Content-Type": "text/plain"}
            )
        )
    )

    with pytest.raises(TransportError) as exc_info:
        Transport(http_client).send("GET", "https://h/")

    assert exc_info.value.status_code == 500
    assert exc_info.value.message.endswith("[…]")
    assert len(exc_info.value.message) < 1100


def test_transport_binary_error_uses_reason():
    """Test that non-text error bodies are replaced by the reason phrase."""
    http_client = httpx.Client(
        transport=httpx.MockTransport(
            lambda request: httpx.Response(
                403, content=b"\x00\x01", headers={"Content-Type": "application/octet-stream"}
            )
        )
    )

    with pytest.raises(TransportError) as exc_info:
        Transport(http_client).send("DELETE", "https://h/a")

    assert exc_info.value.message == "Forbidden"


def test_transport_recreates_client_for_tls_mode():
    """Test that changing TLS verification replaces the owned client."""
    transport = Transport()

    first = transport._get_http_client(verify_tls=True)
    assert transport._get_http_client(verify_tls=True) is first

    second = transport._get_http_client(verify_tls=False)
    assert second is not first
    assert first.is_closed

    transport.close()
    assert transport.http_client is None


def test_transport_logs_when_debug_enabled(caplog):
    """Test that requests and responses are logged with credentials redacted."""
    http_client = httpx.Client(
        transport=httpx.MockTransport(lambda request: httpx.Response(201)),
    )
    transport = Transport(http_client, auth=("user", "pass"))

    with caplog.at_level(logging.DEBUG, logger="webdav_api"):
        transport.send("MKCOL", "https://h/new", ["Authorization: Basic secret"])

    assert ">>> MKCOL https://h/new" in caplog.text
    assert "<<< 201" in caplog.text
    assert "secret" not in caplog.text


def test_clark_name():
    assert clark_name("d:getetag") == "{DAV:}getetag"
    assert clark_name("plain") == "plain"
    assert clark_name("oc:fileid", {"d": "DAV:", "oc": "http://owncloud.org/ns"}) == (
        "{http://owncloud.org/ns}fileid"
    )
    with pytest.raises(ValueError):
        clark_name("oc:fileid")


def test_propfind_body():
    """Test the PROPFIND request document."""
    root = etree.fromstring(propfind_body(["d:getetag", "d:resourcetype"]))

    assert root.tag == "{DAV:}propfind"
    assert [el.tag for el in root.find("{DAV:}prop")] == ["{DAV:}getetag", "{DAV:}resourcetype"]


def test_format_xml():
    """Test pretty printing and fallback for non-XML."""
    assert debug.format_xml(b"<a><b>x</b></a>") == "<a>\n  <b>x</b>\n</a>\n"
    assert debug.format_xml("not xml") == "not xml"


def test_is_xml_content():
    assert debug.is_xml_content("application/xml; charset=utf-8")
    assert debug.is_xml_content("text/xml")
    assert not debug.is_xml_content("text/plain")
    assert not debug.is_xml_content(None)


def test_parse_headers_keeps_repeated_names():
    """Test that repeated header lines are all kept, in order."""
    headers = parse_headers(["X-Tag: one", "X-Tag: two"])

    assert headers.get_list("X-Tag") == ["one", "two"]


def test_transport_sends_repeated_headers():
    """Test that repeated header lines reach the server."""
    seen = []

    def handler(request):
        seen.extend(request.headers.get_list("X-Tag"))
        return httpx.Response(200)

    http_client = httpx.Client(transport=httpx.MockTransport(handler))

    Transport(http_client).send("GET", "https://h/", ["X-Tag: one", "X-Tag: two"])

    assert seen == ["one", "two"]
