"""
Tests for tracing.py
Logic testing: Decision/Branch, Boundary Value
"""
from io import StringIO

import httpx
import pytest
from rich.console import Console

from fetch_request.tracing import mask_headers, mask_sensitive, trace_request, trace_response


@pytest.fixture
def console_output():
    output = StringIO()
    console = Console(file=output, width=200, force_terminal=False, color_system=None)
    return console, output


class TestMaskSensitive:
    """Tests for mask_sensitive function."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, "<none>"),
            ("", "<none>"),
            ("abc", "***"),
            ("abcd", "****"),
            ("abcde", "abcd***"),
            ("Bearer secret", "Bear***"),
        ],
    )
    def test_mask(self, value, expected):
        assert mask_sensitive(value) == expected


class TestMaskHeaders:
    """Tests for mask_headers function."""

    # Decision: only credential headers masked, any case
    def test_mask_headers(self):
        masked = mask_headers({"Authorization": "Bearer token", "X-API-Key": "key-12345", "Accept": "text/plain"})
        assert masked == {"Authorization": "Bear***", "X-API-Key": "key-***", "Accept": "text/plain"}


class TestTrace:
    """Tests for trace_request / trace_response."""

    def test_trace_request(self, console_output):
        console, output = console_output
        request = httpx.Request(
            "POST",
            "https://example.com/items",
            headers={"Authorization": "Bearer secret-token"},
        )
        trace_request(request, console)
        text = output.getvalue()
        assert "POST" in text
        assert "https://example.com/items" in text
        assert "Bear***" in text
        assert "secret-token" not in text

    def test_trace_response(self, console_output):
        console, output = console_output
        request = httpx.Request("GET", "https://example.com/missing")
        response = httpx.Response(404, request=request, headers={"Set-Cookie": "session=abcdef"})
        trace_response(response, console)
        text = output.getvalue()
        assert "404" in text
        assert "Not Found" in text
        assert "sess***" in text
        assert "abcdef" not in text
