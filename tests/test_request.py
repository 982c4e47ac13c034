"""
Test request placement
"""

import pytest

from bracketform.encode import FormEncoder
from bracketform.request import CONTENT_TYPE, append_query, prepare


def test_prepare_get() -> None:
    req = prepare(
        "GET", "https://example.com/search", {"q": "a b", "tags": ["x"]}
    )
    assert req.method == "GET"
    assert req.url == "https://example.com/search?q=a%20b&tags%5B%5D=x"
    assert req.body is None


def test_prepare_get_existing_query() -> None:
    req = prepare("get", "https://example.com/search?page=2", {"q": 1})
    assert req.url == "https://example.com/search?page=2&q=1"


def test_prepare_get_empty() -> None:
    req = prepare("GET", "https://example.com/search", {})
    assert req.url == "https://example.com/search"


def test_prepare_post() -> None:
    req = prepare("post", "https://example.com/form", {"b": 1, "a": True})
    assert req.method == "POST"
    assert req.url == "https://example.com/form"
    assert req.body == b"a=1&b=1"
    assert req.headers["Content-Type"] == CONTENT_TYPE
    assert req.headers["Content-Length"] == "7"


def test_prepare_keeps_content_type() -> None:
    headers = {"content-type": "text/plain"}
    req = prepare(
        "POST", "https://example.com/form", {"a": 1}, headers=headers
    )
    assert req.headers["Content-Type"] == "text/plain"
    assert headers == {"content-type": "text/plain"}


def test_prepare_does_not_change_headers() -> None:
    headers = {"X-Trace": "1"}
    req = prepare("PUT", "https://example.com/form", {"a": 1}, headers=headers)
    assert req.headers["X-Trace"] == "1"
    assert req.headers["Content-Type"] == CONTENT_TYPE
    assert headers == {"X-Trace": "1"}


def test_prepare_forced_destination() -> None:
    req = prepare(
        "GET", "https://example.com/form", {"a": "x"}, destination="body"
    )
    assert req.url == "https://example.com/form"
    assert req.body == b"a=x"

    req = prepare(
        "POST", "https://example.com/form", {"a": "x"}, destination="query"
    )
    assert req.url == "https://example.com/form?a=x"
    assert req.body is None


def test_prepare_unknown_destination() -> None:
    with pytest.raises(ValueError):
        prepare("GET", "https://example.com/", {}, destination="header")


def test_prepare_encoder() -> None:
    encoder = FormEncoder(sort_nested_keys=False)
    req = prepare(
        "POST",
        "https://example.com/form",
        {"p": {"theme": "dark", "color": "blue"}},
        encoder=encoder,
    )
    assert req.body == b"p%5Btheme%5D=dark&p%5Bcolor%5D=blue"


def test_append_query() -> None:
    assert append_query("/path", "a=1") == "/path?a=1"
    assert append_query("/path?", "a=1") == "/path?a=1"
    assert append_query("/path?b=2", "a=1") == "/path?b=2&a=1"
    assert append_query("/path?b=2&", "a=1") == "/path?b=2&a=1"
    assert append_query("/path#top", "a=1") == "/path?a=1#top"
    assert append_query("/path", "") == "/path"
