"""Tests for the request dispatcher."""

from __future__ import annotations

import json
import logging

import httpx
import pytest
from pytest_httpx import HTTPXMock

from groupme_api.core import (
    GroupMeDecodeError,
    GroupMeTransportError,
    RequestDispatcher,
    ResponseCache,
)

API = "https://api.groupme.com/v3"
IMAGE = "https://image.groupme.com"


class TestBuildUrl:
    """Tests for URL construction."""

    def test_token_appended_after_query(self, dispatcher):
        url = dispatcher.build_url("/groups", {"page": 2, "per_page": 10})

        assert url == f"{API}/groups?page=2&per_page=10&access_token=test-token"

    def test_media_upload_uses_image_service(self, dispatcher):
        url = dispatcher.build_url("/pictures", media_upload=True)

        assert url == f"{IMAGE}/pictures?access_token=test-token"

    def test_none_values_skipped_and_bools_lowered(self, dispatcher):
        url = dispatcher.build_url("/x", {"a": None, "b": True})

        assert url == f"{API}/x?b=true&access_token=test-token"


class TestExecute:
    """Tests for RequestDispatcher.execute."""

    def test_get_decodes_envelope(self, dispatcher, envelope, httpx_mock: HTTPXMock):
        """A GET returns the decoded envelope."""
        httpx_mock.add_response(json=envelope([{"id": "1"}]))

        result = dispatcher.execute("GET", "/groups", {"page": 1})

        assert result.ok is True
        assert result.response == [{"id": "1"}]
        assert result.status_code == 200
        assert result.cached is False
        request = httpx_mock.get_requests()[0]
        assert request.method == "GET"
        assert request.url.params["access_token"] == "test-token"
        assert request.headers["User-Agent"] == "GroupMe API Client"

    def test_post_sends_json(self, dispatcher, envelope, httpx_mock: HTTPXMock):
        """A POST sends its payload as JSON."""
        httpx_mock.add_response(status_code=201, json=envelope({"id": "9"}, code=201))

        result = dispatcher.execute("POST", "/groups", payload={"name": "Test"})

        request = httpx_mock.get_requests()[0]
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {"name": "Test"}
        assert result.ok is True

    def test_media_upload_sends_multipart(self, dispatcher, httpx_mock: HTTPXMock):
        """Image uploads go to the image service as multipart form data."""
        httpx_mock.add_response(json={"payload": {"picture_url": "https://i.groupme.com/1"}})

        dispatcher.execute(
            "POST",
            "/pictures",
            payload={"file": ("cat.png", b"\x89PNG", "image/png")},
            media_upload=True,
        )

        request = httpx_mock.get_requests()[0]
        assert str(request.url).startswith(f"{IMAGE}/pictures?")
        assert request.headers["Content-Type"].startswith("multipart/form-data")
        assert b'filename="cat.png"' in request.content

    def test_second_identical_get_served_from_cache(
        self, dispatcher, envelope, httpx_mock: HTTPXMock
    ):
        """Two identical GETs within the TTL issue a single request."""
        httpx_mock.add_response(json=envelope({"id": "1"}))

        first = dispatcher.execute("GET", "/users/me")
        second = dispatcher.execute("GET", "/users/me")

        assert len(httpx_mock.get_requests()) == 1
        assert first.cached is False
        assert second.cached is True
        assert second.status_code == 200
        assert second.response == {"id": "1"}

    def test_cached_error_keeps_status(self, dispatcher, httpx_mock: HTTPXMock):
        """A replayed unenveloped error body still reports the original status."""
        httpx_mock.add_response(status_code=400, json={"errors": ["bad"]})

        first = dispatcher.execute("GET", "/groups/1")
        second = dispatcher.execute("GET", "/groups/1")

        assert len(httpx_mock.get_requests()) == 1
        assert second.cached is True
        assert second.status_code == first.status_code == 400
        assert second.ok is first.ok is False

    def test_cached_empty_not_modified(self, dispatcher, httpx_mock: HTTPXMock):
        """An empty 304 replayed from the cache is still not ok."""
        httpx_mock.add_response(status_code=304)

        first = dispatcher.execute("GET", "/groups/1/messages", {"since_id": "9"})
        second = dispatcher.execute("GET", "/groups/1/messages", {"since_id": "9"})

        assert len(httpx_mock.get_requests()) == 1
        assert second.cached is True
        assert second.status_code == 304
        assert first.ok is False
        assert second.ok is False

    def test_malformed_envelope_raises_decode_error(self, dispatcher, httpx_mock: HTTPXMock):
        httpx_mock.add_response(json={"meta": {"code": "n/a"}, "response": None})

        with pytest.raises(GroupMeDecodeError):
            dispatcher.execute("GET", "/users/me")

    def test_cache_expires(self, dispatcher, clock, envelope, httpx_mock: HTTPXMock):
        """After the TTL the request goes to the network again."""
        httpx_mock.add_response(json=envelope({"n": 1}))
        httpx_mock.add_response(json=envelope({"n": 2}))

        dispatcher.execute("GET", "/users/me")
        clock.advance(61)
        result = dispatcher.execute("GET", "/users/me")

        assert len(httpx_mock.get_requests()) == 2
        assert result.response == {"n": 2}

    def test_post_not_cached_by_default(self, dispatcher, envelope, httpx_mock: HTTPXMock):
        """POST responses are not written to the cache."""
        httpx_mock.add_response(json=envelope(None))
        httpx_mock.add_response(json=envelope(None))

        dispatcher.execute("POST", "/groups/1/destroy")
        dispatcher.execute("POST", "/groups/1/destroy")

        assert len(httpx_mock.get_requests()) == 2
        assert len(dispatcher.cache) == 0

    def test_cache_methods_can_include_post(self, clock, envelope, httpx_mock: HTTPXMock):
        """Listing POST as cacheable caches POST responses too."""
        httpx_mock.add_response(json=envelope({"ok": True}))
        cache = ResponseCache(enabled=True, ttl_seconds=60, clock=clock)

        with RequestDispatcher("t", cache, cache_methods=["GET", "POST"]) as d:
            d.execute("POST", "/x", payload={"a": 1})
            result = d.execute("POST", "/x", payload={"a": 1})

        assert result.cached is True
        assert len(httpx_mock.get_requests()) == 1

    def test_disabled_cache_always_hits_network(self, envelope, httpx_mock: HTTPXMock):
        httpx_mock.add_response(json=envelope(1))
        httpx_mock.add_response(json=envelope(2))

        with RequestDispatcher("t") as d:
            d.execute("GET", "/users/me")
            d.execute("GET", "/users/me")

        assert len(httpx_mock.get_requests()) == 2

    def test_error_status_is_returned_as_data(
        self, dispatcher, envelope, httpx_mock: HTTPXMock
    ):
        """Non-2xx responses are decoded, not raised."""
        httpx_mock.add_response(
            status_code=404, json=envelope(None, code=404, errors=["not found"])
        )

        result = dispatcher.execute("GET", "/groups/404")

        assert result.ok is False
        assert result.code == 404
        assert result.errors == ["not found"]

    def test_empty_body_is_empty_result(self, dispatcher, httpx_mock: HTTPXMock):
        """An empty body (e.g. bot posts) is a successful empty result."""
        httpx_mock.add_response(status_code=202, text="")

        result = dispatcher.execute("POST", "/bots/post", payload={"bot_id": "b"})

        assert result.ok is True
        assert result.response is None
        assert result.status_code == 202

    def test_invalid_json_raises_decode_error(self, dispatcher, httpx_mock: HTTPXMock):
        httpx_mock.add_response(status_code=502, text="<html>Bad Gateway</html>")

        with pytest.raises(GroupMeDecodeError) as exc_info:
            dispatcher.execute("GET", "/groups")

        assert exc_info.value.status_code == 502
        assert "Bad Gateway" in exc_info.value.body

    def test_transport_failure_raises(self, dispatcher, httpx_mock: HTTPXMock):
        """Network errors are wrapped and not retried."""
        httpx_mock.add_exception(httpx.ConnectError("connection refused"))

        with pytest.raises(GroupMeTransportError) as exc_info:
            dispatcher.execute("GET", "/groups")

        assert exc_info.value.method == "GET"
        assert exc_info.value.endpoint == "/groups"
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert len(httpx_mock.get_requests()) == 1

    def test_transport_failure_not_cached(self, dispatcher, httpx_mock: HTTPXMock):
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"))

        with pytest.raises(GroupMeTransportError):
            dispatcher.execute("GET", "/groups")

        assert len(dispatcher.cache) == 0


class TestDispatcherConfig:
    """Tests for dispatcher construction."""

    def test_from_config(self, config):
        config.cache.enabled = True
        config.cache.ttl_seconds = 30

        with RequestDispatcher.from_config(config) as d:
            assert d.access_token == "test-token"
            assert d.timeout == 4.0
            assert d.verify_tls is True
            assert d.cache.enabled is True
            assert d.cache.ttl_seconds == 30
            assert d.cache_methods == {"GET"}

    def test_disabling_tls_verification_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="groupme.dispatcher"):
            d = RequestDispatcher("t", verify_tls=False)
        d.close()

        assert d.verify_tls is False
        assert "TLS certificate verification is disabled" in caplog.text
