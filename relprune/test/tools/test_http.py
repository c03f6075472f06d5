"""Tests for tools/http.py - HTTP client abstraction."""

from __future__ import annotations

import http.client
import io
import urllib.error
import urllib.request
from email.message import Message
from typing import Any

import pytest

from relprune.core.result import Err, Ok
from relprune.tools.http import (
    DEFAULT_USER_AGENT,
    HttpClient,
    HttpError,
    MockHttpClient,
    RealHttpClient,
)

URL = "https://api.github.com/repos/octo/demo/releases"


# =============================================================================
# HttpError tests
# =============================================================================


class TestHttpError:
    def test_str_with_status(self) -> None:
        error = HttpError(url=URL, status=403, message="Resource not accessible")
        assert str(error) == f"HTTP 403: Resource not accessible ({URL})"

    def test_str_without_status(self) -> None:
        error = HttpError(url=URL, status=0, message="Timeout")
        assert str(error) == f"Timeout ({URL})"

    def test_is_frozen(self) -> None:
        error = HttpError(url=URL, status=404, message="Not Found")
        with pytest.raises(AttributeError):
            error.status = 500  # type: ignore[misc]


# =============================================================================
# MockHttpClient tests
# =============================================================================


class TestMockHttpClient:
    def test_isinstance_check(self) -> None:
        assert isinstance(MockHttpClient(), HttpClient)

    def test_response_by_method_and_url(self) -> None:
        client = MockHttpClient()
        client.set_response("GET", URL, [{"id": 1}])
        client.set_response("DELETE", f"{URL}/1", None)

        assert client.request("GET", URL) == Ok([{"id": 1}])
        assert client.request("DELETE", f"{URL}/1") == Ok(None)

    def test_unknown_url_is_404(self) -> None:
        result = MockHttpClient().request("DELETE", f"{URL}/9")
        assert isinstance(result, Err)
        assert result.error.status == 404

    def test_error_response(self) -> None:
        client = MockHttpClient()
        client.set_response("GET", URL, HttpError(url=URL, status=500, message="Server Error"))
        result = client.request("GET", URL)
        assert isinstance(result, Err)
        assert result.error.status == 500

    def test_tracks_calls_and_headers(self) -> None:
        client = MockHttpClient()
        client.request("get", URL, headers={"Authorization": "Bearer t"})
        client.request("DELETE", f"{URL}/1")

        assert client.calls == [("GET", URL), ("DELETE", f"{URL}/1")]
        assert client.calls_for("delete") == [f"{URL}/1"]
        assert client.headers[0] == {"Authorization": "Bearer t"}


# =============================================================================
# RealHttpClient tests (unit tests only - no network)
# =============================================================================


class _FakeResponse:
    def __init__(self, body: bytes) -> None:
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> _FakeResponse:
        return self

    def __exit__(self, *exc: object) -> None:
        return None


class TestRealHttpClient:
    def test_isinstance_check(self) -> None:
        assert isinstance(RealHttpClient(), HttpClient)

    def test_default_config(self) -> None:
        client = RealHttpClient()
        assert client.timeout == 30.0
        assert client.user_agent == DEFAULT_USER_AGENT
        assert DEFAULT_USER_AGENT.startswith("relprune/")

    def test_invalid_url(self) -> None:
        result = RealHttpClient(timeout=1.0).request("GET", "not-a-valid-url")
        assert isinstance(result, Err)
        assert result.error.status == 0

    def test_sends_method_and_headers(self, monkeypatch: pytest.MonkeyPatch) -> None:
        seen: dict[str, Any] = {}

        def fake_urlopen(req: urllib.request.Request, **_: object) -> _FakeResponse:
            seen["method"] = req.get_method()
            seen["headers"] = dict(req.header_items())
            return _FakeResponse(b'[{"id": 1}]')

        monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

        result = RealHttpClient().request("GET", URL, headers={"Authorization": "Bearer t"})

        assert result == Ok([{"id": 1}])
        assert seen["method"] == "GET"
        # urllib capitalizes header names
        assert seen["headers"]["Authorization"] == "Bearer t"
        assert seen["headers"]["User-agent"] == DEFAULT_USER_AGENT

    def test_empty_body_decodes_to_none(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(urllib.request, "urlopen", lambda req, **_: _FakeResponse(b""))
        assert RealHttpClient().request("DELETE", f"{URL}/1") == Ok(None)

    def test_invalid_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(urllib.request, "urlopen", lambda req, **_: _FakeResponse(b"<html>"))
        result = RealHttpClient().request("GET", URL)
        assert isinstance(result, Err)
        assert "JSON parse error" in result.error.message

    def test_http_error_uses_api_message(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_urlopen(req: urllib.request.Request, **_: object) -> _FakeResponse:
            raise urllib.error.HTTPError(
                URL, 401, "Unauthorized", Message(), io.BytesIO(b'{"message": "Bad credentials"}')
            )

        monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
        result = RealHttpClient().request("GET", URL)
        assert isinstance(result, Err)
        assert result.error.status == 401
        assert result.error.message == "Bad credentials"

    def test_http_error_without_body(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_urlopen(req: urllib.request.Request, **_: object) -> _FakeResponse:
            raise urllib.error.HTTPError(URL, 422, "Unprocessable", Message(), io.BytesIO(b""))

        monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
        result = RealHttpClient().request("DELETE", URL)
        assert isinstance(result, Err)
        assert result.error.message == "Unprocessable"

    def test_network_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_urlopen(req: urllib.request.Request, **_: object) -> _FakeResponse:
            raise urllib.error.URLError("Name or service not known")

        monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
        result = RealHttpClient().request("GET", URL)
        assert isinstance(result, Err)
        assert result.error.status == 0
        assert "Name or service not known" in result.error.message

    def test_truncated_body(self, monkeypatch: pytest.MonkeyPatch) -> None:
        class _TruncatedResponse(_FakeResponse):
            def read(self) -> bytes:
                raise http.client.IncompleteRead(b"")

        monkeypatch.setattr(
            urllib.request, "urlopen", lambda req, **_: _TruncatedResponse(b"")
        )
        result = RealHttpClient().request("DELETE", URL)
        assert isinstance(result, Err)
        assert result.error.status == 0
        assert "IncompleteRead" in result.error.message

    def test_bad_status_line(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_urlopen(req: urllib.request.Request, **_: object) -> _FakeResponse:
            raise http.client.BadStatusLine("garbage")

        monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
        result = RealHttpClient().request("GET", URL)
        assert isinstance(result, Err)
        assert result.error.status == 0
        assert result.error.message == "garbage"
