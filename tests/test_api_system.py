"""Unit tests for engine-wide queries."""

from __future__ import annotations

import pytest
from dock_wire.api import system
from dock_wire.client import EngineClient
from dock_wire.errors import ApiResponseError, InvalidJsonPayload

from .conftest import FakeTransport, chunked, http_response


def test_get_version_info_returns_raw_body() -> None:
    body = '{"ID":"7TRN","Containers":14,"ServerVersion":"24.0.7"}'
    transport = FakeTransport(http_response(200, body))
    assert system.get_version_info(EngineClient(transport)) == body
    assert transport.request_lines == ["GET /info HTTP/1.1"]


def test_get_version_info_chunked() -> None:
    raw = http_response(200, Transfer_Encoding="chunked") + chunked(b'{"ID":', b'"x"}')
    assert system.get_version_info(EngineClient(FakeTransport(raw))) == '{"ID":"x"}'


def test_get_version_info_error_status() -> None:
    transport = FakeTransport(http_response(500, "down", reason="Server Error"))
    with pytest.raises(ApiResponseError) as exc_info:
        system.get_version_info(EngineClient(transport))
    assert exc_info.value.status_code == 500


def test_version() -> None:
    body = '{"Version":"24.0.7","ApiVersion":"1.43","Os":"linux"}'
    transport = FakeTransport(http_response(200, body))
    assert system.version(EngineClient(transport))["ApiVersion"] == "1.43"
    assert transport.request_lines == ["GET /version HTTP/1.1"]


def test_version_rejects_non_object() -> None:
    transport = FakeTransport(http_response(200, "[1, 2]"))
    with pytest.raises(InvalidJsonPayload):
        system.version(EngineClient(transport))


def test_ping() -> None:
    transport = FakeTransport(http_response(200, "OK", Content_Type="text/plain"))
    assert system.ping(EngineClient(transport)) == "OK"
    assert transport.request_lines == ["GET /_ping HTTP/1.1"]
