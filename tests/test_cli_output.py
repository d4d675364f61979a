"""Tests for CLI output formatters."""

from __future__ import annotations

import json
from io import StringIO
from unittest.mock import patch

import pytest
from dock_wire._response import Response
from dock_wire.cli._output import (
    _error_info,
    _human_size,
    click_echo_json,
    format_container_details,
    format_container_list,
    format_error,
    format_history,
    format_image_list,
    format_response,
    print_exchange,
    print_success,
)
from dock_wire.errors import (
    ApiResponseError,
    ChunkFramingError,
    ContainerNotFound,
    EngineNotRunning,
    ImageNotFound,
    InvalidSocketAddress,
    SocketConnectionError,
)
from dock_wire.types import ContainerDetails, ContainerState, ContainerSummary, ImageSummary

# --- format_container_list ---


def test_format_container_list_json() -> None:
    items = [ContainerSummary(id="abc123def456", names=("/test-1",), image="alpine:latest")]
    with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
        format_container_list(items, json_output=True)
        output = mock_stdout.getvalue()
    [data] = json.loads(output)
    assert data["names"] == ["/test-1"]
    assert data["image"] == "alpine:latest"


def test_format_container_list_empty() -> None:
    with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
        format_container_list([])
        assert "No containers found" in mock_stdout.getvalue()


def test_format_container_list_table() -> None:
    items = [
        ContainerSummary(
            id="abc123def456789",
            names=("/web",),
            image="nginx",
            state="running",
            status="Up 1 minute",
        ),
        ContainerSummary(id="fff000", names=("/job",), image="busybox", state="exited"),
    ]
    with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
        format_container_list(items)
        output = mock_stdout.getvalue()
    assert "abc123def456" in output
    assert "abc123def4567" not in output
    assert "web" in output
    assert "exited" in output


# --- format_image_list ---


def test_format_image_list_table() -> None:
    items = [ImageSummary(id="sha256:0123456789abcdef", repo_tags=(), size=512)]
    with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
        format_image_list(items)
        output = mock_stdout.getvalue()
    assert "0123456789ab" in output
    assert "<none>" in output
    assert "512B" in output


def test_format_image_list_empty() -> None:
    with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
        format_image_list([])
        assert "No images found" in mock_stdout.getvalue()


# --- format_container_details ---


def test_format_container_details_json() -> None:
    details = ContainerDetails(id="abc", name="web", image="nginx")
    with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
        format_container_details(details, json_output=True)
        data = json.loads(mock_stdout.getvalue())
    assert data["name"] == "web"
    assert data["state"]["running"] is False


def test_format_container_details_exited_with_error() -> None:
    details = ContainerDetails(
        id="abc",
        name="job",
        image="busybox",
        state=ContainerState(
            status="exited", exit_code=3, finished_at="2026-01-01T00:00:00Z", error="oom"
        ),
    )
    with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
        format_container_details(details)
        output = mock_stdout.getvalue()
    assert "exited" in output
    assert "3" in output
    assert "oom" in output


# --- format_response ---


def test_format_response_body_to_stdout_status_to_stderr() -> None:
    with (
        patch("sys.stdout", new_callable=StringIO) as mock_stdout,
        patch("sys.stderr", new_callable=StringIO) as mock_stderr,
    ):
        format_response(Response(200, "OK"))
    assert mock_stdout.getvalue() == "OK\n"
    assert "HTTP 200" in mock_stderr.getvalue()


def test_format_response_empty_body() -> None:
    with (
        patch("sys.stdout", new_callable=StringIO) as mock_stdout,
        patch("sys.stderr", new_callable=StringIO),
    ):
        format_response(Response(204))
    assert mock_stdout.getvalue() == ""


def test_format_response_json() -> None:
    with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
        format_response(Response(404, "nope"), json_output=True)
    assert json.loads(mock_stdout.getvalue()) == {"status_code": 404, "body": "nope"}


# --- format_history ---


def test_format_history_table() -> None:
    entries: list[dict[str, object]] = [
        {"method": "GET", "endpoint": "/_ping", "status_code": 200, "duration_ms": 1.2},
        {"method": "POST", "endpoint": "/x", "error": "boom", "duration_ms": 3.0},
    ]
    with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
        format_history(entries)
        output = mock_stdout.getvalue()
    assert "/_ping" in output
    assert "boom" in output


def test_format_history_empty() -> None:
    with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
        format_history([])
        assert "No log entries found" in mock_stdout.getvalue()


# --- format_error ---


@pytest.mark.parametrize(
    ("err", "title"),
    [
        (EngineNotRunning(), "Engine Not Found"),
        (InvalidSocketAddress("tcp://x"), "Invalid Address"),
        (SocketConnectionError("/x.sock", "refused"), "Connection Failed"),
        (ContainerNotFound("abc"), "Container Not Found"),
        (ImageNotFound("alpine"), "Image Not Found"),
        (ChunkFramingError("truncated chunk"), "Bad Response"),
        (ApiResponseError(500), "Error"),
    ],
)
def test_error_info_titles(err: Exception, title: str) -> None:
    assert _error_info(err)[0] == title  # type: ignore[arg-type]


def test_format_error_to_stderr() -> None:
    with patch("sys.stderr", new_callable=StringIO) as mock_stderr:
        format_error(ContainerNotFound("abc"))
        output = mock_stderr.getvalue()
    assert "Container Not Found" in output
    assert "ps --all" in output


def test_format_error_generic_has_no_suggestion() -> None:
    assert _error_info(ApiResponseError(500, "x")) == ("Error", "")


# --- misc ---


def test_print_success() -> None:
    with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
        print_success("done")
        assert "done" in mock_stdout.getvalue()


def test_print_exchange() -> None:
    with patch("sys.stderr", new_callable=StringIO) as mock_stderr:
        print_exchange("request", "get", "/info", "42B")
        print_exchange("response", "GET", "/info")
        output = mock_stderr.getvalue()
    assert ">>> GET /info 42B" in output
    assert "<<< GET /info" in output


def test_click_echo_json() -> None:
    with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
        click_echo_json({"key": "value"})
        assert json.loads(mock_stdout.getvalue()) == {"key": "value"}


@pytest.mark.parametrize(
    ("size", "text"),
    [(0, "0B"), (999, "999B"), (1500, "1.5KB"), (7_340_000, "7.3MB"), (2_500_000_000, "2.5GB")],
)
def test_human_size(size: int, text: str) -> None:
    assert _human_size(size) == text
