"""Shared fixtures for dock-wire tests."""

from __future__ import annotations

import contextlib
import os
import pathlib
import socket
import tempfile
import threading
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


def _path_exists(path: pathlib.Path) -> bool:
    """Check if *path* exists, returning ``False`` on ``PermissionError``."""
    try:
        return path.exists()
    except PermissionError:
        return False


def _find_socket() -> str | None:
    """Detect an available container engine socket."""
    explicit = os.environ.get("DOCK_WIRE_SOCKET")
    if explicit and _path_exists(pathlib.Path(explicit)):
        return explicit

    xdg = os.environ.get("XDG_RUNTIME_DIR", f"/run/user/{os.getuid()}")
    candidates = [
        pathlib.Path(xdg) / "podman" / "podman.sock",
        pathlib.Path("/run/podman/podman.sock"),
        pathlib.Path("/var/run/docker.sock"),
    ]
    for candidate in candidates:
        if _path_exists(candidate):
            return str(candidate)
    return None


SOCKET_PATH = _find_socket()
HAS_ENGINE = SOCKET_PATH is not None

requires_engine = pytest.mark.skipif(
    not HAS_ENGINE,
    reason="No container engine socket found (Docker or Podman)",
)


@pytest.fixture
def socket_path() -> str:
    """Return the detected socket path, or skip the test."""
    if SOCKET_PATH is None:
        pytest.skip("No container engine socket found")
    return SOCKET_PATH


@pytest.fixture
def short_tmp() -> Iterator[pathlib.Path]:
    """A temp dir with a path short enough for ``AF_UNIX`` (108 bytes)."""
    with tempfile.TemporaryDirectory(prefix="dw-", dir="/tmp") as d:
        yield pathlib.Path(d)


# ---------------------------------------------------------------------------
# Fake transport
# ---------------------------------------------------------------------------


class FakeTransport:
    """Records requests and replays canned raw responses (or ``None``)."""

    def __init__(self, *responses: bytes | None) -> None:
        self.responses = list(responses)
        self.requests: list[bytes] = []
        self.closed = False

    def send(self, request: bytes) -> bytes | None:
        self.requests.append(request)
        if not self.responses:
            return None
        return self.responses.pop(0)

    def close(self) -> None:
        self.closed = True

    @property
    def request_lines(self) -> list[str]:
        """First line of every recorded request."""
        return [r.split(b"\r\n", 1)[0].decode() for r in self.requests]


def http_response(status: int, body: str = "", reason: str = "OK", **headers: str) -> bytes:
    """Build raw response bytes; ``headers`` use underscores for dashes."""
    lines = [f"HTTP/1.1 {status} {reason}"]
    lines += [f"{k.replace('_', '-')}: {v}" for k, v in headers.items()]
    return ("\r\n".join(lines) + "\r\n\r\n" + body).encode("utf-8")


def chunked(*parts: bytes) -> bytes:
    """Encode *parts* as a chunked body with a terminal zero chunk."""
    out = b"".join(f"{len(p):x}".encode() + b"\r\n" + p + b"\r\n" for p in parts)
    return out + b"0\r\n\r\n"


# ---------------------------------------------------------------------------
# Canned Unix socket server
# ---------------------------------------------------------------------------


class CannedServer:
    """Accepts one connection and answers each request with the next reply."""

    def __init__(self, path: pathlib.Path, replies: list[bytes]) -> None:
        self.path = path
        self.replies = list(replies)
        self.received: list[bytes] = []
        self._sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        self._sock.bind(str(path))
        self._sock.listen(1)
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    def _serve(self) -> None:
        try:
            conn, _ = self._sock.accept()
        except OSError:
            return
        with conn:
            while self.replies:
                data = conn.recv(65536)
                if not data:
                    return
                self.received.append(data)
                conn.sendall(self.replies.pop(0))

    def close(self) -> None:
        # shutdown() wakes a thread still blocked in accept()
        with contextlib.suppress(OSError):
            self._sock.shutdown(socket.SHUT_RDWR)
        self._sock.close()
        self._thread.join(timeout=2)


@pytest.fixture
def canned_server(short_tmp: pathlib.Path) -> Iterator[Callable[..., CannedServer]]:
    """Factory: ``canned_server(reply, ...)`` starts a server, returns it."""
    servers: list[CannedServer] = []

    def _start(*replies: bytes) -> CannedServer:
        server = CannedServer(short_tmp / f"engine{len(servers)}.sock", list(replies))
        servers.append(server)
        return server

    yield _start
    for server in servers:
        server.close()
