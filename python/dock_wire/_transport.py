# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Blocking byte transport over a Unix domain socket.

One socket is opened per client and reused for every request.  Handles
produced by :meth:`UnixSocketTransport.clone` alias that same socket and
share a lock, so a write+read cycle from one handle never interleaves with
another's.  An exchange that fails or times out closes the shared socket.

Responses are framed heuristically by :func:`receive_response`: reading
stops at the first short read or at EOF.  This holds for the engine's
small request/response exchanges but is not general HTTP framing.
"""

from __future__ import annotations

import socket
import threading
from typing import TYPE_CHECKING, Any, Protocol

from dock_wire._address import SocketAddress, parse_address
from dock_wire.errors import SocketConnectionError

if TYPE_CHECKING:
    from typing_extensions import Self

BLOCK_SIZE = 1024

_UNSET: Any = object()


class Transport(Protocol):
    """Anything that can carry one request and return the raw response."""

    def send(self, request: bytes) -> bytes | None:
        """Write *request* and return the raw response, or ``None`` on failure."""
        ...


def receive_response(sock: socket.socket, block_size: int = BLOCK_SIZE) -> bytes:
    """Read one response from *sock*.

    Reads *block_size* blocks until a read returns fewer bytes than asked
    for, or nothing at all.  ``OSError`` (timeouts included) propagates.
    """
    parts: list[bytes] = []
    while True:
        block = sock.recv(block_size)
        if not block:
            break
        parts.append(block)
        if len(block) < block_size:
            break
    return b"".join(parts)


class UnixSocketTransport:
    """A connected Unix socket plus the lock guarding it."""

    def __init__(
        self,
        sock: socket.socket,
        *,
        lock: threading.Lock | None = None,
        timeout: float | None = None,
        block_size: int = BLOCK_SIZE,
    ) -> None:
        self._sock = sock
        self._lock = lock if lock is not None else threading.Lock()
        self._timeout = timeout
        self._block_size = block_size

    @classmethod
    def connect(
        cls,
        address: SocketAddress | str,
        *,
        timeout: float | None = None,
    ) -> UnixSocketTransport:
        """Open a stream connection to the engine socket.

        Raises:
            InvalidSocketAddress: *address* is a string that does not validate.
            SocketConnectionError: The OS refused the connection.

        """
        if isinstance(address, str):
            address = parse_address(address)
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.settimeout(timeout)
            sock.connect(address.path)
        except OSError as exc:
            sock.close()
            raise SocketConnectionError(address.path, str(exc)) from exc
        return cls(sock, timeout=timeout)

    @property
    def timeout(self) -> float | None:
        """Default per-operation timeout in seconds (``None`` blocks forever)."""
        return self._timeout

    @property
    def closed(self) -> bool:
        """Whether the underlying socket has been closed."""
        return self._sock.fileno() == -1

    def send(self, request: bytes, *, timeout: float | None = _UNSET) -> bytes | None:
        """Write *request* and read back one response.

        A failed or timed-out exchange closes the socket for every handle,
        since a late reply would otherwise be read as the answer to the
        next request.  Callers must reconnect after that.

        Returns:
            The raw response bytes, or ``None`` if writing or reading failed
            or timed out.  Partially read data is discarded.

        """
        effective = self._timeout if timeout is _UNSET else timeout
        with self._lock:
            try:
                self._sock.settimeout(effective)
                self._sock.sendall(request)
                return receive_response(self._sock, self._block_size)
            except OSError:
                self._sock.close()
                return None

    def clone(self) -> UnixSocketTransport:
        """Return a second handle over the same socket and lock."""
        return UnixSocketTransport(
            self._sock,
            lock=self._lock,
            timeout=self._timeout,
            block_size=self._block_size,
        )

    def close(self) -> None:
        """Close the socket for every handle that shares it."""
        self._sock.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
