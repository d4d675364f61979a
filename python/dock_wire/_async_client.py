# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Async engine client over :func:`asyncio.open_unix_connection`.

Speaks the same wire format as :class:`~dock_wire.client.EngineClient` and
uses the same pure formatter and parser.  One connection per client; an
:class:`asyncio.Lock` serializes exchanges on it.
"""

from __future__ import annotations

import asyncio
import contextlib
from typing import TYPE_CHECKING

from dock_wire._address import SocketAddress, detect_socket, parse_address
from dock_wire._callbacks import CallbackRegistry
from dock_wire._request import format_request
from dock_wire._response import Response, parse_response
from dock_wire._transport import BLOCK_SIZE
from dock_wire.client import NO_RESPONSE
from dock_wire.errors import (
    DockWireError,
    EngineNotRunning,
    SocketCommunicationError,
    SocketConnectionError,
    UnsupportedMethod,
)

if TYPE_CHECKING:
    from typing_extensions import Self


async def receive_response_async(
    reader: asyncio.StreamReader,
    block_size: int = BLOCK_SIZE,
) -> bytes:
    """Read one response, stopping at the first short read or at EOF."""
    parts: list[bytes] = []
    while True:
        block = await reader.read(block_size)
        if not block:
            break
        parts.append(block)
        if len(block) < block_size:
            break
    return b"".join(parts)


class AsyncEngineClient:
    """Async client bound to one engine connection."""

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        *,
        timeout: float | None = None,
    ) -> None:
        self._reader = reader
        self._writer = writer
        self._timeout = timeout
        self._lock = asyncio.Lock()
        self._callbacks = CallbackRegistry()

    @classmethod
    async def connect(
        cls,
        address: SocketAddress | str | None = None,
        *,
        timeout: float | None = None,
    ) -> AsyncEngineClient:
        """Open an async connection to the engine socket.

        Raises:
            EngineNotRunning: No address given and none could be detected.
            InvalidSocketAddress: *address* does not name an existing socket.
            SocketConnectionError: The socket refused the connection.

        """
        if address is None:
            address = detect_socket()
            if address is None:
                raise EngineNotRunning
        if isinstance(address, str):
            address = parse_address(address)
        try:
            reader, writer = await asyncio.wait_for(
                asyncio.open_unix_connection(address.path),
                timeout=timeout,
            )
        except (OSError, asyncio.TimeoutError) as exc:
            raise SocketConnectionError(address.path, str(exc) or "timed out") from exc
        return cls(reader, writer, timeout=timeout)

    @property
    def callbacks(self) -> CallbackRegistry:
        """Hooks fired around every exchange."""
        return self._callbacks

    async def send(self, endpoint: str, method: str, body: str = "") -> Response:
        """Send one request and return the parsed response.

        Raises:
            UnsupportedMethod: *method* is not GET or POST.
            SocketCommunicationError: Nothing was received (I/O error or timeout).
            ResponseParseError: The response bytes could not be parsed.

        """
        try:
            request = format_request(endpoint, method, body)
            if request is None:
                raise UnsupportedMethod(method)
            self._callbacks.dispatch_request(method, endpoint, request)

            raw = await self._roundtrip(request)
            if raw is None:
                raise SocketCommunicationError(NO_RESPONSE)
            response = parse_response(raw)
        except DockWireError as exc:
            self._callbacks.dispatch_error(method, endpoint, exc)
            raise
        self._callbacks.dispatch_response(method, endpoint, response)
        return response

    async def _roundtrip(self, request: bytes) -> bytes | None:
        """Write *request* and read one response.

        Returns ``None`` on failure and closes the connection, so a late
        reply is never paired with a later request.
        """
        async with self._lock:
            if self.closed:
                return None
            try:
                return await asyncio.wait_for(self._write_and_read(request), timeout=self._timeout)
            except (OSError, asyncio.TimeoutError):
                self._writer.close()
                return None

    async def _write_and_read(self, request: bytes) -> bytes:
        self._writer.write(request)
        await self._writer.drain()
        return await receive_response_async(self._reader)

    @property
    def closed(self) -> bool:
        """Whether the connection has been closed."""
        return self._writer.is_closing()

    async def close(self) -> None:
        """Close the connection."""
        self._writer.close()
        with contextlib.suppress(OSError):
            await self._writer.wait_closed()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
