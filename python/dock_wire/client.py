# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Engine API client: format -> transport -> parse.

:meth:`EngineClient.send` is the only entry point the resource helpers in
:mod:`dock_wire.api` use.  It never interprets status codes; a parseable
4xx/5xx response is a successful exchange at this layer.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from dock_wire._address import detect_socket
from dock_wire._callbacks import CallbackRegistry
from dock_wire._request import format_request
from dock_wire._response import Response, parse_response
from dock_wire._transport import UnixSocketTransport
from dock_wire.errors import (
    DockWireError,
    EngineNotRunning,
    SocketCommunicationError,
    UnsupportedMethod,
)

if TYPE_CHECKING:
    from typing_extensions import Self

    from dock_wire._address import SocketAddress
    from dock_wire._logger import RequestLogger
    from dock_wire._transport import Transport

NO_RESPONSE = "no response from daemon"


class EngineClient:
    """Synchronous client bound to one engine connection."""

    def __init__(self, transport: Transport, *, logger: RequestLogger | None = None) -> None:
        self._transport = transport
        self._logger = logger
        self._callbacks = CallbackRegistry()

    @classmethod
    def connect(
        cls,
        address: SocketAddress | str | None = None,
        *,
        timeout: float | None = None,
        logger: RequestLogger | None = None,
    ) -> EngineClient:
        """Connect to the engine socket.

        Args:
            address: ``unix://`` URL or socket path.  Auto-detected if ``None``.
            timeout: Seconds each socket operation may block (``None`` = forever).
            logger: Optional request history logger.

        Raises:
            EngineNotRunning: No address given and none could be detected.
            InvalidSocketAddress: *address* does not name an existing socket.
            SocketConnectionError: The socket refused the connection.

        """
        if address is None:
            address = detect_socket()
            if address is None:
                raise EngineNotRunning
        transport = UnixSocketTransport.connect(address, timeout=timeout)
        return cls(transport, logger=logger)

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def callbacks(self) -> CallbackRegistry:
        """Hooks fired around every exchange."""
        return self._callbacks

    def send(self, endpoint: str, method: str, body: str = "") -> Response:
        """Send one request and return the parsed response.

        Raises:
            UnsupportedMethod: *method* is not GET or POST.
            SocketCommunicationError: The transport returned nothing.
            ResponseParseError: The response bytes could not be parsed.

        """
        started_at = datetime.now(tz=timezone.utc)
        start = time.monotonic()
        try:
            response = self._exchange(endpoint, method, body)
        except DockWireError as exc:
            self._log(method, endpoint, start, started_at, error=str(exc))
            self._callbacks.dispatch_error(method, endpoint, exc)
            raise
        self._log(method, endpoint, start, started_at, status_code=response.status_code)
        self._callbacks.dispatch_response(method, endpoint, response)
        return response

    def _exchange(self, endpoint: str, method: str, body: str) -> Response:
        request = format_request(endpoint, method, body)
        if request is None:
            raise UnsupportedMethod(method)
        self._callbacks.dispatch_request(method, endpoint, request)

        raw = self._transport.send(request)
        if raw is None:
            raise SocketCommunicationError(NO_RESPONSE)

        return parse_response(raw)

    def _log(
        self,
        method: str,
        endpoint: str,
        start: float,
        started_at: datetime,
        *,
        status_code: int | None = None,
        error: str | None = None,
    ) -> None:
        if self._logger is None:
            return
        self._logger.log_exchange(
            method,
            endpoint,
            duration_ms=(time.monotonic() - start) * 1000,
            status_code=status_code,
            error=error,
            started_at=started_at,
        )

    def clone(self) -> EngineClient:
        """Return a client sharing this one's connection.

        Only transports that implement ``clone()`` can be cloned.
        """
        clone = getattr(self._transport, "clone", None)
        if clone is None:
            msg = f"{type(self._transport).__name__} does not support clone()"
            raise TypeError(msg)
        return EngineClient(clone(), logger=self._logger)

    def close(self) -> None:
        """Close the underlying connection, if the transport has one."""
        close = getattr(self._transport, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
