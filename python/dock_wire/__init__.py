# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

from __future__ import annotations

from importlib.metadata import version

from dock_wire._address import SocketAddress, detect_socket, parse_address, validate_address
from dock_wire._logger import RequestLogger
from dock_wire._request import API_VERSION, build_query, format_request
from dock_wire._response import Response, dechunk, parse_response
from dock_wire._transport import Transport, UnixSocketTransport, receive_response
from dock_wire.client import EngineClient
from dock_wire.errors import (
    ApiResponseError,
    ChunkFramingError,
    ContainerError,
    ContainerNotFound,
    ContainerStateUnchanged,
    DockWireError,
    EngineNotRunning,
    ImageNotFound,
    InvalidBodyEncoding,
    InvalidHeaderEncoding,
    InvalidJsonPayload,
    InvalidSocketAddress,
    InvalidStatusLine,
    MalformedResponse,
    RequestError,
    ResponseParseError,
    SocketCommunicationError,
    SocketConnectionError,
    SocketError,
    UnsupportedMethod,
)

__version__ = version("dock-wire")


def get_version() -> str:
    """Return the dock-wire package version string."""
    return __version__


__all__ = [
    "API_VERSION",
    "ApiResponseError",
    "ChunkFramingError",
    "ContainerError",
    "ContainerNotFound",
    "ContainerStateUnchanged",
    "DockWireError",
    "EngineClient",
    "EngineNotRunning",
    "ImageNotFound",
    "InvalidBodyEncoding",
    "InvalidHeaderEncoding",
    "InvalidJsonPayload",
    "InvalidSocketAddress",
    "InvalidStatusLine",
    "MalformedResponse",
    "RequestError",
    "RequestLogger",
    "Response",
    "ResponseParseError",
    "SocketAddress",
    "SocketCommunicationError",
    "SocketConnectionError",
    "SocketError",
    "Transport",
    "UnixSocketTransport",
    "UnsupportedMethod",
    "__version__",
    "build_query",
    "dechunk",
    "detect_socket",
    "format_request",
    "get_version",
    "parse_address",
    "parse_response",
    "receive_response",
    "validate_address",
]
