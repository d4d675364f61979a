# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

from __future__ import annotations


class DockWireError(Exception):
    """Base exception for all dock-wire errors."""


class SocketError(DockWireError):
    """Error related to the Unix socket connection to the engine."""


class InvalidSocketAddress(SocketError):
    """Connection target is not a ``unix://`` address of an existing socket."""

    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(f"The target address `{address}` is not valid")


class SocketConnectionError(SocketError):
    """Cannot connect to the container engine socket."""

    def __init__(self, socket_path: str, detail: str = "") -> None:
        self.socket_path = socket_path
        msg = f"Cannot connect to socket at {socket_path}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class SocketCommunicationError(SocketError):
    """Error during communication over the socket."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        msg = "Socket communication error"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class EngineNotRunning(SocketError):
    """No container engine socket found."""

    def __init__(self) -> None:
        super().__init__(
            "No container engine socket found. "
            "Is Docker or Podman running? "
            "Set DOCK_WIRE_SOCKET or pass --socket explicitly."
        )


class RequestError(DockWireError):
    """A request could not be prepared for the wire."""


class UnsupportedMethod(RequestError):
    """HTTP method other than GET or POST."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Unsupported HTTP method: {method!r}")


class ResponseParseError(DockWireError):
    """Raw response bytes could not be turned into a :class:`Response`."""

    summary = "Invalid HTTP response"

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        msg = self.summary
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class MalformedResponse(ResponseParseError):
    """No blank line separates the headers from the body."""

    summary = "Not a valid HTTP response"


class InvalidStatusLine(ResponseParseError):
    """Status line is not ``<version> <code> <reason>``."""

    summary = "Error while parsing HTTP status line"


class InvalidHeaderEncoding(ResponseParseError):
    """Header block is not valid UTF-8."""

    summary = "Error while parsing HTTP header"


class ChunkFramingError(ResponseParseError):
    """Chunked body has a bad size line or is truncated."""

    summary = "Invalid chunked body"


class InvalidBodyEncoding(ResponseParseError):
    """Response body is not valid UTF-8."""

    summary = "Error while parsing response body"


class ApiResponseError(DockWireError):
    """Engine answered with a status code the operation does not accept."""

    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        msg = f"Invalid API response: HTTP {status_code}"
        if body:
            msg = f"{msg}: {body}"
        super().__init__(msg)


class InvalidJsonPayload(DockWireError):
    """Response body is not the JSON document the operation expects."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        msg = "Error while deserializing JSON response"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class ContainerError(DockWireError):
    """Error related to a specific container."""

    def __init__(self, container_id: str, detail: str = "") -> None:
        self.container_id = container_id
        msg = f"Container {container_id}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class ContainerNotFound(ContainerError):
    """Container does not exist (HTTP 404)."""

    def __init__(self, container_id: str) -> None:
        super().__init__(container_id, "not found")


class ContainerStateUnchanged(ContainerError):
    """Container is already in the requested state (HTTP 304)."""

    def __init__(self, container_id: str, action: str) -> None:
        self.action = action
        super().__init__(container_id, f"state unchanged by `{action}`")


class ImageNotFound(DockWireError):
    """Requested image does not exist locally."""

    def __init__(self, image: str) -> None:
        self.image = image
        super().__init__(f"Image not found: {image}")
