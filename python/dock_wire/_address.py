# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Connection target parsing and engine socket discovery.

Accepted address forms:

* ``unix:///var/run/docker.sock``
* ``/var/run/docker.sock``

Existence of the path is checked once, at validation time.  The daemon may
still go away before the socket is connected.
"""

from __future__ import annotations

import dataclasses
import os
import pathlib

from dock_wire.errors import InvalidSocketAddress

UNIX_SCHEME = "unix"
_SCHEME_SEPARATOR = "://"


@dataclasses.dataclass(frozen=True)
class SocketAddress:
    """A validated connection target."""

    scheme: str
    path: str

    def __str__(self) -> str:
        return f"{self.scheme}{_SCHEME_SEPARATOR}{self.path}"


def validate_address(address: str) -> SocketAddress | None:
    """Split *address* into scheme and path.

    Returns:
        The :class:`SocketAddress`, or ``None`` if the scheme is not exactly
        ``unix`` or the path does not exist.

    """
    if _SCHEME_SEPARATOR in address:
        scheme, path = address.split(_SCHEME_SEPARATOR, 1)
        if scheme != UNIX_SCHEME:
            return None
    else:
        scheme, path = UNIX_SCHEME, address

    if not path or not _path_exists(pathlib.Path(path)):
        return None
    return SocketAddress(scheme=scheme, path=path)


def parse_address(address: str) -> SocketAddress:
    """Like :func:`validate_address` but raise on failure."""
    parsed = validate_address(address)
    if parsed is None:
        raise InvalidSocketAddress(address)
    return parsed


def detect_socket() -> str | None:
    """Auto-detect an available container engine socket.

    Detection order:
    1. ``DOCK_WIRE_SOCKET`` env var
    2. ``DOCKER_HOST`` env var, when it is a ``unix://`` URL
    3. Podman rootless: ``$XDG_RUNTIME_DIR/podman/podman.sock``
    4. Podman system: ``/run/podman/podman.sock``
    5. Docker: ``/var/run/docker.sock``

    Returns:
        The path to the first socket found, or ``None``.

    """
    explicit = os.environ.get("DOCK_WIRE_SOCKET")
    if explicit:
        parsed = validate_address(explicit)
        if parsed is not None:
            return parsed.path

    docker_host = os.environ.get("DOCKER_HOST", "")
    if docker_host.startswith(UNIX_SCHEME + _SCHEME_SEPARATOR):
        parsed = validate_address(docker_host)
        if parsed is not None:
            return parsed.path

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


def _path_exists(path: pathlib.Path) -> bool:
    """Check if *path* exists, returning ``False`` on ``PermissionError``."""
    try:
        return path.exists()
    except PermissionError:
        return False
