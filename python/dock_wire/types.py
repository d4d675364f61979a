# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

from __future__ import annotations

import dataclasses
from typing import Any


@dataclasses.dataclass(frozen=True)
class Port:
    """A published container port."""

    private_port: int
    public_port: int = 0
    type: str = "tcp"


@dataclasses.dataclass(frozen=True)
class Mount:
    """A volume or bind mount attached to a container."""

    source: str
    destination: str
    name: str = ""
    driver: str = ""
    mode: str = ""
    rw: bool = True
    propagation: str = ""


@dataclasses.dataclass(frozen=True)
class ContainerSummary:
    """One entry of ``GET /containers/json``."""

    id: str
    names: tuple[str, ...]
    image: str
    image_id: str = ""
    command: str = ""
    state: str = ""
    status: str = ""
    ports: tuple[Port, ...] = ()
    labels: dict[str, str] = dataclasses.field(default_factory=dict)
    size_rw: int | None = None
    size_root_fs: int = 0
    network_mode: str = ""
    mounts: tuple[Mount, ...] = ()

    @property
    def name(self) -> str:
        """Primary name without the leading slash."""
        return self.names[0].lstrip("/") if self.names else ""


@dataclasses.dataclass(frozen=True)
class ContainerConfig:
    """Body of ``POST /containers/create``."""

    image: str
    cmd: tuple[str, ...] = ()
    hostname: str = ""
    domainname: str = ""
    user: str = ""
    attach_stdin: bool = False
    attach_stdout: bool = False
    attach_stderr: bool = False
    tty: bool = False
    open_stdin: bool = False
    stdin_once: bool = False
    env: tuple[str, ...] = ()
    entrypoint: str | None = None
    labels: dict[str, str] | None = None
    working_dir: str = ""


@dataclasses.dataclass(frozen=True)
class CreateContainerResponse:
    """Result of ``POST /containers/create``."""

    id: str
    warnings: tuple[str, ...] = ()


@dataclasses.dataclass(frozen=True)
class ContainerState:
    """``State`` block of a container inspect."""

    status: str = ""
    running: bool = False
    paused: bool = False
    restarting: bool = False
    oom_killed: bool = False
    dead: bool = False
    pid: int = 0
    exit_code: int = 0
    error: str = ""
    started_at: str = ""
    finished_at: str = ""


@dataclasses.dataclass(frozen=True)
class ContainerDetails:
    """Result of ``GET /containers/{id}/json``."""

    id: str
    name: str
    image: str
    created: str = ""
    path: str = ""
    args: tuple[str, ...] = ()
    state: ContainerState = dataclasses.field(default_factory=ContainerState)
    platform: str | None = None
    restart_count: int = 0
    driver: str = ""
    log_path: str = ""
    host_config: dict[str, Any] = dataclasses.field(default_factory=dict)
    config: dict[str, Any] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass(frozen=True)
class ContainerFsChange:
    """One entry of ``GET /containers/{id}/changes``.

    ``kind`` is 0 for modified, 1 for added and 2 for deleted paths.
    """

    path: str
    kind: int

    @property
    def kind_label(self) -> str:
        return {0: "modified", 1: "added", 2: "deleted"}.get(self.kind, "unknown")


@dataclasses.dataclass(frozen=True)
class ImageSummary:
    """One entry of ``GET /images/json``."""

    id: str
    repo_tags: tuple[str, ...] = ()
    parent_id: str = ""
    repo_digests: tuple[str, ...] = ()
    created: int = 0
    size: int = 0
    virtual_size: int = 0
    shared_size: int = -1
    labels: dict[str, str] = dataclasses.field(default_factory=dict)
    containers: int = -1
