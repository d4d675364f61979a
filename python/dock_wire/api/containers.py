# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Container listing, creation, inspection and lifecycle actions.

Every function takes a connected :class:`~dock_wire.client.EngineClient`
and goes through :meth:`~dock_wire.client.EngineClient.send`; nothing here
touches the socket directly.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from dock_wire._request import build_query
from dock_wire.api._common import (
    check_status,
    decode_json_list,
    decode_json_object,
    is_valid_json,
)
from dock_wire.errors import (
    ApiResponseError,
    ContainerNotFound,
    ContainerStateUnchanged,
    ImageNotFound,
)
from dock_wire.types import (
    ContainerConfig,
    ContainerDetails,
    ContainerFsChange,
    ContainerState,
    ContainerSummary,
    CreateContainerResponse,
    Mount,
    Port,
)

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from dock_wire._response import Response
    from dock_wire.client import EngineClient

# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------


def _check_container_response(response: Response, container_id: str, *expected: int) -> None:
    """Raise appropriate errors based on HTTP status codes."""
    if response.status_code in expected:
        return
    if response.status_code == 404:  # noqa: PLR2004
        raise ContainerNotFound(container_id)
    raise ApiResponseError(response.status_code, response.body)


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------


def get_containers(client: EngineClient, query: str) -> list[ContainerSummary]:
    """Run ``GET /containers/json{query}`` and decode the result."""
    response = client.send("/containers/json", "GET", query)
    check_status(response, 200)
    return [_container_summary(item) for item in decode_json_list(response)]


def list_running_containers(
    client: EngineClient,
    limit: int | None = None,
) -> list[ContainerSummary]:
    """List running containers, newest first."""
    return get_containers(client, build_query({"size": True, "limit": limit}))


def list_all_containers(
    client: EngineClient,
    limit: int | None = None,
) -> list[ContainerSummary]:
    """List all containers, stopped ones included."""
    return get_containers(client, build_query({"all": True, "size": True, "limit": limit}))


def get_containers_with_filter(
    client: EngineClient,
    filters: str,
    limit: int | None = None,
) -> list[ContainerSummary]:
    """List all containers matching a JSON-encoded filter map.

    Raises:
        ValueError: *filters* is not valid JSON.

    """
    if not is_valid_json(filters):
        msg = f"The provided filter is not a valid JSON: {filters}"
        raise ValueError(msg)
    query = build_query({"all": True, "size": True, "limit": limit, "filters": filters})
    return get_containers(client, query)


# ---------------------------------------------------------------------------
# Create / inspect
# ---------------------------------------------------------------------------


def create_container(
    client: EngineClient,
    name: str,
    config: ContainerConfig,
) -> CreateContainerResponse:
    """Create a container named *name* from *config*.

    Raises:
        ImageNotFound: The image does not exist locally (HTTP 404).
        ApiResponseError: Any other status than 201.

    """
    endpoint = "/containers/create" + build_query({"name": name})
    response = client.send(endpoint, "POST", json.dumps(_config_payload(config)))

    if response.status_code == 404:  # noqa: PLR2004
        raise ImageNotFound(config.image)
    check_status(response, 201)

    data = decode_json_object(response)
    return CreateContainerResponse(
        id=str(data.get("Id", "")),
        warnings=tuple(data.get("Warnings") or ()),
    )


def create_container_minimal(
    client: EngineClient,
    name: str,
    image: str,
    cmd: Sequence[str],
) -> CreateContainerResponse:
    """Create a container from just an image and a command."""
    return create_container(client, name, ContainerConfig(image=image, cmd=tuple(cmd)))


def inspect_container(client: EngineClient, container_id: str) -> ContainerDetails:
    """Return low-level details of a container."""
    response = client.send(f"/containers/{container_id}/json", "GET")
    _check_container_response(response, container_id, 200)
    return _container_details(decode_json_object(response))


def get_container_changes(client: EngineClient, container_id: str) -> list[ContainerFsChange]:
    """Return filesystem changes made inside a container."""
    response = client.send(f"/containers/{container_id}/changes", "GET")
    _check_container_response(response, container_id, 200)
    if response.body in ("", "null"):
        return []
    return [
        ContainerFsChange(path=str(item.get("Path", "")), kind=int(item.get("Kind", 0)))
        for item in decode_json_list(response)
    ]


# ---------------------------------------------------------------------------
# Lifecycle actions
# ---------------------------------------------------------------------------


def manipulate_container_status(
    client: EngineClient,
    action: str,
    container_id: str,
    params: Mapping[str, object | None] | None = None,
) -> str:
    """Run ``POST /containers/{id}/{action}`` with optional query *params*.

    Returns:
        A short confirmation message.

    Raises:
        ContainerStateUnchanged: The container is already in that state (304).
        ContainerNotFound: No such container (404).
        ApiResponseError: Any other status than 204.

    """
    endpoint = f"/containers/{container_id}/{action}" + build_query(params or {})
    response = client.send(endpoint, "POST")
    if response.status_code == 304:  # noqa: PLR2004
        raise ContainerStateUnchanged(container_id, action)
    _check_container_response(response, container_id, 204)
    return f"Container {action} successful"


def start_container(client: EngineClient, container_id: str) -> str:
    return manipulate_container_status(client, "start", container_id)


def stop_container(client: EngineClient, container_id: str, delay: int | None = None) -> str:
    """Stop a container, killing it after *delay* seconds."""
    return manipulate_container_status(client, "stop", container_id, {"t": delay})


def pause_container(client: EngineClient, container_id: str) -> str:
    return manipulate_container_status(client, "pause", container_id)


def unpause_container(client: EngineClient, container_id: str) -> str:
    return manipulate_container_status(client, "unpause", container_id)


def restart_container(client: EngineClient, container_id: str, delay: int | None = None) -> str:
    """Restart a container, killing it after *delay* seconds if it won't stop."""
    return manipulate_container_status(client, "restart", container_id, {"t": delay})


def kill_container(client: EngineClient, container_id: str, signal: str | None = None) -> str:
    """Send *signal* (default ``SIGKILL``) to a container."""
    return manipulate_container_status(client, "kill", container_id, {"signal": signal})


def rename_container(client: EngineClient, container_id: str, name: str) -> str:
    return manipulate_container_status(client, "rename", container_id, {"name": name})


# ---------------------------------------------------------------------------
# JSON <-> dataclass helpers
# ---------------------------------------------------------------------------


def _config_payload(config: ContainerConfig) -> dict[str, Any]:
    """Render a :class:`ContainerConfig` as the engine's create body."""
    payload: dict[str, Any] = {
        "Image": config.image,
        "Cmd": list(config.cmd),
        "Hostname": config.hostname,
        "Domainname": config.domainname,
        "User": config.user,
        "AttachStdin": config.attach_stdin,
        "AttachStdout": config.attach_stdout,
        "AttachStderr": config.attach_stderr,
        "Tty": config.tty,
        "OpenStdin": config.open_stdin,
        "StdinOnce": config.stdin_once,
        "Env": list(config.env),
        "WorkingDir": config.working_dir,
    }
    if config.entrypoint is not None:
        payload["Entrypoint"] = config.entrypoint
    if config.labels is not None:
        payload["Labels"] = config.labels
    return payload


def _container_summary(data: dict[str, Any]) -> ContainerSummary:
    ports = tuple(
        Port(
            private_port=int(p.get("PrivatePort", 0)),
            public_port=int(p.get("PublicPort", 0)),
            type=str(p.get("Type", "tcp")),
        )
        for p in data.get("Ports") or ()
    )
    mounts = tuple(
        Mount(
            source=str(m.get("Source", "")),
            destination=str(m.get("Destination", "")),
            name=str(m.get("Name", "")),
            driver=str(m.get("Driver", "")),
            mode=str(m.get("Mode", "")),
            rw=bool(m.get("RW", True)),
            propagation=str(m.get("Propagation", "")),
        )
        for m in data.get("Mounts") or ()
    )
    size_rw = data.get("SizeRw")
    return ContainerSummary(
        id=str(data.get("Id", "")),
        names=tuple(data.get("Names") or ()),
        image=str(data.get("Image", "")),
        image_id=str(data.get("ImageID", "")),
        command=str(data.get("Command", "")),
        state=str(data.get("State", "")),
        status=str(data.get("Status", "")),
        ports=ports,
        labels=dict(data.get("Labels") or {}),
        size_rw=int(size_rw) if size_rw is not None else None,
        size_root_fs=int(data.get("SizeRootFs", 0)),
        network_mode=str((data.get("HostConfig") or {}).get("NetworkMode", "")),
        mounts=mounts,
    )


def _container_details(data: dict[str, Any]) -> ContainerDetails:
    state = data.get("State") or {}
    return ContainerDetails(
        id=str(data.get("Id", "")),
        name=str(data.get("Name", "")).lstrip("/"),
        image=str(data.get("Image", "")),
        created=str(data.get("Created", "")),
        path=str(data.get("Path", "")),
        args=tuple(data.get("Args") or ()),
        state=ContainerState(
            status=str(state.get("Status", "")),
            running=bool(state.get("Running", False)),
            paused=bool(state.get("Paused", False)),
            restarting=bool(state.get("Restarting", False)),
            oom_killed=bool(state.get("OOMKilled", False)),
            dead=bool(state.get("Dead", False)),
            pid=int(state.get("Pid", 0)),
            exit_code=int(state.get("ExitCode", 0)),
            error=str(state.get("Error", "")),
            started_at=str(state.get("StartedAt", "")),
            finished_at=str(state.get("FinishedAt", "")),
        ),
        platform=data.get("Platform"),
        restart_count=int(data.get("RestartCount", 0)),
        driver=str(data.get("Driver", "")),
        log_path=str(data.get("LogPath", "")),
        host_config=dict(data.get("HostConfig") or {}),
        config=dict(data.get("Config") or {}),
    )
