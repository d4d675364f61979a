# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""CLI command implementations."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

import click

from dock_wire.cli._output import (
    format_container_details,
    format_container_list,
    format_error,
    format_history,
    format_image_list,
    format_response,
    print_exchange,
    print_success,
)
from dock_wire.errors import DockWireError

if TYPE_CHECKING:
    from collections.abc import Callable

    from dock_wire.cli.main import CliContext
    from dock_wire.client import EngineClient

T = TypeVar("T")


def _get_ctx(ctx: click.Context) -> CliContext:
    """Extract the CliContext from Click's context object."""
    return ctx.obj  # type: ignore[no-any-return]


def _open_client(cli_ctx: CliContext) -> EngineClient:
    """Connect using CLI options, falling back to the config files."""
    from dock_wire._config import load_config  # noqa: PLC0415
    from dock_wire._logger import RequestLogger  # noqa: PLC0415
    from dock_wire.client import EngineClient  # noqa: PLC0415

    config = load_config(Path.cwd())
    socket = cli_ctx.socket or config.socket
    timeout = cli_ctx.timeout if cli_ctx.timeout is not None else config.timeout
    logger = None
    if config.auto_log:
        logger = RequestLogger(config.resolved_log_dir(), max_history=config.max_history)

    client = EngineClient.connect(socket, timeout=timeout, logger=logger)
    if cli_ctx.verbose:
        _attach_verbose(client)
    return client


def _attach_verbose(client: EngineClient) -> None:
    """Echo every exchange on *client* to stderr."""
    client.callbacks.on_request(
        lambda method, endpoint, raw: print_exchange("request", method, endpoint, f"{len(raw)}B")
    )
    client.callbacks.on_response(
        lambda method, endpoint, response: print_exchange(
            "response", method, endpoint, f"HTTP {response.status_code}"
        )
    )
    client.callbacks.on_error(
        lambda method, endpoint, exc: print_exchange("response", method, endpoint, str(exc))
    )


def _call(ctx: click.Context, fn: Callable[[EngineClient], T]) -> T:
    """Open a client, run *fn*, and turn SDK errors into exit code 1."""
    cli_ctx = _get_ctx(ctx)
    try:
        with _open_client(cli_ctx) as client:
            return fn(client)
    except DockWireError as exc:
        format_error(exc)
        raise SystemExit(1) from exc


# ---------------------------------------------------------------------------
# System
# ---------------------------------------------------------------------------


@click.command("info")
@click.pass_context
def info_cmd(ctx: click.Context) -> None:
    """Show engine-wide information (raw JSON)."""
    from dock_wire.api import system  # noqa: PLC0415

    body = _call(ctx, system.get_version_info)
    click.echo(body)


@click.command("version")
@click.pass_context
def version_cmd(ctx: click.Context) -> None:
    """Show the engine version document."""
    from dock_wire.api import system  # noqa: PLC0415
    from dock_wire.cli._output import click_echo_json  # noqa: PLC0415

    click_echo_json(_call(ctx, system.version))


@click.command("ping")
@click.pass_context
def ping_cmd(ctx: click.Context) -> None:
    """Check that the engine answers."""
    from dock_wire.api import system  # noqa: PLC0415

    print_success(f"Engine replied {_call(ctx, system.ping)}")


# ---------------------------------------------------------------------------
# Listing / inspection
# ---------------------------------------------------------------------------


@click.command("ps")
@click.option("--all", "-a", "show_all", is_flag=True, help="Include stopped containers.")
@click.option("--limit", "-n", type=int, default=None, help="Show at most N containers.")
@click.option("--filter", "filters", default=None, help="JSON-encoded filter map.")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON.")
@click.pass_context
def ps_cmd(
    ctx: click.Context,
    *,
    show_all: bool,
    limit: int | None,
    filters: str | None,
    json_output: bool,
) -> None:
    """List containers."""
    from dock_wire.api import containers  # noqa: PLC0415

    def _list(client: EngineClient) -> list[containers.ContainerSummary]:
        if filters is not None:
            return containers.get_containers_with_filter(client, filters, limit)
        if show_all:
            return containers.list_all_containers(client, limit)
        return containers.list_running_containers(client, limit)

    try:
        items = _call(ctx, _list)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--filter") from exc
    format_container_list(items, json_output=json_output)


@click.command("images")
@click.option("--all", "-a", "show_all", is_flag=True, help="Include intermediate images.")
@click.option("--filter", "filters", default=None, help="JSON-encoded filter map.")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON.")
@click.pass_context
def images_cmd(
    ctx: click.Context,
    *,
    show_all: bool,
    filters: str | None,
    json_output: bool,
) -> None:
    """List local images."""
    from dock_wire.api import images  # noqa: PLC0415

    try:
        items = _call(ctx, lambda c: images.list_images(c, filters, all_images=show_all))
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--filter") from exc
    format_image_list(items, json_output=json_output)


@click.command("inspect")
@click.argument("container")
@click.option("--changes", is_flag=True, help="Show filesystem changes instead.")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON.")
@click.pass_context
def inspect_cmd(ctx: click.Context, container: str, *, changes: bool, json_output: bool) -> None:
    """Show low-level details of a container."""
    from dock_wire.api import containers  # noqa: PLC0415

    if changes:
        fs_changes = _call(ctx, lambda c: containers.get_container_changes(c, container))
        if json_output:
            from dock_wire.cli._output import click_echo_json  # noqa: PLC0415

            click_echo_json([{"path": ch.path, "kind": ch.kind} for ch in fs_changes])
            return
        for change in fs_changes:
            click.echo(f"{change.kind_label[0].upper()} {change.path}")
        return

    details = _call(ctx, lambda c: containers.inspect_container(c, container))
    format_container_details(details, json_output=json_output)


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


@click.command("create")
@click.argument("name")
@click.argument("image")
@click.argument("cmd", nargs=-1)
@click.pass_context
def create_cmd(ctx: click.Context, name: str, image: str, cmd: tuple[str, ...]) -> None:
    """Create a container NAME from IMAGE, optionally running CMD."""
    from dock_wire.api import containers  # noqa: PLC0415

    created = _call(ctx, lambda c: containers.create_container_minimal(c, name, image, cmd))
    for warning in created.warnings:
        click.echo(f"warning: {warning}", err=True)
    print_success(f"Created {name} ({created.id[:12]})")


def _action_command(name: str, help_text: str) -> click.Command:
    """Build a one-argument lifecycle command (start, pause, ...)."""

    @click.command(name, help=help_text)
    @click.argument("container")
    @click.pass_context
    def _cmd(ctx: click.Context, container: str) -> None:
        from dock_wire.api import containers  # noqa: PLC0415

        action = getattr(containers, f"{name}_container")
        print_success(_call(ctx, lambda c: action(c, container)))

    return _cmd


start_cmd = _action_command("start", "Start a created or stopped container.")
pause_cmd = _action_command("pause", "Pause all processes in a container.")
unpause_cmd = _action_command("unpause", "Resume a paused container.")


@click.command("stop")
@click.argument("container")
@click.option("--time", "-t", "delay", type=int, default=None, help="Seconds before killing.")
@click.pass_context
def stop_cmd(ctx: click.Context, container: str, delay: int | None) -> None:
    """Stop a running container."""
    from dock_wire.api import containers  # noqa: PLC0415

    print_success(_call(ctx, lambda c: containers.stop_container(c, container, delay)))


@click.command("restart")
@click.argument("container")
@click.option("--time", "-t", "delay", type=int, default=None, help="Seconds before killing.")
@click.pass_context
def restart_cmd(ctx: click.Context, container: str, delay: int | None) -> None:
    """Restart a container."""
    from dock_wire.api import containers  # noqa: PLC0415

    print_success(_call(ctx, lambda c: containers.restart_container(c, container, delay)))


@click.command("kill")
@click.argument("container")
@click.option("--signal", "-s", default=None, help="Signal to send (default SIGKILL).")
@click.pass_context
def kill_cmd(ctx: click.Context, container: str, signal: str | None) -> None:
    """Send a signal to a container."""
    from dock_wire.api import containers  # noqa: PLC0415

    print_success(_call(ctx, lambda c: containers.kill_container(c, container, signal)))


@click.command("rename")
@click.argument("container")
@click.argument("new_name")
@click.pass_context
def rename_cmd(ctx: click.Context, container: str, new_name: str) -> None:
    """Rename a container."""
    from dock_wire.api import containers  # noqa: PLC0415

    print_success(_call(ctx, lambda c: containers.rename_container(c, container, new_name)))


# ---------------------------------------------------------------------------
# Raw access / history
# ---------------------------------------------------------------------------


@click.command("request")
@click.argument("method")
@click.argument("endpoint")
@click.argument("body", required=False, default="")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON.")
@click.pass_context
def request_cmd(
    ctx: click.Context,
    method: str,
    endpoint: str,
    body: str,
    *,
    json_output: bool,
) -> None:
    """Send a raw METHOD request to ENDPOINT.

    For GET, BODY is appended as a query string (include the leading ``?``);
    for POST it is sent as the JSON request body.
    """
    response = _call(ctx, lambda c: c.send(endpoint, method, body))
    format_response(response, json_output=json_output)
    if not response.ok:
        raise SystemExit(1)


@click.command("logs")
@click.option("--last", "-n", "last_n", type=int, default=20, help="Number of entries.")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON.")
def logs_cmd(*, last_n: int, json_output: bool) -> None:
    """View the request history (requires ``auto_log`` in the config)."""
    from dock_wire._config import load_config  # noqa: PLC0415
    from dock_wire._logger import RequestLogger  # noqa: PLC0415

    config = load_config(Path.cwd())
    logger = RequestLogger(config.resolved_log_dir(), max_history=config.max_history)
    format_history(logger.read_history(last=last_n), json_output=json_output)
