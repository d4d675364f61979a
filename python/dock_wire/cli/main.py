# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""CLI entry point for dock-wire."""

from __future__ import annotations

import dataclasses

import click

from dock_wire import __version__


@dataclasses.dataclass
class CliContext:
    """Shared state passed through Click's context object."""

    socket: str | None = None
    timeout: float | None = None
    verbose: bool = False


@click.group()
@click.option(
    "--socket",
    envvar="DOCK_WIRE_SOCKET",
    default=None,
    help="Engine socket: unix:///path or a bare path.",
)
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Seconds to wait on the socket before giving up.",
)
@click.option("--verbose", "-v", is_flag=True, help="Echo each request and response.")
@click.version_option(version=__version__, prog_name="dock-wire")
@click.pass_context
def cli(ctx: click.Context, socket: str | None, timeout: float | None, *, verbose: bool) -> None:
    """Talk to a Docker-compatible engine over its Unix socket."""
    ctx.ensure_object(dict)
    ctx.obj = CliContext(socket=socket, timeout=timeout, verbose=verbose)


# --- Register commands ---

from dock_wire.cli._commands import (  # noqa: E402
    create_cmd,
    images_cmd,
    info_cmd,
    inspect_cmd,
    kill_cmd,
    logs_cmd,
    pause_cmd,
    ping_cmd,
    ps_cmd,
    rename_cmd,
    request_cmd,
    restart_cmd,
    start_cmd,
    stop_cmd,
    unpause_cmd,
    version_cmd,
)

cli.add_command(info_cmd)
cli.add_command(version_cmd)
cli.add_command(ping_cmd)
cli.add_command(ps_cmd)
cli.add_command(images_cmd)
cli.add_command(inspect_cmd)
cli.add_command(create_cmd)
cli.add_command(start_cmd)
cli.add_command(stop_cmd)
cli.add_command(restart_cmd)
cli.add_command(pause_cmd)
cli.add_command(unpause_cmd)
cli.add_command(kill_cmd)
cli.add_command(rename_cmd)
cli.add_command(request_cmd)
cli.add_command(logs_cmd)
