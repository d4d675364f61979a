# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Rich output formatters for the CLI."""

from __future__ import annotations

import dataclasses
import json
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dock_wire._response import Response
    from dock_wire.errors import DockWireError
    from dock_wire.types import ContainerDetails, ContainerSummary, ImageSummary

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

_console = Console()
_err_console = Console(stderr=True)


def format_container_list(items: list[ContainerSummary], *, json_output: bool = False) -> None:
    """Print a list of containers as a rich table or JSON."""
    if json_output:
        click_echo_json([dataclasses.asdict(item) for item in items])
        return

    if not items:
        _console.print("[dim]No containers found.[/dim]")
        return

    table = Table(title="Containers")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Image")
    table.add_column("State")
    table.add_column("Status")

    for item in items:
        state_style = "green" if item.state == "running" else "yellow"
        table.add_row(
            item.id[:12],
            item.name,
            item.image,
            f"[{state_style}]{item.state}[/{state_style}]",
            item.status,
        )

    _console.print(table)


def format_image_list(items: list[ImageSummary], *, json_output: bool = False) -> None:
    """Print a list of images as a rich table or JSON."""
    if json_output:
        click_echo_json([dataclasses.asdict(item) for item in items])
        return

    if not items:
        _console.print("[dim]No images found.[/dim]")
        return

    table = Table(title="Images")
    table.add_column("ID", style="dim")
    table.add_column("Tags", style="cyan")
    table.add_column("Size", justify="right")

    for item in items:
        short_id = item.id.removeprefix("sha256:")[:12]
        tags = ", ".join(item.repo_tags) or "<none>"
        table.add_row(short_id, tags, _human_size(item.size))

    _console.print(table)


def format_container_details(details: ContainerDetails, *, json_output: bool = False) -> None:
    """Print container details as a rich panel or JSON."""
    if json_output:
        click_echo_json(dataclasses.asdict(details))
        return

    state = details.state
    status_style = "green" if state.running else "yellow"
    lines = [
        f"[bold]ID:[/bold]       {details.id[:12]}",
        f"[bold]Name:[/bold]     {details.name}",
        f"[bold]Status:[/bold]   [{status_style}]{state.status}[/{status_style}]",
        f"[bold]Image:[/bold]    {details.image}",
        f"[bold]Created:[/bold]  {details.created}",
    ]
    if state.pid:
        lines.append(f"[bold]PID:[/bold]      {state.pid}")
    if not state.running and state.finished_at:
        lines.append(f"[bold]Exit:[/bold]     {state.exit_code}")
    if state.error:
        lines.append(f"[bold]Error:[/bold]    [red]{state.error}[/red]")

    panel = Panel("\n".join(lines), title=f"[cyan]{details.name}[/cyan]", expand=False)
    _console.print(panel)


def format_response(response: Response, *, json_output: bool = False) -> None:
    """Print a raw engine response."""
    if json_output:
        click_echo_json(dataclasses.asdict(response))
        return
    style = "green" if response.ok else "red"
    _err_console.print(f"[{style}]HTTP {response.status_code}[/{style}]")
    if response.body:
        sys.stdout.write(response.body + "\n")


def format_history(entries: list[dict[str, object]], *, json_output: bool = False) -> None:
    """Print request history entries as a rich table or JSON."""
    if json_output:
        click_echo_json(entries)
        return

    if not entries:
        _console.print("[dim]No log entries found.[/dim]")
        return

    table = Table(title="Request History")
    table.add_column("Time", style="dim")
    table.add_column("Method")
    table.add_column("Endpoint", style="cyan")
    table.add_column("Result")
    table.add_column("ms", justify="right")

    for entry in entries:
        if "error" in entry:
            result = f"[red]{entry['error']}[/red]"
        else:
            code = entry.get("status_code", "")
            result = f"[green]{code}[/green]"
        table.add_row(
            str(entry.get("timestamp", "")),
            str(entry.get("method", "")),
            str(entry.get("endpoint", "")),
            result,
            str(entry.get("duration_ms", "")),
        )

    _console.print(table)


def format_error(err: DockWireError) -> None:
    """Print an SDK error as a rich panel with suggestions."""
    title, suggestion = _error_info(err)
    lines = [str(err)]
    if suggestion:
        lines.append(f"\n[dim]{suggestion}[/dim]")

    panel = Panel(
        "\n".join(lines),
        title=f"[red]{title}[/red]",
        expand=False,
    )
    _err_console.print(panel)


def _error_info(err: DockWireError) -> tuple[str, str]:
    """Map an SDK error to a title and suggestion string."""
    from dock_wire.errors import (  # noqa: PLC0415
        ContainerNotFound,
        EngineNotRunning,
        ImageNotFound,
        InvalidSocketAddress,
        ResponseParseError,
        SocketConnectionError,
    )

    if isinstance(err, EngineNotRunning):
        return "Engine Not Found", "Start Docker or Podman and try again."
    if isinstance(err, InvalidSocketAddress):
        return "Invalid Address", "Use unix:///path/to/engine.sock or an existing socket path."
    if isinstance(err, SocketConnectionError):
        return "Connection Failed", "Check that the engine is running and the socket is readable."
    if isinstance(err, ContainerNotFound):
        return "Container Not Found", "Run 'dock-wire ps --all' to see available containers."
    if isinstance(err, ImageNotFound):
        return "Image Not Found", "Pull the image first: docker pull <image>"
    if isinstance(err, ResponseParseError):
        return "Bad Response", "The engine sent a response that could not be parsed."
    return "Error", ""


def print_success(msg: str) -> None:
    """Print a success message with a checkmark."""
    _console.print(f"[green]✓[/green] {msg}")


def print_exchange(direction: str, method: str, endpoint: str, detail: str = "") -> None:
    """Echo one side of an exchange to stderr (``--verbose``)."""
    arrow = ">>>" if direction == "request" else "<<<"
    line = f"[dim]{arrow} {method.upper()} {endpoint}[/dim]"
    if detail:
        line = f"{line} [dim]{detail}[/dim]"
    _err_console.print(line)


def click_echo_json(data: object) -> None:
    """Serialize data to JSON and echo to stdout."""
    sys.stdout.write(json.dumps(data, indent=2, default=str) + "\n")


def _human_size(size: int) -> str:
    value = float(size)
    for unit in ("B", "KB", "MB", "GB"):
        if value < 1000 or unit == "GB":  # noqa: PLR2004
            return f"{value:.0f}{unit}" if unit == "B" else f"{value:.1f}{unit}"
        value /= 1000
    return f"{value:.1f}GB"
