# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Configuration loading with install-level -> project-level precedence."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Any

import yaml

_CONFIG_DIRNAME = ".dock-wire"
_CONFIG_FILENAME = "dock-wire.yaml"


@dataclasses.dataclass(frozen=True)
class DockWireConfig:
    """Resolved dock-wire configuration."""

    socket: str | None = None
    timeout: float | None = None
    auto_log: bool = False
    log_dir: str | None = None
    max_history: int = 1000

    def resolved_log_dir(self) -> Path:
        """Directory for ``history.jsonl``; defaults to ``~/.dock-wire/logs``."""
        if self.log_dir:
            return Path(self.log_dir).expanduser()
        return Path.home() / _CONFIG_DIRNAME / "logs"


def load_config(project_root: Path | None = None) -> DockWireConfig:
    """Load configuration with precedence: project > install > defaults.

    1. Start with defaults
    2. Overlay install-level ``~/.dock-wire/dock-wire.yaml`` (if exists)
    3. Overlay project-level ``.dock-wire/dock-wire.yaml`` (if exists)
    """
    overrides: dict[str, Any] = {}

    install_config = Path.home() / _CONFIG_DIRNAME / _CONFIG_FILENAME
    if install_config.is_file():
        _merge_yaml(overrides, install_config)

    if project_root is not None:
        project_config = project_root / _CONFIG_DIRNAME / _CONFIG_FILENAME
        if project_config.is_file():
            _merge_yaml(overrides, project_config)

    return _build_config(overrides)


def _merge_yaml(target: dict[str, Any], path: Path) -> None:
    """Parse a YAML file and merge its values into *target*."""
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError:
        return
    if not isinstance(data, dict):
        return

    for key, value in data.items():
        if key == "logging" and isinstance(value, dict):
            # logging.auto_log -> auto_log, etc.
            target.update(value)
        else:
            target[key] = value


def _build_config(overrides: dict[str, Any]) -> DockWireConfig:
    """Build a ``DockWireConfig`` from a dict of overrides."""
    field_names = {f.name for f in dataclasses.fields(DockWireConfig)}
    filtered = {k: v for k, v in overrides.items() if k in field_names}
    return DockWireConfig(**filtered)
