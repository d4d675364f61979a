"""Unit tests for _config.py: configuration loading with precedence."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from dock_wire._config import DockWireConfig, _build_config, _merge_yaml, load_config

# --- Default config ---


def test_default_config_values() -> None:
    cfg = DockWireConfig()
    assert cfg.socket is None
    assert cfg.timeout is None
    assert cfg.auto_log is False
    assert cfg.log_dir is None
    assert cfg.max_history == 1000


def test_config_is_frozen() -> None:
    cfg = DockWireConfig()
    with pytest.raises(AttributeError):
        cfg.socket = "/tmp/x.sock"  # type: ignore[misc]


def test_resolved_log_dir_default(tmp_path: Path) -> None:
    with patch("dock_wire._config.Path.home", return_value=tmp_path):
        assert DockWireConfig().resolved_log_dir() == tmp_path / ".dock-wire" / "logs"


def test_resolved_log_dir_expands_user(tmp_path: Path) -> None:
    with patch.dict("os.environ", {"HOME": str(tmp_path)}):
        cfg = DockWireConfig(log_dir="~/dw-logs")
        assert cfg.resolved_log_dir() == tmp_path / "dw-logs"


# --- load_config ---


def test_load_config_no_files_returns_defaults(tmp_path: Path) -> None:
    with patch("dock_wire._config.Path.home", return_value=tmp_path / "home"):
        assert load_config(tmp_path / "project") == DockWireConfig()


def test_load_config_without_project_root(tmp_path: Path) -> None:
    with patch("dock_wire._config.Path.home", return_value=tmp_path):
        assert load_config() == DockWireConfig()


def test_load_config_install_level(tmp_path: Path) -> None:
    home = tmp_path / "home"
    (home / ".dock-wire").mkdir(parents=True)
    (home / ".dock-wire" / "dock-wire.yaml").write_text("socket: /run/e.sock\ntimeout: 4.5\n")
    with patch("dock_wire._config.Path.home", return_value=home):
        cfg = load_config(tmp_path / "project")
    assert cfg.socket == "/run/e.sock"
    assert cfg.timeout == 4.5


def test_load_config_project_overrides_install(tmp_path: Path) -> None:
    home = tmp_path / "home"
    (home / ".dock-wire").mkdir(parents=True)
    (home / ".dock-wire" / "dock-wire.yaml").write_text("socket: /run/a.sock\nmax_history: 5\n")
    project = tmp_path / "project"
    (project / ".dock-wire").mkdir(parents=True)
    (project / ".dock-wire" / "dock-wire.yaml").write_text("socket: /run/b.sock\n")
    with patch("dock_wire._config.Path.home", return_value=home):
        cfg = load_config(project)
    assert cfg.socket == "/run/b.sock"
    assert cfg.max_history == 5


def test_load_config_logging_section(tmp_path: Path) -> None:
    project = tmp_path / "project"
    (project / ".dock-wire").mkdir(parents=True)
    (project / ".dock-wire" / "dock-wire.yaml").write_text(
        "logging:\n  auto_log: true\n  log_dir: /var/log/dw\n  max_history: 50\n"
    )
    with patch("dock_wire._config.Path.home", return_value=tmp_path / "home"):
        cfg = load_config(project)
    assert cfg.auto_log is True
    assert cfg.log_dir == "/var/log/dw"
    assert cfg.max_history == 50


# --- _merge_yaml ---


def test_merge_yaml_ignores_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("socket: [unterminated\n")
    target: dict[str, object] = {"socket": "/keep.sock"}
    _merge_yaml(target, path)
    assert target == {"socket": "/keep.sock"}


def test_merge_yaml_ignores_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n")
    target: dict[str, object] = {}
    _merge_yaml(target, path)
    assert target == {}


def test_merge_yaml_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("")
    target: dict[str, object] = {}
    _merge_yaml(target, path)
    assert target == {}


# --- _build_config ---


def test_build_config_drops_unknown_keys() -> None:
    cfg = _build_config({"socket": "/s.sock", "project_name": "ignored", "color": True})
    assert cfg == DockWireConfig(socket="/s.sock")
