# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Fire-and-forget request history written to disk.

Every exchange made through :class:`~dock_wire.client.EngineClient` can be
appended as one JSON line to ``<log_dir>/history.jsonl``.  All I/O is
synchronous filesystem writes with no background thread.
"""

from __future__ import annotations

import contextlib
import json
from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

HISTORY_FILENAME = "history.jsonl"


class RequestLogger:
    """Appends engine API exchanges to ``history.jsonl``."""

    def __init__(self, log_dir: Path, *, enabled: bool = True, max_history: int = 1000) -> None:
        self._log_dir = log_dir
        self._history_path = log_dir / HISTORY_FILENAME
        self._enabled = enabled
        self._max_history = max_history

    @property
    def enabled(self) -> bool:
        """Whether logging is active."""
        return self._enabled

    @property
    def history_path(self) -> Path:
        """Location of the JSONL history file."""
        return self._history_path

    def log_exchange(
        self,
        method: str,
        endpoint: str,
        *,
        duration_ms: float,
        status_code: int | None = None,
        error: str | None = None,
        started_at: datetime | None = None,
    ) -> None:
        """Record one request and its outcome."""
        if not self._enabled:
            return

        entry: dict[str, object] = {
            "method": method.upper(),
            "endpoint": endpoint,
            "duration_ms": round(duration_ms, 1),
            "timestamp": (started_at or datetime.now(tz=timezone.utc)).isoformat(),
        }
        if status_code is not None:
            entry["status_code"] = status_code
        if error is not None:
            entry["error"] = error
        self.append_history(entry)

    def append_history(self, entry: dict[str, object]) -> None:
        """Append one JSONL line to ``history.jsonl``.

        Filesystem errors are swallowed so logging never masks a request's
        outcome.
        """
        if not self._enabled:
            return
        with contextlib.suppress(OSError):
            self._log_dir.mkdir(parents=True, exist_ok=True)
            with self._history_path.open("a") as f:
                f.write(json.dumps(entry, default=str) + "\n")
            self._trim()

    def read_history(self, last: int | None = None) -> list[dict[str, object]]:
        """Return logged entries, oldest first, skipping corrupt lines."""
        if not self._history_path.is_file():
            return []
        entries: list[dict[str, object]] = []
        for raw in self._history_path.read_text().splitlines():
            stripped = raw.strip()
            if not stripped:
                continue
            try:
                entry = json.loads(stripped)
            except json.JSONDecodeError:
                continue
            if isinstance(entry, dict):
                entries.append(entry)
        if last is not None:
            return entries[-last:] if last > 0 else []
        return entries

    def _trim(self) -> None:
        """Keep only the newest ``max_history`` lines."""
        if self._max_history <= 0:
            return
        lines = self._history_path.read_text().splitlines(keepends=True)
        if len(lines) > self._max_history:
            self._history_path.write_text("".join(lines[-self._max_history :]))
