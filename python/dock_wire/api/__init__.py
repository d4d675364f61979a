# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Resource helpers built on :meth:`EngineClient.send`."""

from __future__ import annotations

from dock_wire.api import containers, images, system

__all__ = ["containers", "images", "system"]
