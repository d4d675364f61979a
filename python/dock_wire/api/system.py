# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Engine-wide queries: info, version and ping."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from dock_wire.api._common import check_status, decode_json_object

if TYPE_CHECKING:
    from dock_wire.client import EngineClient


def get_version_info(client: EngineClient) -> str:
    """Return the raw JSON text of ``GET /info``."""
    response = client.send("/info", "GET")
    check_status(response, 200)
    return response.body


def version(client: EngineClient) -> dict[str, Any]:
    """Return the decoded ``GET /version`` document."""
    response = client.send("/version", "GET")
    check_status(response, 200)
    return decode_json_object(response)


def ping(client: EngineClient) -> str:
    """Ping the container engine.

    Returns:
        ``"OK"`` on success.

    """
    response = client.send("/_ping", "GET")
    check_status(response, 200)
    return response.body
