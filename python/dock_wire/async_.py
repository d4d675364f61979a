# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Async public API for dock-wire.

Usage::

    from dock_wire.async_ import AsyncEngineClient

    async def main():
        async with await AsyncEngineClient.connect() as client:
            response = await client.send("/info", "GET")
            print(response.status_code, response.body)
"""

from __future__ import annotations

from dock_wire._async_client import AsyncEngineClient, receive_response_async

__all__ = [
    "AsyncEngineClient",
    "receive_response_async",
]
