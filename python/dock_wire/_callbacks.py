# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Callback registry for request/response events on a client."""

from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class CallbackRegistry:
    """Registry for request/response/error callbacks on an engine client.

    Errors in callbacks are suppressed so they never break an exchange.
    """

    def __init__(self) -> None:
        self._request_cbs: list[Callable[..., object]] = []
        self._response_cbs: list[Callable[..., object]] = []
        self._error_cbs: list[Callable[..., object]] = []

    def on_request(self, fn: Callable[..., object]) -> None:
        """Register a callback for outgoing requests: fn(method, endpoint, raw)."""
        self._request_cbs.append(fn)

    def on_response(self, fn: Callable[..., object]) -> None:
        """Register a callback for parsed responses: fn(method, endpoint, response)."""
        self._response_cbs.append(fn)

    def on_error(self, fn: Callable[..., object]) -> None:
        """Register a callback for failed exchanges: fn(method, endpoint, exc)."""
        self._error_cbs.append(fn)

    def dispatch_request(self, method: str, endpoint: str, raw: bytes) -> None:
        """Fire all request callbacks, suppressing errors."""
        for fn in self._request_cbs:
            with contextlib.suppress(Exception):
                fn(method, endpoint, raw)

    def dispatch_response(self, method: str, endpoint: str, response: object) -> None:
        """Fire all response callbacks, suppressing errors."""
        for fn in self._response_cbs:
            with contextlib.suppress(Exception):
                fn(method, endpoint, response)

    def dispatch_error(self, method: str, endpoint: str, exc: Exception) -> None:
        """Fire all error callbacks, suppressing errors."""
        for fn in self._error_cbs:
            with contextlib.suppress(Exception):
                fn(method, endpoint, exc)
