# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""HTTP/1.1 request formatting for the engine API.

Only ``GET`` and ``POST`` are spoken.  For ``GET`` the *body* argument is a
query-string suffix appended to the endpoint verbatim (the caller supplies
the leading ``?``).  For ``POST`` it is a JSON document sent as the message
body with a byte-accurate ``Content-Length``.
"""

from __future__ import annotations

import urllib.parse
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

API_VERSION = "v1.37"

_CRLF = "\r\n"


def format_request(endpoint: str, method: str, body: str = "") -> bytes | None:
    """Build the wire bytes for one request.

    Returns:
        The encoded request, or ``None`` if *method* is not GET or POST
        (compared case-insensitively).

    """
    verb = method.upper()
    if verb == "GET":
        lines = [
            f"GET {endpoint}{body} HTTP/1.1",
            f"Host: {API_VERSION}",
            "",
            "",
        ]
        return _CRLF.join(lines).encode("utf-8")

    if verb == "POST":
        payload = body.encode("utf-8")
        lines = [
            f"POST {endpoint} HTTP/1.1",
            f"Host: {API_VERSION}",
            "Content-Type: application/json",
            f"Content-Length: {len(payload)}",
            "",
            "",
        ]
        return _CRLF.join(lines).encode("utf-8") + payload + _CRLF.encode("ascii")

    return None


def build_query(params: Mapping[str, object | None]) -> str:
    """Encode *params* as a ``?key=value`` suffix, skipping ``None`` values.

    Booleans are rendered the way the engine expects them (``true``/``false``).
    Returns an empty string when nothing is left to encode.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            pairs.append((key, "true" if value else "false"))
        else:
            pairs.append((key, str(value)))
    if not pairs:
        return ""
    return "?" + urllib.parse.urlencode(pairs)
