# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Status-code checks and JSON decoding shared by the resource helpers."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from dock_wire.errors import ApiResponseError, InvalidJsonPayload

if TYPE_CHECKING:
    from dock_wire._response import Response


def check_status(response: Response, *expected: int) -> None:
    """Raise :class:`ApiResponseError` unless the status is one of *expected*."""
    if response.status_code not in expected:
        raise ApiResponseError(response.status_code, response.body)


def decode_json(response: Response) -> Any:  # noqa: ANN401
    """Decode the response body, raising :class:`InvalidJsonPayload` on bad JSON."""
    try:
        return json.loads(response.body)
    except json.JSONDecodeError as exc:
        raise InvalidJsonPayload(str(exc)) from exc


def decode_json_list(response: Response) -> list[dict[str, Any]]:
    """Decode a JSON array of objects."""
    data = decode_json(response)
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        msg = "expected a JSON array of objects"
        raise InvalidJsonPayload(msg)
    return data


def decode_json_object(response: Response) -> dict[str, Any]:
    """Decode a JSON object."""
    data = decode_json(response)
    if not isinstance(data, dict):
        msg = "expected a JSON object"
        raise InvalidJsonPayload(msg)
    return data


def is_valid_json(text: str) -> bool:
    """Return True if *text* parses as JSON."""
    try:
        json.loads(text)
    except json.JSONDecodeError:
        return False
    return True
