# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""HTTP/1.1 response parsing from a raw byte buffer.

The transport hands over whatever bytes it read, with no framing knowledge.
:func:`parse_response` locates the header/body boundary itself, decodes the
status line and headers, and undoes ``Transfer-Encoding: chunked`` when the
engine used it.

Header handling is deliberately narrow:

* names are compared exactly as received (``Transfer-Encoding`` matches,
  ``transfer-encoding`` does not);
* a repeated header name keeps its **last** value;
* lines without a ``": "`` separator are ignored.
"""

from __future__ import annotations

import dataclasses
import json
from typing import Any

from dock_wire.errors import (
    ChunkFramingError,
    InvalidBodyEncoding,
    InvalidHeaderEncoding,
    InvalidStatusLine,
    MalformedResponse,
)

_CRLF = b"\r\n"
_HEADER_END = b"\r\n\r\n"
_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")


@dataclasses.dataclass(frozen=True)
class Response:
    """Status code and decoded body of an engine response."""

    status_code: int
    body: str = ""

    @property
    def ok(self) -> bool:
        """Return True for a 2xx status code."""
        return 200 <= self.status_code < 300  # noqa: PLR2004

    def json(self) -> Any:  # noqa: ANN401
        """Decode the body as JSON."""
        return json.loads(self.body)


def parse_response(data: bytes) -> Response:
    """Parse a complete HTTP response.

    Raises:
        MalformedResponse: No ``CRLF CRLF`` boundary in *data*.
        InvalidHeaderEncoding: Header block is not UTF-8.
        InvalidStatusLine: Status line is not ``<version> <code> <reason>``.
        ChunkFramingError: Chunked body is malformed or truncated.
        InvalidBodyEncoding: Body is not UTF-8.

    """
    boundary = data.find(_HEADER_END)
    if boundary == -1:
        msg = "no header/body boundary"
        raise MalformedResponse(msg)
    body_start = boundary + len(_HEADER_END)

    try:
        header_text = data[:body_start].decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidHeaderEncoding(str(exc)) from exc

    lines = header_text.split("\r\n")
    status_code = _parse_status_line(lines[0])
    headers = _parse_headers(lines[1:])

    raw_body = data[body_start:]
    if headers.get("Transfer-Encoding") == "chunked":
        raw_body = dechunk(raw_body)

    try:
        body = raw_body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidBodyEncoding(str(exc)) from exc

    return Response(status_code=status_code, body=body.strip())


def _parse_status_line(line: str) -> int:
    """Return the status code from ``HTTP/1.1 200 OK``."""
    parts = line.split(" ", 2)
    if len(parts) != 3:  # noqa: PLR2004
        msg = f"expected 3 tokens: {line!r}"
        raise InvalidStatusLine(msg)
    code = parts[1]
    if not (code.isascii() and code.isdigit()):
        msg = f"non-numeric status code: {code!r}"
        raise InvalidStatusLine(msg)
    return int(code)


def _parse_headers(lines: list[str]) -> dict[str, str]:
    """Build the header map; last occurrence of a name wins."""
    headers: dict[str, str] = {}
    for line in lines:
        if not line:
            continue
        name, sep, value = line.partition(": ")
        if not sep:
            continue
        headers[name] = value
    return headers


def dechunk(data: bytes) -> bytes:
    """Decode a ``Transfer-Encoding: chunked`` body.

    Each chunk is ``<hex size>CRLF<data>CRLF``; a zero size ends the body.
    Chunk extensions and trailers are not supported and fail the size parse.

    Raises:
        ChunkFramingError: Missing size line, bad hex, or truncated chunk.

    """
    out = bytearray()
    cursor = 0
    while True:
        line_end = data.find(_CRLF, cursor)
        if line_end == -1:
            msg = "chunked response without length marker"
            raise ChunkFramingError(msg)

        size = _parse_chunk_size(data[cursor:line_end])
        if size == 0:
            return bytes(out)

        start = line_end + len(_CRLF)
        end = start + size
        if end > len(data):
            msg = f"truncated chunk: expected {size} bytes, got {len(data) - start}"
            raise ChunkFramingError(msg)
        if data[end : end + len(_CRLF)] != _CRLF:
            msg = f"chunk of {size} bytes not followed by CRLF"
            raise ChunkFramingError(msg)

        out += data[start:end]
        cursor = end + len(_CRLF)


def _parse_chunk_size(field: bytes) -> int:
    """Parse a bare hexadecimal chunk size."""
    if not field or not _HEX_DIGITS.issuperset(field):
        msg = f"invalid chunk size: {field!r}"
        raise ChunkFramingError(msg)
    return int(field, 16)
