"""Decoder for the upstream's semicolon-delimited text responses.

The same framing carries three things: a lone error line, a header line, and
data lines. decode() tells them apart and never raises; every malformed
shape comes back as a DecodeError.
"""

from __future__ import annotations

import re
from typing import Union

from .models import DecodeError

FIELD_DELIMITER = ";"

# Upstream in-band errors: "ERROR :: LIMIT EXCEEDED" or "ERROR 50 :: NOTHING FOUND"
ERROR_LINE = re.compile(r"^ERROR(?: \d+)? :: (?P<message>.+)$")

EMPTY_MESSAGE = "Response is empty after trimming"
INVALID_HEADER_MESSAGE = "No data rows or invalid header"
HEADERS_ONLY_MESSAGE = "No data results, only headers returned"


def is_error_line(line: str) -> bool:
    return ERROR_LINE.match(line.strip()) is not None


def error_line_message(text: str) -> str | None:
    """Return the message after the ``ERROR ::`` prefix, if the text carries one."""
    for line in text.splitlines():
        match = ERROR_LINE.match(line.strip())
        if match:
            return match.group("message").strip()
    return None


def _split(line: str) -> list[str]:
    return [field.strip() for field in line.split(FIELD_DELIMITER)]


def decode(text: str) -> Union[list[dict[str, str]], DecodeError]:
    """Decode a delimited text payload into records.

    Args:
        text: Raw response body.

    Returns:
        One dict per data line, keyed by the trimmed header names in header
        order, or a DecodeError describing why the body holds no records.
    """
    if not isinstance(text, str):
        return DecodeError(message="Invalid or empty data")

    lines = [line for line in text.strip().splitlines() if line.strip()]
    if not lines:
        return DecodeError(message=EMPTY_MESSAGE)

    if len(lines) == 1:
        if is_error_line(lines[0]):
            return DecodeError(message=lines[0].strip())
        if FIELD_DELIMITER not in lines[0]:
            return DecodeError(message=INVALID_HEADER_MESSAGE)

    headers = _split(lines[0])
    data_lines = lines[1:]
    if not data_lines:
        return DecodeError(message=HEADERS_ONLY_MESSAGE, expected_headers=headers)

    records = []
    for line in data_lines:
        values = _split(line)
        row = {}
        for index, header in enumerate(headers):
            row[header] = values[index] if index < len(values) else ""
        records.append(row)
    return records
