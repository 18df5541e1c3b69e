"""Render a ToolResult as the single text block returned to the caller."""

from __future__ import annotations

import json

from .models import ErrorResult, JsonResult, RecordsResult, TextResult

RECORD_SEPARATOR = "\n---\n"
NO_RESULTS = "No results found."
UNEXPECTED_FORMAT = "Received an unexpected data format from the API."


def present(result: object) -> str:
    """Deterministic, total rendering of every ToolResult variant."""
    if isinstance(result, ErrorResult):
        text = f"Error: {result.error.message}"
        if result.error.expected_headers:
            text += f" (Expected columns: {', '.join(result.error.expected_headers)})"
        return text

    if isinstance(result, RecordsResult):
        if not result.records:
            return NO_RESULTS
        return RECORD_SEPARATOR.join(json.dumps(row, ensure_ascii=False) for row in result.records)

    if isinstance(result, JsonResult):
        try:
            return json.dumps(result.raw, indent=2, ensure_ascii=False)
        except (TypeError, ValueError):
            return UNEXPECTED_FORMAT

    if isinstance(result, TextResult):
        return result.raw

    return UNEXPECTED_FORMAT
