"""Semrush API client.

API docs: https://developer.semrush.com/api/
Two surfaces: the legacy report API at the root path, and the Analytics v1
API (backlinks) under /analytics/v1/. Both answer with semicolon-delimited
text by default, a single "ERROR :: ..." line on failure, or occasionally JSON.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import httpx

from ..decoder import decode, error_line_message, is_error_line
from ..errors import TransportError
from ..models import (
    ApiVariant,
    DecodeError,
    ErrorResult,
    ErrorSource,
    JsonResult,
    RecordsResult,
    ReportRequest,
    ToolResult,
)

logger = logging.getLogger(__name__)

API_BASE = "https://api.semrush.com"

# Per-surface request shape: URL path and the query field carrying the report type
VARIANTS: dict[ApiVariant, dict[str, str]] = {
    ApiVariant.LEGACY: {"path": "/", "report_field": "type"},
    ApiVariant.ANALYTICS_V1: {"path": "/analytics/v1/", "report_field": "type"},
}


def _mask(params: dict) -> dict:
    masked = dict(params)
    if masked.get("key"):
        masked["key"] = "***"
    return masked


def _looks_like_json(response: httpx.Response) -> bool:
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        return True
    return response.text.lstrip().startswith(("{", "["))


class SemrushClient:
    """Issues report requests and classifies what comes back.

    Holds only the credential and endpoint settings; every call is
    independent and safe to run concurrently.
    """

    def __init__(
        self,
        api_key: str,
        api_base: str = API_BASE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ValueError("api_key is required")
        self._api_key = api_key
        self._api_base = api_base.rstrip("/")
        self._transport = transport

    def build_request(self, request: ReportRequest) -> tuple[str, dict[str, Any]]:
        """Return the URL and query parameters for a report request."""
        variant = VARIANTS[request.variant]
        url = self._api_base + variant["path"]
        params: dict[str, Any] = {
            "key": self._api_key,
            variant["report_field"]: request.report,
            **request.params,
        }
        return url, params

    async def invoke(self, request: ReportRequest) -> ToolResult:
        """Fetch a report.

        Raises:
            TransportError: the request could not be completed (DNS,
                connection reset, timeout).

        Returns:
            Records, an error result, or the upstream's JSON/text unchanged.
        """
        url, params = self.build_request(request)
        logger.info("Calling Semrush API. URL: %s, params: %s", url, _mask(params))

        try:
            async with httpx.AsyncClient(transport=self._transport, follow_redirects=True) as client:
                response = await client.get(url, params=params)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            return self._status_error(request, exc.response)
        except httpx.RequestError as exc:
            detail = str(exc) or exc.__class__.__name__
            logger.error("Semrush API call failed for type %s: %s", request.report, detail)
            raise TransportError(f"Semrush API request failed: {detail}") from exc

        return self._classify(response)

    def _status_error(self, request: ReportRequest, response: httpx.Response) -> ErrorResult:
        logger.warning(
            "Semrush API call failed for type %s. Status: %s, body: %s",
            request.report,
            response.status_code,
            response.text,
        )
        detail = error_line_message(response.text) or response.reason_phrase
        return ErrorResult(
            error=DecodeError(message=f"Semrush API error ({response.status_code}): {detail}"),
            source=ErrorSource.UPSTREAM,
            status_code=response.status_code,
        )

    def _classify(self, response: httpx.Response) -> ToolResult:
        body: Any = response.text
        if _looks_like_json(response):
            try:
                body = response.json()
            except (json.JSONDecodeError, UnicodeDecodeError):
                body = response.text

        if not isinstance(body, str):
            return JsonResult(raw=body)

        decoded = decode(body)
        if isinstance(decoded, DecodeError):
            source = ErrorSource.UPSTREAM if is_error_line(decoded.message) else ErrorSource.DECODE
            return ErrorResult(error=decoded, source=source, status_code=response.status_code)
        return RecordsResult(records=decoded)
