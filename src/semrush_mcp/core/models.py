"""Pydantic data models — the shared business objects.

The decoder, client, and presenter all speak in these types. A tool call
always ends in exactly one ToolResult variant.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ApiVariant(str, Enum):
    """Upstream endpoint families. Each is versioned independently."""

    LEGACY = "legacy"
    ANALYTICS_V1 = "analytics_v1"


class ErrorSource(str, Enum):
    """Where an error result originated."""

    DECODE = "decode"
    UPSTREAM = "upstream"


class ReportRequest(BaseModel):
    """One report call: which report, with which parameters, on which surface."""

    model_config = ConfigDict(frozen=True)

    report: str = Field(description="Upstream report type, e.g. 'domain_ranks'")
    params: dict[str, Union[str, int, float, bool]] = Field(default_factory=dict)
    variant: ApiVariant = ApiVariant.LEGACY


class DecodeError(BaseModel):
    """A body that could not be read as delimited records."""

    message: str
    expected_headers: Optional[list[str]] = Field(
        None, description="Header line of a response that carried no data rows"
    )


class RecordsResult(BaseModel):
    kind: Literal["records"] = "records"
    records: list[dict[str, str]] = Field(default_factory=list)


class ErrorResult(BaseModel):
    kind: Literal["error"] = "error"
    error: DecodeError
    source: ErrorSource = ErrorSource.DECODE
    status_code: Optional[int] = None


class JsonResult(BaseModel):
    """Structured JSON the upstream returned instead of delimited text."""

    kind: Literal["json"] = "json"
    raw: Any = None


class TextResult(BaseModel):
    kind: Literal["text"] = "text"
    raw: str


ToolResult = Union[RecordsResult, ErrorResult, JsonResult, TextResult]
