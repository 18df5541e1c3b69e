"""Tool registry — argument models, report mapping, and per-call dispatch.

Each tool maps validated arguments onto one Semrush report. The export
column lists are passed through to the API as-is.
"""

from __future__ import annotations

import logging
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, ValidationError

from .core.clients.semrush import SemrushClient
from .core.errors import ToolArgumentError, TransportError, UnknownToolError
from .core.models import ApiVariant, ErrorResult, ErrorSource, ReportRequest
from .core.presenter import present

logger = logging.getLogger(__name__)


# ─── Argument Models ─────────────────────────────────────────────────────────


class DomainOverviewParams(BaseModel):
    domain: str = Field(description="Domain to analyze")
    database: str = Field("us", description="Database code (e.g., us, uk, ca)")


class KeywordOverviewParams(BaseModel):
    phrase: str = Field(description="Keyword phrase to analyze")
    database: str = Field("us", description="Database code")


class DomainOrganicSearchParams(BaseModel):
    domain: str = Field(description="Domain to analyze")
    database: str = Field("us", description="Database code")
    limit: int = Field(10, ge=1, description="Number of results")
    offset: int = Field(0, ge=0, description="Offset for pagination")


class BacklinksOverviewParams(BaseModel):
    target: str = Field(description="Domain to analyze")
    target_type: Literal["root_domain", "domain", "url"] = Field(
        "root_domain",
        description="Type of target: root_domain, domain (for subdomains), or url",
    )


class CompetitorResearchParams(BaseModel):
    domain: str = Field(description="Domain to analyze")
    database: str = Field("us", description="Database code")
    limit: int = Field(10, ge=1, description="Number of competitors")


class DomainAdwordsParams(BaseModel):
    domain: str = Field(description="Domain to analyze")
    database: str = Field("us", description="Database code")
    limit: int = Field(10, ge=1, description="Number of results")


class RelatedKeywordsParams(BaseModel):
    phrase: str = Field(description="Seed keyword phrase")
    database: str = Field("us", description="Database code")
    limit: int = Field(10, ge=1, description="Number of results")


# ─── Registry ────────────────────────────────────────────────────────────────


class ToolSpec(BaseModel):
    """Everything needed to turn one tool call into one report request."""

    name: str
    description: str
    params_model: type[BaseModel]
    report: str
    variant: ApiVariant = ApiVariant.LEGACY
    export_columns: str
    renames: dict[str, str] = Field(default_factory=dict, description="Argument name -> query field")


PAGING = {"limit": "display_limit", "offset": "display_offset"}

TOOLS: dict[str, ToolSpec] = {
    spec.name: spec
    for spec in [
        ToolSpec(
            name="domain_overview",
            description="Get domain analytics overview including organic traffic, keywords, and authority score",
            params_model=DomainOverviewParams,
            report="domain_ranks",
            export_columns="Db,Dn,Rk,Or,Ot,Oc,Ad,At,Ac,Sh,Sv",
        ),
        ToolSpec(
            name="keyword_overview",
            description="Get keyword metrics including search volume, difficulty, and CPC",
            params_model=KeywordOverviewParams,
            report="phrase_all",
            export_columns="Ph,Nq,Cp,Co,Nr,Td",
        ),
        ToolSpec(
            name="domain_organic_search",
            description="Get organic search keywords for a domain",
            params_model=DomainOrganicSearchParams,
            report="domain_organic",
            export_columns="Ph,Po,Nq,Cp,Ur,Tr,Tc,Co,Nr,Td",
            renames=PAGING,
        ),
        ToolSpec(
            name="backlinks_overview",
            description="Get backlinks overview for a domain or URL. Target type can be root_domain, domain, or url.",
            params_model=BacklinksOverviewParams,
            report="backlinks_overview",
            variant=ApiVariant.ANALYTICS_V1,
            export_columns=(
                "ascore,total,domains_num,urls_num,ips_num,ipclassc_num,follows_num,nofollows_num,"
                "sponsored_num,ugc_num,texts_num,images_num,forms_num,frames_num"
            ),
        ),
        ToolSpec(
            name="competitor_research",
            description="Find organic competitors for a domain",
            params_model=CompetitorResearchParams,
            report="domain_organic_competitors",
            export_columns="Dn,Cr,Np,Or,Ot,Oc,Ad,At,Ac",
            renames=PAGING,
        ),
        ToolSpec(
            name="domain_adwords",
            description="Get paid search (Google Ads) keywords for a domain",
            params_model=DomainAdwordsParams,
            report="domain_adwords",
            export_columns="Ph,Po,Pp,Pd,Nq,Cp,Ur,Tr,Tc,Co,Nr,Td,Avg,Sym,Sp",
            renames=PAGING,
        ),
        ToolSpec(
            name="related_keywords",
            description="Get related keywords and suggestions for a seed keyword",
            params_model=RelatedKeywordsParams,
            report="phrase_related",
            export_columns="Ph,Nq,Cp,Co,Nr,Td,Rr",
            renames=PAGING,
        ),
    ]
}


def get_tool(name: str) -> ToolSpec:
    spec = TOOLS.get(name)
    if spec is None:
        raise UnknownToolError(f"Unknown tool: {name}")
    return spec


def _format_errors(exc: ValidationError) -> list[str]:
    errors = []
    for err in exc.errors():
        path = ".".join(str(part) for part in err["loc"])
        errors.append(f"{path}: {err['msg']}")
    return errors


def build_params(spec: ToolSpec, arguments: Optional[dict[str, Any]]) -> dict[str, Any]:
    """Validate tool arguments and map them onto report query fields.

    Raises:
        ToolArgumentError: one or more arguments failed validation.
    """
    try:
        validated = spec.params_model.model_validate(arguments or {})
    except ValidationError as exc:
        raise ToolArgumentError(spec.name, _format_errors(exc)) from exc

    params = {spec.renames.get(field, field): value for field, value in validated.model_dump().items()}
    params["export_columns"] = spec.export_columns
    return params


def build_request(name: str, arguments: Optional[dict[str, Any]]) -> ReportRequest:
    spec = get_tool(name)
    return ReportRequest(report=spec.report, params=build_params(spec, arguments), variant=spec.variant)


async def call_tool(client: SemrushClient, name: str, arguments: Optional[dict[str, Any]]) -> str:
    """Run one tool end to end and return the rendered text.

    Argument, unknown-tool, and transport errors are re-raised so the
    protocol layer can report them as tool errors.
    """
    try:
        request = build_request(name, arguments)
    except (ToolArgumentError, UnknownToolError) as exc:
        logger.info("Rejected call to %s: %s", name, exc)
        raise

    try:
        result = await client.invoke(request)
    except TransportError as exc:
        logger.error("Error executing tool %s: %s", name, exc)
        raise

    if isinstance(result, ErrorResult):
        level = logging.WARNING if result.source == ErrorSource.UPSTREAM else logging.INFO
        logger.log(
            level,
            "Tool %s got %s error (HTTP %s): %s",
            name,
            result.source.value,
            result.status_code,
            result.error.message,
        )
    return present(result)
