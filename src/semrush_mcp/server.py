"""Semrush MCP Server.

FastMCP server with 7 read-only SEO tools backed by the Semrush API.
Run: semrush-mcp
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Annotated, AsyncIterator, Literal, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from . import __version__
from .config import Settings, load_settings
from .core.clients.semrush import SemrushClient
from .core.errors import ConfigError
from .tools import TOOLS, call_tool

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=True)

_client: Optional[SemrushClient] = None


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Make sure the client exists before the first tool call."""
    _get_client()
    logger.info("Semrush MCP Server %s running on stdio", __version__)
    try:
        yield
    finally:
        logger.info("Semrush MCP Server stopped")


mcp = FastMCP(
    "Semrush",
    instructions="Ask your AI about SEO — domain rankings, organic and paid keywords, backlinks, and competitors, live from the Semrush API.",
    lifespan=lifespan,
)


def configure(settings: Settings) -> SemrushClient:
    """Build the process-wide client from explicit settings."""
    global _client
    _client = SemrushClient(api_key=settings.api_key, api_base=settings.api_base)
    return _client


def _get_client() -> SemrushClient:
    if _client is None:
        return configure(load_settings())
    return _client


Domain = Annotated[str, Field(description="Domain to analyze, e.g. 'example.com'")]
Phrase = Annotated[str, Field(description="Keyword phrase")]
Database = Annotated[str, Field(description="Regional database code (e.g., us, uk, ca)")]
Limit = Annotated[int, Field(ge=1, description="Number of results")]
Offset = Annotated[int, Field(ge=0, description="Offset for pagination")]
TargetType = Annotated[
    Literal["root_domain", "domain", "url"],
    Field(description="root_domain, domain (for subdomains), or url"),
]


def _tool(name: str):
    """Register a tool under its registry name and description."""
    return mcp.tool(name=name, description=TOOLS[name].description, annotations=READ_ONLY)


# ─── Tool 1: Domain Overview ─────────────────────────────────────────────────


@_tool("domain_overview")
async def domain_overview(domain: Domain, database: Database = "us") -> str:
    return await call_tool(_get_client(), "domain_overview", {"domain": domain, "database": database})


# ─── Tool 2: Keyword Overview ────────────────────────────────────────────────


@_tool("keyword_overview")
async def keyword_overview(phrase: Phrase, database: Database = "us") -> str:
    return await call_tool(_get_client(), "keyword_overview", {"phrase": phrase, "database": database})


# ─── Tool 3: Organic Search ──────────────────────────────────────────────────


@_tool("domain_organic_search")
async def domain_organic_search(
    domain: Domain,
    database: Database = "us",
    limit: Limit = 10,
    offset: Offset = 0,
) -> str:
    return await call_tool(
        _get_client(),
        "domain_organic_search",
        {"domain": domain, "database": database, "limit": limit, "offset": offset},
    )


# ─── Tool 4: Backlinks ───────────────────────────────────────────────────────


@_tool("backlinks_overview")
async def backlinks_overview(
    target: Annotated[str, Field(description="Domain or URL to analyze")],
    target_type: TargetType = "root_domain",
) -> str:
    return await call_tool(_get_client(), "backlinks_overview", {"target": target, "target_type": target_type})


# ─── Tool 5: Competitors ─────────────────────────────────────────────────────


@_tool("competitor_research")
async def competitor_research(domain: Domain, database: Database = "us", limit: Limit = 10) -> str:
    return await call_tool(
        _get_client(),
        "competitor_research",
        {"domain": domain, "database": database, "limit": limit},
    )


# ─── Tool 6: Paid Search ─────────────────────────────────────────────────────


@_tool("domain_adwords")
async def domain_adwords(domain: Domain, database: Database = "us", limit: Limit = 10) -> str:
    return await call_tool(
        _get_client(),
        "domain_adwords",
        {"domain": domain, "database": database, "limit": limit},
    )


# ─── Tool 7: Related Keywords ────────────────────────────────────────────────


@_tool("related_keywords")
async def related_keywords(phrase: Phrase, database: Database = "us", limit: Limit = 10) -> str:
    return await call_tool(
        _get_client(),
        "related_keywords",
        {"phrase": phrase, "database": database, "limit": limit},
    )


def main():
    """Entry point for the CLI command."""
    try:
        settings = load_settings()
    except ConfigError as exc:
        logging.basicConfig(level=logging.ERROR, format=LOG_FORMAT, force=True)
        logger.critical("%s", exc)
        sys.exit(1)

    # FastMCP installs its own root handler at import time
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT, force=True)
    configure(settings)
    mcp.run()


if __name__ == "__main__":
    main()
