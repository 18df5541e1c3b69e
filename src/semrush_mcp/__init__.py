"""Semrush MCP Server.

Ask your AI about SEO — domain rankings, keywords, backlinks, competitors,
and paid search, straight from the Semrush API.
"""

__version__ = "1.0.0"
