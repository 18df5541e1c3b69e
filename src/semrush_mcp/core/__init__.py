"""Core business logic — response decoding, the API client, and rendering.

This module is framework-agnostic. It has no dependency on MCP, FastMCP,
or any server framework, and never reads the process environment: the
credential is handed to SemrushClient explicitly.
"""
