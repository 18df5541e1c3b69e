"""Exception types raised across the package."""


class SemrushMCPError(Exception):
    """Base class for all errors raised by this package."""


class ConfigError(SemrushMCPError):
    """Startup configuration is missing or invalid."""


class TransportError(SemrushMCPError):
    """The HTTP request could not be completed at all."""


class UnknownToolError(SemrushMCPError):
    """No tool is registered under the requested name."""


class ToolArgumentError(SemrushMCPError):
    """Caller-supplied tool arguments failed validation."""

    def __init__(self, tool: str, errors: list[str]):
        self.tool = tool
        self.errors = errors
        super().__init__(f"Invalid parameters for {tool}: {', '.join(errors)}")
