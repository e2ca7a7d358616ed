"""
Billy MCP Client Errors
Error kinds raised by the proxy and how each one is reported to the host
"""

from typing import Optional

from mcp.shared.exceptions import McpError
from mcp.types import ErrorData, INTERNAL_ERROR, INVALID_REQUEST, METHOD_NOT_FOUND


class ConfigurationError(Exception):
    """Required startup configuration is missing or invalid."""


class CatalogLoadFailure(Exception):
    """The tool definition document could not be read or understood."""


class ProxyError(McpError):
    """Base for every failure that crosses the host boundary.

    Subclasses pick the JSON-RPC error code the host sees.
    """

    code = INTERNAL_ERROR

    def __init__(self, message: str):
        super().__init__(ErrorData(code=self.code, message=message))
        self.message = message

    def __str__(self) -> str:
        return self.message


class UnknownTool(ProxyError):
    """Invocation names a tool that is not in the catalog."""

    code = METHOD_NOT_FOUND

    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class UnknownResource(ProxyError):
    """Resource read for an identifier this client does not serve."""

    code = INVALID_REQUEST

    def __init__(self, uri: str):
        super().__init__(f"Unknown resource: {uri}")
        self.uri = uri


class TransportFailure(ProxyError):
    """The outbound HTTP call failed or returned something unusable."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RemoteTimeout(TransportFailure):
    """The remote service did not answer within the request timeout."""


class RemoteRejection(ProxyError):
    """The remote service answered with success: false."""
