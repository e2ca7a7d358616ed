"""
Billy MCP Client Proxy
Validates tool calls against the catalog and forwards them to the remote server
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import structlog
import mcp.types as types

from client_config import ClientConfig
from proxy_errors import RemoteRejection, TransportFailure, UnknownResource, UnknownTool
from remote_client import RemoteServiceClient
from tool_catalog import Catalog, load_catalog

logger = structlog.get_logger()

SERVER_INFO_URI = "billy://server-info"


@dataclass(frozen=True)
class ProxyContext:
    """Everything the proxy reads; built once at startup."""
    config: ClientConfig
    catalog: Catalog


def load_context(config: ClientConfig) -> ProxyContext:
    """Load the catalog named by config and wrap both in a ProxyContext."""
    result = load_catalog(config.tool_definitions_path)
    if result.fell_back:
        logger.warning(
            "catalog_fallback",
            path=config.tool_definitions_path,
            reason=result.reason,
            tools=result.catalog.names()
        )
    else:
        logger.info("catalog_loaded", path=config.tool_definitions_path, tools=len(result.catalog))
    return ProxyContext(config=config, catalog=result.catalog)


class ToolProxy:
    """Host-facing operations: advertise, describe and invoke."""

    def __init__(self, context: ProxyContext, remote: RemoteServiceClient):
        self.context = context
        self.remote = remote

    @property
    def catalog(self) -> Catalog:
        return self.context.catalog

    def advertise(self) -> List[types.Tool]:
        return self.catalog.list()

    def list_resources(self) -> List[types.Resource]:
        return [
            types.Resource(
                uri=SERVER_INFO_URI,
                name="🏛️ Billy MCP Server Information",
                description="Information about the connected Billy MCP Server",
                mimeType="application/json"
            )
        ]

    async def describe(self, uri: str) -> Any:
        """Fetch the content of a resource; only server info is known."""
        if uri.rstrip("/") != SERVER_INFO_URI:
            raise UnknownResource(uri)
        return await self.remote.get_server_info()

    def enrich_arguments(self, arguments: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Merge caller arguments with the credentials; credentials win."""
        payload = dict(arguments or {})
        payload.update(self.context.config.credentials())
        return payload

    async def invoke(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        """Forward one tool call and return the remote result unchanged."""
        if name not in self.catalog:
            logger.warning("unknown_tool", tool=name)
            raise UnknownTool(name)

        payload = self.enrich_arguments(arguments)
        logger.info("tool_call", tool=name)

        try:
            response = await self.remote.call_tool(name, payload)
        except TransportFailure as e:
            logger.error("tool_call_failed", tool=name, error=str(e), status=e.status_code)
            raise

        if not isinstance(response, dict):
            logger.error("tool_call_failed", tool=name, error="unexpected response shape")
            raise TransportFailure(
                f"Unexpected response from Billy MCP Server for {name}: "
                f"expected an object, got {type(response).__name__}"
            )

        if response.get("success"):
            return response.get("result")

        error = response.get("error") or "Tool execution failed"
        logger.error("tool_call_rejected", tool=name, error=error)
        raise RemoteRejection(str(error))
