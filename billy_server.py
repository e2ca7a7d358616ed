#!/usr/bin/env python3
"""
Billy MCP Client - Congressional Intelligence API
Connects Claude Desktop/Cursor to the hosted Billy MCP Server over stdio
"""

import json
import logging
import sys
from typing import Any, List, Union

import structlog
from pydantic import AnyUrl, ValidationError
from mcp.server import Server, NotificationOptions
from mcp.server.models import InitializationOptions
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
import mcp.types as types

from client_config import ClientConfig
from proxy_errors import RemoteRejection
from remote_client import RemoteServiceClient
from tool_proxy import ToolProxy, load_context

__version__ = "1.0.0"

SERVER_NAME = "billy-mcp-client"

logger = structlog.get_logger()

ContentItem = Union[types.TextContent, types.ImageContent, types.EmbeddedResource]

CONTENT_MODELS = {
    "text": types.TextContent,
    "image": types.ImageContent,
    "resource": types.EmbeddedResource,
}


def configure_logging(level: str = "INFO") -> None:
    """Send structured logs to stderr only (stdout is for MCP protocol)."""
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer()
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def _render_content(item: Any) -> ContentItem:
    model = CONTENT_MODELS.get(item.get("type")) if isinstance(item, dict) else None
    if model is None:
        return types.TextContent(type="text", text=json.dumps(item, indent=2))
    try:
        return model.model_validate(item)
    except ValidationError as e:
        logger.warning("content_item_invalid", type=item.get("type"), error=str(e))
        return types.TextContent(type="text", text=json.dumps(item, indent=2))


def render_tool_result(result: Any) -> List[ContentItem]:
    """Turn a remote tool result into MCP content for the host.

    Results already shaped like an MCP tool result keep their content
    items; anything else is returned as pretty-printed JSON text.
    """
    if isinstance(result, dict) and isinstance(result.get("content"), list):
        content = [_render_content(item) for item in result["content"]]
        if result.get("isError"):
            text = "\n".join(item.text for item in content if isinstance(item, types.TextContent))
            raise RemoteRejection(text or "Tool execution failed")
        return content

    return [types.TextContent(type="text", text=json.dumps(result, indent=2))]


def create_server(proxy: ToolProxy) -> Server:
    """Create the MCP server and bind its handlers to proxy."""
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        """List the congressional tools in the catalog."""
        return proxy.advertise()

    @server.list_resources()
    async def handle_list_resources() -> list[types.Resource]:
        return proxy.list_resources()

    @server.read_resource()
    async def handle_read_resource(uri: AnyUrl) -> list[ReadResourceContents]:
        info = await proxy.describe(str(uri))
        return [ReadResourceContents(content=json.dumps(info, indent=2), mime_type="application/json")]

    # Registered directly rather than via @server.call_tool(): arguments go
    # to the remote server unvalidated, and ProxyError codes reach the host
    # as JSON-RPC errors instead of text-only error results.
    async def handle_call_tool(req: types.CallToolRequest) -> types.ServerResult:
        """Proxy the call to the Billy MCP Server."""
        result = await proxy.invoke(req.params.name, req.params.arguments or {})
        return types.ServerResult(
            types.CallToolResult(content=render_tool_result(result), isError=False)
        )

    server.request_handlers[types.CallToolRequest] = handle_call_tool

    return server


async def run(config: ClientConfig) -> None:
    """Serve the proxy over stdin/stdout until the host disconnects."""
    context = load_context(config)

    logger.info(
        "client_initialized",
        server=config.server_url,
        congress_api_key="provided" if config.congress_api_key else "not provided",
        default_congress="provided" if config.default_congress else "not provided"
    )

    async with RemoteServiceClient(config.server_url, timeout=config.request_timeout) as remote:
        server = create_server(ToolProxy(context, remote))
        async with stdio_server() as (read_stream, write_stream):
            logger.info("client_connected", name=SERVER_NAME)
            await server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name=SERVER_NAME,
                    server_version=__version__,
                    capabilities=server.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={}
                    )
                )
            )
