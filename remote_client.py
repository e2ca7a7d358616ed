"""
Billy MCP Client Remote Service
HTTP access to the hosted Billy MCP Server
"""

from typing import Any, Dict, Optional

import httpx
import structlog

from proxy_errors import RemoteTimeout, TransportFailure

logger = structlog.get_logger()

INFO_ENDPOINT = "/info"
TOOL_CALL_ENDPOINT = "/api/tools/call"

JSON_HEADERS = {"Content-Type": "application/json"}


class RemoteServiceClient:
    """Makes single-attempt JSON requests against the remote server."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        self.base_url = base_url.rstrip("/")
        self._client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    async def __aenter__(self) -> "RemoteServiceClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(self, endpoint: str, data: Optional[Dict[str, Any]] = None) -> Any:
        """POST data as JSON to endpoint, or GET it when there is no data.

        Returns the decoded JSON body. Every failure is raised as
        TransportFailure (RemoteTimeout for timeouts).
        """
        url = f"{self.base_url}{endpoint}"
        method = "POST" if data is not None else "GET"

        try:
            response = await self._client.request(method, url, headers=JSON_HEADERS, json=data)
        except httpx.TimeoutException as e:
            logger.error("http_request_timeout", url=url, method=method, error=str(e))
            raise RemoteTimeout(f"Failed to connect to Billy MCP Server: request to {url} timed out")
        except httpx.HTTPError as e:
            logger.error("http_request_failed", url=url, method=method, error=str(e))
            raise TransportFailure(f"Failed to connect to Billy MCP Server: {e}")

        if not response.is_success:
            detail = response.reason_phrase or response.text
            logger.error("http_request_failed", url=url, method=method, status=response.status_code)
            raise TransportFailure(
                f"Failed to connect to Billy MCP Server: HTTP {response.status_code}: {detail}",
                status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error("http_response_invalid", url=url, method=method, error=str(e))
            raise TransportFailure(f"Invalid JSON from Billy MCP Server: {e}")

    async def get_server_info(self) -> Any:
        return await self.request(INFO_ENDPOINT)

    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> Any:
        return await self.request(TOOL_CALL_ENDPOINT, {"tool": name, "arguments": arguments})
