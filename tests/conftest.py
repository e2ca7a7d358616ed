"""Shared fixtures for the Billy MCP client tests"""

import json

import httpx
import pytest

from client_config import ClientConfig, DEFAULT_TOOL_DEFINITIONS_PATH
from remote_client import RemoteServiceClient
from tool_catalog import load_catalog
from tool_proxy import ProxyContext, ToolProxy

SERVER_URL = "https://billy.test"


class RecordingHandler:
    """Stands in for the remote server and records every request it gets."""

    def __init__(self, responder):
        self.responder = responder
        self.requests = []

    @property
    def payloads(self):
        return [json.loads(request.content) for request in self.requests if request.content]

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        result = self.responder(request)
        if hasattr(result, "__await__"):
            result = await result
        return result


def reply(body, status_code=200):
    return lambda request: httpx.Response(status_code, json=body)


@pytest.fixture
def config():
    return ClientConfig(
        server_url=SERVER_URL,
        congress_api_key="ABC123",
        default_congress="119",
        tool_definitions_path=DEFAULT_TOOL_DEFINITIONS_PATH,
    )


@pytest.fixture
def catalog():
    return load_catalog(DEFAULT_TOOL_DEFINITIONS_PATH).catalog


@pytest.fixture
def make_proxy(config, catalog):
    """Build a ToolProxy whose remote server is answered by responder."""
    def _make(responder):
        handler = RecordingHandler(responder)
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        remote = RemoteServiceClient(SERVER_URL, http_client=http_client)
        return ToolProxy(ProxyContext(config=config, catalog=catalog), remote), handler
    return _make
