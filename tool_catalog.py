"""
Billy MCP Client Tool Catalog
Loads the congressional tool definitions advertised to the host
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from mcp.types import Tool
from pydantic import ValidationError

from proxy_errors import CatalogLoadFailure

# Served when the definition document cannot be loaded
FALLBACK_TOOL = {
    "name": "search_bills",
    "description": "Search congressional bills",
    "inputSchema": {
        "type": "object",
        "properties": {
            "query": {"type": "string", "description": "Search query"}
        },
        "required": ["query"]
    }
}


class Catalog:
    """Ordered, read-only collection of tool descriptors keyed by name."""

    def __init__(self, tools: Iterable[Tool]):
        self._tools = tuple(tools)
        self._by_name: Dict[str, Tool] = {}
        for tool in self._tools:
            if tool.name in self._by_name:
                raise CatalogLoadFailure(f"Duplicate tool name: {tool.name}")
            self._by_name[tool.name] = tool

    def list(self) -> List[Tool]:
        return list(self._tools)

    def names(self) -> List[str]:
        return [tool.name for tool in self._tools]

    def get(self, name: str) -> Optional[Tool]:
        return self._by_name.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self):
        return iter(self._tools)


@dataclass(frozen=True)
class CatalogLoadResult:
    """Outcome of loading the catalog.

    Either the document loaded (fell_back is False) or the single-entry
    fallback catalog was substituted and reason says why.
    """
    catalog: Catalog
    fell_back: bool = False
    reason: Optional[str] = None

    @classmethod
    def loaded(cls, catalog: Catalog) -> "CatalogLoadResult":
        return cls(catalog=catalog)

    @classmethod
    def fallback(cls, reason: str) -> "CatalogLoadResult":
        return cls(catalog=fallback_catalog(), fell_back=True, reason=reason)


def fallback_catalog() -> Catalog:
    return Catalog([Tool.model_validate(FALLBACK_TOOL)])


def parse_tool_definitions(data: Any) -> Catalog:
    """Turn a decoded definition document into a Catalog.

    The document must be a JSON array of objects with at least name and
    inputSchema. Anything else raises CatalogLoadFailure.
    """
    if not isinstance(data, list):
        raise CatalogLoadFailure(
            f"Tool definitions must be a JSON array, got {type(data).__name__}"
        )

    tools = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise CatalogLoadFailure(f"Tool definition #{index} is not an object")
        try:
            tools.append(Tool.model_validate(entry))
        except ValidationError as e:
            raise CatalogLoadFailure(f"Tool definition #{index} is invalid: {e}")

    return Catalog(tools)


def load_catalog(path: str) -> CatalogLoadResult:
    """Load the tool definition document at path.

    Never raises: any read or parse problem yields the fallback result.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        catalog = parse_tool_definitions(data)
    except (OSError, ValueError, CatalogLoadFailure) as e:
        return CatalogLoadResult.fallback(f"{type(e).__name__}: {e}")

    return CatalogLoadResult.loaded(catalog)


def catalog_from_server_info(info: Any) -> Catalog:
    """Build a catalog from the tools a remote server lists under /info.

    The server only reports names and descriptions, so every tool gets an
    empty object schema. Raises CatalogLoadFailure when the payload does
    not have that shape.
    """
    if not isinstance(info, dict):
        raise CatalogLoadFailure(f"Server info must be a JSON object, got {type(info).__name__}")

    available = info.get("available_tools") or []
    if not isinstance(available, list):
        raise CatalogLoadFailure("Server info available_tools must be a JSON array")

    tools = []
    for index, entry in enumerate(available):
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            raise CatalogLoadFailure(f"Server tool #{index} has no name")
        description = entry.get("description")
        tools.append(Tool(
            name=entry["name"],
            description=description if isinstance(description, str) else None,
            inputSchema={"type": "object", "properties": {}}
        ))
    return Catalog(tools)
