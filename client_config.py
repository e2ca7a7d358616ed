"""
Billy MCP Client Configuration
Reads the client settings from environment variables
"""

import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from proxy_errors import ConfigurationError

DEFAULT_TOOL_DEFINITIONS_PATH = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), "tool_definitions.json"
)
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_LOG_LEVEL = "INFO"

# Field names the remote service expects credentials under
API_KEY_FIELD = "CONGRESS_API_KEY"
DEFAULT_CONGRESS_FIELD = "DEFAULT_CONGRESS"


@dataclass(frozen=True)
class ClientConfig:
    """Settings held for the lifetime of the process."""
    server_url: str
    congress_api_key: Optional[str] = None
    default_congress: Optional[str] = None
    tool_definitions_path: str = DEFAULT_TOOL_DEFINITIONS_PATH
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    def credentials(self) -> Dict[str, Optional[str]]:
        """Fields injected into every outbound tool call."""
        return {
            API_KEY_FIELD: self.congress_api_key,
            DEFAULT_CONGRESS_FIELD: self.default_congress,
        }


def _get(environ: Mapping[str, str], name: str) -> Optional[str]:
    # Blank values count as unset
    value = environ.get(name, "").strip()
    return value or None


def load_config(environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
    """Build a ClientConfig from the environment.

    Raises ConfigurationError when MCP_SERVER_URL is missing, when neither
    CONGRESS_API_KEY nor DEFAULT_CONGRESS is set, or when the request
    timeout is not a positive number.
    """
    if environ is None:
        environ = os.environ

    server_url = _get(environ, "MCP_SERVER_URL")
    if not server_url:
        raise ConfigurationError(
            "MCP_SERVER_URL is required in your Claude Desktop config\n"
            "   Example: https://billy-mcp.vercel.app"
        )

    congress_api_key = _get(environ, "CONGRESS_API_KEY")
    default_congress = _get(environ, "DEFAULT_CONGRESS")
    if not congress_api_key and not default_congress:
        raise ConfigurationError(
            "Either CONGRESS_API_KEY or DEFAULT_CONGRESS is required\n"
            "   Get your free API key at: https://api.congress.gov/sign-up"
        )

    timeout_value = _get(environ, "BILLY_REQUEST_TIMEOUT")
    request_timeout = DEFAULT_REQUEST_TIMEOUT
    if timeout_value:
        try:
            request_timeout = float(timeout_value)
        except ValueError:
            raise ConfigurationError(
                f"BILLY_REQUEST_TIMEOUT must be a number of seconds, got '{timeout_value}'"
            )
        if request_timeout <= 0:
            raise ConfigurationError("BILLY_REQUEST_TIMEOUT must be greater than zero")

    return ClientConfig(
        server_url=server_url.rstrip("/"),
        congress_api_key=congress_api_key,
        default_congress=default_congress,
        tool_definitions_path=_get(environ, "BILLY_TOOL_DEFINITIONS") or DEFAULT_TOOL_DEFINITIONS_PATH,
        request_timeout=request_timeout,
        log_level=(_get(environ, "BILLY_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
    )
