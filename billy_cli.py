#!/usr/bin/env python3
"""
Billy MCP Client CLI
Command-line entry point for serving and inspecting the client
"""

import sys
import argparse
import asyncio
import json
from typing import List, Optional

from dotenv import load_dotenv

from billy_server import configure_logging, run
from client_config import ClientConfig, load_config
from proxy_errors import CatalogLoadFailure, ConfigurationError, TransportFailure
from remote_client import RemoteServiceClient
from tool_catalog import catalog_from_server_info, load_catalog


class BillyCLI:
    """Command-line interface for the Billy MCP client."""

    def __init__(self, config: ClientConfig):
        self.config = config

    def serve(self, args):
        """Run the MCP server over stdio."""
        asyncio.run(run(self.config))
        return 0

    def tools(self, args):
        """List the tools that would be advertised."""
        if args.remote:
            info = asyncio.run(self._fetch_server_info())
            catalog = catalog_from_server_info(info)
        else:
            result = load_catalog(self.config.tool_definitions_path)
            if result.fell_back:
                print(f"⚠️  Using fallback catalog: {result.reason}", file=sys.stderr)
            catalog = result.catalog

        if args.format == 'json':
            print(json.dumps([tool.model_dump(exclude_none=True) for tool in catalog], indent=2))
        else:
            for tool in catalog:
                print(f"  {tool.name}")
            print(f"\n{len(catalog)} tools")
        return 0

    def info(self, args):
        """Print the remote server information."""
        info = asyncio.run(self._fetch_server_info())
        print(json.dumps(info, indent=2))
        return 0

    def check(self, args):
        """Report whether the client is ready for Claude Desktop."""
        print("Billy MCP Client")
        print("=" * 40)
        print(f"🌐 Server: {self.config.server_url}")
        print(f"🔑 Congress API: {'✅ Provided' if self.config.congress_api_key else '❌ Not provided'}")
        print(f"📋 Default Congress: {'✅ Provided' if self.config.default_congress else '❌ Not provided'}")

        result = load_catalog(self.config.tool_definitions_path)
        if result.fell_back:
            print(f"✗ Tool definitions: fallback catalog ({result.reason})")
        else:
            print(f"✓ Tool definitions: {len(result.catalog)} tools")

        print("=" * 40)
        if result.fell_back:
            print("❌ Some issues need fixing")
            return 1
        print("✅ Ready for Claude Desktop!")
        return 0

    async def _fetch_server_info(self):
        async with RemoteServiceClient(self.config.server_url, timeout=self.config.request_timeout) as remote:
            return await remote.get_server_info()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='billy-mcp-client',
        description='Billy MCP Client - Congressional Intelligence API for Claude Desktop'
    )
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    subparsers.add_parser('serve', help='Serve the tools over stdio (default)')

    tools_parser = subparsers.add_parser('tools', help='List available tools')
    tools_parser.add_argument('--remote', action='store_true',
                              help='List the tools reported by the server instead of the local catalog')
    tools_parser.add_argument('--format', choices=['list', 'json'], default='list',
                              help='Output format')

    subparsers.add_parser('info', help='Show remote server information')
    subparsers.add_parser('check', help='Check configuration and tool definitions')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    command = args.command or 'serve'

    load_dotenv()

    try:
        config = load_config()
    except ConfigurationError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    configure_logging(config.log_level)
    cli = BillyCLI(config)

    try:
        if command == 'serve':
            return cli.serve(args)
        elif command == 'tools':
            return cli.tools(args)
        elif command == 'info':
            return cli.info(args)
        elif command == 'check':
            return cli.check(args)
        else:
            print(f"Unknown command: {command}", file=sys.stderr)
            return 1

    except (TransportFailure, CatalogLoadFailure) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nShutting down.", file=sys.stderr)
        return 0


if __name__ == '__main__':
    sys.exit(main())
