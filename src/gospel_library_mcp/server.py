"""MCP Server — scripture and General Conference talk tools.

Tools:
- list_collections / get_book_info        (structure)
- get_scripture_text / search_scriptures  (scripture text)
- list_conference_talks                   (session and talk index)
- get_conference_talk / search_conference_talks
"""

from __future__ import annotations

import argparse
import logging

from mcp.server.fastmcp import FastMCP

from gospel_library_mcp import __version__
from gospel_library_mcp.engine import LibraryEngine
from gospel_library_mcp.tools import conference, scriptures

# basicConfig logs to stderr; stdout carries the MCP JSON-RPC stream
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

mcp = FastMCP("unofficial-gospel-library-mcp")

# Shared engine instance used by all tools
engine = LibraryEngine()

scriptures.register(mcp, engine)
conference.register(mcp, engine)


def main():
    """Run the MCP server with the corpus pre-loaded."""
    parser = argparse.ArgumentParser(
        description=f"Unofficial Gospel Library MCP Server {__version__}",
    )
    parser.add_argument(
        "--data-dir",
        metavar="PATH",
        help="Corpus data directory (default: $GOSPEL_LIBRARY_DATA or ./data)",
    )
    parser.add_argument(
        "--sse",
        type=int,
        metavar="PORT",
        help="Run with SSE transport on specified port",
    )
    parser.add_argument(
        "--http",
        type=int,
        metavar="PORT",
        help="Run with Streamable HTTP transport on specified port",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.sse:
        transport = "sse"
        port = args.sse
    elif args.http:
        transport = "http"
        port = args.http
    else:
        transport = "stdio"
        port = None

    logger.info("Starting Gospel Library MCP server (transport: %s)...", transport)

    # Load everything before serving; a load error aborts startup
    if args.data_dir:
        engine.data_dir = args.data_dir
    engine.load()

    if transport == "stdio":
        mcp.run(transport="stdio")
    elif transport == "sse":
        mcp.settings.host = "0.0.0.0"
        mcp.settings.port = port
        mcp.run(transport="sse")
    elif transport == "http":
        mcp.settings.host = "0.0.0.0"
        mcp.settings.port = port
        mcp.run(transport="streamable-http")


if __name__ == "__main__":
    main()
