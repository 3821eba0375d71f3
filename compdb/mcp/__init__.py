"""
MCP server for compdb.

Exposes compilation database queries to LLMs via the Model Context Protocol.

Tools:
    - compdb_compile_commands: Compiler invocations for a source file
    - compdb_files: Every file in the database
    - compdb_stats: File and command counts
    - compdb_tokenize: Split an escaped command string

Usage:
    Run: mcp-server-compdb
"""

import asyncio

from compdb.mcp.server import serve as _serve


def serve() -> None:
    """Entry point for the MCP server."""
    asyncio.run(_serve())


__all__ = ["serve"]
