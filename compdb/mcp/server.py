"""MCP server implementation for compdb."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from compdb.core.exceptions import CompDBError
from compdb.core.plugins import CompilationDatabase, create_default_registry
from compdb.core.tokenizer import CommandLineParser

server = Server("compdb")

_BUILD_DIR_PROPERTY = {
    "type": "string",
    "description": (
        "Build directory holding compile_commands.json "
        "(default: current directory, parents are searched too)"
    ),
}


def _get_database(build_dir: str | None) -> CompilationDatabase:
    """Load the database for a build directory, or the current directory."""
    directory = Path(build_dir) if build_dir else Path.cwd()
    return create_default_registry().autodetect_from_directory(directory)


@server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="compdb_compile_commands",
            description=(
                "Get the compiler invocations used to build a source file. "
                "Returns the working directory and argument list of each command."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "file": {
                        "type": "string",
                        "description": "Absolute path of the source file",
                    },
                    "build_dir": _BUILD_DIR_PROPERTY,
                },
                "required": ["file"],
            },
        ),
        Tool(
            name="compdb_files",
            description="List every source file in the compilation database.",
            inputSchema={
                "type": "object",
                "properties": {"build_dir": _BUILD_DIR_PROPERTY},
            },
        ),
        Tool(
            name="compdb_stats",
            description="Count the files and compile commands in the compilation database.",
            inputSchema={
                "type": "object",
                "properties": {"build_dir": _BUILD_DIR_PROPERTY},
            },
        ),
        Tool(
            name="compdb_tokenize",
            description=(
                "Split a shell-escaped compile command string into arguments "
                "the way the compilation database loader does."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "command": {
                        "type": "string",
                        "description": "Escaped command string",
                    },
                },
                "required": ["command"],
            },
        ),
    ]


@server.call_tool()  # type: ignore[untyped-decorator]
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    result = handle_tool(name, arguments)
    return [TextContent(type="text", text=json.dumps(result, indent=2))]


def handle_tool(name: str, arguments: dict[str, Any]) -> dict[str, Any]:
    """Dispatch a tool call and return its JSON-serializable result."""
    try:
        if name == "compdb_compile_commands":
            return _handle_compile_commands(arguments["file"], arguments.get("build_dir"))
        if name == "compdb_files":
            return _handle_files(arguments.get("build_dir"))
        if name == "compdb_stats":
            return _handle_stats(arguments.get("build_dir"))
        if name == "compdb_tokenize":
            return _handle_tokenize(arguments["command"])
        return {"error": f"Unknown tool: {name}"}
    except CompDBError as e:
        return {"error": str(e)}
    except KeyError as e:
        return {"error": f"Missing argument: {e.args[0]}"}


def _handle_compile_commands(file: str, build_dir: str | None) -> dict[str, Any]:
    """Handle compdb_compile_commands tool."""
    database = _get_database(build_dir)
    commands = database.get_compile_commands(file)
    if not commands:
        return {"error": f"No compile commands for '{file}'", "results": []}
    return {"results": [command.to_dict() for command in commands]}


def _handle_files(build_dir: str | None) -> dict[str, Any]:
    """Handle compdb_files tool."""
    database = _get_database(build_dir)
    return {"results": database.get_all_files()}


def _handle_stats(build_dir: str | None) -> dict[str, Any]:
    """Handle compdb_stats tool."""
    database = _get_database(build_dir)
    return {
        "files": len(database.get_all_files()),
        "commands": len(database.get_all_compile_commands()),
    }


def _handle_tokenize(command: str) -> dict[str, Any]:
    """Handle compdb_tokenize tool."""
    parser = CommandLineParser(command)
    return {"arguments": parser.parse(), "truncated": parser.truncated}


async def serve() -> None:
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
