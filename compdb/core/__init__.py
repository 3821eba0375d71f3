"""
Core module: data models, exceptions, and the database building blocks.

Models (models.py):
    - CompileCommand: Working directory and argument vector for one file
    - CompileCommandRef: Indexed form of a command, materialized on query
    - DatabaseStats: File and command counts

Exceptions (exceptions.py):
    - CompDBError: Base exception for all compdb errors
    - LoadError: A database could not be built (IO, document, schema)
    - UnterminatedCommandError: Strict tokenization hit the end of input

Building blocks:
    - tokenizer: Shell-style splitting of "command" strings
    - paths: Native path normalization
    - match_trie: FileMatchTrie, resolves query paths to stored paths

The database itself lives in compdb.core.database and the format registry in
compdb.core.plugins.
"""

from compdb.core.exceptions import (
    CompDBError,
    DatabaseIOError,
    DatabaseNotFoundError,
    DocumentError,
    LoadError,
    SchemaError,
    UnterminatedCommandError,
)
from compdb.core.match_trie import FileMatchTrie, FilesystemComparator, PathComparator
from compdb.core.models import CompileCommand, CompileCommandRef, DatabaseStats, ParsedEntry
from compdb.core.paths import native_path, resolve_path
from compdb.core.tokenizer import CommandLineParser, unescape_command_line

__all__ = [
    # Models
    "CompileCommand",
    "CompileCommandRef",
    "DatabaseStats",
    "ParsedEntry",
    # Exceptions
    "CompDBError",
    "LoadError",
    "DatabaseIOError",
    "DocumentError",
    "SchemaError",
    "DatabaseNotFoundError",
    "UnterminatedCommandError",
    # Building blocks
    "CommandLineParser",
    "unescape_command_line",
    "native_path",
    "resolve_path",
    "FileMatchTrie",
    "FilesystemComparator",
    "PathComparator",
]
