"""Explicit registry of compilation database formats."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from compdb.core.database import JSONCompilationDatabase
from compdb.core.exceptions import DatabaseNotFoundError
from compdb.core.models import CompileCommand

logger = logging.getLogger(__name__)

DATABASE_FILENAME = "compile_commands.json"
JSON_PLUGIN_NAME = "json-compilation-database"


class CompilationDatabase(Protocol):
    """Query interface shared by every database format."""

    def get_compile_commands(self, file_path: str) -> list[CompileCommand]: ...

    def get_all_files(self) -> list[str]: ...

    def get_all_compile_commands(self) -> list[CompileCommand]: ...


class CompilationDatabasePlugin(Protocol):
    """Loads one database format from a build directory."""

    def load_from_directory(self, directory: Path) -> CompilationDatabase:
        """Load the database stored in directory.

        Raises:
            LoadError: If the directory holds a database of this format that
                cannot be loaded.
            DatabaseNotFoundError: If the directory holds no database of this
                format.
        """
        ...


class JSONCompilationDatabasePlugin:
    """Loads ``compile_commands.json`` from a build directory."""

    def __init__(self, strict_commands: bool = False) -> None:
        self._strict_commands = strict_commands

    def load_from_directory(self, directory: Path) -> CompilationDatabase:
        database_path = get_default_database_path(directory)
        if not database_path.is_file():
            raise DatabaseNotFoundError(f'No {DATABASE_FILENAME} in "{directory}"')
        return JSONCompilationDatabase.load_from_file(
            database_path, strict_commands=self._strict_commands
        )


PluginFactory = Callable[[], CompilationDatabasePlugin]


@dataclass(frozen=True)
class PluginEntry:
    """A registered plugin factory."""

    name: str
    description: str
    factory: PluginFactory


class PluginRegistry:
    """Format name to plugin factory, tried in registration order."""

    def __init__(self) -> None:
        self._entries: dict[str, PluginEntry] = {}

    def register(self, name: str, factory: PluginFactory, description: str = "") -> None:
        """Register a plugin factory under a unique name."""
        if name in self._entries:
            raise ValueError(f"Plugin already registered: {name}")
        self._entries[name] = PluginEntry(name=name, description=description, factory=factory)

    def names(self) -> list[str]:
        return list(self._entries)

    def get(self, name: str) -> PluginEntry:
        """Get a plugin entry by name.

        Raises:
            KeyError: If no plugin has that name.
        """
        return self._entries[name]

    def load_from_directory(self, directory: Path) -> CompilationDatabase:
        """Load a database from directory with the first plugin that finds one.

        A plugin that finds its database but fails to load it stops the
        search; its error is raised unchanged.

        Raises:
            LoadError: If a database exists in directory but is broken.
            DatabaseNotFoundError: If no plugin finds a database; the message
                lists each plugin's reason.
        """
        reasons = []
        for entry in self._entries.values():
            try:
                database = entry.factory().load_from_directory(directory)
            except DatabaseNotFoundError as e:
                reasons.append(f"{entry.name}: {e}")
                continue
            logger.debug("Loaded %s from %s", entry.name, directory)
            return database

        details = "\n".join(reasons) if reasons else "no plugins registered"
        raise DatabaseNotFoundError(
            f"Could not auto-detect compilation database from directory "
            f'"{directory}"\n{details}'
        )

    def autodetect_from_directory(self, directory: Path) -> CompilationDatabase:
        """Load a database from directory or the nearest parent that has one.

        The search stops at the first directory holding a database, even if
        that database fails to load.

        Raises:
            LoadError: If the nearest database found is broken.
            DatabaseNotFoundError: If neither directory nor any parent has
                one; the message keeps the reasons given for directory.
        """
        directory = directory.resolve()
        first_error: DatabaseNotFoundError | None = None
        for candidate in (directory, *directory.parents):
            try:
                return self.load_from_directory(candidate)
            except DatabaseNotFoundError as e:
                logger.debug("No compilation database in %s", candidate)
                if first_error is None:
                    first_error = e
        raise DatabaseNotFoundError(
            f"{first_error}\nNo compilation database in any parent directory either"
        )


def get_default_database_path(directory: Path) -> Path:
    """Get the path of the JSON database inside a build directory."""
    return directory / DATABASE_FILENAME


def create_default_registry(strict_commands: bool = False) -> PluginRegistry:
    """Create a registry holding the built-in formats."""
    registry = PluginRegistry()
    registry.register(
        JSON_PLUGIN_NAME,
        lambda: JSONCompilationDatabasePlugin(strict_commands=strict_commands),
        "Reads JSON formatted compilation databases",
    )
    return registry
