"""compdb custom exceptions."""

from __future__ import annotations


class CompDBError(Exception):
    """Base exception for compdb errors."""


class LoadError(CompDBError):
    """A compilation database could not be constructed."""


class DatabaseIOError(LoadError):
    """The database file could not be opened or read."""


class DocumentError(LoadError):
    """The document reader could not produce a root node."""


class SchemaError(LoadError):
    """The document does not have the shape of a compilation database."""

    def __init__(
        self,
        message: str,
        entry_index: int | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.entry_index = entry_index
        self.line = line
        self.column = column

    def __str__(self) -> str:
        location = []
        if self.entry_index is not None:
            location.append(f"entry {self.entry_index}")
        if self.line is not None:
            location.append(f"line {self.line}, column {self.column}")
        if location:
            return f"{self.message} ({'; '.join(location)})"
        return self.message


class DatabaseNotFoundError(LoadError):
    """No registered plugin could load a database from a directory."""


class UnterminatedCommandError(CompDBError):
    """A command line ended inside a quote or after an escape character."""
