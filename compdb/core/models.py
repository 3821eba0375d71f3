"""Data models for compdb."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from compdb.document.models import ScalarNode


@dataclass(frozen=True)
class CompileCommand:
    """The working directory and command line used to compile one file."""

    directory: str
    invocation: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {"directory": self.directory, "arguments": list(self.invocation)}


@dataclass(frozen=True)
class CompileCommandRef:
    """A compile command as stored in the index, before materialization."""

    directory: ScalarNode
    invocation: tuple[str, ...]

    def materialize(self) -> CompileCommand:
        """Create the CompileCommand this reference stands for."""
        return CompileCommand(directory=self.directory.value, invocation=self.invocation)


@dataclass(frozen=True)
class ParsedEntry:
    """A validated database entry (before indexing)."""

    file: str
    command: CompileCommandRef


@dataclass(frozen=True)
class DatabaseStats:
    """Size of a loaded compilation database."""

    files: int
    commands: int

    def to_dict(self) -> dict[str, int]:
        return {"files": self.files, "commands": self.commands}
