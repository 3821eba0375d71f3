"""In-memory compilation database loaded from a JSON document."""

from __future__ import annotations

import logging
from pathlib import Path

from compdb.core.exceptions import DatabaseIOError
from compdb.core.match_trie import FileMatchTrie, PathComparator
from compdb.core.models import CompileCommand, CompileCommandRef, DatabaseStats
from compdb.core.parser import parse_entries
from compdb.core.paths import native_path
from compdb.document import DocumentReader, Node, YamlDocumentReader

logger = logging.getLogger(__name__)


class JSONCompilationDatabase:
    """Maps source files to the compile commands that build them.

    Built once from a document and read-only afterwards, so a single instance
    can be shared between threads. Use ``load_from_file`` or
    ``load_from_buffer`` rather than the constructor.
    """

    __slots__ = ("_by_file", "_match_trie")

    def __init__(self, comparator: PathComparator | None = None) -> None:
        self._by_file: dict[str, list[CompileCommandRef]] = {}
        self._match_trie = FileMatchTrie(comparator)

    @classmethod
    def load_from_file(
        cls,
        file_path: Path | str,
        strict_commands: bool = False,
        reader: DocumentReader | None = None,
        comparator: PathComparator | None = None,
    ) -> JSONCompilationDatabase:
        """Load a database from a file on disk.

        Raises:
            DatabaseIOError: If the file cannot be opened or decoded.
            DocumentError: If the file is not a well-formed document.
            SchemaError: If the document is not a valid compilation database.
        """
        try:
            text = Path(file_path).read_text(encoding="utf-8")
        except OSError as e:
            reason = e.strerror or str(e)
            raise DatabaseIOError(f"Error while opening JSON database: {reason}") from e
        except UnicodeDecodeError as e:
            raise DatabaseIOError(f"Error while opening JSON database: {e}") from e

        logger.debug("Loading compilation database from %s", file_path)
        return cls.load_from_buffer(
            text, strict_commands=strict_commands, reader=reader, comparator=comparator
        )

    @classmethod
    def load_from_buffer(
        cls,
        text: str,
        strict_commands: bool = False,
        reader: DocumentReader | None = None,
        comparator: PathComparator | None = None,
    ) -> JSONCompilationDatabase:
        """Load a database from document text.

        Raises:
            DocumentError: If the text is not a well-formed document.
            SchemaError: If the document is not a valid compilation database.
        """
        root = (reader or YamlDocumentReader()).read(text)
        return cls.from_document(root, strict_commands=strict_commands, comparator=comparator)

    @classmethod
    def from_document(
        cls,
        root: Node,
        strict_commands: bool = False,
        comparator: PathComparator | None = None,
    ) -> JSONCompilationDatabase:
        """Build a database from an already parsed document tree."""
        entries = parse_entries(root, strict_commands=strict_commands)

        database = cls(comparator)
        for entry in entries:
            database._by_file.setdefault(entry.file, []).append(entry.command)
            database._match_trie.insert(entry.file)

        logger.debug(
            "Loaded %d compile commands for %d files", len(entries), len(database._by_file)
        )
        return database

    def get_compile_commands(self, file_path: str) -> list[CompileCommand]:
        """Return the commands that compile file_path, in document order.

        A file that is not in the database yields an empty list.
        """
        match = self._match_trie.find_equivalent(native_path(file_path))
        if match is None:
            logger.debug("No compile commands for %s", file_path)
            return []
        return [ref.materialize() for ref in self._by_file.get(match, [])]

    def get_all_files(self) -> list[str]:
        """Return every indexed file path."""
        return list(self._by_file)

    def get_all_compile_commands(self) -> list[CompileCommand]:
        """Return every compile command, grouped by file."""
        return [ref.materialize() for refs in self._by_file.values() for ref in refs]

    def stats(self) -> DatabaseStats:
        return DatabaseStats(
            files=len(self._by_file),
            commands=sum(len(refs) for refs in self._by_file.values()),
        )

    def __contains__(self, file_path: object) -> bool:
        if not isinstance(file_path, str):
            return False
        return bool(self.get_compile_commands(file_path))

    def __len__(self) -> int:
        return len(self._by_file)

    def __repr__(self) -> str:
        stats = self.stats()
        return f"JSONCompilationDatabase(files={stats.files}, commands={stats.commands})"
