"""Turn a document tree into validated compilation database entries."""

from __future__ import annotations

import logging

from compdb.core.exceptions import SchemaError
from compdb.core.models import CompileCommandRef, ParsedEntry
from compdb.core.paths import resolve_path
from compdb.core.tokenizer import CommandLineParser
from compdb.document.models import MappingNode, Node, NullNode, ScalarNode, SequenceNode

logger = logging.getLogger(__name__)

KEY_DIRECTORY = "directory"
KEY_FILE = "file"
KEY_ARGUMENTS = "arguments"
KEY_COMMAND = "command"

_KNOWN_KEYS = (KEY_DIRECTORY, KEY_FILE, KEY_ARGUMENTS, KEY_COMMAND)


def parse_entries(root: Node, strict_commands: bool = False) -> list[ParsedEntry]:
    """Validate the whole document and return its entries in document order.

    Args:
        root: Root node of the document; must be a sequence of mappings.
        strict_commands: If True, a ``command`` string that ends inside a
            quote or after an escape is a SchemaError instead of a warning.

    Raises:
        SchemaError: On the first structural violation. No entries are
            returned in that case.
    """
    if not isinstance(root, SequenceNode):
        raise _error("Expected array.", node=root)

    return [
        _EntryParser(index, strict_commands).parse(item) for index, item in enumerate(root)
    ]


class _EntryParser:
    """Validates one object of the top-level array."""

    def __init__(self, index: int, strict_commands: bool) -> None:
        self._index = index
        self._strict_commands = strict_commands

    def parse(self, node: Node) -> ParsedEntry:
        if not isinstance(node, MappingNode):
            raise self._error("Expected object.", node)

        scalars: dict[str, ScalarNode] = {}
        arguments: SequenceNode | None = None
        for pair in node:
            if not isinstance(pair.key, ScalarNode):
                raise self._error("Expected strings as key.", pair.key)
            key = pair.key.value
            # Value shape is checked before the key name, so {"x": [1]} is a
            # value error rather than an unknown key.
            if isinstance(pair.value, NullNode):
                raise self._error("Expected value.", pair.key)
            if key == KEY_ARGUMENTS and not isinstance(pair.value, SequenceNode):
                raise self._error("Expected sequence as value.", pair.value)
            if key != KEY_ARGUMENTS and not isinstance(pair.value, ScalarNode):
                raise self._error("Expected string as value.", pair.value)
            if key not in _KNOWN_KEYS:
                raise self._error(f'Unknown key: "{key}"', pair.key)
            if key in scalars or (key == KEY_ARGUMENTS and arguments is not None):
                raise self._error(f'Duplicate key: "{key}"', pair.key)

            if isinstance(pair.value, SequenceNode):
                arguments = pair.value
            elif isinstance(pair.value, ScalarNode):
                scalars[key] = pair.value

        command = scalars.get(KEY_COMMAND)
        if KEY_FILE not in scalars:
            raise self._error(f'Missing key: "{KEY_FILE}".', node)
        if arguments is None and command is None:
            raise self._error(f'Missing key: "{KEY_COMMAND}" or "{KEY_ARGUMENTS}".', node)
        if arguments is not None and command is not None:
            raise self._error(
                f'Keys "{KEY_COMMAND}" and "{KEY_ARGUMENTS}" are mutually exclusive.', node
            )
        if KEY_DIRECTORY not in scalars:
            raise self._error(f'Missing key: "{KEY_DIRECTORY}".', node)

        directory = scalars[KEY_DIRECTORY]
        if arguments is not None:
            invocation = self._parse_arguments(arguments)
        else:
            invocation = self._parse_command(scalars[KEY_COMMAND])

        return ParsedEntry(
            file=resolve_path(scalars[KEY_FILE].value, directory.value),
            command=CompileCommandRef(directory=directory, invocation=invocation),
        )

    def _parse_arguments(self, node: SequenceNode) -> tuple[str, ...]:
        arguments = []
        for item in node:
            if not isinstance(item, ScalarNode):
                raise self._error(f'Expected strings in "{KEY_ARGUMENTS}" sequence.', item)
            arguments.append(item.value)
        return tuple(arguments)

    def _parse_command(self, node: ScalarNode) -> tuple[str, ...]:
        parser = CommandLineParser(node.value)
        arguments = parser.parse()
        if parser.truncated:
            if self._strict_commands:
                raise self._error("Unterminated quote or escape in command.", node)
            logger.warning(
                "Entry %d: command ends inside a quote or escape, arguments truncated: %r",
                self._index,
                node.value,
            )
        return tuple(arguments)

    def _error(self, message: str, node: Node) -> SchemaError:
        return _error(message, node=node, entry_index=self._index)


def _error(message: str, node: Node, entry_index: int | None = None) -> SchemaError:
    mark = node.mark
    return SchemaError(
        message,
        entry_index=entry_index,
        line=mark.line if mark else None,
        column=mark.column if mark else None,
    )
