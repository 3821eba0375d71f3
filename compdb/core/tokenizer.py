"""Splitting of shell-escaped command strings into argument vectors.

Rules, applied left to right:

- Arguments are separated by runs of spaces.
- An argument is a concatenation of fragments: double-quoted, single-quoted,
  or free text. ``foo"bar"baz`` is the single argument ``foobarbaz``.
- In double quotes and in free text a backslash escapes the next character.
- In single quotes nothing is escaped.

Input that ends inside a quote or right after an escaping backslash is cut
short: the argument collected so far is kept and ``truncated`` is set.
"""

from __future__ import annotations

from compdb.core.exceptions import UnterminatedCommandError

_SPACE = " "
_DOUBLE_QUOTE = '"'
_SINGLE_QUOTE = "'"
_ESCAPE = "\\"


class CommandLineParser:
    """Single-use parser for one escaped command line.

    Every private method returns True while there is more input.
    """

    def __init__(self, command_line: str) -> None:
        self._input = command_line
        self._position = -1
        self.truncated = False

    def parse(self) -> list[str]:
        """Split the command line into arguments."""
        arguments: list[str] = []
        has_more_input = True
        while has_more_input and self._next_non_whitespace():
            argument: list[str] = []
            has_more_input = self._parse_string_into(argument)
            arguments.append("".join(argument))
        return arguments

    @property
    def _current(self) -> str:
        return self._input[self._position]

    def _parse_string_into(self, argument: list[str]) -> bool:
        while True:
            if self._current == _DOUBLE_QUOTE:
                has_more = self._parse_double_quoted_into(argument)
            elif self._current == _SINGLE_QUOTE:
                has_more = self._parse_single_quoted_into(argument)
            else:
                has_more = self._parse_free_into(argument)
            if not has_more:
                return False
            if self._current == _SPACE:
                return True

    def _parse_double_quoted_into(self, argument: list[str]) -> bool:
        if not self._next_or_truncate():
            return False
        while self._current != _DOUBLE_QUOTE:
            if not self._skip_escape_character():
                return False
            argument.append(self._current)
            if not self._next_or_truncate():
                return False
        return self._next()

    def _parse_single_quoted_into(self, argument: list[str]) -> bool:
        if not self._next_or_truncate():
            return False
        while self._current != _SINGLE_QUOTE:
            argument.append(self._current)
            if not self._next_or_truncate():
                return False
        return self._next()

    def _parse_free_into(self, argument: list[str]) -> bool:
        while True:
            if not self._skip_escape_character():
                return False
            argument.append(self._current)
            if not self._next():
                return False
            if self._current in (_SPACE, _DOUBLE_QUOTE, _SINGLE_QUOTE):
                return True

    def _skip_escape_character(self) -> bool:
        if self._current == _ESCAPE:
            return self._next_or_truncate()
        return True

    def _next_non_whitespace(self) -> bool:
        while True:
            if not self._next():
                return False
            if self._current != _SPACE:
                return True

    def _next(self) -> bool:
        self._position += 1
        return self._position < len(self._input)

    def _next_or_truncate(self) -> bool:
        """Advance where running out of input means the command was cut short."""
        if self._next():
            return True
        self.truncated = True
        return False


def unescape_command_line(command_line: str, strict: bool = False) -> list[str]:
    """Split an escaped command line into its arguments.

    Args:
        command_line: The command string, e.g. ``cc -c "my file.c"``.
        strict: If True, raise instead of returning a truncated result.

    Raises:
        UnterminatedCommandError: In strict mode, when the input ends inside a
            quote or after an escaping backslash.
    """
    parser = CommandLineParser(command_line)
    arguments = parser.parse()
    if strict and parser.truncated:
        raise UnterminatedCommandError(
            f"Unterminated quote or escape in command: {command_line!r}"
        )
    return arguments
