"""Generic document tree consumed by the database parser."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Mark:
    """A 1-based position in the source text."""

    line: int
    column: int


@dataclass(frozen=True)
class ScalarNode:
    """A string value."""

    value: str
    mark: Mark | None = None


@dataclass(frozen=True)
class NullNode:
    """A key without a value (``key:`` in YAML)."""

    mark: Mark | None = None


@dataclass(frozen=True)
class SequenceNode:
    """An ordered list of nodes."""

    items: tuple[Node, ...] = ()
    mark: Mark | None = None

    def __iter__(self) -> Iterator[Node]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class KeyValue:
    """One key/value pair of a mapping, in document order."""

    key: Node
    value: Node


@dataclass(frozen=True)
class MappingNode:
    """An ordered list of key/value pairs; keys are not deduplicated."""

    pairs: tuple[KeyValue, ...] = field(default_factory=tuple)
    mark: Mark | None = None

    def __iter__(self) -> Iterator[KeyValue]:
        return iter(self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)


Node = ScalarNode | NullNode | SequenceNode | MappingNode
