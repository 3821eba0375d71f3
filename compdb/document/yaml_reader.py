"""Document reader backed by PyYAML's composer."""

from __future__ import annotations

import yaml

from compdb.core.exceptions import DocumentError
from compdb.document.models import (
    KeyValue,
    MappingNode,
    Mark,
    Node,
    NullNode,
    ScalarNode,
    SequenceNode,
)

_NULL_TAG = "tag:yaml.org,2002:null"


class YamlDocumentReader:
    """Reads JSON or YAML text into a tree of document nodes.

    Only the first document of a multi-document stream is used. Scalars keep
    their source text, so ``1`` and ``"1"`` both read as the string ``"1"``.
    Aliases (``*name``) are rejected: the result is always a tree.
    """

    def read(self, text: str) -> Node:
        """Parse text and return the root node."""
        try:
            root = next(iter(yaml.compose_all(text, Loader=yaml.SafeLoader)), None)
            if root is None:
                raise DocumentError("Error while parsing YAML.")
            return _TreeBuilder().convert(root)
        except yaml.YAMLError as e:
            raise DocumentError(f"Error while parsing YAML: {e}") from e
        except RecursionError as e:
            raise DocumentError("Error while parsing YAML: document is nested too deeply") from e


def _mark(node: yaml.Node) -> Mark | None:
    if node.start_mark is None:
        return None
    return Mark(line=node.start_mark.line + 1, column=node.start_mark.column + 1)


class _TreeBuilder:
    """Converts PyYAML nodes into document nodes, visiting each node once."""

    def __init__(self) -> None:
        self._seen: set[int] = set()

    def convert(self, node: yaml.Node) -> Node:
        # The composer returns the same node object for every alias of an anchor.
        if id(node) in self._seen:
            mark = _mark(node)
            where = f" (anchor at line {mark.line}, column {mark.column})" if mark else ""
            raise DocumentError(f"Error while parsing YAML: aliases are not supported{where}")
        self._seen.add(id(node))

        if isinstance(node, yaml.ScalarNode):
            if node.tag == _NULL_TAG and node.value == "":
                return NullNode(mark=_mark(node))
            return ScalarNode(value=node.value, mark=_mark(node))

        if isinstance(node, yaml.SequenceNode):
            return SequenceNode(
                items=tuple(self.convert(item) for item in node.value), mark=_mark(node)
            )

        if isinstance(node, yaml.MappingNode):
            pairs = tuple(
                KeyValue(key=self.convert(key), value=self.convert(value))
                for key, value in node.value
            )
            return MappingNode(pairs=pairs, mark=_mark(node))

        raise DocumentError(f"Unsupported node kind: {type(node).__name__}")
