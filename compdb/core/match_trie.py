"""Path-equivalence index over the files of a compilation database."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from typing import Protocol

from compdb.core.paths import native_path, path_components

logger = logging.getLogger(__name__)


class PathComparator(Protocol):
    """Decides whether two native paths name the same file."""

    def equivalent(self, a: str, b: str) -> bool: ...


class FilesystemComparator:
    """Paths are equivalent when equal or when they name the same file on disk."""

    def equivalent(self, a: str, b: str) -> bool:
        if a == b:
            return True
        try:
            return os.path.samefile(a, b)
        except (OSError, ValueError):
            return False


class _TrieNode:
    """A node of the reversed-component trie.

    A leaf stores one path. An inner node keeps the path that first reached
    it (so empty subtrees can be told apart) and children keyed by the path
    component at its depth, counted from the file name.
    """

    __slots__ = ("path", "children")

    def __init__(self, path: str | None = None) -> None:
        self.path = path
        self.children: dict[str, _TrieNode] = {}

    def insert(self, new_path: str, components: list[str], depth: int = 0) -> None:
        if self.path is None:
            self.path = new_path
            return
        if not self.children:
            if new_path == self.path:
                return
            existing = _component(path_components(self.path), depth)
            self.children[existing] = _TrieNode(self.path)
        element = _component(components, depth)
        child = self.children.setdefault(element, _TrieNode())
        child.insert(new_path, components, depth + 1)

    def find_equivalent(
        self,
        comparator: PathComparator,
        query: str,
        components: list[str],
        depth: int = 0,
    ) -> tuple[str | None, bool]:
        """Return (match, is_ambiguous) for the most specific equivalent path."""
        if not self.children:
            if self.path is not None and comparator.equivalent(self.path, query):
                return self.path, False
            return None, False

        matching_child = self.children.get(_component(components, depth))
        if matching_child is not None:
            result, is_ambiguous = matching_child.find_equivalent(
                comparator, query, components, depth + 1
            )
            if result is not None or is_ambiguous:
                return result, is_ambiguous

        result = None
        for key in sorted(self.children):
            child = self.children[key]
            if child is matching_child:
                continue
            for candidate in child.all_paths():
                if comparator.equivalent(candidate, query):
                    if result is not None:
                        return None, True
                    result = candidate
        return result, False

    def all_paths(self) -> Iterator[str]:
        """Yield every path stored at or below this node."""
        if self.path is None:
            return
        if not self.children:
            yield self.path
            return
        for key in sorted(self.children):
            yield from self.children[key].all_paths()


def _component(components: list[str], depth: int) -> str:
    return components[depth] if depth < len(components) else ""


class FileMatchTrie:
    """Resolves a query path to the stored path it is equivalent to.

    Exact matches always win. Otherwise the query walks the trie along its
    own components from the file name upward; at the deepest node it reaches,
    the stored paths sharing the longest suffix with it are compared first,
    then those sharing shorter suffixes. Two equivalent candidates at the
    same level make the query ambiguous and nothing is returned.

    Relative paths can be stored and matched exactly, but are kept out of the
    trie since one relative path can be a suffix of another.
    """

    def __init__(self, comparator: PathComparator | None = None) -> None:
        self._root = _TrieNode()
        self._paths: dict[str, None] = {}
        self._comparator = comparator or FilesystemComparator()

    def insert(self, path: str) -> None:
        """Add a path, stored in native form. Inserting a path twice is a no-op."""
        path = native_path(path)
        if path in self._paths:
            return
        self._paths[path] = None
        if os.path.isabs(path):
            self._root.insert(path, path_components(path))

    def find_equivalent(self, query: str) -> str | None:
        """Return the stored path equivalent to query, or None."""
        query = native_path(query)
        if query in self._paths:
            return query
        if not os.path.isabs(query):
            logger.debug("Cannot resolve relative paths: %s", query)
            return None

        result, is_ambiguous = self._root.find_equivalent(
            self._comparator, query, path_components(query)
        )
        if is_ambiguous:
            logger.warning("Path is ambiguous: %s", query)
            return None
        return result

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __repr__(self) -> str:
        return f"FileMatchTrie(paths={len(self._paths)})"
