"""Unit tests for the path-equivalence index."""

import os
from pathlib import Path

import pytest

from compdb.core.match_trie import FileMatchTrie, FilesystemComparator
from compdb.core.paths import native_path, path_components, resolve_path


class AliasComparator:
    """Treats every query as equivalent to a fixed set of stored paths."""

    def __init__(self, *aliases: str) -> None:
        self.aliases = set(aliases)
        self.calls: list[tuple[str, str]] = []

    def equivalent(self, a: str, b: str) -> bool:
        self.calls.append((a, b))
        return a == b or a in self.aliases


@pytest.fixture
def trie() -> FileMatchTrie:
    """A trie holding a few files under two source roots."""
    trie = FileMatchTrie(AliasComparator())
    for path in ["/src/a/main.cpp", "/src/b/main.cpp", "/src/a/util.cpp", "/other/lib.c"]:
        trie.insert(path)
    return trie


class TestPaths:
    """Tests for native path normalization."""

    def test_native_path_keeps_clean_path(self) -> None:
        """Test that an already native path is unchanged."""
        assert native_path("/a/b/c.cpp") == "/a/b/c.cpp"

    def test_native_path_drops_dot_and_empty_components(self) -> None:
        """Test that "." and empty components are removed."""
        assert native_path("/a//./b/c.cpp") == "/a/b/c.cpp"

    def test_native_path_drops_trailing_separator(self) -> None:
        """Test that a trailing separator is removed."""
        assert native_path("/a/b/") == "/a/b"

    def test_native_path_keeps_parent_components(self) -> None:
        """Test that ".." components are kept."""
        assert native_path("/a/../b/c.cpp") == "/a/../b/c.cpp"

    def test_native_path_relative(self) -> None:
        """Test that relative paths stay relative."""
        assert native_path("./c.cpp") == "c.cpp"
        assert native_path(".") == "."

    def test_resolve_relative_file(self) -> None:
        """Test that a relative file is joined to its directory."""
        assert resolve_path("c.cpp", "/a/b") == "/a/b/c.cpp"

    def test_resolve_absolute_file_ignores_directory(self) -> None:
        """Test that an absolute file ignores the directory."""
        assert resolve_path("/x/c.cpp", "/a/b") == "/x/c.cpp"

    def test_path_components_start_at_file_name(self) -> None:
        """Test that components are listed from the file name up to the root."""
        assert path_components("/a/b/c.cpp") == ["c.cpp", "b", "a", ""]


class TestExactMatch:
    """Exact matches always resolve to themselves."""

    def test_find_exact(self, trie: FileMatchTrie) -> None:
        """Test that every stored path resolves to itself."""
        assert trie.find_equivalent("/src/a/main.cpp") == "/src/a/main.cpp"
        assert trie.find_equivalent("/src/b/main.cpp") == "/src/b/main.cpp"
        assert trie.find_equivalent("/other/lib.c") == "/other/lib.c"

    def test_missing_path(self, trie: FileMatchTrie) -> None:
        """Test that an unknown file resolves to nothing."""
        assert trie.find_equivalent("/src/a/missing.cpp") is None

    def test_empty_trie(self) -> None:
        """Test that an empty trie resolves nothing."""
        assert FileMatchTrie(AliasComparator()).find_equivalent("/a.c") is None

    def test_single_entry(self) -> None:
        """Test a trie holding one path."""
        trie = FileMatchTrie(AliasComparator())
        trie.insert("/a/b.c")
        assert trie.find_equivalent("/a/b.c") == "/a/b.c"
        assert trie.find_equivalent("/a/c.c") is None

    def test_duplicate_insert_is_ignored(self, trie: FileMatchTrie) -> None:
        """Test that inserting a stored path again changes nothing."""
        trie.insert("/src/a/main.cpp")
        assert len(trie) == 4
        assert trie.find_equivalent("/src/a/main.cpp") == "/src/a/main.cpp"

    def test_spellings_of_one_path_are_stored_once(self) -> None:
        """Test that non-native spellings are normalized before insertion."""
        trie = FileMatchTrie(AliasComparator())
        trie.insert("/a")
        trie.insert("//a")
        trie.insert("/./a/")

        assert list(trie) == ["/a"]
        assert trie.find_equivalent("//a") == "/a"

    def test_spellings_share_the_trie(self) -> None:
        """Test that a non-native spelling lands beside native paths in the trie."""
        trie = FileMatchTrie(AliasComparator())
        trie.insert("/src/a/main.cpp")
        trie.insert("/src//b/./main.cpp")

        assert list(trie) == ["/src/a/main.cpp", "/src/b/main.cpp"]
        assert trie.find_equivalent("/src/b/main.cpp") == "/src/b/main.cpp"

    def test_relative_path_matches_exactly(self) -> None:
        """Test that relative paths are stored and match exactly."""
        trie = FileMatchTrie(AliasComparator())
        trie.insert("build/a.c")
        assert "build/a.c" in trie
        assert trie.find_equivalent("build/a.c") == "build/a.c"

    def test_relative_query_does_not_match_suffix(self, trie: FileMatchTrie) -> None:
        """Test that a relative query never matches by suffix."""
        assert trie.find_equivalent("a/main.cpp") is None

    def test_iteration_keeps_insertion_order(self, trie: FileMatchTrie) -> None:
        """Test that iteration yields paths in insertion order."""
        assert list(trie) == [
            "/src/a/main.cpp",
            "/src/b/main.cpp",
            "/src/a/util.cpp",
            "/other/lib.c",
        ]


class TestEquivalentMatch:
    """Non-exact queries resolve through the comparator."""

    def test_single_equivalent_candidate(self) -> None:
        """Test that the only equivalent candidate is returned."""
        trie = FileMatchTrie(AliasComparator("/src/a/util.cpp"))
        for path in ["/src/a/main.cpp", "/src/a/util.cpp"]:
            trie.insert(path)

        assert trie.find_equivalent("/link/util.cpp") == "/src/a/util.cpp"

    def test_longest_suffix_wins(self) -> None:
        """Test that the candidate sharing the longest suffix is preferred."""
        comparator = AliasComparator("/src/a/main.cpp", "/src/b/main.cpp", "/x/a/main.cpp")
        trie = FileMatchTrie(comparator)
        for path in ["/src/b/main.cpp", "/x/a/main.cpp"]:
            trie.insert(path)

        # Both candidates are equivalent, but only one shares "a/main.cpp".
        assert trie.find_equivalent("/link/a/main.cpp") == "/x/a/main.cpp"

    def test_equally_specific_candidates_are_ambiguous(self) -> None:
        """Test that two equivalent candidates at the same level give no match."""
        trie = FileMatchTrie(AliasComparator("/src/a/main.cpp", "/src/b/main.cpp"))
        for path in ["/src/a/main.cpp", "/src/b/main.cpp"]:
            trie.insert(path)

        assert trie.find_equivalent("/link/main.cpp") is None

    def test_result_does_not_depend_on_insertion_order(self) -> None:
        """Test that the match does not depend on insertion order."""
        paths = ["/src/a/main.cpp", "/src/b/main.cpp", "/x/a/main.cpp", "/src/a/util.cpp"]
        results = set()
        for ordering in (paths, list(reversed(paths))):
            trie = FileMatchTrie(AliasComparator("/x/a/main.cpp"))
            for path in ordering:
                trie.insert(path)
            results.add(trie.find_equivalent("/link/a/main.cpp"))

        assert results == {"/x/a/main.cpp"}

    def test_unrelated_file_names_are_not_compared_first(self) -> None:
        """Test that the candidate sharing the file name is compared first."""
        comparator = AliasComparator()
        trie = FileMatchTrie(comparator)
        for path in ["/src/a/main.cpp", "/src/a/util.cpp"]:
            trie.insert(path)

        assert trie.find_equivalent("/src/b/main.cpp") is None
        assert comparator.calls[0] == ("/src/a/main.cpp", "/src/b/main.cpp")


class TestFilesystemComparator:
    """Tests for on-disk equivalence."""

    def test_equal_paths(self) -> None:
        """Test that equal paths are equivalent without touching the disk."""
        assert FilesystemComparator().equivalent("/does/not/exist", "/does/not/exist")

    def test_missing_files_are_not_equivalent(self, tmp_path: Path) -> None:
        """Test that missing files are never equivalent."""
        comparator = FilesystemComparator()
        assert not comparator.equivalent(str(tmp_path / "a.c"), str(tmp_path / "b.c"))

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_symlinked_directory_resolves(self, tmp_path: Path) -> None:
        """Test that a path through a symlinked directory matches the real file."""
        real_dir = tmp_path / "real"
        real_dir.mkdir()
        source = real_dir / "main.cpp"
        source.write_text("int main() { return 0; }\n")
        link_dir = tmp_path / "link"
        link_dir.symlink_to(real_dir, target_is_directory=True)

        trie = FileMatchTrie()
        trie.insert(native_path(str(source)))

        query = native_path(str(link_dir / "main.cpp"))
        assert trie.find_equivalent(query) == native_path(str(source))
