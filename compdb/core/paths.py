"""Native path normalization."""

from __future__ import annotations

import os


def native_path(path: str) -> str:
    """Rewrite a path into the canonical native form used as an index key.

    Case is folded where the platform folds it, alternate separators become
    the native separator, and empty or ``.`` components are dropped. ``..``
    components are kept since removing them can change the file a path names.
    """
    path = os.path.normcase(path)
    if os.altsep:
        path = path.replace(os.altsep, os.sep)

    drive, rest = os.path.splitdrive(path)
    is_absolute = rest.startswith(os.sep)
    parts = [part for part in rest.split(os.sep) if part not in ("", ".")]

    normalized = os.sep.join(parts)
    if is_absolute:
        normalized = os.sep + normalized
    elif not normalized and rest:
        normalized = "."
    return drive + normalized


def resolve_path(file: str, directory: str) -> str:
    """Resolve a possibly relative file against its directory and normalize it."""
    if not os.path.isabs(file):
        file = os.path.join(directory, file)
    return native_path(file)


def path_components(path: str) -> list[str]:
    """Split a native path into components, file name first.

    The root of an absolute path yields a trailing empty component.
    """
    drive, rest = os.path.splitdrive(path)
    components = rest.split(os.sep)
    components.reverse()
    if drive:
        components.append(drive)
    return components
