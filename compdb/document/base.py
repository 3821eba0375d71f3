"""Protocol for document readers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from compdb.document.models import Node


class DocumentReader(Protocol):
    """Turns raw document text into a tree of nodes."""

    def read(self, text: str) -> Node:
        """Parse text and return the root node.

        Raises:
            DocumentError: If the text is not a well-formed document.
        """
        ...
