"""Exception hierarchy shared across tab bookmark services."""

from __future__ import annotations


class TabBookmarkError(RuntimeError):
    """Base class for every error raised by tab_bookmark."""


class BookmarkNotFoundError(TabBookmarkError, KeyError):
    """Raised when a store lookup names a bookmark that does not exist."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No bookmark named '{name}'")
        self.name = name

    def __str__(self) -> str:
        return str(self.args[0])


class BookmarkStoreError(TabBookmarkError):
    """Raised when persisted bookmarks cannot be read or written."""


class StackEmptyError(TabBookmarkError):
    """Raised when popping a context that has no numbered snapshots."""

    def __init__(self, context: str) -> None:
        super().__init__(f"Tab bookmark stack for '{context}' is empty")
        self.context = context


class PromptCancelled(TabBookmarkError):
    """Raised by prompters when the user aborts a name prompt."""


__all__ = [
    "TabBookmarkError",
    "BookmarkNotFoundError",
    "BookmarkStoreError",
    "StackEmptyError",
    "PromptCancelled",
]
