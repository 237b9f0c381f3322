"""Bookmark records and the stores that persist them."""

from .base import BookmarkStore, JumpHandler, MemoryBookmarkStore
from .file_store import FORMAT_VERSION, JsonBookmarkStore
from .records import TAB_BOOKMARK_HANDLER, BufferRecord, Geometry, TabRecord

__all__ = [
    "BookmarkStore",
    "JumpHandler",
    "MemoryBookmarkStore",
    "JsonBookmarkStore",
    "FORMAT_VERSION",
    "TAB_BOOKMARK_HANDLER",
    "BufferRecord",
    "Geometry",
    "TabRecord",
]
