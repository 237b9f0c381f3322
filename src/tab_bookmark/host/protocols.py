"""Boundary types a host editor implements for tab bookmarks."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from tab_bookmark.store.records import BufferRecord, Geometry

from .filters import BufferInfo


class ViewHost(Protocol):
    """Tabs, their windows, and the buffers shown in them."""

    def context_names(self) -> Sequence[str]:
        """Return the names of all explicitly named tabs."""
        ...

    def current_context(self) -> Optional[str]:
        """Return the current tab's name, ``None`` when it is unnamed."""
        ...

    def switch_to(self, name: str) -> None:
        ...

    def new_context(self) -> None:
        """Create an unnamed tab and make it current."""
        ...

    def rename_current(self, name: str) -> None:
        ...

    def visible_buffers(self) -> Sequence[BufferInfo]:
        ...

    def capture_geometry(self) -> Geometry:
        ...

    def apply_geometry(self, geometry: Geometry) -> None:
        ...

    def open_buffer(self, record: BufferRecord) -> None:
        """Reopen a buffer from its record; raise on failure."""
        ...


class BufferRecorder(Protocol):
    """Produces a record that can reopen ``info`` later."""

    def record(self, info: BufferInfo) -> BufferRecord:
        ...


__all__ = ["ViewHost", "BufferRecorder"]
