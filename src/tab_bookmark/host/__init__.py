"""Host boundary: protocols, buffer filtering, and an in-memory workspace."""

from .filters import BufferInfo, default_buffer_filter
from .protocols import BufferRecorder, ViewHost
from .workspace import SCRATCH_BUFFER, Tab, Window, Workspace

__all__ = [
    "BufferInfo",
    "default_buffer_filter",
    "BufferRecorder",
    "ViewHost",
    "SCRATCH_BUFFER",
    "Tab",
    "Window",
    "Workspace",
]
