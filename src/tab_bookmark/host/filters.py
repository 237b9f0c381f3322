"""Buffer descriptions and the predicate deciding which ones get saved."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

INTERNAL_PREFIX = " "


@dataclass(frozen=True, slots=True)
class BufferInfo:
    """What a host reports about one visible buffer."""

    name: str
    path: Optional[str] = None
    point: int = 0
    recordable: bool = False

    @property
    def internal(self) -> bool:
        return self.name.startswith(INTERNAL_PREFIX)


def default_buffer_filter(info: BufferInfo) -> bool:
    """Keep non-internal buffers that visit a file or can record themselves."""

    if info.internal:
        return False
    return info.path is not None or info.recordable


__all__ = ["BufferInfo", "default_buffer_filter", "INTERNAL_PREFIX"]
