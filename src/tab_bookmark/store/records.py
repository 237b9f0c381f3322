"""Serializable payloads kept in the bookmark store."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

TAB_BOOKMARK_HANDLER = "tab-bookmark"

Geometry = Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class BufferRecord:
    """Enough information for a host to reopen one buffer."""

    name: str
    path: Optional[str] = None
    point: int = 0
    attributes: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("buffer record name cannot be empty")
        object.__setattr__(self, "attributes", dict(self.attributes))

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "point": self.point}
        if self.path is not None:
            data["path"] = self.path
        if self.attributes:
            data["attributes"] = dict(self.attributes)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BufferRecord":
        return cls(
            name=str(data["name"]),
            path=data.get("path"),
            point=int(data.get("point", 0)),
            attributes={str(k): str(v) for k, v in data.get("attributes", {}).items()},
        )


@dataclass(frozen=True, slots=True)
class TabRecord:
    """Snapshot of one tab: its buffers plus the root window geometry."""

    buffers: tuple[BufferRecord, ...]
    geometry: Geometry
    handler: str = TAB_BOOKMARK_HANDLER
    created: float = field(default_factory=time.time)
    context: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "buffers", tuple(self.buffers))
        object.__setattr__(self, "geometry", dict(self.geometry))

    @classmethod
    def capture(
        cls,
        buffers: Sequence[BufferRecord],
        geometry: Geometry,
        *,
        context: Optional[str] = None,
    ) -> "TabRecord":
        return cls(buffers=tuple(buffers), geometry=geometry, context=context)

    @property
    def buffer_names(self) -> tuple[str, ...]:
        return tuple(record.name for record in self.buffers)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "handler": self.handler,
            "created": self.created,
            "buffers": [record.to_dict() for record in self.buffers],
            "window": dict(self.geometry),
        }
        if self.context is not None:
            data["context"] = self.context
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TabRecord":
        return cls(
            buffers=tuple(BufferRecord.from_dict(item) for item in data["buffers"]),
            geometry=data.get("window", {}),
            handler=str(data.get("handler", TAB_BOOKMARK_HANDLER)),
            created=float(data.get("created", 0.0)),
            context=_optional_str(data.get("context")),
        )


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {type(value).__name__}")
    return value


__all__ = ["TAB_BOOKMARK_HANDLER", "BufferRecord", "Geometry", "TabRecord"]
