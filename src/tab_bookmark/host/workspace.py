"""In-memory editor workspace implementing the host protocols."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

from tab_bookmark.store.records import BufferRecord, Geometry

from .filters import BufferInfo

SCRATCH_BUFFER = "*scratch*"
ORIENTATIONS = ("single", "horizontal", "vertical")


@dataclass(slots=True)
class Window:
    buffer: str
    point: int = 0


@dataclass(slots=True)
class Tab:
    """One tab: an optional name plus a flat split of windows."""

    name: Optional[str] = None
    windows: List[Window] = field(default_factory=lambda: [Window(SCRATCH_BUFFER)])
    orientation: str = "single"
    selected: int = 0

    @property
    def selected_window(self) -> Window:
        return self.windows[self.selected]


def _path_exists(path: str) -> bool:
    return Path(path).expanduser().exists()


class Workspace:
    """Tabs and buffers held in memory.

    Buffers visiting a file are reopened only when ``file_exists`` accepts
    their path; other buffers are reopened only when already known or
    marked recordable.
    """

    def __init__(
        self,
        *,
        file_exists: Callable[[str], bool] = _path_exists,
    ) -> None:
        self.file_exists = file_exists
        self.buffers: Dict[str, BufferInfo] = {
            SCRATCH_BUFFER: BufferInfo(SCRATCH_BUFFER)
        }
        self.tabs: List[Tab] = [Tab()]
        self.current = 0

    @property
    def tab(self) -> Tab:
        return self.tabs[self.current]

    # buffers ---------------------------------------------------------------

    def add_buffer(
        self,
        name: str,
        *,
        path: Optional[str] = None,
        point: int = 0,
        recordable: bool = False,
    ) -> BufferInfo:
        info = BufferInfo(name=name, path=path, point=point, recordable=recordable)
        self.buffers[name] = info
        return info

    def show(self, *names: str, orientation: str = "horizontal") -> None:
        """Lay out ``names`` side by side in the current tab."""

        if not names:
            raise ValueError("show requires at least one buffer")
        missing = [name for name in names if name not in self.buffers]
        if missing:
            raise KeyError(f"Unknown buffers {missing}")
        self.tab.windows = [
            Window(name, self.buffers[name].point) for name in names
        ]
        self.tab.orientation = "single" if len(names) == 1 else orientation
        self.tab.selected = 0

    def open_buffer(self, record: BufferRecord) -> None:
        if record.path is not None:
            if not self.file_exists(record.path):
                raise FileNotFoundError(record.path)
            info = self.buffers.get(record.name) or BufferInfo(
                record.name, path=record.path
            )
            info = replace(info, path=record.path, point=record.point)
        else:
            known = self.buffers.get(record.name)
            if known is None and record.attributes.get("recordable") != "true":
                raise LookupError(f"Buffer '{record.name}' cannot be recreated")
            info = replace(
                known or BufferInfo(record.name, recordable=True), point=record.point
            )
        self.buffers[info.name] = info
        window = self.tab.selected_window
        window.buffer = info.name
        window.point = info.point

    # tabs -------------------------------------------------------------------

    def context_names(self) -> Sequence[str]:
        return [tab.name for tab in self.tabs if tab.name is not None]

    def current_context(self) -> Optional[str]:
        return self.tab.name

    def switch_to(self, name: str) -> None:
        for index, tab in enumerate(self.tabs):
            if tab.name == name:
                self.current = index
                return
        raise KeyError(f"No tab named '{name}'")

    def new_context(self) -> None:
        self.tabs.insert(self.current + 1, Tab())
        self.current += 1

    def rename_current(self, name: str) -> None:
        self.tab.name = name

    def close_current(self) -> None:
        if len(self.tabs) == 1:
            raise RuntimeError("Cannot close the last tab")
        del self.tabs[self.current]
        self.current = min(self.current, len(self.tabs) - 1)

    def visible_buffers(self) -> Sequence[BufferInfo]:
        seen: Dict[str, BufferInfo] = {}
        for window in self.tab.windows:
            info = self.buffers.get(window.buffer)
            if info is not None and info.name not in seen:
                seen[info.name] = replace(info, point=window.point)
        return list(seen.values())

    # geometry ---------------------------------------------------------------

    def capture_geometry(self) -> Geometry:
        return {
            "orientation": self.tab.orientation,
            "selected": self.tab.selected,
            "windows": [
                {"buffer": window.buffer, "point": window.point}
                for window in self.tab.windows
            ],
        }

    def apply_geometry(self, geometry: Geometry) -> None:
        entries: List[Dict[str, Any]] = list(geometry.get("windows") or [])
        windows = [
            Window(
                entry["buffer"] if entry["buffer"] in self.buffers else SCRATCH_BUFFER,
                int(entry.get("point", 0)),
            )
            for entry in entries
        ] or [Window(SCRATCH_BUFFER)]
        orientation = str(geometry.get("orientation", "single"))
        if orientation not in ORIENTATIONS:
            orientation = "single"
        self.tab.windows = windows
        self.tab.orientation = orientation if len(windows) > 1 else "single"
        self.tab.selected = min(int(geometry.get("selected", 0)), len(windows) - 1)

    # recorder ---------------------------------------------------------------

    def record(self, info: BufferInfo) -> BufferRecord:
        attributes = {"recordable": "true"} if info.recordable else {}
        return BufferRecord(
            name=info.name, path=info.path, point=info.point, attributes=attributes
        )


__all__ = ["SCRATCH_BUFFER", "Tab", "Window", "Workspace"]
