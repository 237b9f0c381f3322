"""Environment-driven settings shared by the manager and stores."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Mapping, Optional

from tab_bookmark.host.filters import BufferInfo, default_buffer_filter

from .telemetry import ENV_PREFIX

BufferFilter = Callable[[BufferInfo], bool]

DEFAULT_UNNAMED_CONTEXT = "-"
DEFAULT_SELECTION_MARKER = "@"
DEFAULT_BOOKMARK_FILE = Path("~/.local/state/tab-bookmark/bookmarks.json")


@dataclass(slots=True)
class Settings:
    """Naming conventions, persistence options and the buffer filter."""

    bookmark_file: Path = DEFAULT_BOOKMARK_FILE
    unnamed_context: str = DEFAULT_UNNAMED_CONTEXT
    selection_marker: str = DEFAULT_SELECTION_MARKER
    save_on_change: bool = True
    buffer_filter: BufferFilter = field(default=default_buffer_filter)

    def __post_init__(self) -> None:
        if not self.unnamed_context or " " in self.unnamed_context:
            raise ValueError("unnamed_context must be a non-empty word")
        if not self.selection_marker:
            raise ValueError("selection_marker cannot be empty")
        if not callable(self.buffer_filter):
            raise TypeError("buffer_filter must be callable")
        self.bookmark_file = Path(self.bookmark_file).expanduser()


def _flag(raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    *,
    buffer_filter: Optional[BufferFilter] = None,
) -> Settings:
    """Build ``Settings`` from ``TAB_BOOKMARK_*`` variables."""

    env = os.environ if environ is None else environ

    def get(name: str) -> Optional[str]:
        return env.get(f"{ENV_PREFIX}{name}")

    return Settings(
        bookmark_file=Path(get("FILE") or DEFAULT_BOOKMARK_FILE),
        unnamed_context=get("UNNAMED_CONTEXT") or DEFAULT_UNNAMED_CONTEXT,
        selection_marker=get("SELECTION_MARKER") or DEFAULT_SELECTION_MARKER,
        save_on_change=_flag(get("SAVE_ON_CHANGE"), True),
        buffer_filter=buffer_filter or default_buffer_filter,
    )


__all__ = [
    "BufferFilter",
    "Settings",
    "load_settings",
    "DEFAULT_BOOKMARK_FILE",
    "DEFAULT_SELECTION_MARKER",
    "DEFAULT_UNNAMED_CONTEXT",
]
