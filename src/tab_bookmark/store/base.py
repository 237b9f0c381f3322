"""Bookmark store protocol and the in-memory implementation."""

from __future__ import annotations

from typing import Callable, Dict, Iterator, Mapping, Optional, Protocol

from tab_bookmark.errors import BookmarkNotFoundError, TabBookmarkError
from tab_bookmark.runtime.telemetry import span

from .records import TabRecord

JumpHandler = Callable[[str, TabRecord], object]


class BookmarkStore(Protocol):
    """Mapping from bookmark name to record, loaded on first use."""

    def load(self) -> None:
        """Make stored bookmarks available; repeated calls are no-ops."""
        ...

    def names(self) -> list[str]:
        ...

    def get(self, name: str) -> TabRecord:
        """Return the record for ``name`` or raise ``BookmarkNotFoundError``."""
        ...

    def put(self, name: str, record: TabRecord, *, no_overwrite: bool = False) -> bool:
        """Store ``record``; return ``False`` when ``no_overwrite`` kept an entry."""
        ...

    def delete(self, name: str) -> bool:
        ...

    def rename(self, old: str, new: str) -> None:
        ...

    def jump(self, name: str, handlers: Mapping[str, JumpHandler]) -> object:
        ...

    def __contains__(self, name: object) -> bool:
        ...


class MemoryBookmarkStore:
    """Insertion-ordered store kept in process memory."""

    def __init__(
        self,
        records: Optional[Mapping[str, TabRecord]] = None,
        *,
        logger_name: str | None = None,
    ) -> None:
        self._records: Dict[str, TabRecord] = dict(records or {})
        self._logger_name = logger_name
        self._loaded = False
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def load(self) -> None:
        self._loaded = True

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def names(self) -> list[str]:
        self._ensure_loaded()
        return list(self._records)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        self._ensure_loaded()
        return len(self._records)

    def __contains__(self, name: object) -> bool:
        self._ensure_loaded()
        return name in self._records

    def get(self, name: str) -> TabRecord:
        self._ensure_loaded()
        try:
            return self._records[name]
        except KeyError as exc:
            raise BookmarkNotFoundError(name) from exc

    def put(self, name: str, record: TabRecord, *, no_overwrite: bool = False) -> bool:
        self._ensure_loaded()
        with span(
            "store::put",
            logger_name=self._logger_name,
            component="store",
            metadata={"name": name, "no_overwrite": no_overwrite},
        ) as handle:
            if no_overwrite and name in self._records:
                handle.add_metadata("kept_existing", True)
                return False
            self._records[name] = record
            self._touch()
            return True

    def delete(self, name: str) -> bool:
        self._ensure_loaded()
        with span(
            "store::delete",
            logger_name=self._logger_name,
            component="store",
            metadata={"name": name},
        ):
            if self._records.pop(name, None) is None:
                return False
            self._touch()
            return True

    def rename(self, old: str, new: str) -> None:
        self._ensure_loaded()
        with span(
            "store::rename",
            logger_name=self._logger_name,
            component="store",
            metadata={"old": old, "new": new},
        ):
            if old not in self._records:
                raise BookmarkNotFoundError(old)
            if old == new:
                return
            # Rebuild to keep the renamed entry at its original position.
            self._records = {
                (new if key == old else key): value
                for key, value in self._records.items()
                if key != new
            }
            self._touch()

    def jump(self, name: str, handlers: Mapping[str, JumpHandler]) -> object:
        record = self.get(name)
        handler = handlers.get(record.handler)
        if handler is None:
            raise TabBookmarkError(
                f"Bookmark '{name}' uses unknown handler '{record.handler}'"
            )
        with span(
            "store::jump",
            logger_name=self._logger_name,
            component="store",
            metadata={"name": name, "handler": record.handler},
        ):
            return handler(name, record)

    def _touch(self) -> None:
        self._revision += 1


__all__ = ["BookmarkStore", "JumpHandler", "MemoryBookmarkStore"]
