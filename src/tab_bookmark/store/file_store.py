"""JSON-file bookmark store with lazy loading."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from tab_bookmark.errors import BookmarkStoreError
from tab_bookmark.runtime.telemetry import record_event, span

from .base import MemoryBookmarkStore
from .records import TabRecord

FORMAT_VERSION = 1


class JsonBookmarkStore(MemoryBookmarkStore):
    """Bookmarks persisted as one JSON document.

    The file is read the first time any bookmark is requested. With
    ``save_on_change`` every successful mutation rewrites the file.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        save_on_change: bool = True,
        logger_name: str | None = None,
    ) -> None:
        super().__init__(logger_name=logger_name)
        self.path = Path(path).expanduser()
        self.save_on_change = save_on_change
        self._saved_revision = 0

    @property
    def dirty(self) -> bool:
        return self.revision() != self._saved_revision

    def load(self) -> None:
        if self._loaded:
            return
        with span(
            "store::load",
            logger_name=self._logger_name,
            component="store",
            metadata={"path": self.path},
        ) as handle:
            self._records = self._read()
            self._loaded = True
            self._saved_revision = self.revision()
            handle.add_metadata("count", len(self._records))

    def _read(self) -> dict[str, TabRecord]:
        if not self.path.is_file():
            return {}
        try:
            with self.path.open(encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, ValueError) as exc:
            raise BookmarkStoreError(f"Cannot read bookmarks from {self.path}") from exc
        return _decode(data, self.path)

    def save(self) -> None:
        """Write all bookmarks, replacing the file atomically."""

        self._ensure_loaded()
        payload = {
            "version": FORMAT_VERSION,
            "bookmarks": [
                {"name": name, "record": record.to_dict()}
                for name, record in self._records.items()
            ],
        }
        with span(
            "store::save",
            logger_name=self._logger_name,
            component="store",
            metadata={"path": self.path, "count": len(self._records)},
        ):
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(payload, handle, indent=2)
                os.replace(tmp_name, self.path)
            except OSError as exc:
                Path(tmp_name).unlink(missing_ok=True)
                raise BookmarkStoreError(f"Cannot write bookmarks to {self.path}") from exc
            self._saved_revision = self.revision()

    def put(self, name: str, record: TabRecord, *, no_overwrite: bool = False) -> bool:
        stored = super().put(name, record, no_overwrite=no_overwrite)
        if stored:
            self._maybe_save()
        return stored

    def delete(self, name: str) -> bool:
        removed = super().delete(name)
        if removed:
            self._maybe_save()
        return removed

    def rename(self, old: str, new: str) -> None:
        super().rename(old, new)
        self._maybe_save()

    def _maybe_save(self) -> None:
        if self.save_on_change and self.dirty:
            self.save()


def _decode(data: Any, path: Path) -> dict[str, TabRecord]:
    if not isinstance(data, dict) or data.get("version") != FORMAT_VERSION:
        raise BookmarkStoreError(f"Unsupported bookmark file format in {path}")
    entries = data.get("bookmarks", [])
    if not isinstance(entries, list):
        raise BookmarkStoreError(f"Malformed bookmark list in {path}")
    records: dict[str, TabRecord] = {}
    for entry in entries:
        try:
            name = str(entry["name"])
            record = TabRecord.from_dict(entry["record"])
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise BookmarkStoreError(f"Malformed bookmark entry in {path}") from exc
        if name in records:
            record_event(
                "store.duplicate_skipped", level="warning", data={"name": name}
            )
            continue
        records[name] = record
    return records


__all__ = ["FORMAT_VERSION", "JsonBookmarkStore"]
