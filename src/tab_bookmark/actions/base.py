"""Results, restore reports, and the event bus shared by actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional


@dataclass(frozen=True, slots=True)
class RestoreFailure:
    """A buffer that could not be reopened while restoring a tab."""

    buffer: str
    error: str

    def __str__(self) -> str:
        return f"{self.buffer}: {self.error}"


@dataclass(slots=True)
class RestoreReport:
    context: str
    restored: list[str] = field(default_factory=list)
    failures: list[RestoreFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


@dataclass(slots=True)
class ActionResult:
    """Outcome of one user-facing action."""

    status: str = "ok"
    name: Optional[str] = None
    message: Optional[str] = None
    report: Optional[RestoreReport] = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


class EventBus:
    """Minimal event bus relaying action signals to adapters."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


__all__ = ["ActionResult", "EventBus", "RestoreFailure", "RestoreReport"]
