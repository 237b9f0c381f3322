"""Save, open, and stack tab layouts as named bookmarks."""

from __future__ import annotations

from typing import List, Mapping, Optional

from tab_bookmark.errors import PromptCancelled, StackEmptyError, TabBookmarkError
from tab_bookmark.host.protocols import BufferRecorder, ViewHost
from tab_bookmark.naming import (
    Candidate,
    SnapshotName,
    build_candidates,
    resolve_answer,
    stack_top,
)
from tab_bookmark.prompts import Prompter, ScriptedPrompter
from tab_bookmark.runtime import telemetry
from tab_bookmark.runtime.settings import Settings
from tab_bookmark.store.base import BookmarkStore, JumpHandler
from tab_bookmark.store.records import TAB_BOOKMARK_HANDLER, TabRecord

from .base import ActionResult, EventBus, RestoreFailure, RestoreReport


class TabBookmarkManager:
    """Names, stores, and restores tab snapshots.

    Names follow ``@<context> <tag>``; numbered tags ``<k>`` form a stack per
    context (see ``push``/``pop``). ``recorder`` defaults to ``host`` when the
    host can record its own buffers.
    """

    def __init__(
        self,
        store: BookmarkStore,
        host: ViewHost,
        *,
        recorder: BufferRecorder | None = None,
        prompter: Prompter | None = None,
        settings: Settings | None = None,
        bus: EventBus | None = None,
        logger_name: str | None = None,
    ) -> None:
        self.store = store
        self.host = host
        self.recorder: BufferRecorder = recorder or host  # type: ignore[assignment]
        self.prompter: Prompter = prompter or ScriptedPrompter()
        self.settings = settings or Settings()
        self.bus = bus or EventBus()
        self.history: List[str] = []
        self._logger_name = logger_name or "tab_bookmark.manager"

    # naming -----------------------------------------------------------------

    def current_context(self) -> str:
        name = self.host.current_context()
        return self.settings.unnamed_context if name is None else name

    def names(self) -> list[str]:
        self.store.load()
        return self.store.names()

    def candidates(self) -> list[Candidate]:
        return build_candidates(self.names())

    def top(self, *, existing: bool = False) -> Optional[str]:
        """Return the stack top of the current context, or the next free name."""

        name = stack_top(self.names(), self.current_context(), existing=existing)
        return None if name is None else name.format()

    def require_top(self) -> str:
        name = self.top(existing=True)
        if name is None:
            raise StackEmptyError(self.current_context())
        return name

    def read(self, prompt: str, *, default: Optional[str] = None) -> str:
        """Prompt for a bookmark name and resolve the answer."""

        candidates = self.candidates()
        answer = self.prompter.ask(prompt, candidates, default)
        name = resolve_answer(
            answer,
            candidates,
            context=self.current_context(),
            default=default,
            marker=self.settings.selection_marker,
        )
        if name is None:
            raise PromptCancelled(prompt)
        self.history.append(name)
        return name

    # snapshot operations ------------------------------------------------------

    def capture(self, context: Optional[str] = None) -> TabRecord:
        keep = self.settings.buffer_filter
        buffers = [
            self.recorder.record(info)
            for info in self.host.visible_buffers()
            if keep(info)
        ]
        return TabRecord.capture(
            buffers, self.host.capture_geometry(), context=context
        )

    def save(
        self, name: Optional[str] = None, *, no_overwrite: bool = False
    ) -> ActionResult:
        if name is None:
            name = self.read("Save tab bookmark: ", default=self.top())
        with telemetry.span(
            "manager::save",
            logger_name=self._logger_name,
            component="manager",
            metadata={"name": name, "no_overwrite": no_overwrite},
        ):
            record = self.capture(self.target_context(name))
            stored = self.store.put(name, record, no_overwrite=no_overwrite)
        if not stored:
            return ActionResult(status="kept", name=name, message=f"Kept {name}")
        self.bus.emit("bookmark.saved", name)
        return ActionResult(name=name, message=f"Saved {name}")

    def open(self, name: Optional[str] = None) -> ActionResult:
        if name is None:
            name = self.read("Open tab bookmark: ", default=self.top(existing=True))
        with telemetry.span(
            "manager::open",
            logger_name=self._logger_name,
            component="manager",
            metadata={"name": name},
        ):
            report = self.store.jump(name, self.jump_handlers())
        if not isinstance(report, RestoreReport):
            raise TabBookmarkError(f"{name} is not a tab bookmark")
        self.bus.emit("bookmark.opened", name)
        return _restore_result(name, report)

    def delete(self, name: Optional[str] = None) -> ActionResult:
        if name is None:
            name = self.read("Delete tab bookmark: ")
        if not self.store.delete(name):
            return ActionResult(status="missing", name=name, message=f"No {name}")
        self.bus.emit("bookmark.deleted", name)
        return ActionResult(name=name, message=f"Deleted {name}")

    def rename(
        self, old: Optional[str] = None, new: Optional[str] = None
    ) -> ActionResult:
        if old is None:
            old = self.read("Rename tab bookmark: ")
        if new is None:
            new = self.read(f"Rename {old} to: ")
        self.store.rename(old, new)
        self.bus.emit("bookmark.renamed", {"old": old, "new": new})
        return ActionResult(name=new, message=f"Renamed {old} to {new}")

    def toggle(self, name: Optional[str] = None) -> ActionResult:
        """Open ``name`` if it is stored, otherwise save the current tab."""

        if name is None:
            name = self.read("Tab bookmark: ", default=self.top(existing=True))
        self.store.load()
        if name in self.store:
            return self.open(name)
        return self.save(name)

    # stack --------------------------------------------------------------------

    def push(self) -> ActionResult:
        name = self.top()
        if name is None:
            raise TabBookmarkError(f"no free stack slot in {self.current_context()}")
        return self.save(name, no_overwrite=True)

    def pop(self) -> ActionResult:
        try:
            name = self.require_top()
        except StackEmptyError as exc:
            telemetry.record_event(
                "stack.empty",
                data={"context": exc.context},
                logger_name=self._logger_name,
            )
            return ActionResult(status="stack_empty", message=str(exc))
        result = self.open(name)
        self.store.delete(name)
        self.bus.emit("bookmark.deleted", name)
        if result.ok:
            result.message = f"Popped {name}"
        return result

    # restore ------------------------------------------------------------------

    def jump_handlers(self) -> Mapping[str, JumpHandler]:
        return {TAB_BOOKMARK_HANDLER: self.handle}

    def handle(self, name: str, record: TabRecord) -> RestoreReport:
        """Jump handler for tab bookmark records."""

        return self.put(self.target_context(name, record.context), record)

    def target_context(self, name: str, saved_from: Optional[str] = None) -> str:
        """Tab a bookmark called ``name`` restores into.

        ``@ctx tag`` names restore into ``ctx``, preferring the longest of
        ``saved_from`` and the open tab names that prefixes them. Free-form
        names restore into a tab of the same name.
        """

        contexts = [self.current_context(), *self.host.context_names()]
        if saved_from:
            contexts.append(saved_from)
        parsed = SnapshotName.parse(name, contexts)
        return parsed.context if parsed.context is not None else name

    def put(self, context: str, record: TabRecord) -> RestoreReport:
        """Restore ``record`` into the tab named ``context``."""

        with telemetry.span(
            "manager::put",
            logger_name=self._logger_name,
            component="manager",
            metadata={"context": context, "buffers": len(record.buffers)},
        ) as handle:
            self._enter_context(context)
            report = RestoreReport(context=context)
            for buffer in record.buffers:
                try:
                    self.host.open_buffer(buffer)
                except Exception as exc:
                    failure = RestoreFailure(buffer=buffer.name, error=str(exc))
                    report.failures.append(failure)
                    handle.warn(
                        "restore::buffer_failed", buffer=buffer.name, error=repr(exc)
                    )
                    self.bus.emit("bookmark.restore_failed", failure)
                else:
                    report.restored.append(buffer.name)
            self.host.apply_geometry(record.geometry)
            return report

    def _enter_context(self, context: str) -> None:
        current = self.host.current_context()
        if context == self.settings.unnamed_context:
            if current is not None:
                self.host.new_context()
        elif context in self.host.context_names():
            if current != context:
                self.host.switch_to(context)
        else:
            self.host.new_context()
            self.host.rename_current(context)


def _restore_result(name: str, report: RestoreReport) -> ActionResult:
    if report.ok:
        return ActionResult(name=name, message=f"Opened {name}", report=report)
    failed = ", ".join(failure.buffer for failure in report.failures)
    return ActionResult(
        status="partial",
        name=name,
        message=f"Opened {name}; could not restore {failed}",
        report=report,
    )


__all__ = ["TabBookmarkManager"]
