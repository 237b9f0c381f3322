"""UI-agnostic controller the Textual app drives."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from tab_bookmark.actions import ActionResult, CommandContext, submit_command_line
from tab_bookmark.actions.manager import TabBookmarkManager
from tab_bookmark.host.workspace import Workspace
from tab_bookmark.naming import Candidate
from tab_bookmark.prompts import PromptDeferred, PromptRequest, ReplayPrompter


_WORKSPACE_COMMANDS = frozenset(
    {"find", "tab-new", "tab-close", "tab-rename", "tab-select"}
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(frozen=True, slots=True)
class TabView:
    label: str
    current: bool
    buffers: tuple[str, ...]


@dataclass(slots=True)
class TabBookmarkUIHooks:
    """Callbacks invoked by the controller to update widgets."""

    update_tabs: Callable[[Sequence[TabView]], None]
    update_bookmarks: Callable[[Sequence[Candidate]], None] = _noop
    update_status: Callable[[str], None] = _noop
    show_prompt: Callable[[Optional[PromptRequest]], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


@dataclass(slots=True)
class _PendingCommand:
    line: str
    answers: List[str]
    request: PromptRequest


class TabBookmarkController:
    """Runs command lines against a workspace, one prompt answer at a time.

    A command that needs a name is run with the answers collected so far; when
    it asks for one more, nothing has been committed yet, so the controller
    shows the prompt and runs the command again once the answer arrives.
    """

    def __init__(
        self,
        manager: TabBookmarkManager,
        workspace: Workspace,
        hooks: TabBookmarkUIHooks,
    ) -> None:
        self.manager = manager
        self.workspace = workspace
        self.hooks = hooks
        self.context = CommandContext(manager=manager)
        self._pending: Optional[_PendingCommand] = None
        self._subscribe_events()
        self.refresh()

    @property
    def pending_prompt(self) -> Optional[PromptRequest]:
        return self._pending.request if self._pending else None

    def submit(self, text: str) -> ActionResult:
        """Run a command line, or answer the pending prompt with ``text``."""

        if self._pending is not None:
            line = self._pending.line
            answers = [*self._pending.answers, text]
        else:
            line, answers = text, []
            words = line.split()
            if words and words[0] in _WORKSPACE_COMMANDS:
                return self._run_workspace_command(words[0], words[1:])
        self._log("submit ->", line=line, answers=answers)
        return self._run(line, answers)

    def _run_workspace_command(self, command: str, args: List[str]) -> ActionResult:
        """Edit the layout itself: open files, add, close, or label tabs."""

        self._log("workspace ->", command=command, args=args)
        try:
            if command == "find":
                if not args:
                    raise ValueError("find needs at least one path")
                for path in args:
                    self.workspace.add_buffer(path.rsplit("/", 1)[-1], path=path)
                self.workspace.show(*(path.rsplit("/", 1)[-1] for path in args))
            elif command == "tab-new":
                self.workspace.new_context()
            elif command == "tab-close":
                self.workspace.close_current()
            elif command == "tab-rename":
                if not args:
                    raise ValueError("tab-rename needs a name")
                self.workspace.rename_current(" ".join(args))
            elif command == "tab-select":
                self.workspace.switch_to(" ".join(args))
        except (KeyError, ValueError, RuntimeError) as exc:
            result = ActionResult(status="command_error", message=f"{command}: {exc}")
        else:
            result = ActionResult(message=command)
        self.hooks.update_status(result.message or result.status)
        self.refresh()
        return result

    def cancel(self) -> None:
        if self._pending is None:
            return
        self._log("cancel ->", line=self._pending.line)
        self._pending = None
        self.hooks.show_prompt(None)
        self.hooks.update_status("Quit")

    def _run(self, line: str, answers: List[str]) -> ActionResult:
        self.manager.prompter = ReplayPrompter(answers)
        try:
            result = submit_command_line(self.context, line)
        except PromptDeferred as deferred:
            self._pending = _PendingCommand(line, answers, deferred.request)
            self.hooks.show_prompt(deferred.request)
            self.hooks.update_status(deferred.request.prompt)
            return ActionResult(status="prompt", message=deferred.request.prompt)
        self._pending = None
        self.hooks.show_prompt(None)
        self.hooks.update_status(result.message or result.status)
        self._log("result <-", status=result.status, name=result.name)
        self.refresh()
        return result

    def refresh(self) -> None:
        self.hooks.update_tabs(self.tab_views())
        self.hooks.update_bookmarks(self.manager.candidates())

    def tab_views(self) -> list[TabView]:
        unnamed = self.manager.settings.unnamed_context
        return [
            TabView(
                label=tab.name or unnamed,
                current=index == self.workspace.current,
                buffers=tuple(window.buffer for window in tab.windows),
            )
            for index, tab in enumerate(self.workspace.tabs)
        ]

    def _subscribe_events(self) -> None:
        bus = self.manager.bus
        for event in (
            "bookmark.saved",
            "bookmark.opened",
            "bookmark.deleted",
            "bookmark.renamed",
            "bookmark.restore_failed",
            "prompt.cancelled",
            "command.error",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _log(self, prefix: str, **fields: object) -> None:
        parts = [prefix, f"tab={self.manager.current_context()!r}"]
        parts.extend(f"{key}={value!r}" for key, value in fields.items())
        self.hooks.log(" ".join(parts))


__all__ = ["TabBookmarkController", "TabBookmarkUIHooks", "TabView"]
