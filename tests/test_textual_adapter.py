from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from tab_bookmark.actions import TabBookmarkManager
from tab_bookmark.adapters.textual import (
    TabBookmarkController,
    TabBookmarkUIHooks,
    TabView,
)
from tab_bookmark.host import Workspace
from tab_bookmark.prompts import PromptRequest
from tab_bookmark.store import MemoryBookmarkStore


@dataclass
class Recorded:
    tabs: List[List[TabView]] = field(default_factory=list)
    statuses: List[str] = field(default_factory=list)
    prompts: List[Optional[PromptRequest]] = field(default_factory=list)
    logs: List[str] = field(default_factory=list)


def make_controller(recorded: Optional[Recorded] = None) -> TabBookmarkController:
    seen = recorded if recorded is not None else Recorded()
    workspace = Workspace(file_exists=lambda path: True)
    workspace.add_buffer("a.py", path="/src/a.py")
    workspace.add_buffer("b.py", path="/src/b.py")
    workspace.show("a.py", "b.py")
    workspace.rename_current("C")
    manager = TabBookmarkManager(MemoryBookmarkStore(), workspace)
    hooks = TabBookmarkUIHooks(
        update_tabs=lambda views: seen.tabs.append(list(views)),
        update_status=seen.statuses.append,
        show_prompt=seen.prompts.append,
        log=seen.logs.append,
    )
    return TabBookmarkController(manager, workspace, hooks)


def test_controller_renders_tabs_on_start() -> None:
    recorded = Recorded()

    make_controller(recorded)

    expected = TabView(label="C", current=True, buffers=("a.py", "b.py"))
    assert recorded.tabs[-1] == [expected]


def test_push_and_pop_through_controller() -> None:
    recorded = Recorded()
    controller = make_controller(recorded)

    pushed = controller.submit("tab-bookmark-push")
    popped = controller.submit("tab-bookmark-pop")

    assert pushed.name == "@C <1>"
    assert popped.name == "@C <1>"
    assert recorded.statuses[-1] == "Popped @C <1>"


def test_missing_name_defers_until_answered() -> None:
    recorded = Recorded()
    controller = make_controller(recorded)

    first = controller.submit("tab-bookmark-save")

    assert first.status == "prompt"
    assert controller.pending_prompt is not None
    assert controller.pending_prompt.default == "@C <1>"
    assert controller.manager.names() == []

    second = controller.submit("draft")

    assert second.ok
    assert second.name == "@C draft"
    assert controller.pending_prompt is None
    assert recorded.prompts[-1] is None


def test_rename_collects_two_answers() -> None:
    controller = make_controller()
    controller.submit('tab-bookmark-save "@C old"')

    assert controller.submit("tab-bookmark-rename").status == "prompt"
    assert controller.submit("@C old").status == "prompt"
    result = controller.submit("new")

    assert result.ok
    assert controller.manager.names() == ["@C new"]


def test_cancel_drops_pending_prompt() -> None:
    recorded = Recorded()
    controller = make_controller(recorded)
    controller.submit("tab-bookmark-open")

    controller.cancel()

    assert controller.pending_prompt is None
    assert recorded.statuses[-1] == "Quit"
    assert controller.submit("tab-bookmark-pop").status == "stack_empty"


def test_workspace_commands_edit_layout() -> None:
    recorded = Recorded()
    controller = make_controller(recorded)

    controller.submit("tab-new")
    controller.submit("tab-rename D")
    controller.submit("find /src/b.py")
    pushed = controller.submit("tab-bookmark-push")

    assert pushed.name == "@D <1>"
    assert [view.label for view in recorded.tabs[-1]] == ["C", "D"]
    assert recorded.tabs[-1][1].buffers == ("b.py",)
    assert controller.submit("tab-select nowhere").status == "command_error"
    assert controller.submit("tab-rename").status == "command_error"


def test_restore_into_other_tab() -> None:
    controller = make_controller()
    controller.submit("tab-bookmark-push")
    controller.submit("tab-new")

    controller.submit('tab-bookmark-open "@C <1>"')

    assert controller.workspace.current_context() == "C"
    assert len(controller.workspace.tabs) == 2


def test_controller_emits_log_lines() -> None:
    recorded = Recorded()
    controller = make_controller(recorded)

    controller.submit("tab-bookmark-push")

    assert any(line.startswith("submit ->") for line in recorded.logs)
    assert any(line.startswith("event ->") for line in recorded.logs)
