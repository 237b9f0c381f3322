"""Executable Textual app for trying tab bookmarks on a simulated workspace."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal
    from textual.widgets import Footer, Header, Input, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use tab_bookmark.adapters.textual.app"
    ) from exc

from tab_bookmark.actions import TabBookmarkManager
from tab_bookmark.host.workspace import Workspace
from tab_bookmark.naming import Candidate
from tab_bookmark.prompts import PromptRequest
from tab_bookmark.runtime import telemetry
from tab_bookmark.runtime.settings import Settings, load_settings
from tab_bookmark.store import JsonBookmarkStore

from .controller import TabBookmarkController, TabBookmarkUIHooks, TabView


def create_default_controller(
    settings: Settings,
    hooks: TabBookmarkUIHooks,
    *,
    files: Sequence[str] = (),
) -> TabBookmarkController:
    """Wire a JSON store and a fresh workspace showing ``files``."""

    store = JsonBookmarkStore(
        settings.bookmark_file, save_on_change=settings.save_on_change
    )
    workspace = Workspace()
    for path in files:
        workspace.add_buffer(Path(path).name, path=path)
    if files:
        workspace.show(*(Path(path).name for path in files))
    manager = TabBookmarkManager(store, workspace, settings=settings)
    return TabBookmarkController(manager, workspace, hooks)


@dataclass
class UIState:
    tabs_text: str = ""
    bookmarks_text: str = ""
    status_text: str = ""


class TabBookmarkApp(App[None]):
    """Tabs on top, bookmarks beside the layout, a command line below."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#tab-bar {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#main {
		height: 1fr;
	}

	#layout-view {
		width: 2fr;
		border: round $accent;
		padding: 1 1;
	}

	#bookmark-list {
		width: 1fr;
		border: round $secondary;
		padding: 1 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("escape", "cancel_prompt", "Cancel prompt"),
    ]

    def __init__(self, *, settings: Settings, files: Sequence[str] = ()) -> None:
        super().__init__()
        self._state = UIState()
        self._settings = settings
        self._files = tuple(files)
        self.controller: TabBookmarkController | None = None
        self._tab_widget: Static | None = None
        self._layout_widget: Static | None = None
        self._bookmark_widget: Static | None = None
        self._status_widget: Static | None = None
        self._input: Input | None = None
        self._logger = telemetry.get_logger("tab_bookmark.app")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._tab_widget = Static("", id="tab-bar")
        yield self._tab_widget
        with Horizontal(id="main"):
            self._layout_widget = Static("", id="layout-view")
            self._bookmark_widget = Static("", id="bookmark-list")
            yield self._layout_widget
            yield self._bookmark_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        self._input = Input(placeholder="tab-bookmark-push", id="command-line")
        yield self._input
        yield Footer()

    def on_mount(self) -> None:
        hooks = TabBookmarkUIHooks(
            update_tabs=self._update_tabs,
            update_bookmarks=self._update_bookmarks,
            update_status=self._update_status,
            show_prompt=self._show_prompt,
            handle_event=self._handle_event,
            log=self._log_line,
        )
        self.controller = create_default_controller(
            self._settings, hooks, files=self._files
        )
        if self._input:
            self._input.focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if not self.controller:
            return
        self.controller.submit(event.value)
        event.input.value = ""

    def action_cancel_prompt(self) -> None:
        if self.controller:
            self.controller.cancel()

    def _update_tabs(self, tabs: Sequence[TabView]) -> None:
        labels = [f"[{tab.label}]" if tab.current else f" {tab.label} " for tab in tabs]
        self._state.tabs_text = " ".join(labels)
        if self._tab_widget:
            self._tab_widget.update(self._state.tabs_text)
        current = next((tab for tab in tabs if tab.current), None)
        if self._layout_widget and current:
            self._layout_widget.update(" | ".join(current.buffers))

    def _update_bookmarks(self, candidates: Sequence[Candidate]) -> None:
        self._state.bookmarks_text = "\n".join(c.label for c in candidates)
        if self._bookmark_widget:
            self._bookmark_widget.update(self._state.bookmarks_text or "(none)")

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _show_prompt(self, request: Optional[PromptRequest]) -> None:
        if not self._input:
            return
        if request is None:
            self._input.placeholder = "tab-bookmark-push"
        else:
            default = f" (default {request.default})" if request.default else ""
            self._input.placeholder = f"{request.prompt}{default}"

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "bookmark.restore_failed":
            self.notify(f"Could not restore {payload}", severity="warning")

    def _log_line(self, line: str) -> None:
        self._logger.debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the tab bookmark demo.")
    parser.add_argument("files", nargs="*", help="Files to show in the first tab")
    parser.add_argument(
        "--bookmark-file",
        default=os.environ.get("TAB_BOOKMARK_FILE"),
        help="JSON file holding bookmarks (default: $TAB_BOOKMARK_FILE)",
    )
    parser.add_argument(
        "--log-level",
        help="telelog level for this run (default: $TAB_BOOKMARK_LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_level:
        os.environ[f"{telemetry.ENV_PREFIX}LOG_LEVEL"] = args.log_level
        telemetry.configure()
    settings = load_settings()
    if args.bookmark_file:
        settings.bookmark_file = Path(args.bookmark_file).expanduser()
    app = TabBookmarkApp(settings=settings, files=args.files)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
