"""Textual adapter: a controller plus a runnable demo app."""

from .controller import TabBookmarkController, TabBookmarkUIHooks, TabView

__all__ = ["TabBookmarkController", "TabBookmarkUIHooks", "TabView"]
