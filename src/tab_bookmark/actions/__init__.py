"""Bookmark actions: the manager and the command-line surface."""

from .base import ActionResult, EventBus, RestoreFailure, RestoreReport
from .command import COMMANDS, CommandContext, submit_command_line
from .manager import TabBookmarkManager

__all__ = [
    "ActionResult",
    "EventBus",
    "RestoreFailure",
    "RestoreReport",
    "COMMANDS",
    "CommandContext",
    "submit_command_line",
    "TabBookmarkManager",
]
