"""Actions that evaluate ``tab-bookmark`` command lines."""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from typing import Callable, Dict, List, MutableMapping, Optional, cast

from tab_bookmark.errors import (
    BookmarkNotFoundError,
    BookmarkStoreError,
    PromptCancelled,
    TabBookmarkError,
)
from tab_bookmark.prompts import PromptDeferred

from .base import ActionResult
from .manager import TabBookmarkManager


@dataclass(slots=True)
class CommandContext:
    """What command handlers can reach: the manager plus scratch state."""

    manager: TabBookmarkManager
    extras: Dict[str, object] = field(default_factory=dict)


CommandHandler = Callable[[CommandContext, List[str]], ActionResult]


class _UsageError(ValueError):
    """Raised when a command gets the wrong number of arguments."""


def _command_state(context: CommandContext) -> MutableMapping[str, object]:
    state = cast(
        MutableMapping[str, object], context.extras.setdefault("command_state", {})
    )
    state.setdefault("history", [])
    return state


def submit_command_line(context: CommandContext, text: str) -> ActionResult:
    """Run one command line such as ``tab-bookmark-open "@work <2>"``.

    ``PromptDeferred`` propagates so adapters can ask for the missing name and
    run the line again; every other failure becomes an ``ActionResult``.
    """

    bus = context.manager.bus
    state = _command_state(context)
    line = text.strip()
    bus.emit("command.submit", line)
    history = state.get("history")
    if isinstance(history, list):
        history.append(line)
    if not line:
        return ActionResult(status="command_empty")
    try:
        parts = shlex.split(line)
    except ValueError as exc:
        return _command_error(context, line, str(exc))
    command, args = parts[0], parts[1:]
    handler = _COMMAND_HANDLERS.get(command)
    if handler is None:
        return _command_error(context, command, "unknown command")
    try:
        return handler(context, args)
    except _UsageError as exc:
        return _command_error(context, command, str(exc))
    except PromptDeferred:
        raise
    except PromptCancelled:
        bus.emit("prompt.cancelled", command)
        return ActionResult(status="cancelled", message="Quit")
    except BookmarkNotFoundError as exc:
        bus.emit("command.error", str(exc))
        return ActionResult(status="not_found", name=exc.name, message=str(exc))
    except BookmarkStoreError as exc:
        bus.emit("command.error", str(exc))
        return ActionResult(status="store_error", message=str(exc))
    except TabBookmarkError as exc:
        bus.emit("command.error", str(exc))
        return ActionResult(status="error", message=str(exc))


def _command_error(context: CommandContext, command: str, reason: str) -> ActionResult:
    context.manager.bus.emit("command.error", command)
    return ActionResult(status="command_error", message=f"{command}: {reason}")


def _single_name(args: List[str]) -> Optional[str]:
    if len(args) > 1:
        raise _UsageError("expected at most one name")
    return args[0] if args else None


def _handle_toggle(context: CommandContext, args: List[str]) -> ActionResult:
    return context.manager.toggle(_single_name(args))


def _handle_save(context: CommandContext, args: List[str]) -> ActionResult:
    return context.manager.save(_single_name(args))


def _handle_open(context: CommandContext, args: List[str]) -> ActionResult:
    return context.manager.open(_single_name(args))


def _handle_delete(context: CommandContext, args: List[str]) -> ActionResult:
    return context.manager.delete(_single_name(args))


def _handle_rename(context: CommandContext, args: List[str]) -> ActionResult:
    if len(args) > 2:
        raise _UsageError("expected at most two names")
    old = args[0] if args else None
    new = args[1] if len(args) > 1 else None
    return context.manager.rename(old, new)


def _handle_push(context: CommandContext, args: List[str]) -> ActionResult:
    if args:
        raise _UsageError("takes no arguments")
    return context.manager.push()


def _handle_pop(context: CommandContext, args: List[str]) -> ActionResult:
    if args:
        raise _UsageError("takes no arguments")
    return context.manager.pop()


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "tab-bookmark": _handle_toggle,
    "tab-bookmark-save": _handle_save,
    "tab-bookmark-open": _handle_open,
    "tab-bookmark-delete": _handle_delete,
    "tab-bookmark-rename": _handle_rename,
    "tab-bookmark-push": _handle_push,
    "tab-bookmark-pop": _handle_pop,
}

COMMANDS = tuple(_COMMAND_HANDLERS)


__all__ = ["COMMANDS", "CommandContext", "CommandHandler", "submit_command_line"]
