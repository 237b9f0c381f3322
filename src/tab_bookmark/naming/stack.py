"""Per-context LIFO ordering of numbered bookmark names."""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Optional

from .models import CONTEXT_SIGIL, SnapshotName


def _ordinal_pattern(context: str) -> re.Pattern[str]:
    return re.compile(rf"{re.escape(CONTEXT_SIGIL + context)} <(\d+)>")


def ordinals(names: Iterable[str], context: str) -> Iterator[int]:
    """Yield every ordinal ``k`` found in names of the form ``@context <k>``."""

    pattern = _ordinal_pattern(context)
    for name in names:
        match = pattern.fullmatch(name)
        if match is not None:
            yield int(match.group(1))


def stack_top(
    names: Iterable[str], context: str, *, existing: bool
) -> Optional[SnapshotName]:
    """Return the current top of ``context``'s stack, or the next free slot.

    With ``existing`` the highest stored ordinal is returned, or ``None`` when
    the context has no numbered names. Without it the slot after the highest
    ordinal is returned, starting from ``<1>``.
    """

    idx = max(ordinals(names, context), default=0)
    if not existing:
        idx += 1
    if idx == 0:
        return None
    return SnapshotName.numbered(context, idx)


__all__ = ["ordinals", "stack_top"]
