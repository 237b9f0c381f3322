"""Turn prompt answers into bookmark names."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .models import Candidate, SnapshotName


def build_candidates(names: Iterable[str]) -> list[Candidate]:
    """Split stored names for display, sorted by full name."""

    return sorted((Candidate.from_name(name) for name in names), key=lambda c: c.name)


def resolve_answer(
    answer: str,
    candidates: Sequence[Candidate],
    *,
    context: str,
    default: Optional[str] = None,
    marker: str = "@",
) -> Optional[str]:
    """Resolve a raw prompt answer to a bookmark name.

    Empty answers fall back to ``default`` (``None`` when there is none).
    Answers starting with ``marker`` select the candidate with that full name,
    or are used verbatim. Answers equal to a candidate's name select it.
    Anything else becomes a comment tag in ``context``.
    """

    text = answer.strip()
    if not text:
        return default
    if text.startswith(marker) or any(c.name == text for c in candidates):
        for candidate in candidates:
            if candidate.name == text:
                return candidate.name
        return text
    return SnapshotName.contextual(context, text).format()


__all__ = ["build_candidates", "resolve_answer"]
