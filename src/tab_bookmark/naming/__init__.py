"""Bookmark names, parsing, and per-context stack ordering."""

from .models import CONTEXT_SIGIL, Candidate, SnapshotName, Tag
from .reader import build_candidates, resolve_answer
from .stack import ordinals, stack_top

__all__ = [
    "CONTEXT_SIGIL",
    "Candidate",
    "SnapshotName",
    "Tag",
    "build_candidates",
    "resolve_answer",
    "ordinals",
    "stack_top",
]
