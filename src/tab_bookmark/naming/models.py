"""Structured bookmark names and their ``@context tag`` text form."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional

CONTEXT_SIGIL = "@"
_ORDINAL_RE = re.compile(r"<(\d+)>")


@dataclass(frozen=True, slots=True)
class Tag:
    """Second half of a contextual name: a comment or an ordinal ``<k>``."""

    text: str

    @classmethod
    def for_ordinal(cls, index: int) -> "Tag":
        if index < 1:
            raise ValueError("ordinal tags start at 1")
        return cls(f"<{index}>")

    @property
    def ordinal(self) -> Optional[int]:
        match = _ORDINAL_RE.fullmatch(self.text)
        if match is None:
            return None
        return int(match.group(1))


@dataclass(frozen=True, slots=True)
class SnapshotName:
    """Bookmark name, either ``@<context> <tag>`` or free-form text.

    ``parse`` and ``format`` round-trip the text exactly. A context may
    contain spaces; pass the known contexts to ``parse`` so the longest
    matching one wins over the split at the first space.
    """

    context: Optional[str] = None
    tag: Optional[Tag] = None
    text: Optional[str] = None

    def __post_init__(self) -> None:
        if self.context is None:
            if self.tag is not None:
                raise ValueError("a tag requires a context")
            if not self.text:
                raise ValueError("free-form names cannot be empty")
            return
        if not self.context:
            raise ValueError(f"invalid context '{self.context}'")
        if self.tag is None or not self.tag.text:
            raise ValueError("contextual names require a tag")
        if self.text is not None:
            raise ValueError("contextual names are formatted from context and tag")

    @classmethod
    def contextual(cls, context: str, tag: str | Tag) -> "SnapshotName":
        value = tag if isinstance(tag, Tag) else Tag(tag)
        return cls(context=context, tag=value)

    @classmethod
    def numbered(cls, context: str, index: int) -> "SnapshotName":
        return cls(context=context, tag=Tag.for_ordinal(index))

    @classmethod
    def free(cls, text: str) -> "SnapshotName":
        return cls(text=text)

    @classmethod
    def parse(cls, text: str, contexts: Iterable[str] = ()) -> "SnapshotName":
        if not text.startswith(CONTEXT_SIGIL):
            return cls(text=text)
        body = text[len(CONTEXT_SIGIL) :]
        known = [
            context
            for context in contexts
            if context and body.startswith(f"{context} ") and body[len(context) + 1 :]
        ]
        if known:
            context = max(known, key=len)
            return cls(context=context, tag=Tag(body[len(context) + 1 :]))
        context, sep, tag = body.partition(" ")
        if sep and context and tag:
            return cls(context=context, tag=Tag(tag))
        return cls(text=text)

    @property
    def is_contextual(self) -> bool:
        return self.context is not None

    @property
    def ordinal(self) -> Optional[int]:
        return self.tag.ordinal if self.tag is not None else None

    def format(self) -> str:
        if self.context is None or self.tag is None:
            return str(self.text)
        return f"{CONTEXT_SIGIL}{self.context} {self.tag.text}"

    def __str__(self) -> str:
        return self.format()


@dataclass(frozen=True, slots=True)
class Candidate:
    """A stored name split for display: prefix before the first space, rest."""

    prefix: str
    suffix: str
    name: str

    @classmethod
    def from_name(cls, name: str) -> "Candidate":
        prefix, _, suffix = name.partition(" ")
        return cls(prefix=prefix, suffix=suffix.strip(), name=name)

    @property
    def label(self) -> str:
        return f"{self.prefix} {self.suffix}" if self.suffix else self.prefix


__all__ = ["CONTEXT_SIGIL", "Tag", "SnapshotName", "Candidate"]
