"""Prompting for bookmark names."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, Sequence

from tab_bookmark.errors import PromptCancelled
from tab_bookmark.naming import Candidate


class Prompter(Protocol):
    """Asks the user for a name; raises ``PromptCancelled`` on abort."""

    def ask(
        self,
        prompt: str,
        candidates: Sequence[Candidate],
        default: Optional[str] = None,
    ) -> str:
        ...


@dataclass(frozen=True, slots=True)
class PromptRequest:
    prompt: str
    candidates: tuple[Candidate, ...]
    default: Optional[str] = None


class PromptDeferred(PromptCancelled):
    """Raised when an answer is not available yet; carries the request."""

    def __init__(self, request: PromptRequest) -> None:
        super().__init__(request.prompt)
        self.request = request


class ScriptedPrompter:
    """Answers prompts from a fixed list, cancelling once it runs out."""

    def __init__(self, answers: Iterable[str] = ()) -> None:
        self._answers: List[str] = list(answers)
        self.requests: List[PromptRequest] = []

    def ask(
        self,
        prompt: str,
        candidates: Sequence[Candidate],
        default: Optional[str] = None,
    ) -> str:
        request = PromptRequest(prompt, tuple(candidates), default)
        self.requests.append(request)
        if not self._answers:
            raise self._exhausted(request)
        return self._answers.pop(0)

    def _exhausted(self, request: PromptRequest) -> PromptCancelled:
        return PromptCancelled(request.prompt)


class ReplayPrompter(ScriptedPrompter):
    """Replays collected answers, then defers the next unanswered prompt."""

    def _exhausted(self, request: PromptRequest) -> PromptCancelled:
        return PromptDeferred(request)


__all__ = [
    "Prompter",
    "PromptRequest",
    "PromptDeferred",
    "ScriptedPrompter",
    "ReplayPrompter",
]
