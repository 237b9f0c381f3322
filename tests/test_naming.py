import pytest

from tab_bookmark.naming import (
    Candidate,
    SnapshotName,
    Tag,
    build_candidates,
    resolve_answer,
    stack_top,
)


def test_parse_numbered_name() -> None:
    name = SnapshotName.parse("@work <3>")

    assert name.context == "work"
    assert name.ordinal == 3
    assert name.format() == "@work <3>"


def test_parse_free_form_names() -> None:
    for text in ("notes", "@work", "@ detached", "plain text with spaces"):
        name = SnapshotName.parse(text)
        assert not name.is_contextual
        assert str(name) == text


def test_parse_keeps_comment_text_verbatim() -> None:
    name = SnapshotName.parse("@work  before refactor")

    assert name.tag == Tag(" before refactor")
    assert name.ordinal is None
    assert name.format() == "@work  before refactor"


def test_tag_ordinal_detection() -> None:
    assert Tag("<12>").ordinal == 12
    assert Tag("<x>").ordinal is None
    assert Tag("12").ordinal is None
    assert Tag.for_ordinal(4).text == "<4>"
    with pytest.raises(ValueError):
        Tag.for_ordinal(0)


def test_snapshot_name_validation() -> None:
    with pytest.raises(ValueError):
        SnapshotName.free("")
    with pytest.raises(ValueError):
        SnapshotName(context="work")
    with pytest.raises(ValueError):
        SnapshotName(tag=Tag("<1>"), text="x")


def test_candidate_splits_on_first_space() -> None:
    contextual = Candidate.from_name("@work  my note ")
    free = Candidate.from_name("scratchpad")

    assert (contextual.prefix, contextual.suffix) == ("@work", "my note")
    assert (free.prefix, free.suffix) == ("scratchpad", "")
    assert free.label == "scratchpad"


def test_build_candidates_sorted_by_full_name() -> None:
    candidates = build_candidates(["@b <1>", "zeta", "@a note", "@a <2>"])

    assert [c.name for c in candidates] == ["@a <2>", "@a note", "@b <1>", "zeta"]


def test_stack_top_next_slot_starts_at_one() -> None:
    assert str(stack_top([], "C", existing=False)) == "@C <1>"
    assert stack_top([], "C", existing=True) is None


def test_stack_top_uses_highest_ordinal() -> None:
    names = ["@C <1>", "@C <3>", "@C note", "@D <7>", "C <9>"]

    assert str(stack_top(names, "C", existing=True)) == "@C <3>"
    assert str(stack_top(names, "C", existing=False)) == "@C <4>"


def test_stack_top_ignores_other_contexts() -> None:
    names = ["@aXb <5>", "@CC <2>", "@C <x>"]

    assert stack_top(names, "a.b", existing=True) is None
    assert stack_top(names, "C", existing=True) is None


def test_stack_top_context_with_spaces() -> None:
    assert str(stack_top(["@My Tab <2>"], "My Tab", existing=True)) == "@My Tab <2>"


def test_resolve_answer_composes_comment_tag() -> None:
    assert resolve_answer("  before lunch ", [], context="C") == "@C before lunch"


def test_resolve_answer_marker_selects_candidate_or_literal() -> None:
    candidates = build_candidates(["@C <1>", "scratchpad"])

    assert resolve_answer("@C <1>", candidates, context="C") == "@C <1>"
    assert resolve_answer("@X other", candidates, context="C") == "@X other"


def test_resolve_answer_exact_candidate_match() -> None:
    candidates = build_candidates(["scratchpad"])

    assert resolve_answer("scratchpad", candidates, context="C") == "scratchpad"


def test_resolve_answer_default_on_empty_input() -> None:
    assert resolve_answer("", [], context="C", default="@C <2>") == "@C <2>"
    assert resolve_answer("  ", [], context="C") is None


def test_resolve_answer_custom_marker() -> None:
    candidates = build_candidates(["@C <1>"])

    assert resolve_answer("=raw", candidates, context="C", marker="=") == "=raw"
    assert resolve_answer("@C <1>", candidates, context="C", marker="=") == "@C <1>"


def test_parse_prefers_longest_known_context() -> None:
    name = SnapshotName.parse("@my work <2>", ["my", "my work"])

    assert name.context == "my work"
    assert name.ordinal == 2
    assert name.format() == "@my work <2>"


def test_parse_without_known_context_splits_on_first_space() -> None:
    name = SnapshotName.parse("@my work <2>", ["other"])

    assert name.context == "my"
    assert name.tag == Tag("work <2>")
