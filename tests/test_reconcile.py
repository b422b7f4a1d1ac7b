"""Tests for applying and rejecting suggestions against a live document."""


import pytest

from cadence_check.analysis import Suggestion, SuggestionStatus
from cadence_check.errors import StaleSpanError
from cadence_check.reconcile import (
    apply_suggestion,
    locate_span,
    reject_suggestion,
    span_is_current,
)

DOCUMENT = "Alpha beta. Gamma delta. Epsilon zeta."


def _suggestion(
    suggestion_id: str, start: int, end: int, replacement: str = "X"
) -> Suggestion:
    return Suggestion(
        type="swap-predictable-phrasing",
        title="t",
        description="d",
        start=start,
        end=end,
        original=DOCUMENT[start:end],
        replacement=replacement,
        risk_impact=6,
        id=suggestion_id,
    )


def _suggestions() -> list[Suggestion]:
    return [
        _suggestion("s-1", 0, 5, "Omega"),
        _suggestion("s-2", 12, 17, "Gamma-ray"),
        _suggestion("s-3", 17, 23, " kappa"),
        _suggestion("s-4", 25, 32, "Eta"),
        _suggestion("s-5", 14, 20, "??"),
    ]


def test_accept_splices_replacement_and_shifts_later_spans() -> None:
    """Later suggestions move by the length delta; earlier ones stay put."""
    original = _suggestions()
    text, updated = apply_suggestion(DOCUMENT, original, "s-2")
    by_id = {s.id: s for s in updated}

    assert text == "Alpha beta. Gamma-ray delta. Epsilon zeta."
    assert (by_id["s-1"].start, by_id["s-1"].end) == (0, 5)
    assert (by_id["s-3"].start, by_id["s-3"].end) == (21, 27)
    assert (by_id["s-4"].start, by_id["s-4"].end) == (29, 36)
    for key in ("s-1", "s-3", "s-4"):
        assert span_is_current(text, by_id[key])


def test_accept_marks_target_accepted_over_its_replacement() -> None:
    """The accepted suggestion's span now covers the inserted text."""
    text, updated = apply_suggestion(DOCUMENT, _suggestions(), "s-2")
    accepted = next(s for s in updated if s.id == "s-2")

    assert accepted.status is SuggestionStatus.ACCEPTED
    assert text[accepted.start : accepted.end] == "Gamma-ray"


def test_accept_leaves_overlapping_suggestions_stale() -> None:
    """A suggestion that overlaps the edit keeps its old coordinates."""
    text, updated = apply_suggestion(DOCUMENT, _suggestions(), "s-2")
    overlapping = next(s for s in updated if s.id == "s-5")

    assert (overlapping.start, overlapping.end) == (14, 20)
    assert overlapping.status is SuggestionStatus.PENDING
    assert not span_is_current(text, overlapping)


def test_accept_does_not_mutate_inputs() -> None:
    """Callers' suggestion lists are left untouched."""
    original = _suggestions()
    snapshot = list(original)
    apply_suggestion(DOCUMENT, original, "s-2")
    assert original == snapshot


def test_sequential_accepts_keep_document_consistent() -> None:
    """Accepting several non-overlapping suggestions applies each in place."""
    text, suggestions = apply_suggestion(DOCUMENT, _suggestions(), "s-4")
    text, suggestions = apply_suggestion(text, suggestions, "s-1")
    text, suggestions = apply_suggestion(text, suggestions, "s-3")

    assert text == "Omega beta. Gamma kappa. Eta zeta."


def test_locate_span_falls_back_to_literal_search() -> None:
    """A drifted span is relocated by searching for its original text."""
    drifted = _suggestion("s-9", 12, 17, "Gamma-ray")
    edited = "Intro. " + DOCUMENT

    assert locate_span(edited, drifted) == (19, 24)
    text, updated = apply_suggestion(edited, [drifted], "s-9")
    assert text == "Intro. Alpha beta. Gamma-ray delta. Epsilon zeta."
    assert (updated[0].start, updated[0].end) == (19, 28)


def test_locate_span_falls_back_to_trimmed_search() -> None:
    """Surrounding whitespace in the recorded original is tolerated."""
    padded = Suggestion(
        type="vary-sentence-length",
        title="t",
        description="d",
        start=40,
        end=52,
        original="  Gamma delta.\n",
        replacement="Gamma. Delta.",
        risk_impact=8,
        id="s-1",
    )
    assert locate_span(DOCUMENT, padded) == (12, 24)


def test_stale_suggestion_raises() -> None:
    """A suggestion whose text is gone cannot be applied."""
    gone = _suggestion("s-1", 12, 17, "Gamma-ray")
    with pytest.raises(StaleSpanError) as excinfo:
        apply_suggestion("Something else entirely.", [gone], "s-1")
    assert excinfo.value.suggestion_id == "s-1"
    assert "Run the analysis again" in str(excinfo.value)


def test_unknown_id_raises_key_error() -> None:
    """Accepting or rejecting a missing id is a lookup failure."""
    with pytest.raises(KeyError):
        apply_suggestion(DOCUMENT, _suggestions(), "s-99")
    with pytest.raises(KeyError):
        reject_suggestion(_suggestions(), "s-99")


def test_resolved_suggestions_cannot_be_resolved_again() -> None:
    """Accepted or rejected suggestions never return to pending."""
    _, accepted = apply_suggestion(DOCUMENT, _suggestions(), "s-1")
    with pytest.raises(ValueError):
        apply_suggestion(DOCUMENT, accepted, "s-1")

    rejected = reject_suggestion(_suggestions(), "s-2")
    with pytest.raises(ValueError):
        reject_suggestion(rejected, "s-2")
    with pytest.raises(ValueError):
        apply_suggestion(DOCUMENT, rejected, "s-2")


def test_reject_changes_only_status() -> None:
    """Rejecting leaves spans and other suggestions as they were."""
    before = _suggestions()
    after = reject_suggestion(before, "s-3")

    assert [s.id for s in after] == [s.id for s in before]
    rejected = after[2]
    assert rejected.status is SuggestionStatus.REJECTED
    assert (rejected.start, rejected.end) == (17, 23)
    assert after[:2] == before[:2]
    assert after[3:] == before[3:]
