"""Integration tests for rule-pipeline based analysis output."""


import json

import pytest

from cadence_check.analysis import HYPERPARAMETERS
from cadence_check.errors import InputValidationError, StaleSpanError
from cadence_check.server import (
    _accept,
    _analyze,
    accept_suggestion,
    analyze_prose,
    reject_pending,
)

HEDGED_PROSE = (
    "This approach may improve results for most teams. "
    "This approach could reduce costs over a long period. "
    "This approach might help managers plan their work. "
    "Furthermore, it is important to note that the tools are typically easy to adopt. "
    "In conclusion, the method is generally useful for many organizations."
)


def test_analyze_emits_expected_schema() -> None:
    """Analyze should emit metrics, bands, insights, and suggestions."""
    result = _analyze(HEDGED_PROSE)

    assert set(result) == {
        "metrics",
        "riskBands",
        "insights",
        "suggestions",
        "styleProfile",
    }
    assert set(result["metrics"]) == {
        "perplexity",
        "burstiness",
        "sentencePatternDiversity",
        "vocabularyPredictability",
        "overallRisk",
    }
    assert set(result["riskBands"]) == set(result["metrics"])
    assert result["styleProfile"] is None
    for suggestion in result["suggestions"]:
        assert set(suggestion) == {
            "id",
            "type",
            "title",
            "description",
            "start",
            "end",
            "original",
            "replacement",
            "riskImpact",
            "status",
        }
        assert suggestion["status"] == "pending"


def test_analyze_runs_rules_in_pipeline_order() -> None:
    """Suggestions come out in rule order with sequential ids."""
    suggestions = _analyze(HEDGED_PROSE)["suggestions"]

    assert [s["type"] for s in suggestions] == (
        ["swap-predictable-phrasing"] * 3
        + ["add-stylistic-texture"]
        + ["diversify-openers"] * 2
        + ["reduce-hedging-uniformity"] * 5
    )
    assert [s["id"] for s in suggestions] == [f"s-{n}" for n in range(1, 12)]
    assert [s["replacement"] for s in suggestions[:3]] == [
        "To wrap up",
        "note that",
        "Also",
    ]
    assert suggestions[4]["replacement"] == (
        "In this case, this approach could reduce costs over a long period."
    )


def test_suggestion_offsets_address_request_text() -> None:
    """Every span should slice its original text out of the request."""
    for text in (HEDGED_PROSE, "   \n" + HEDGED_PROSE, HEDGED_PROSE.replace(". ", ".\n\n")):
        for suggestion in _analyze(text)["suggestions"]:
            assert 0 <= suggestion["start"] < suggestion["end"] <= len(text)
            assert text[suggestion["start"] : suggestion["end"]] == suggestion["original"]


def test_insights_include_suggestion_counts() -> None:
    """Per-rule counts are reported alongside the summary ratios."""
    insights = _analyze(HEDGED_PROSE)["insights"]

    assert insights["wordCount"] == 49
    assert insights["sentenceCount"] == 5
    assert insights["suggestionCounts"] == {
        "swap-predictable-phrasing": 3,
        "add-stylistic-texture": 1,
        "diversify-openers": 2,
        "reduce-hedging-uniformity": 5,
    }


def test_analyze_short_text_is_neutral() -> None:
    """Short text should score neutral with no suggestions."""
    result = _analyze("Too short. Still short.")

    assert set(result["metrics"].values()) == {HYPERPARAMETERS.neutral_score}
    assert set(result["riskBands"].values()) == {"moderate"}
    assert result["suggestions"] == []
    assert result["insights"]["note"] == HYPERPARAMETERS.short_text_note
    assert "suggestionCounts" not in result["insights"]


def test_suggestions_are_capped_after_candidate_limits() -> None:
    """Pathological input is cut to twenty suggestions."""
    text = "Furthermore, it works. " * 100
    result = _analyze(text)
    suggestions = result["suggestions"]

    assert len(suggestions) == 20
    assert {s["type"] for s in suggestions} == {"swap-predictable-phrasing"}
    assert [s["id"] for s in suggestions] == [f"s-{n}" for n in range(1, 21)]
    assert result["insights"]["suggestionCounts"] == {
        "swap-predictable-phrasing": 40,
        "diversify-openers": 2,
    }


@pytest.mark.parametrize("text", ["", "   \n\t"])
def test_blank_text_is_rejected(text: str) -> None:
    """Blank input is a validation error, not a neutral report."""
    with pytest.raises(InputValidationError):
        _analyze(text)


def test_oversized_text_is_rejected() -> None:
    """Text above the character ceiling is refused."""
    text = "a" * (HYPERPARAMETERS.max_text_chars + 1)
    with pytest.raises(InputValidationError, match="120,000"):
        _analyze(text)


def test_style_sample_is_profiled() -> None:
    """A style sample adds a profile to the output."""
    result = _analyze(HEDGED_PROSE, "One two three. Four five? Six, seven eight, nine.")
    profile = result["styleProfile"]

    assert profile["avgSentenceLength"] == 3.0
    assert profile["questionRate"] == pytest.approx(1 / 3)


def test_accept_applies_edit_and_shifts_later_spans() -> None:
    """Accepting rewrites the text and keeps later suggestions addressable."""
    suggestions = _analyze(HEDGED_PROSE)["suggestions"]
    result = _accept(HEDGED_PROSE, suggestions, "s-3")
    text = result["text"]
    by_id = {s["id"]: s for s in result["suggestions"]}

    assert "Also, it is important to note that" in text
    assert by_id["s-3"]["status"] == "accepted"
    assert text[by_id["s-3"]["start"] : by_id["s-3"]["end"]] == "Also"
    conclusion = by_id["s-1"]
    assert text[conclusion["start"] : conclusion["end"]] == "In conclusion"
    assert isinstance(result["riskDelta"], int)
    assert result["riskDelta"] == (
        result["metrics"]["overallRisk"] - _analyze(HEDGED_PROSE)["metrics"]["overallRisk"]
    )


def test_accept_of_stale_suggestion_raises() -> None:
    """A suggestion whose text has vanished cannot be accepted."""
    suggestions = _analyze(HEDGED_PROSE)["suggestions"]
    edited = HEDGED_PROSE.replace("Furthermore", "Besides")
    with pytest.raises(StaleSpanError):
        _accept(edited, suggestions, "s-3")


def test_analyze_tool_returns_json() -> None:
    """The MCP tool wraps the analysis result as JSON."""
    payload = json.loads(analyze_prose(HEDGED_PROSE))
    assert len(payload["suggestions"]) == 11


def test_analyze_tool_reports_validation_errors() -> None:
    """The MCP tool turns validation failures into an error payload."""
    assert json.loads(analyze_prose("  ")) == {"error": "Text is required for analysis."}


def test_accept_tool_flags_stale_suggestions() -> None:
    """Stale accepts come back with an error and ``stale: true``."""
    suggestions = _analyze(HEDGED_PROSE)["suggestions"]
    payload = json.loads(accept_suggestion("Nothing matches here.", suggestions, "s-3"))

    assert payload["stale"] is True
    assert "Run the analysis again" in payload["error"]


def test_accept_tool_reports_unknown_ids() -> None:
    """Unknown ids produce an error payload."""
    suggestions = _analyze(HEDGED_PROSE)["suggestions"]
    payload = json.loads(accept_suggestion(HEDGED_PROSE, suggestions, "s-99"))
    assert "s-99" in payload["error"]
    assert "stale" not in payload


def test_reject_tool_marks_suggestion_rejected() -> None:
    """Rejecting changes only the target's status."""
    suggestions = _analyze(HEDGED_PROSE)["suggestions"]
    payload = json.loads(reject_pending(suggestions, "s-2"))
    updated = payload["suggestions"]

    assert updated[1]["status"] == "rejected"
    assert [s["status"] for s in updated if s["id"] != "s-2"] == ["pending"] * 10

    again = json.loads(reject_pending(updated, "s-2"))
    assert "already rejected" in again["error"]
