"""MCP server exposing prose risk analysis and offset-safe edit acceptance."""


import argparse
import json
import logging
import sys
from collections.abc import Mapping
from typing import Any

from mcp.server.fastmcp import FastMCP

from .analysis import (
    HYPERPARAMETERS,
    AnalysisDocument,
    Hyperparameters,
    Payload,
    Suggestion,
)
from .errors import InputValidationError, StaleSpanError
from .profile import build_style_profile
from .reconcile import apply_suggestion, reject_suggestion
from .rules import Pipeline
from .scoring import score_document, score_text
from .version import PACKAGE_VERSION

logger = logging.getLogger(__name__)

MCP_SERVER_NAME = "cadence-check"
HEALTH_MESSAGE = "Analyzer API is running"
mcp_server = FastMCP(MCP_SERVER_NAME)
DEFAULT_PIPELINE = Pipeline.from_jsonl()
ACTIVE_PIPELINE = DEFAULT_PIPELINE


def validate_text(text: str, hyperparameters: Hyperparameters) -> None:
    """Reject blank text and text above the character ceiling."""
    if not text or not text.strip():
        raise InputValidationError("Text is required for analysis.")
    if len(text) > hyperparameters.max_text_chars:
        raise InputValidationError(
            "Text is too large. Please keep it under "
            f"{hyperparameters.max_text_chars:,} characters."
        )


def _analyze(
    text: str,
    style_sample: str | None = None,
    hyperparameters: Hyperparameters = HYPERPARAMETERS,
    pipeline: Pipeline | None = None,
) -> dict:
    """Score ``text`` and propose edits; offsets index into ``text`` itself."""
    validate_text(text, hyperparameters)
    document = AnalysisDocument.from_text(text)
    profile = build_style_profile(style_sample)
    report = score_document(document, profile, hyperparameters)

    suggestions: list[Suggestion] = []
    insights = dict(report.insights)
    if report.sufficient:
        active_pipeline = ACTIVE_PIPELINE if pipeline is None else pipeline
        suggestions, counts = active_pipeline.suggest(document, profile, hyperparameters)
        insights["suggestionCounts"] = counts

    return {
        "metrics": report.metrics.to_payload(),
        "riskBands": report.bands.to_payload(),
        "insights": insights,
        "suggestions": [suggestion.to_payload() for suggestion in suggestions],
        "styleProfile": profile.to_payload() if profile is not None else None,
    }


def _accept(
    text: str,
    suggestions: list[Mapping[str, object]],
    suggestion_id: str,
    style_sample: str | None = None,
    hyperparameters: Hyperparameters = HYPERPARAMETERS,
) -> dict:
    """Apply one suggestion and refresh the metrics for the edited text.

    Suggestions are not regenerated; the reconciled list is returned as-is.
    """
    validate_text(text, hyperparameters)
    records = [Suggestion.from_payload(raw) for raw in suggestions]
    before = score_text(text, style_sample, hyperparameters)
    updated, reconciled = apply_suggestion(text, records, suggestion_id)
    after = score_text(updated, style_sample, hyperparameters)
    return {
        "text": updated,
        "suggestions": [suggestion.to_payload() for suggestion in reconciled],
        "metrics": after.metrics.to_payload(),
        "riskBands": after.bands.to_payload(),
        "riskDelta": after.metrics.overall_risk - before.metrics.overall_risk,
    }


def _error(message: str, **extra: Any) -> str:
    payload: Payload = {"error": message}
    payload.update(extra)
    return json.dumps(payload)


@mcp_server.tool()
def analyze_prose(text: str, style_sample: str = "") -> str:
    """Score prose for detector-associated style patterns and propose edits.

    Returns a JSON object with four 0-100 risk metrics plus an overall risk,
    a low/moderate/high band per metric, summary insights, and up to 20
    suggestions. Each suggestion carries ``start``/``end`` character offsets
    into ``text``, the ``original`` text at that span, and a ``replacement``.
    Pass an optional ``style_sample`` of your own writing to bias rhythm
    scoring toward it.
    """
    try:
        result = _analyze(text, style_sample, HYPERPARAMETERS)
    except InputValidationError as exc:
        return _error(str(exc))
    return json.dumps(result, indent=2)


@mcp_server.tool()
def accept_suggestion(
    text: str,
    suggestions: list[dict[str, Any]],
    suggestion_id: str,
    style_sample: str = "",
) -> str:
    """Apply one pending suggestion to the current text.

    Returns the edited text, the suggestion list with offsets shifted past
    the edit, refreshed metrics, and the change in overall risk. If the
    suggestion's text cannot be found any more, returns an error with
    ``stale: true``; run ``analyze_prose`` again in that case.
    """
    try:
        result = _accept(text, suggestions, suggestion_id, style_sample)
    except StaleSpanError as exc:
        return _error(str(exc), stale=True)
    except (InputValidationError, KeyError, ValueError) as exc:
        return _error(str(exc))
    return json.dumps(result, indent=2)


@mcp_server.tool(name="reject_suggestion")
def reject_pending(suggestions: list[dict[str, Any]], suggestion_id: str) -> str:
    """Mark one pending suggestion as rejected and return the updated list."""
    try:
        records = [Suggestion.from_payload(raw) for raw in suggestions]
        updated = reject_suggestion(records, suggestion_id)
    except (KeyError, ValueError) as exc:
        return _error(str(exc))
    return json.dumps(
        {"suggestions": [suggestion.to_payload() for suggestion in updated]},
        indent=2,
    )


@mcp_server.tool()
def health() -> str:
    """Report that the analyzer is available."""
    return json.dumps({"ok": True, "message": HEALTH_MESSAGE})


def _build_parser() -> argparse.ArgumentParser:
    """Construct the MCP server CLI parser."""
    parser = argparse.ArgumentParser(
        prog="cadence-check",
        description="Run the cadence-check MCP server on stdio.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=PACKAGE_VERSION,
        help="Show package version and exit.",
    )
    parser.add_argument(
        "-c", "--config",
        default=None,
        metavar="JSONL",
        help="Path to JSONL rule configuration. Defaults to packaged settings.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging level for stderr diagnostics.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run the cadence-check MCP server on stdio."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )
    global ACTIVE_PIPELINE
    ACTIVE_PIPELINE = Pipeline.from_jsonl(args.config)
    logger.info("loaded %d rules", len(ACTIVE_PIPELINE.rules))
    mcp_server.run()
