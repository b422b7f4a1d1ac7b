"""Apply one accepted suggestion to a live document and re-derive offsets.

Accepts are applied one at a time; callers serialize them. Each call returns
a new document string and a new list of suggestion records, leaving its
inputs untouched.

Suggestions after the edit shift by the length delta. Suggestions that
overlap the edited region keep their old coordinates and are stale until the
next full analysis; ``span_is_current`` reports which ones still line up.
"""


import logging
from dataclasses import replace

from cadence_check.analysis import Suggestion, SuggestionStatus
from cadence_check.errors import StaleSpanError

logger = logging.getLogger(__name__)


def span_is_current(document: str, suggestion: Suggestion) -> bool:
    """Return whether the suggestion's coordinates still address its text."""
    return (
        0 <= suggestion.start < suggestion.end <= len(document)
        and document[suggestion.start : suggestion.end] == suggestion.original
    )


def locate_span(document: str, suggestion: Suggestion) -> tuple[int, int]:
    """Find where ``suggestion.original`` sits in ``document``.

    Tries the recorded span, then the first literal occurrence, then the first
    occurrence of the whitespace-trimmed text.

    Raises:
        StaleSpanError: if none of the lookups succeed.
    """
    if span_is_current(document, suggestion):
        return suggestion.start, suggestion.end

    original = suggestion.original
    if original:
        found = document.find(original)
        if found >= 0:
            logger.debug("relocated %s from %d to %d", suggestion.id, suggestion.start, found)
            return found, found + len(original)

    compact = original.strip()
    if compact:
        found = document.find(compact)
        if found >= 0:
            logger.debug("relocated trimmed %s to %d", suggestion.id, found)
            return found, found + len(compact)

    logger.warning("suggestion %s is stale", suggestion.id)
    raise StaleSpanError(suggestion.id)


def _find(suggestions: list[Suggestion], suggestion_id: str) -> Suggestion:
    for suggestion in suggestions:
        if suggestion.id == suggestion_id:
            return suggestion
    raise KeyError(f"Unknown suggestion id '{suggestion_id}'")


def _require_pending(suggestion: Suggestion) -> None:
    if suggestion.status is not SuggestionStatus.PENDING:
        raise ValueError(
            f"Suggestion {suggestion.id} is already {suggestion.status}"
        )


def apply_suggestion(
    document: str, suggestions: list[Suggestion], suggestion_id: str
) -> tuple[str, list[Suggestion]]:
    """Splice one pending suggestion into ``document``.

    Returns the new document and the reconciled suggestion list. The accepted
    suggestion's span is moved onto its replacement text; every other
    suggestion starting at or after the end of the edited span shifts by the
    length delta.

    Raises:
        KeyError: if no suggestion has ``suggestion_id``.
        ValueError: if the suggestion is not pending.
        StaleSpanError: if its text cannot be located.
    """
    target = _find(suggestions, suggestion_id)
    _require_pending(target)

    start, end = locate_span(document, target)
    replacement = target.replacement
    updated = document[:start] + replacement + document[end:]
    delta = len(replacement) - (end - start)

    reconciled: list[Suggestion] = []
    for suggestion in suggestions:
        if suggestion.id == suggestion_id:
            reconciled.append(
                replace(
                    suggestion,
                    start=start,
                    end=start + len(replacement),
                    status=SuggestionStatus.ACCEPTED,
                )
            )
        elif suggestion.start >= end:
            reconciled.append(
                replace(
                    suggestion,
                    start=suggestion.start + delta,
                    end=suggestion.end + delta,
                )
            )
        else:
            reconciled.append(suggestion)
    return updated, reconciled


def reject_suggestion(
    suggestions: list[Suggestion], suggestion_id: str
) -> list[Suggestion]:
    """Mark one pending suggestion rejected; the document is unchanged."""
    target = _find(suggestions, suggestion_id)
    _require_pending(target)
    return [
        s.with_status(SuggestionStatus.REJECTED) if s.id == suggestion_id else s
        for s in suggestions
    ]
