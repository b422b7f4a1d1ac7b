"""Shared helper functions used by multiple rule modules."""


from cadence_check.analysis import Sentence, Suggestion, capitalize_first


def split_at_first_comma(text: str) -> str | None:
    """Turn ``text`` into two sentences at its first comma.

    Returns ``None`` when there is no comma or either half would be empty.
    """
    index = text.find(",")
    if index < 0:
        return None
    left = text[:index].strip()
    right = text[index + 1 :].strip()
    if not left or not right:
        return None
    return f"{left}. {capitalize_first(right)}"


def sentence_suggestion(
    sentence: Sentence,
    *,
    rule: str,
    title: str,
    description: str,
    replacement: str,
    risk_impact: int,
) -> Suggestion:
    """Build a suggestion that rewrites a whole sentence.

    The span covers the sentence without its surrounding whitespace, so the
    spacing between sentences survives the edit. This differs from the raw
    ``Sentence.start``/``Sentence.end`` span, which includes leading whitespace.
    """
    return Suggestion(
        type=rule,
        title=title,
        description=description,
        start=sentence.content_start,
        end=sentence.content_end,
        original=sentence.text,
        replacement=replacement,
        risk_impact=risk_impact,
    )
