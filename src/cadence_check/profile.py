"""Reduce an author's reference sample to baseline rhythm statistics."""


from dataclasses import dataclass

from cadence_check.analysis import Payload, mean, population_std, split_sentences


@dataclass(frozen=True)
class StyleProfile:
    """Aggregate statistics of the author's own writing."""

    avg_sentence_length: float
    sentence_length_std: float
    comma_rate: float
    question_rate: float

    def to_payload(self) -> Payload:
        """Serialize for tool output."""
        return {
            "avgSentenceLength": self.avg_sentence_length,
            "sentenceLengthStdDev": self.sentence_length_std,
            "commaRate": self.comma_rate,
            "questionRate": self.question_rate,
        }


def build_style_profile(sample: str | None) -> StyleProfile | None:
    """Profile ``sample``, or return ``None`` when it is empty or blank.

    Rates are per sentence with at least one word; they are zero when the
    sample has no such sentence.
    """
    if not sample or not sample.strip():
        return None

    lengths = [s.word_count for s in split_sentences(sample) if s.word_count]
    measured = len(lengths)
    return StyleProfile(
        avg_sentence_length=mean(lengths),
        sentence_length_std=population_std(lengths),
        comma_rate=sample.count(",") / measured if measured else 0.0,
        question_rate=sample.count("?") / measured if measured else 0.0,
    )
