"""Core analysis models, segmentation, and shared math helpers for cadence-check."""


import math
import re
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Mapping, TypeAlias

Counts: TypeAlias = dict[str, int]
Payload: TypeAlias = dict[str, object]


@dataclass(frozen=True)
class Hyperparameters:
    """Tunable thresholds, coefficients, and caps used by the analyzer."""

    min_word_count: int = 20
    min_sentence_count: int = 2
    neutral_score: int = 50
    short_text_note: str = (
        "Add more text for a stronger signal. "
        "Roughly 120+ words gives better stability."
    )
    max_text_chars: int = 120_000

    perplexity_entropy_weight: float = 85.0
    perplexity_repetition_weight: float = 45.0
    burstiness_base: float = 92.0
    burstiness_cv_weight: float = 125.0
    burstiness_baseline_gap_weight: float = 3.5
    pattern_diversity_weight: float = 70.0
    pattern_dominance_weight: float = 55.0
    vocabulary_common_weight: float = 120.0
    vocabulary_hapax_weight: float = 30.0
    vocabulary_hedge_weight: float = 12.0

    overall_weights: tuple[float, float, float, float] = (0.28, 0.24, 0.22, 0.26)

    max_suggestions: int = 20

    score_min: int = 0
    score_max: int = 100
    band_low_max: int = 35
    band_moderate_max: int = 65


HYPERPARAMETERS = Hyperparameters()


class RiskBand(StrEnum):
    """Three-way classification of a risk score."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class SuggestionStatus(StrEnum):
    """Lifecycle of a suggestion; never returns to ``pending``."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


HEDGE_WORDS: tuple[str, ...] = (
    "may",
    "might",
    "could",
    "perhaps",
    "possibly",
    "generally",
    "typically",
    "often",
    "somewhat",
    "largely",
    "arguably",
    "relatively",
)
HEDGE_RE = re.compile(r"\b(?:" + "|".join(HEDGE_WORDS) + r")\b", re.IGNORECASE)

# Regex boundary heuristic: abbreviations, decimals and ellipses mis-split.
_SENTENCE_RE = re.compile(r"[^.!?\n]+[.!?]?")
_WORD_RE = re.compile(r"\w+(?:['\u2019]\w+)*")
_NON_WORD_CHARS_RE = re.compile(r"[^a-z']")


def tokenize_words(text: str) -> list[str]:
    """Return lowercase word tokens stripped to ``[a-z']``, dropping empties."""
    tokens: list[str] = []
    for match in _WORD_RE.finditer(text):
        token = _NON_WORD_CHARS_RE.sub("", match.group(0).lower())
        if token:
            tokens.append(token)
    return tokens


@dataclass(frozen=True)
class Sentence:
    """One regex-delimited sentence with offsets into the source text."""

    index: int
    start: int
    end: int
    raw: str
    text: str
    word_count: int
    opener: str
    first_word: str

    @property
    def content_start(self) -> int:
        """Offset of the first non-whitespace character of the sentence."""
        return self.start + (len(self.raw) - len(self.raw.lstrip()))

    @property
    def content_end(self) -> int:
        """Offset just past the last non-whitespace character."""
        return self.content_start + len(self.text)


def split_sentences(text: str) -> list[Sentence]:
    """Split text on ``. ! ? \\n`` keeping the raw offsets of each span."""
    sentences: list[Sentence] = []
    for match in _SENTENCE_RE.finditer(text):
        raw = match.group(0)
        normalized = raw.strip()
        if not normalized:
            continue
        words = tokenize_words(normalized)
        sentences.append(
            Sentence(
                index=len(sentences),
                start=match.start(),
                end=match.end(),
                raw=raw,
                text=normalized,
                word_count=len(words),
                opener=" ".join(words[:2]),
                first_word=words[0] if words else "",
            )
        )
    return sentences


def segment(text: str) -> tuple[list[Sentence], list[str]]:
    """Return the sentence records and global word stream for ``text``."""
    return split_sentences(text), tokenize_words(text)


@dataclass(frozen=True)
class AnalysisDocument:
    """Precomputed text views consumed by the scorer and suggestion rules."""

    text: str
    sentences: tuple[Sentence, ...]
    words: tuple[str, ...]
    sentence_word_counts: tuple[int, ...]
    hedge_count: int

    @classmethod
    def from_text(cls, text: str) -> "AnalysisDocument":
        """Build a document with sentence, word, and hedge projections."""
        sentences, words = segment(text)
        return cls(
            text=text,
            sentences=tuple(sentences),
            words=tuple(words),
            sentence_word_counts=tuple(s.word_count for s in sentences),
            hedge_count=len(HEDGE_RE.findall(text)),
        )

    @property
    def word_count(self) -> int:
        return len(self.words)

    @property
    def sentence_count(self) -> int:
        return len(self.sentences)

    @property
    def sentence_lengths(self) -> list[int]:
        """Word counts of sentences that contain at least one word."""
        return [count for count in self.sentence_word_counts if count]

    @property
    def sentence_length_mean(self) -> float:
        return mean(self.sentence_lengths)

    @property
    def sentence_length_std(self) -> float:
        return population_std(self.sentence_lengths)

    @property
    def hedge_density(self) -> float:
        """Hedge-word matches per sentence."""
        return self.hedge_count / max(1, self.sentence_count)

    def is_sufficient(self, hp: Hyperparameters) -> bool:
        """Return whether frequency statistics are stable enough to score."""
        return (
            self.word_count >= hp.min_word_count
            and self.sentence_count >= hp.min_sentence_count
        )


@dataclass(frozen=True)
class Suggestion:
    """Literal, offset-addressed edit proposed by a rule."""

    type: str
    title: str
    description: str
    start: int
    end: int
    original: str
    replacement: str
    risk_impact: int
    id: str = ""
    status: SuggestionStatus = SuggestionStatus.PENDING

    def is_valid_span(self) -> bool:
        return 0 <= self.start < self.end

    def with_status(self, status: SuggestionStatus) -> "Suggestion":
        return replace(self, status=status)

    def to_payload(self) -> Payload:
        """Serialize for tool output using the editor-facing key names."""
        return {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "description": self.description,
            "start": self.start,
            "end": self.end,
            "original": self.original,
            "replacement": self.replacement,
            "riskImpact": self.risk_impact,
            "status": str(self.status),
        }

    @classmethod
    def from_payload(cls, raw: Mapping[str, object]) -> "Suggestion":
        """Rebuild a suggestion from the payload shape produced by ``to_payload``."""
        return cls(
            id=str(raw["id"]),
            type=str(raw["type"]),
            title=str(raw.get("title", "")),
            description=str(raw.get("description", "")),
            start=int(raw["start"]),  # type: ignore[call-overload]
            end=int(raw["end"]),  # type: ignore[call-overload]
            original=str(raw["original"]),
            replacement=str(raw["replacement"]),
            risk_impact=int(raw.get("riskImpact", 0)),  # type: ignore[call-overload]
            status=SuggestionStatus(raw.get("status", SuggestionStatus.PENDING)),
        )


@dataclass
class RuleResult:
    """Output payload emitted by a single rule invocation."""

    suggestions: list[Suggestion] = field(default_factory=list)
    count_deltas: Counts = field(default_factory=dict)


@dataclass(frozen=True)
class AnalysisState:
    """Immutable accumulator carrying merged rule output."""

    suggestions: tuple[Suggestion, ...]
    counts: Counts

    @classmethod
    def initial(cls) -> "AnalysisState":
        return cls(suggestions=(), counts={})

    def merge(self, result: RuleResult, limit: int | None = None) -> "AnalysisState":
        """Merge one rule result into a new state instance.

        Candidates with an empty or negative span are dropped. When ``limit``
        is given, the merged state never holds more than ``limit`` suggestions
        unless it already did before this merge.
        """
        accepted = [s for s in result.suggestions if s.is_valid_span()]
        if limit is not None:
            accepted = accepted[: max(0, limit - len(self.suggestions))]

        merged_counts = dict(self.counts)
        for key, delta in result.count_deltas.items():
            if delta:
                merged_counts[key] = merged_counts.get(key, 0) + delta

        return AnalysisState(
            suggestions=self.suggestions + tuple(accepted),
            counts=merged_counts,
        )


def mean(values: list[int] | list[float]) -> float:
    """Arithmetic mean; zero for an empty sequence."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def population_std(values: list[int] | list[float]) -> float:
    """Population standard deviation; zero for fewer than two values."""
    if len(values) <= 1:
        return 0.0
    center = mean(values)
    variance = sum((value - center) ** 2 for value in values) / len(values)
    return math.sqrt(variance)


def clamp_score(value: float, hp: Hyperparameters = HYPERPARAMETERS) -> float:
    """Clamp a raw score into ``[score_min, score_max]``."""
    return max(float(hp.score_min), min(float(hp.score_max), value))


def round_score(value: float) -> int:
    """Round half up, matching the scores shown in the editor."""
    return int(math.floor(value + 0.5))


def band_for_score(score: float, hp: Hyperparameters = HYPERPARAMETERS) -> RiskBand:
    """Map a numeric score into its risk band."""
    if score < hp.band_low_max:
        return RiskBand.LOW
    if score < hp.band_moderate_max:
        return RiskBand.MODERATE
    return RiskBand.HIGH


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def lower_first(text: str) -> str:
    return text[:1].lower() + text[1:]
