"""Closed-form risk scoring over word-frequency and sentence-length statistics.

Four independent sub-scores are computed, each clamped to ``[0, 100]``:

* perplexity: low word-frequency entropy relative to vocabulary size, plus a
  single dominant word, both indicate templated repetition;
* burstiness: uniform sentence lengths (low coefficient of variation), made
  worse when the author's own sample shows more variation;
* sentence pattern diversity: repeated sentence openers;
* vocabulary predictability: function-word share, few hapaxes, and hedging.

The overall score is a fixed weighted sum of the four. Bands are taken from
the unrounded scores; reported metrics are rounded half up.
"""


import math
from collections import Counter
from dataclasses import dataclass

from cadence_check.analysis import (
    HYPERPARAMETERS,
    AnalysisDocument,
    Hyperparameters,
    Payload,
    RiskBand,
    band_for_score,
    clamp_score,
    round_score,
)
from cadence_check.profile import StyleProfile, build_style_profile

COMMON_WORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "if", "then", "that", "this",
        "it", "is", "are", "was", "were", "be", "been", "being", "to", "of",
        "in", "on", "at", "for", "with", "by", "from", "as", "about", "into",
        "through", "after", "before", "between", "because", "while", "over",
        "under", "during", "within", "without", "i", "you", "we", "they",
        "he", "she", "my", "your", "our", "their", "its", "there", "here",
        "can", "could", "would", "should", "may", "might", "do", "does",
        "did", "have", "has", "had", "more", "most", "very", "really",
    }
)

METRIC_KEYS: tuple[str, ...] = (
    "perplexity",
    "burstiness",
    "sentencePatternDiversity",
    "vocabularyPredictability",
    "overallRisk",
)


@dataclass(frozen=True)
class RiskMetrics:
    """Rounded risk scores, each an integer in ``[0, 100]``."""

    perplexity: int
    burstiness: int
    sentence_pattern_diversity: int
    vocabulary_predictability: int
    overall_risk: int

    def to_payload(self) -> Payload:
        values = (
            self.perplexity,
            self.burstiness,
            self.sentence_pattern_diversity,
            self.vocabulary_predictability,
            self.overall_risk,
        )
        return dict(zip(METRIC_KEYS, values))


@dataclass(frozen=True)
class RiskBands:
    """Per-metric band classification."""

    perplexity: RiskBand
    burstiness: RiskBand
    sentence_pattern_diversity: RiskBand
    vocabulary_predictability: RiskBand
    overall_risk: RiskBand

    def to_payload(self) -> Payload:
        values = (
            self.perplexity,
            self.burstiness,
            self.sentence_pattern_diversity,
            self.vocabulary_predictability,
            self.overall_risk,
        )
        return {key: str(band) for key, band in zip(METRIC_KEYS, values)}


@dataclass(frozen=True)
class RiskReport:
    """Scores, bands, and summary ratios for one document."""

    metrics: RiskMetrics
    bands: RiskBands
    insights: Payload
    sufficient: bool


def neutral_report(document: AnalysisDocument, hp: Hyperparameters) -> RiskReport:
    """Fixed report for inputs too small for stable statistics."""
    neutral = hp.neutral_score
    band = band_for_score(neutral, hp)
    return RiskReport(
        metrics=RiskMetrics(neutral, neutral, neutral, neutral, neutral),
        bands=RiskBands(band, band, band, band, band),
        insights={
            "wordCount": document.word_count,
            "sentenceCount": document.sentence_count,
            "note": hp.short_text_note,
        },
        sufficient=False,
    )


def perplexity_risk(words: tuple[str, ...] | list[str], hp: Hyperparameters) -> float:
    """Score low normalized entropy and a dominant repeated word."""
    frequencies = Counter(words)
    total = len(words)
    if not total:
        return 0.0
    entropy = 0.0
    for count in frequencies.values():
        p = count / total
        entropy -= p * math.log2(p)
    unique = len(frequencies)
    max_entropy = math.log2(unique) if unique > 1 else 1.0
    entropy_ratio = entropy / max_entropy
    repetition_ratio = max(frequencies.values()) / total
    return clamp_score(
        (1 - entropy_ratio) * hp.perplexity_entropy_weight
        + repetition_ratio * hp.perplexity_repetition_weight,
        hp,
    )


def burstiness_risk(
    document: AnalysisDocument,
    profile: StyleProfile | None,
    hp: Hyperparameters,
) -> float:
    """Score flat sentence-length rhythm against the author's baseline."""
    mean_length = document.sentence_length_mean
    std_length = document.sentence_length_std
    cv = std_length / mean_length if mean_length else 0.0
    score = clamp_score(hp.burstiness_base - cv * hp.burstiness_cv_weight, hp)

    if profile is not None and profile.sentence_length_std > 0:
        gap = max(0.0, profile.sentence_length_std - std_length)
        score = clamp_score(score + gap * hp.burstiness_baseline_gap_weight, hp)
    return score


def opener_ratios(document: AnalysisDocument) -> tuple[float, float]:
    """Return ``(dominant_opener_ratio, opener_diversity_ratio)``."""
    openers = [s.opener or s.first_word for s in document.sentences]
    openers = [opener for opener in openers if opener]
    if not openers:
        return 0.0, 0.0
    counts = Counter(openers)
    return max(counts.values()) / len(openers), len(counts) / len(openers)


def pattern_diversity_risk(document: AnalysisDocument, hp: Hyperparameters) -> float:
    dominant, diversity = opener_ratios(document)
    return clamp_score(
        (1 - diversity) * hp.pattern_diversity_weight
        + dominant * hp.pattern_dominance_weight,
        hp,
    )


def vocabulary_risk(document: AnalysisDocument, hp: Hyperparameters) -> float:
    """Score function-word share, hapax scarcity, and hedge density."""
    words = document.words
    if not words:
        return 0.0
    frequencies = Counter(words)
    common_ratio = sum(1 for word in words if word in COMMON_WORDS) / len(words)
    hapax_ratio = sum(1 for c in frequencies.values() if c == 1) / len(frequencies)
    score = clamp_score(
        common_ratio * hp.vocabulary_common_weight
        + (1 - hapax_ratio) * hp.vocabulary_hapax_weight,
        hp,
    )
    return clamp_score(
        score + document.hedge_density * hp.vocabulary_hedge_weight, hp
    )


def overall_risk(
    perplexity: float,
    burstiness: float,
    pattern: float,
    vocabulary: float,
    hp: Hyperparameters = HYPERPARAMETERS,
) -> float:
    """Weighted combination of the four sub-scores."""
    w_perplexity, w_burstiness, w_pattern, w_vocabulary = hp.overall_weights
    return clamp_score(
        perplexity * w_perplexity
        + burstiness * w_burstiness
        + pattern * w_pattern
        + vocabulary * w_vocabulary,
        hp,
    )


def score_document(
    document: AnalysisDocument,
    profile: StyleProfile | None = None,
    hp: Hyperparameters = HYPERPARAMETERS,
) -> RiskReport:
    """Score a segmented document, or return the neutral report if too small."""
    if not document.is_sufficient(hp):
        return neutral_report(document, hp)

    perplexity = perplexity_risk(document.words, hp)
    burstiness = burstiness_risk(document, profile, hp)
    pattern = pattern_diversity_risk(document, hp)
    vocabulary = vocabulary_risk(document, hp)
    overall = overall_risk(perplexity, burstiness, pattern, vocabulary, hp)

    dominant, _ = opener_ratios(document)
    return RiskReport(
        metrics=RiskMetrics(
            perplexity=round_score(perplexity),
            burstiness=round_score(burstiness),
            sentence_pattern_diversity=round_score(pattern),
            vocabulary_predictability=round_score(vocabulary),
            overall_risk=round_score(overall),
        ),
        bands=RiskBands(
            perplexity=band_for_score(perplexity, hp),
            burstiness=band_for_score(burstiness, hp),
            sentence_pattern_diversity=band_for_score(pattern, hp),
            vocabulary_predictability=band_for_score(vocabulary, hp),
            overall_risk=band_for_score(overall, hp),
        ),
        insights={
            "wordCount": document.word_count,
            "sentenceCount": document.sentence_count,
            "avgSentenceLength": round(document.sentence_length_mean, 1),
            "sentenceLengthStd": round(document.sentence_length_std, 1),
            "dominantOpenerRatio": round(dominant, 2),
            "hedgeDensity": round(document.hedge_density, 2),
        },
        sufficient=True,
    )


def score_text(
    text: str,
    style_sample: str | None = None,
    hp: Hyperparameters = HYPERPARAMETERS,
) -> RiskReport:
    """Segment and score ``text``; used to refresh metrics after an edit."""
    return score_document(
        AnalysisDocument.from_text(text), build_style_profile(style_sample), hp
    )
