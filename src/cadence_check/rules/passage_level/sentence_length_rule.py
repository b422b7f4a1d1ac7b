"""Split one sentence inside a run of near-identical sentence lengths.

Objective: Slide a window over consecutive sentences and, where their word
counts barely vary, propose splitting the long middle sentence at its first
comma so the passage regains some rhythm.

Example Matches:
    - Three neighbouring sentences of roughly twenty words each, the middle
      one joined by a comma. It is split into two shorter sentences.

Example Non-Matches:
    - Three similar sentences of about ten words. The middle sentence is too
      short to be worth splitting.
    - A passage that already alternates short and long sentences.

Impact: Medium; uniform cadence is one of the stronger burstiness signals.
"""


from dataclasses import dataclass

from cadence_check.analysis import AnalysisDocument, RuleResult, population_std
from cadence_check.profile import StyleProfile
from cadence_check.rules.base import Rule, RuleConfig, RuleLevel
from cadence_check.rules.helpers import sentence_suggestion, split_at_first_comma

TITLE = "Vary sentence length in this run"
DESCRIPTION = (
    "These nearby sentences have very similar length. "
    "Splitting this one adds natural rhythm."
)


@dataclass
class SentenceLengthRuleConfig(RuleConfig):
    """Config for sliding-window sentence length uniformity."""

    window_size: int
    max_window_std: float
    min_split_words: int
    risk_impact: int


class SentenceLengthRule(Rule[SentenceLengthRuleConfig]):
    """Propose a comma split inside runs of uniform sentence length."""

    name = "vary-sentence-length"
    count_key = "vary-sentence-length"
    level = RuleLevel.PASSAGE

    def example_matches(self) -> list[str]:
        return [
            (
                "The team reviewed every open ticket on Monday morning and then "
                "sorted the remaining work by customer impact and urgency. "
                "After lunch the engineers paired on the billing fix, and they "
                "wrote new tests for the refund path before shipping the patch. "
                "By the end of the week the support queue was shorter than it "
                "had been at any point since the spring launch."
            ),
        ]

    def example_non_matches(self) -> list[str]:
        return [
            (
                "We met at nine to plan the launch. "
                "The demo, which ran long, covered the new search page. "
                "Everyone left with a short list of next steps."
            ),
            (
                "Stop. Then the whole crew, tired and hungry after the long "
                "drive, finally sat down together to eat a very late dinner "
                "outside. Good."
            ),
        ]

    def forward(
        self, document: AnalysisDocument, profile: StyleProfile | None
    ) -> RuleResult:
        """Scan each window and split its middle sentence when lengths are flat."""
        _ = profile
        size = self.config.window_size
        sentences = document.sentences
        suggestions = []
        for start in range(len(sentences) - size + 1):
            window = sentences[start : start + size]
            lengths = [sentence.word_count for sentence in window]
            if population_std(lengths) > self.config.max_window_std:
                continue
            target = window[size // 2]
            if target.word_count <= self.config.min_split_words:
                continue
            replacement = split_at_first_comma(target.text)
            if replacement is None:
                continue
            suggestions.append(
                sentence_suggestion(
                    target,
                    rule=self.name,
                    title=TITLE,
                    description=DESCRIPTION,
                    replacement=replacement,
                    risk_impact=self.config.risk_impact,
                )
            )

        return RuleResult(
            suggestions=suggestions,
            count_deltas={self.count_key: len(suggestions)} if suggestions else {},
        )
