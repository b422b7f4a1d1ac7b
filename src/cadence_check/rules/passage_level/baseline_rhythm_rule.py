"""Restore the author's usual rhythm when a draft is flatter than their sample.

Objective: Compare the draft's sentence-length spread with the author's style
sample. When the draft varies much less, split one of its longer sentences
at the first comma.

Example Matches:
    - A draft of nine-word sentences plus one long sentence with a comma,
      checked against a sample that swings from one word to two dozen.

Example Non-Matches:
    - A draft whose own lengths already vary as much as the sample's.
    - Any draft analyzed without a style sample.

Impact: Medium; only applies when a baseline exists.
"""


from dataclasses import dataclass

from cadence_check.analysis import AnalysisDocument, RuleResult
from cadence_check.profile import StyleProfile
from cadence_check.rules.base import Rule, RuleConfig, RuleLevel
from cadence_check.rules.helpers import sentence_suggestion, split_at_first_comma

TITLE = "Match your usual rhythm"
DESCRIPTION = (
    "Compared to your style sample, this section is rhythmically uniform. "
    "Split one sentence to restore your voice."
)


@dataclass
class BaselineRhythmRuleConfig(RuleConfig):
    """Config for baseline-relative sentence length spread."""

    max_std_ratio: float
    long_sentence_margin: float
    risk_impact: int


class BaselineRhythmRule(Rule[BaselineRhythmRuleConfig]):
    """Split a long sentence when the draft is flatter than the author's baseline."""

    name = "vary-sentence-length"
    count_key = "vary-sentence-length"
    level = RuleLevel.PASSAGE

    def example_style_sample(self) -> str | None:
        return (
            "Short one. This sentence is much longer than the others because "
            "it keeps going with extra words that stretch it well past the "
            "rest of them. Tiny. Another medium sentence sits here in the "
            "middle again."
        )

    def example_matches(self) -> list[str]:
        return [
            (
                "The garden needs water every morning before the heat. "
                "Tomatoes grow best when the soil stays evenly moist. "
                "When the first frost finally arrived in late October, we "
                "covered the peppers with old sheets and hoped for the best. "
                "We pull weeds by hand on most weekends now. "
                "The beans climbed the fence faster than we expected."
            ),
        ]

    def example_non_matches(self) -> list[str]:
        return [
            (
                "Stop. Then the whole crew, tired and hungry after the long "
                "drive, finally sat down together to eat a very late dinner "
                "outside. Good."
            ),
        ]

    def forward(
        self, document: AnalysisDocument, profile: StyleProfile | None
    ) -> RuleResult:
        """Emit at most one split framed against the author's baseline."""
        if profile is None:
            return RuleResult()
        if (
            document.sentence_length_std
            >= profile.sentence_length_std * self.config.max_std_ratio
        ):
            return RuleResult()

        threshold = document.sentence_length_mean + self.config.long_sentence_margin
        for sentence in document.sentences:
            if sentence.word_count <= threshold:
                continue
            replacement = split_at_first_comma(sentence.text)
            if replacement is None:
                continue
            return RuleResult(
                suggestions=[
                    sentence_suggestion(
                        sentence,
                        rule=self.name,
                        title=TITLE,
                        description=DESCRIPTION,
                        replacement=replacement,
                        risk_impact=self.config.risk_impact,
                    )
                ],
                count_deltas={self.count_key: 1},
            )
        return RuleResult()
