"""Add a small parenthetical aside to prose with no punctuation texture.

Objective: Polished generated prose rarely uses parentheses, questions,
semicolons, or colons. When a draft has none of them (or the author's sample
is comma-heavy), insert a short aside into the first long sentence.

Example Matches:
    - A single twenty-word declarative sentence with only commas and a period.

Example Non-Matches:
    - "Did it work? We think so; the numbers moved in the right direction."
      The draft already has questions and semicolons.

Impact: Low; one suggestion per draft at most.
"""


from dataclasses import dataclass

from cadence_check.analysis import AnalysisDocument, RuleResult
from cadence_check.profile import StyleProfile
from cadence_check.rules.base import Rule, RuleConfig, RuleLevel
from cadence_check.rules.helpers import sentence_suggestion

TITLE = "Add a small human-style aside"
DESCRIPTION = (
    "A brief parenthetical can make polished writing feel more naturally human."
)


@dataclass
class StylisticTextureRuleConfig(RuleConfig):
    """Config for texture detection and aside insertion."""

    texture_chars: str
    min_words: int
    insert_after: int
    aside: str
    comma_rate_threshold: float
    risk_impact: int


class StylisticTextureRule(Rule[StylisticTextureRuleConfig]):
    """Insert an aside into the first long sentence of a texture-free draft."""

    name = "add-stylistic-texture"
    count_key = "add-stylistic-texture"
    level = RuleLevel.SENTENCE

    def example_matches(self) -> list[str]:
        return [
            (
                "We shipped the new onboarding flow last week and the early "
                "numbers look better than anyone on the team expected."
            ),
        ]

    def example_non_matches(self) -> list[str]:
        return [
            "Did it work? We think so; the numbers moved in the right direction.",
            "Short lines only. Nothing long enough here.",
        ]

    def _applies(self, document: AnalysisDocument, profile: StyleProfile | None) -> bool:
        has_texture = any(char in document.text for char in self.config.texture_chars)
        comma_heavy = (
            profile is not None
            and profile.comma_rate > self.config.comma_rate_threshold
        )
        return not has_texture or comma_heavy

    def forward(
        self, document: AnalysisDocument, profile: StyleProfile | None
    ) -> RuleResult:
        """Rewrite the first qualifying sentence with the aside inserted."""
        if not self._applies(document, profile):
            return RuleResult()

        for sentence in document.sentences:
            if sentence.word_count < self.config.min_words or "(" in sentence.text:
                continue
            words = sentence.text.split()
            words.insert(min(self.config.insert_after, len(words)), self.config.aside)
            return RuleResult(
                suggestions=[
                    sentence_suggestion(
                        sentence,
                        rule=self.name,
                        title=TITLE,
                        description=DESCRIPTION,
                        replacement=" ".join(words),
                        risk_impact=self.config.risk_impact,
                    )
                ],
                count_deltas={self.count_key: 1},
            )
        return RuleResult()
