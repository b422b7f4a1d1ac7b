"""Thin out hedging when it appears in sentence after sentence.

Objective: Once hedge words ("may", "perhaps", "typically") average at least
one per two sentences, propose dropping the first hedge in every hedged
sentence.

Example Matches:
    - "This may help. It could also fail."
      Each sentence loses its first hedge.

Example Non-Matches:
    - "The bridge opened on time. Traffic moved well across it all day."
      No hedges at all.
    - One "perhaps" across four sentences stays below the density gate.

Impact: Low to medium; removes the uniform qualifier pattern.
"""


import re
from dataclasses import dataclass

from cadence_check.analysis import HEDGE_RE, AnalysisDocument, RuleResult
from cadence_check.profile import StyleProfile
from cadence_check.rules.base import Rule, RuleConfig, RuleLevel
from cadence_check.rules.helpers import sentence_suggestion

_MULTI_SPACE_RE = re.compile(r"\s{2,}")

TITLE = "Reduce repetitive hedging"
DESCRIPTION = "Hedging is useful, but too much in every sentence can look algorithmic."


@dataclass
class HedgingRuleConfig(RuleConfig):
    """Config for the hedge density gate."""

    min_hedge_density: float
    risk_impact: int


def remove_first_hedge(text: str) -> str:
    """Drop the first hedge word in ``text`` and collapse the leftover spacing."""
    stripped = HEDGE_RE.sub("", text, count=1)
    return _MULTI_SPACE_RE.sub(" ", stripped).strip()


class HedgingRule(Rule[HedgingRuleConfig]):
    """Remove the first hedge word from every hedged sentence."""

    name = "reduce-hedging-uniformity"
    count_key = "reduce-hedging-uniformity"
    level = RuleLevel.SENTENCE

    def example_matches(self) -> list[str]:
        return [
            "This may help. It could also fail.",
        ]

    def example_non_matches(self) -> list[str]:
        return [
            "The bridge opened on time. Traffic moved well across it all day.",
            (
                "Perhaps we start early. The crew arrives at six. "
                "Coffee is ready by then. Work begins at seven."
            ),
        ]

    def forward(
        self, document: AnalysisDocument, profile: StyleProfile | None
    ) -> RuleResult:
        """Emit one cleanup per hedged sentence when hedging is dense."""
        _ = profile
        if document.hedge_density < self.config.min_hedge_density:
            return RuleResult()

        suggestions = []
        for sentence in document.sentences:
            if HEDGE_RE.search(sentence.text) is None:
                continue
            replacement = remove_first_hedge(sentence.text)
            if not replacement or replacement == sentence.text:
                continue
            suggestions.append(
                sentence_suggestion(
                    sentence,
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
