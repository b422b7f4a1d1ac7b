"""Swap templated transition phrases for plainer wording.

Objective: Find stock phrases that generated prose leans on ("in conclusion",
"furthermore") and propose a more colloquial replacement for each occurrence,
keeping the capitalization of the first letter.

Example Matches:
    - "It is important to note that this works."
      Replaced with "Note that this works."
    - "Furthermore, the cache is warm."
      Replaced with "Also, the cache is warm."

Example Non-Matches:
    - "The results were clear and the team moved on."
    - "Moreover" inside a longer word such as "Moreoverly" does not match.

Impact: Low per hit; phrases are common and cheap to fix.
"""


import logging
import re
from dataclasses import dataclass

from cadence_check.analysis import (
    AnalysisDocument,
    RuleResult,
    Suggestion,
    capitalize_first,
)
from cadence_check.profile import StyleProfile
from cadence_check.rules.base import Rule, RuleConfig, RuleLevel

logger = logging.getLogger(__name__)

TITLE = "Use less templated phrasing"
DESCRIPTION = (
    "This phrase is common in generated text. "
    "A small wording swap can feel more personal."
)


@dataclass
class PredictablePhraseRuleConfig(RuleConfig):
    """Config for the phrase catalog and the candidate safety valve."""

    phrases: dict[str, str]
    candidate_cap: int
    risk_impact: int


class PredictablePhraseRule(Rule[PredictablePhraseRuleConfig]):
    """Propose a literal swap for every whole-word catalog phrase."""

    name = "swap-predictable-phrasing"
    count_key = "swap-predictable-phrasing"
    level = RuleLevel.SENTENCE

    def example_matches(self) -> list[str]:
        return [
            "It is important to note that this works.",
            "Furthermore, the cache is warm.",
        ]

    def example_non_matches(self) -> list[str]:
        return [
            "The results were clear and the team moved on.",
            "Moreoverly is not a word anyone uses.",
        ]

    def candidate_limit(self) -> int | None:
        return self.config.candidate_cap

    def forward(
        self, document: AnalysisDocument, profile: StyleProfile | None
    ) -> RuleResult:
        """Scan the catalog phrase by phrase, in catalog order."""
        _ = profile
        suggestions: list[Suggestion] = []
        for phrase, replacement in self.config.phrases.items():
            pattern = re.compile(rf"\b{re.escape(phrase)}\b", re.IGNORECASE)
            for match in pattern.finditer(document.text):
                original = match.group(0)
                suggestions.append(
                    Suggestion(
                        type=self.name,
                        title=TITLE,
                        description=DESCRIPTION,
                        start=match.start(),
                        end=match.end(),
                        original=original,
                        replacement=(
                            capitalize_first(replacement)
                            if original[:1].isupper()
                            else replacement
                        ),
                        risk_impact=self.config.risk_impact,
                    )
                )
                if len(suggestions) >= self.config.candidate_cap:
                    logger.debug(
                        "phrase scan stopped at %d candidates", len(suggestions)
                    )
                    return self._result(suggestions)

        return self._result(suggestions)

    def _result(self, suggestions: list[Suggestion]) -> RuleResult:
        return RuleResult(
            suggestions=suggestions,
            count_deltas={self.count_key: len(suggestions)} if suggestions else {},
        )
