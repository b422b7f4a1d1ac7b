"""Detect repeated sentence openers and vary a couple of them.

Objective: Group sentences by their first word. When one first word starts
several sentences, prefix the second and third of them with a lead-in chosen
from the opener itself.

Example Matches:
    - "This plan is simple. This plan is cheap. This plan is fast."
      The later two sentences gain an "In this case," lead-in.

Example Non-Matches:
    - "This plan is simple. This plan is cheap. Nobody objected."
      Only two sentences share an opener.

Impact: Medium; repeated openers drive the pattern-diversity score.
"""


import re
from dataclasses import dataclass

from cadence_check.analysis import AnalysisDocument, RuleResult, lower_first
from cadence_check.profile import StyleProfile
from cadence_check.rules.base import Rule, RuleConfig, RuleLevel
from cadence_check.rules.helpers import sentence_suggestion

TITLE = "Diversify repetitive sentence starts"


@dataclass
class OpenerRepetitionRuleConfig(RuleConfig):
    """Config for repeated first-word detection and lead-in selection."""

    min_repeats: int
    max_rewrites: int
    lead_ins: dict[str, str]
    default_lead_in: str
    risk_impact: int


class OpenerRepetitionRule(Rule[OpenerRepetitionRuleConfig]):
    """Rewrite later sentences that reuse a common first word."""

    name = "diversify-openers"
    count_key = "diversify-openers"
    level = RuleLevel.PASSAGE

    def example_matches(self) -> list[str]:
        return [
            "This plan is simple. This plan is cheap. This plan is fast.",
            "Users asked for export. Users asked for import. Users asked for sync.",
        ]

    def example_non_matches(self) -> list[str]:
        return [
            "This plan is simple. This plan is cheap. Nobody objected.",
        ]

    def _lead_in(self, text: str) -> str:
        for word, lead_in in self.config.lead_ins.items():
            if re.match(rf"{re.escape(word)}\b", text, re.IGNORECASE):
                return lead_in
        return self.config.default_lead_in

    def forward(
        self, document: AnalysisDocument, profile: StyleProfile | None
    ) -> RuleResult:
        """Prefix the repeated occurrences of each overused first word."""
        _ = profile
        groups: dict[str, list] = {}
        for sentence in document.sentences:
            if sentence.first_word:
                groups.setdefault(sentence.first_word, []).append(sentence)

        suggestions = []
        for word, sentences in groups.items():
            if len(sentences) < self.config.min_repeats:
                continue
            for sentence in sentences[1 : 1 + self.config.max_rewrites]:
                lead_in = self._lead_in(sentence.text)
                suggestions.append(
                    sentence_suggestion(
                        sentence,
                        rule=self.name,
                        title=TITLE,
                        description=(
                            f'Several sentences start with "{word}". Varying one '
                            "opener reduces structural repetition."
                        ),
                        replacement=f"{lead_in} {lower_first(sentence.text)}",
                        risk_impact=self.config.risk_impact,
                    )
                )

        return RuleResult(
            suggestions=suggestions,
            count_deltas={self.count_key: len(suggestions)} if suggestions else {},
        )
