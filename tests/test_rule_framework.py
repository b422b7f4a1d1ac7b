"""Tests for the modular rule framework."""


import pytest

from cadence_check.analysis import AnalysisDocument
from cadence_check.profile import build_style_profile
from cadence_check.rules import Pipeline, Rule, RuleConfig, RuleLevel
from cadence_check.rules.sentence_level import HedgingRule, HedgingRuleConfig


def test_default_pipeline_covers_all_levels() -> None:
    """Default pipeline should include each configured rule level."""
    rules = Pipeline.from_jsonl().rules
    levels = {rule.level for rule in rules}
    assert levels == {RuleLevel.SENTENCE, RuleLevel.PASSAGE}


def test_default_pipeline_rule_tags() -> None:
    """Each default rule should emit one of the five suggestion tags."""
    names = [rule.name for rule in Pipeline.from_jsonl().rules]
    assert names == [
        "vary-sentence-length",
        "swap-predictable-phrasing",
        "add-stylistic-texture",
        "diversify-openers",
        "reduce-hedging-uniformity",
        "vary-sentence-length",
    ]


def test_rule_to_dict_from_dict_round_trip() -> None:
    """Rules should round-trip config through base serialization helpers."""
    rule = HedgingRule(HedgingRuleConfig(min_hedge_density=0.5, risk_impact=6))

    raw = rule.to_dict()
    assert raw == {"min_hedge_density": 0.5, "risk_impact": 6}

    rebuilt = HedgingRule.from_dict(raw)
    assert isinstance(rebuilt, HedgingRule)
    assert rebuilt.config == rule.config


def test_from_dict_rejects_unknown_config_fields() -> None:
    """Unexpected config keys should fail loudly."""
    with pytest.raises(TypeError):
        HedgingRule.from_dict({"min_hedge_density": 0.5, "risk_impact": 6, "x": 1})


_DEFAULT_RULES = Pipeline.from_jsonl().rules
_RULE_EXAMPLE_IDS = [
    f"{index:02d}-{rule.__class__.__name__}" for index, rule in enumerate(_DEFAULT_RULES)
]


@pytest.mark.parametrize("rule", _DEFAULT_RULES, ids=_RULE_EXAMPLE_IDS)
def test_rule_examples_match_rule_forward_behavior(rule: Rule[RuleConfig]) -> None:
    """Each rule should pass its own example matches and non-matches."""
    match_examples = rule.example_matches()
    non_match_examples = rule.example_non_matches()
    profile = build_style_profile(rule.example_style_sample())

    assert match_examples, (
        f"{rule.__class__.__name__} must define at least one match example"
    )
    assert non_match_examples, (
        f"{rule.__class__.__name__} must define at least one non-match example"
    )

    for text in match_examples:
        result = rule.forward(AnalysisDocument.from_text(text), profile)
        assert any(s.type == rule.name for s in result.suggestions), (
            f"{rule.__class__.__name__} expected a suggestion for: {text!r}"
        )
        for suggestion in result.suggestions:
            assert text[suggestion.start : suggestion.end] == suggestion.original

    for text in non_match_examples:
        result = rule.forward(AnalysisDocument.from_text(text), profile)
        assert not result.suggestions, (
            f"{rule.__class__.__name__} expected no suggestions for: {text!r}"
        )
