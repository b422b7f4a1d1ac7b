"""Sentence-level rules."""

from .hedging_rule import HedgingRule, HedgingRuleConfig
from .predictable_phrase_rule import PredictablePhraseRule, PredictablePhraseRuleConfig
from .stylistic_texture_rule import StylisticTextureRule, StylisticTextureRuleConfig

__all__ = [
    "HedgingRule",
    "HedgingRuleConfig",
    "PredictablePhraseRule",
    "PredictablePhraseRuleConfig",
    "StylisticTextureRule",
    "StylisticTextureRuleConfig",
]
