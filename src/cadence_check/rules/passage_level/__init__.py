"""Passage-level rules."""

from .baseline_rhythm_rule import BaselineRhythmRule, BaselineRhythmRuleConfig
from .opener_rule import OpenerRepetitionRule, OpenerRepetitionRuleConfig
from .sentence_length_rule import SentenceLengthRule, SentenceLengthRuleConfig

__all__ = [
    "BaselineRhythmRule",
    "BaselineRhythmRuleConfig",
    "OpenerRepetitionRule",
    "OpenerRepetitionRuleConfig",
    "SentenceLengthRule",
    "SentenceLengthRuleConfig",
]
