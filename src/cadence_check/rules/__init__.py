"""Rule framework exports."""

from .base import Rule, RuleConfig, RuleLevel
from .pipeline import Pipeline
from .registry import RuleList

__all__ = [
    "Pipeline",
    "Rule",
    "RuleConfig",
    "RuleLevel",
    "RuleList",
]
