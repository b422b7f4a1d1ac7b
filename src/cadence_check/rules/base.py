"""Shared base types for suggestion rule definitions."""


from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from enum import StrEnum
from typing import Generic, Mapping, TypeVar, cast, get_args, get_origin

from cadence_check.analysis import AnalysisDocument, RuleResult
from cadence_check.profile import StyleProfile


class RuleLevel(StrEnum):
    """Hierarchy grouping used to organize rule modules."""

    SENTENCE = "sentence"
    PASSAGE = "passage"


@dataclass
class RuleConfig:
    """Base config container inherited by concrete rule configs."""

    def to_dict(self) -> dict[str, object]:
        """Serialize the config dataclass to a plain dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(
        cls: type["ConfigFromDictT"], raw: Mapping[str, object]
    ) -> "ConfigFromDictT":
        """Instantiate a config dataclass from a plain dictionary."""
        return cls(**dict(raw))


ConfigT = TypeVar("ConfigT", bound=RuleConfig)
ConfigFromDictT = TypeVar("ConfigFromDictT", bound=RuleConfig)
RuleFromDictT = TypeVar("RuleFromDictT", bound="Rule[RuleConfig]")


class Rule(ABC, Generic[ConfigT]):
    """Base rule class exposing a forward pass that proposes text edits."""

    name: str = "rule"
    count_key: str = "rule"
    level: RuleLevel = RuleLevel.PASSAGE

    def __init__(self, config: ConfigT) -> None:
        """Initialize a rule with explicit configuration."""
        self.config = config

    def to_dict(self) -> dict[str, object]:
        """Serialize this rule's config as a plain dictionary."""
        return self.config.to_dict()

    @classmethod
    def from_dict(
        cls: type["RuleFromDictT"], raw: Mapping[str, object]
    ) -> "RuleFromDictT":
        """Instantiate a rule from a plain config dictionary."""
        config_type = cls._resolve_config_type()
        config = config_type.from_dict(raw)
        return cls(config)

    @classmethod
    def _resolve_config_type(cls) -> type[RuleConfig]:
        """Infer the concrete config type from ``Rule[Config]`` inheritance."""
        for base in getattr(cls, "__orig_bases__", ()):
            if get_origin(base) is Rule:
                args = get_args(base)
                if len(args) != 1:
                    break
                config_type = args[0]
                if isinstance(config_type, type) and issubclass(
                    config_type, RuleConfig
                ):
                    return cast(type[RuleConfig], config_type)
                break
        raise TypeError(
            f"Could not infer config type for rule class {cls.__name__}. "
            "Ensure it subclasses Rule[ConcreteConfig]."
        )

    def candidate_limit(self) -> int | None:
        """Running candidate count at which the pipeline stops taking this rule's output."""
        return None

    @abstractmethod
    def forward(
        self, document: AnalysisDocument, profile: StyleProfile | None
    ) -> RuleResult:
        """Apply the rule and return suggestions and counter deltas."""

    @abstractmethod
    def example_matches(self) -> list[str]:
        """Return text samples that should produce a suggestion."""

    @abstractmethod
    def example_non_matches(self) -> list[str]:
        """Return text samples that should produce no suggestion."""

    def example_style_sample(self) -> str | None:
        """Return the author sample the examples are evaluated against."""
        return None
