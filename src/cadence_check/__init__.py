"""Public package interface for cadence-check."""

from .cli import cli_main
from .server import (
    HYPERPARAMETERS,
    _accept,
    _analyze,
    accept_suggestion,
    analyze_prose,
    health,
    main,
)

__all__ = [
    "HYPERPARAMETERS",
    "_accept",
    "_analyze",
    "accept_suggestion",
    "analyze_prose",
    "cli_main",
    "health",
    "main",
]
