"""Pattern classification for a one-dimensional cellular automaton."""

from .classifier import MAX_DEPTH, Detection, classify, detect
from .config import ClassifyConfig, GenerateConfig, RunConfig
from .pattern import Pattern
from .row import Row

__all__ = [
    "MAX_DEPTH",
    "ClassifyConfig",
    "Detection",
    "GenerateConfig",
    "Pattern",
    "Row",
    "RunConfig",
    "classify",
    "detect",
]
