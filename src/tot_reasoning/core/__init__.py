"""Core thought data structures and pluggable prompt/scoring strategies."""

from tot_reasoning.core.node import ThoughtNode, ThoughtTree
from tot_reasoning.core.parser import BaseParser, DefaultParser
from tot_reasoning.core.evaluator import BaseEvaluator, DefaultEvaluator

__all__ = [
    "ThoughtNode",
    "ThoughtTree",
    "BaseParser",
    "DefaultParser",
    "BaseEvaluator",
    "DefaultEvaluator",
]
