"""Score extraction and validity checks for value replies."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any

# Leading decimal number, e.g. "7", "7.5 - solid step"
_LEADING_NUMBER = re.compile(r"^(\d+(\.\d+)?)")

DEFAULT_SCORE = 1.0
MAX_SCORE = 10.0


class BaseEvaluator(ABC):
    """Abstract base class for turning value replies into scores."""

    @abstractmethod
    def evaluate(self, evaluation: str, **options: Any) -> float:
        """Extract a numeric score from the collaborator's value reply."""

    @abstractmethod
    def status_verify(self, value: float, **options: Any) -> bool:
        """Decide whether a thought with this score stays eligible for expansion."""


class DefaultEvaluator(BaseEvaluator):
    """
    Reads a leading 0-10 number from the reply.

    Replies that do not start with a number in range score ``DEFAULT_SCORE``
    instead of raising, so an unhelpful reply only demotes the thought.

    Args:
        valid_threshold: Minimum score for a thought to count as valid
    """

    def __init__(self, valid_threshold: float = 3.0):
        self.valid_threshold = valid_threshold

    def evaluate(self, evaluation: str, **options: Any) -> float:
        match = _LEADING_NUMBER.match(evaluation)
        if match:
            score = float(match.group(1))
            if 0 <= score <= MAX_SCORE:
                return score
        return DEFAULT_SCORE

    def status_verify(self, value: float, **options: Any) -> bool:
        return value >= self.valid_threshold

    def __repr__(self) -> str:
        return f"DefaultEvaluator(valid_threshold={self.valid_threshold})"
