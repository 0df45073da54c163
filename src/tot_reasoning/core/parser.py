"""
Prompt builders for thought generation and scoring.

A parser produces the three prompt shapes the solvers need:

- propose: ask for N diverse candidate next thoughts
- sample: ask for a single continuation (no shipped solver issues it yet)
- value: ask for a 0-10 score of one thought with a short justification

Substitute your own BaseParser subclass through ``ThoughtSolverConfig.parser``
to phrase prompts for a specific domain.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BaseParser(ABC):
    """Abstract base class for prompt builders."""

    @abstractmethod
    def propose(self, current_state: str, **options: Any) -> str:
        """
        Build a prompt asking for candidate next thoughts.

        Args:
            current_state: The reasoning state to continue from
            **options: ``n_generate_sample`` is the number of candidates wanted

        Returns:
            Prompt text for the collaborator
        """

    @abstractmethod
    def sample(self, current_state: str, **options: Any) -> str:
        """Build a prompt asking for one likely-productive continuation."""

    @abstractmethod
    def value(self, thought: str, **options: Any) -> str:
        """
        Build a prompt asking for a 0-10 score of ``thought``.

        Args:
            thought: The thought text to score
            **options: ``node_id`` labels the thought in the prompt
        """


class DefaultParser(BaseParser):
    """General-purpose prompts with no domain knowledge."""

    def propose(self, current_state: str, **options: Any) -> str:
        n_generate_sample = options.get("n_generate_sample") or 5
        return (
            f'Given the current state of reasoning: "{current_state}", generate '
            f"{n_generate_sample} possible next steps or thoughts that could lead to a "
            "solution. Be diverse and creative in your proposals."
        )

    def sample(self, current_state: str, **options: Any) -> str:
        return (
            f'Given the current state of reasoning: "{current_state}", provide a sample '
            "continuation or next thought that is most likely to be productive."
        )

    def value(self, thought: str, **options: Any) -> str:
        node_id = options.get("node_id", "")
        return (
            "Evaluate the following thought on a scale from 0 to 10, where 0 is completely "
            "irrelevant or incorrect and 10 is extremely valuable and directly leads to "
            "solving the problem.\n"
            f'Thought {node_id}: "{thought}"\n'
            "Provide your evaluation as a single number followed by a brief explanation."
        )
