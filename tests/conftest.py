"""Pytest configuration and fixtures."""

import json
import re

import pytest

from tot_reasoning.config import ThoughtSolverConfig
from tot_reasoning.llm import LLMProvider
from tot_reasoning.utils.logging import set_verbosity


_PROPOSE_STATE = re.compile(r'Given the current state of reasoning: "(.*)", generate', re.S)
_VALUE_THOUGHT = re.compile(r'Thought [^\n]*?: "(.*)"\nProvide', re.S)


def fenced(thoughts) -> str:
    """Render thought names as a propose reply with a fenced JSON array."""
    payload = [
        {"node_id": str(i), "node_state_instruction": name}
        for i, name in enumerate(thoughts, 1)
    ]
    return "Here are my proposals:\n```json\n" + json.dumps(payload) + "\n```\n"


class ScriptedLLM(LLMProvider):
    """
    Deterministic collaborator for tests.

    Propose prompts are answered by ``propose(state)`` (a list of thought
    names, or a raw reply string); value prompts by ``score(thought)``
    (the raw reply text). Either callable may raise to simulate failures.
    """

    def __init__(self, propose=None, score=None, n_children: int = 2):
        self.propose = propose or (
            lambda state: [f"{state} -> t{i}" for i in range(1, n_children + 1)]
        )
        self.score = score or (lambda thought: "5 - a reasonable step")
        self.calls = []

    @property
    def propose_calls(self):
        return [p for p in self.calls if not p.startswith("Evaluate the following thought")]

    @property
    def value_calls(self):
        return [p for p in self.calls if p.startswith("Evaluate the following thought")]

    async def chat(self, prompt: str) -> str:
        self.calls.append(prompt)

        if prompt.startswith("Evaluate the following thought"):
            match = _VALUE_THOUGHT.search(prompt)
            return self.score(match.group(1) if match else "")

        match = _PROPOSE_STATE.search(prompt)
        reply = self.propose(match.group(1) if match else "")
        return reply if isinstance(reply, str) else fenced(reply)


class FixedRandom:
    """Stand-in for random.Random that always draws the same number."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep test output free of progress logging."""
    set_verbosity("silent")
    yield
    set_verbosity("normal")


@pytest.fixture
def scripted_llm() -> ScriptedLLM:
    """Collaborator proposing two children per expansion, each scoring 5."""
    return ScriptedLLM()


@pytest.fixture
def solver_config() -> ThoughtSolverConfig:
    """Small search budget for fast tests."""
    return ThoughtSolverConfig(
        max_steps=2,
        n_generate_sample=2,
        n_select_sample=2,
    )
