"""
Shared generate -> evaluate -> select driver for all search strategies.

Every strategy repeats the same three primitives against the thought tree:

1. GENERATE: one propose call to the collaborator; the reply must carry a
   fenced JSON array of ``{"node_id", "node_state_instruction"}`` objects,
   which become children of the node being expanded
2. EVALUATE: one value call per child; the evaluator turns the reply into a
   score and a validity verdict
3. SELECT: keep a subset of the valid children, greedily or by weighted
   random draws

Failures inside generate/evaluate are contained: a bad propose reply ends
that branch, a failed evaluation marks the node invalid. Collaborator calls
are awaited one at a time.
"""

from __future__ import annotations

import json
import random
import re
from abc import ABC, abstractmethod
from typing import Any, List, Tuple

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from tot_reasoning.config import MethodSelect, ThoughtSolverConfig
from tot_reasoning.core.node import ThoughtNode, ThoughtTree
from tot_reasoning.exceptions import EvaluationError, GenerationParseError
from tot_reasoning.llm import LLMProvider
from tot_reasoning.utils.logging import LogLevel, get_logger, log_evaluation, log_event


OUTPUT_FORMAT = """
Each output should be strictly a list of nodes, in json format, like this:
```json
    [
        {
            "node_id": str = "unique identifier for a solution, can be an ordinal",
            "node_state_instruction": "specified sample of solution",
        },
        ...
    ]
```
"""

_FENCED_JSON = re.compile(r"```json\s*([\s\S]*?)\s*```")


class ThoughtProposal(BaseModel):
    """One candidate thought as returned by a propose reply."""
    node_id: str
    node_state_instruction: str

    model_config = ConfigDict(coerce_numbers_to_str=True)


_PROPOSALS = TypeAdapter(List[ThoughtProposal])


def parse_proposals(response: str, limit: int | None = None) -> List[dict]:
    """
    Extract proposed thoughts from a propose reply.

    Args:
        response: Raw collaborator reply
        limit: Keep at most this many proposals

    Returns:
        ``{"node_id", "node_state_instruction"}`` dicts in reply order

    Raises:
        GenerationParseError: No fenced ``json`` block, invalid JSON, not an
            array, or an element missing a required field
    """
    match = _FENCED_JSON.search(response)
    if not match or not match.group(1):
        raise GenerationParseError("no fenced JSON block in propose reply")

    try:
        data = json.loads(match.group(1))
    except json.JSONDecodeError as e:
        raise GenerationParseError(f"invalid JSON in propose reply: {e}") from e

    if not isinstance(data, list):
        raise GenerationParseError(f"expected a JSON array, got {type(data).__name__}")

    if limit is not None:
        data = data[:limit]

    try:
        proposals = _PROPOSALS.validate_python(data)
    except ValidationError as e:
        raise GenerationParseError(f"malformed thought in propose reply: {e}") from e

    return [proposal.model_dump() for proposal in proposals]


class ThoughtSolverBase(ABC):
    """
    Base class for thought solvers.

    Subclasses implement ``solve()`` on top of ``generate_thoughts``,
    ``evaluate_node`` and ``select_nodes``.

    Args:
        llm: Text-generation collaborator
        config: Solver configuration. Uses defaults if None.
    """

    name = "base"

    def __init__(self, llm: LLMProvider, config: ThoughtSolverConfig | None = None):
        self.thought_tree = ThoughtTree()
        self.llm = llm
        self.config = config or ThoughtSolverConfig()
        self._random = random.Random(self.config.seed)
        self._logger = get_logger()

        # Statistics
        self.total_generations = 0
        self.total_evaluations = 0

    @abstractmethod
    async def solve(self, init_prompt: str) -> str:
        """
        Search for a solution path.

        Returns:
            Thought contents from the root to the chosen node, joined by
            newlines; always starts with ``init_prompt``
        """

    def _start(self, init_prompt: str) -> ThoughtNode:
        """Reset statistics and plant a fresh tree rooted at ``init_prompt``."""
        self.total_generations = 0
        self.total_evaluations = 0
        root = ThoughtNode(init_prompt)
        self.thought_tree = ThoughtTree(root)
        log_event(f"{self.name}", level=LogLevel.NORMAL, max_steps=self.config.max_steps)
        return root

    def _solution(self, node: ThoughtNode) -> str:
        return "\n".join(self.thought_tree.parse_node_path(node))

    async def generate_thoughts(
        self,
        current_state: str = "",
        current_node: ThoughtNode | None = None,
    ) -> List[ThoughtNode]:
        """
        Ask the collaborator for child thoughts and attach them.

        At most ``n_generate_sample`` children are created under
        ``current_node``. A reply without a usable JSON array, or a failing
        collaborator call, yields ``[]`` and attaches nothing.
        """
        try:
            prompt = self.config.parser.propose(
                current_state,
                n_generate_sample=self.config.n_generate_sample,
            )
            self.total_generations += 1
            response = await self.llm.chat(prompt + "\n" + OUTPUT_FORMAT)
            thoughts = parse_proposals(response, limit=self.config.n_generate_sample)
        except GenerationParseError as e:
            self._logger.warning(f"Failed to parse thoughts from LLM response: {e}")
            return []
        except Exception as e:
            self._logger.error(f"Error generating thoughts: {e}")
            return []

        return self.thought_tree.update_node(thoughts, current_node)

    async def _score(self, node: ThoughtNode) -> Tuple[float, bool]:
        """Score ``node`` and return ``(score, valid)``; any failure becomes EvaluationError."""
        try:
            prompt = self.config.parser.value(node.name, node_id=node.id)
            self.total_evaluations += 1
            evaluation = await self.llm.chat(prompt)
            score = self.config.evaluator.evaluate(evaluation, node_id=node.id)
            status = self.config.evaluator.status_verify(score)
        except Exception as e:
            raise EvaluationError(f"could not score node {node.id}: {e}", node_id=node.id) from e
        return score, status

    async def evaluate_node(self, node: ThoughtNode, parent_value: float) -> None:
        """
        Score ``node`` and set its value and validity.

        On success ``value = parent_value + score``. On failure the node is
        marked invalid and keeps ``value = parent_value``.
        """
        try:
            score, status = await self._score(node)
        except EvaluationError as e:
            self._logger.warning(f"Error evaluating node: {e}")
            node.update_valid_status(False)
            node.update_value(parent_value)
            return

        node.update_valid_status(status)
        node.update_value(parent_value + score)
        log_evaluation(node.id, score, status, value=node.value)

    def select_nodes(self, thought_nodes: List[ThoughtNode]) -> List[ThoughtNode]:
        """
        Choose which valid candidates continue.

        Invalid nodes never survive. GREEDY keeps the ``n_select_sample``
        highest values, ties in generation order. SAMPLE makes up to
        ``n_select_sample`` value-weighted draws over candidates not yet
        drawn; a draw that lands on nothing falls back to the i-th best
        candidate even if it was already drawn, so the result may repeat a
        node.
        """
        valid_nodes = [node for node in thought_nodes if node.valid_status]
        if not valid_nodes:
            return []

        sorted_nodes = sorted(valid_nodes, key=lambda node: node.value, reverse=True)
        n_select = self.config.n_select_sample

        if self.config.method_select == MethodSelect.GREEDY:
            return sorted_nodes[:n_select]

        selected: List[ThoughtNode] = []
        total_value = sum(node.value for node in sorted_nodes)

        for i in range(min(n_select, len(sorted_nodes))):
            threshold = self._random.random() * total_value
            cumulative = 0.0

            for node in sorted_nodes:
                if any(node is chosen for chosen in selected):
                    continue
                cumulative += node.value
                if cumulative >= threshold:
                    selected.append(node)
                    break

            if len(selected) <= i:
                selected.append(sorted_nodes[i])

        return selected

    def stats(self) -> dict[str, Any]:
        """Counters from the most recent solve."""
        return {
            "strategy": self.name,
            "nodes": len(self.thought_tree.all_nodes),
            "generations": self.total_generations,
            "evaluations": self.total_evaluations,
        }
