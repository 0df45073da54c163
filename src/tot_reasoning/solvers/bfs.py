"""Breadth-first search over the thought tree."""

from __future__ import annotations

from typing import List

from tot_reasoning.core.node import ThoughtNode
from tot_reasoning.solvers.base import ThoughtSolverBase
from tot_reasoning.utils.logging import LogLevel, log_event


class BFSSolver(ThoughtSolverBase):
    """
    Level-synchronous expansion.

    Each step expands every node in the frontier (generate -> evaluate ->
    select) and the selected children form the next frontier. The search
    stops after ``max_steps`` levels or when the frontier empties. The
    answer is the path to the highest-valued non-root leaf; when no such
    leaf exists the initial prompt is returned unchanged.
    """

    name = "BFS"

    async def solve(self, init_prompt: str) -> str:
        root = self._start(init_prompt)

        queue: List[ThoughtNode] = [root]
        step = 0

        while queue and step < self.config.max_steps:
            log_event(
                f"BFS STEP {step + 1}/{self.config.max_steps}",
                level=LogLevel.NORMAL,
                frontier=len(queue),
            )
            next_queue: List[ThoughtNode] = []

            for current in queue:
                children = await self.generate_thoughts(current.name, current)
                for child in children:
                    await self.evaluate_node(child, current.value)
                next_queue.extend(self.select_nodes(children))

            queue = next_queue
            step += 1

        leaves = [
            node for node in self.thought_tree.all_nodes
            if node.is_leaf and node is not root
        ]
        if not leaves:
            return init_prompt

        best = max(leaves, key=lambda node: node.value)
        return self._solution(best)
