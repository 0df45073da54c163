"""Depth-first search over the thought tree."""

from __future__ import annotations

from dataclasses import dataclass

from tot_reasoning.core.node import ThoughtNode
from tot_reasoning.solvers.base import ThoughtSolverBase
from tot_reasoning.utils.logging import LogLevel, log_event


@dataclass
class BestLeaf:
    """Best leaf seen so far, shared across the whole descent."""
    node: ThoughtNode
    value: float = 0.0

    def offer(self, node: ThoughtNode) -> None:
        if node.value > self.value:
            self.node = node
            self.value = node.value


class DFSSolver(ThoughtSolverBase):
    """
    Recursive depth-first descent.

    A node at depth ``max_steps``, or one whose children are all rejected by
    selection, is a leaf and is offered to the shared best-leaf tracker
    (initialised with the root at value 0). Selected children are explored
    in selection order. The answer is the path to the best leaf.
    """

    name = "DFS"

    async def solve(self, init_prompt: str) -> str:
        root = self._start(init_prompt)
        best = BestLeaf(node=root)

        await self._dfs(root, 0, best)

        return self._solution(best.node)

    async def _dfs(self, node: ThoughtNode, depth: int, best: BestLeaf) -> None:
        if depth >= self.config.max_steps:
            best.offer(node)
            return

        log_event("DFS EXPAND", level=LogLevel.VERBOSE, depth=depth, node=node.id)

        children = await self.generate_thoughts(node.name, node)
        for child in children:
            await self.evaluate_node(child, node.value)

        selected = self.select_nodes(children)
        if not selected:
            best.offer(node)
            return

        for child in selected:
            await self._dfs(child, depth + 1, best)
