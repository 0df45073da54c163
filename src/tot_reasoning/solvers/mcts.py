"""
Monte Carlo Tree Search over the thought tree.

=============================================================================
THE PHASES OF ONE ITERATION
=============================================================================

1. SELECTION: walk down from the root. An unscored child (value 0) is taken
   immediately; otherwise UCB1 picks the child to descend into.

2. EXPANSION: a valid leaf gets children from the collaborator. Children are
   scored from 0 (not from the path score as in BFS/DFS) and the walk moves
   into the first generated child.

3. SIMULATION: no rollout is played; the selected node's current value is
   the simulation result.

4. BACKPROPAGATION: that value is added to the node and every ancestor.

=============================================================================
THE VALUE FIELD
=============================================================================

A node's ``value`` is both its cumulative score and its pseudo visit count.
UCB1 therefore reads:

    visits       = max(value, 1)
    exploitation = value / visits
    exploration  = sqrt(2) * sqrt(ln(sum of sibling values) / visits)

Values only grow once set, so repeated iterations accumulate monotonically.
After all iterations the answer follows the highest-valued child from the
root down to a leaf.
"""

from __future__ import annotations

import math

from tot_reasoning.core.node import ThoughtNode
from tot_reasoning.solvers.base import ThoughtSolverBase
from tot_reasoning.utils.logging import LogLevel, log_event

EXPLORATION_CONSTANT = math.sqrt(2)


class MCTSSolver(ThoughtSolverBase):
    """MCTS running ``max_steps * n_generate_sample`` iterations."""

    name = "MCTS"

    @property
    def num_iterations(self) -> int:
        return self.config.max_steps * self.config.n_generate_sample

    async def solve(self, init_prompt: str) -> str:
        root = self._start(init_prompt)
        num_iterations = self.num_iterations

        for i in range(num_iterations):
            log_event(f"MCTS ITER {i + 1}/{num_iterations}", level=LogLevel.VERBOSE)

            selected = await self._select_and_expand(root)
            value = self._simulate(selected)
            self._backpropagate(selected, value)

        best = self._find_best_node(root)
        return self._solution(best)

    async def _select_and_expand(self, root: ThoughtNode) -> ThoughtNode:
        """
        SELECTION + EXPANSION: find the node this iteration will credit.

        Returns:
            An unscored child met on the way down, the first child of a
            freshly expanded leaf, or the leaf itself when it is invalid or
            expansion produced nothing
        """
        current = root

        while current.children:
            unscored = [child for child in current.children if child.value == 0]
            if unscored:
                current = unscored[0]
                break
            current = self._select_ucb1(current)

        if current.is_leaf and current.valid_status:
            children = await self.generate_thoughts(current.name, current)
            for child in children:
                await self.evaluate_node(child, 0)
            if children:
                current = children[0]

        return current

    def _select_ucb1(self, node: ThoughtNode) -> ThoughtNode:
        """
        Pick the valid child with the highest UCB1 score.

        Falls back to the first child when no child is valid, or when the
        summed child value is below 1 and the log term is undefined.
        """
        total_visits = sum(child.value for child in node.children)
        best_child = node.children[0]
        if total_visits < 1:
            return best_child

        log_total = math.log(total_visits)
        best_ucb1 = float("-inf")

        for child in node.children:
            if not child.valid_status:
                continue

            visits = max(child.value, 1)
            exploitation = child.value / visits
            exploration = EXPLORATION_CONSTANT * math.sqrt(log_total / visits)
            ucb1 = exploitation + exploration

            if ucb1 > best_ucb1:
                best_ucb1 = ucb1
                best_child = child

        return best_child

    def _simulate(self, node: ThoughtNode) -> float:
        """SIMULATION: the node's current value stands in for a rollout."""
        return node.value

    def _backpropagate(self, node: ThoughtNode, value: float) -> None:
        """BACKPROPAGATION: add ``value`` to ``node`` and all its ancestors."""
        current: ThoughtNode | None = node
        while current is not None:
            current.update_value(current.value + value)
            current = current.parent

    def _find_best_node(self, root: ThoughtNode) -> ThoughtNode:
        """Follow the highest-valued child (first on ties) down to a leaf."""
        node = root
        while node.children:
            node = max(node.children, key=lambda child: child.value)
        return node
