"""
TreeOfThought facade.

Picks a search strategy, runs it and exposes the resulting thought tree for
inspection. This is the entry point higher-level agents use when they need
structured multi-step reasoning.
"""

from __future__ import annotations

from typing import Dict, Type

from tot_reasoning.config import Strategy, ThoughtSolverConfig
from tot_reasoning.core.node import ThoughtTree
from tot_reasoning.exceptions import FatalPropagationError
from tot_reasoning.llm import LLMProvider
from tot_reasoning.solvers import BFSSolver, DFSSolver, MCTSSolver, ThoughtSolverBase
from tot_reasoning.utils.logging import LogLevel, get_logger, log_event


_SOLVERS: Dict[Strategy, Type[ThoughtSolverBase]] = {
    Strategy.BFS: BFSSolver,
    Strategy.DFS: DFSSolver,
    Strategy.MCTS: MCTSSolver,
}


def create_solver(
    strategy: Strategy | str,
    llm: LLMProvider,
    config: ThoughtSolverConfig | None = None,
) -> ThoughtSolverBase:
    """Factory function to get a solver by strategy; unknown strategies fall back to BFS."""
    try:
        strategy = Strategy(strategy)
    except ValueError:
        get_logger().warning(f"Unknown strategy: {strategy}, defaulting to BFS")
        strategy = Strategy.BFS

    return _SOLVERS[strategy](llm, config)


class TreeOfThought:
    """
    High-level interface to tree-of-thought reasoning.

    Args:
        llm: Text-generation collaborator
        strategy: Search algorithm (default BFS)
        config: Solver configuration. Uses defaults if None.

    Example:
        >>> tot = TreeOfThought(llm, strategy=Strategy.DFS)
        >>> answer = await tot.solve("Four friends each like a different color...")
        >>> tot.visualize()
    """

    def __init__(
        self,
        llm: LLMProvider,
        strategy: Strategy | str = Strategy.BFS,
        config: ThoughtSolverConfig | None = None,
    ):
        self.llm = llm
        self.solver = create_solver(strategy, llm, config)
        self.strategy = Strategy(self.solver.name)
        self._logger = get_logger()

        log_event("ToT INIT", level=LogLevel.VERBOSE, strategy=self.strategy.value)

    async def solve(self, prompt: str) -> str:
        """
        Solve a problem with the configured strategy.

        Returns:
            Root-to-best-node thought contents joined by newlines

        Raises:
            FatalPropagationError: Any failure the solver did not contain,
                chained to the original error
        """
        preview = prompt[:100] + ("..." if len(prompt) > 100 else "")
        log_event("ToT SOLVE", level=LogLevel.VERBOSE, prompt=preview)

        try:
            solution = await self.solver.solve(prompt)
        except Exception as e:
            self._logger.error(f"Error solving problem with Tree of Thought: {e}")
            raise FatalPropagationError(str(e)) from e

        log_event("ToT DONE", level=LogLevel.NORMAL, **self.solver.stats())
        return solution

    def get_thought_tree(self) -> ThoughtTree:
        """The tree built by the most recent solve."""
        return self.solver.thought_tree

    def visualize(self) -> None:
        """Print the thought tree."""
        self.solver.thought_tree.show()


def create_tree_of_thought(
    llm: LLMProvider,
    strategy: Strategy | str = Strategy.BFS,
    config: ThoughtSolverConfig | None = None,
) -> TreeOfThought:
    """Create a TreeOfThought with the given strategy and configuration."""
    return TreeOfThought(llm, strategy=strategy, config=config)
