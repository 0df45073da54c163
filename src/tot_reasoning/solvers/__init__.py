"""Search strategies built on the shared generate -> evaluate -> select driver."""

from tot_reasoning.solvers.base import ThoughtSolverBase, ThoughtProposal, parse_proposals, OUTPUT_FORMAT
from tot_reasoning.solvers.bfs import BFSSolver
from tot_reasoning.solvers.dfs import DFSSolver
from tot_reasoning.solvers.mcts import MCTSSolver

__all__ = [
    "ThoughtSolverBase",
    "ThoughtProposal",
    "parse_proposals",
    "OUTPUT_FORMAT",
    "BFSSolver",
    "DFSSolver",
    "MCTSSolver",
]
