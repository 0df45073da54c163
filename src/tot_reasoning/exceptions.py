"""Error taxonomy for thought generation, scoring and search."""

from __future__ import annotations


class ThoughtSolverError(Exception):
    """Base class for all errors raised by the engine."""


class GenerationParseError(ThoughtSolverError):
    """A propose reply did not contain a usable fenced JSON array of thoughts.

    Recovered locally: the expansion yields no children and the search
    continues on other branches.
    """


class EvaluationError(ThoughtSolverError):
    """Scoring a single thought failed.

    Recovered locally: the node is marked invalid and keeps its parent's value.
    """

    def __init__(self, message: str, node_id: str | None = None):
        super().__init__(message)
        self.node_id = node_id


class FatalPropagationError(ThoughtSolverError):
    """An error escaped the guarded generate/evaluate helpers.

    Raised out of ``TreeOfThought.solve()`` with the original error chained
    as ``__cause__``.
    """
