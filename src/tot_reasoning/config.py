"""
Configuration schema for the Tree of Thought engine.

All configuration classes use Pydantic for validation. The main Config class
combines the search strategy, solver knobs, collaborator settings and output
options, and can be loaded from YAML files.

Key configuration areas:
- ThoughtSolverConfig: search budget, selection policy, parser/evaluator
- LLMConfig: the text-generation collaborator
- OutputConfig: logging and formatting options
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, model_validator

from tot_reasoning.core.evaluator import BaseEvaluator, DefaultEvaluator
from tot_reasoning.core.parser import BaseParser, DefaultParser


class MethodSelect(str, Enum):
    """How surviving children are chosen after evaluation."""
    SAMPLE = "sample"
    GREEDY = "greedy"


class Strategy(str, Enum):
    """Search algorithm driving the exploration."""
    BFS = "BFS"
    DFS = "DFS"
    MCTS = "MCTS"


class ThoughtSolverConfig(BaseModel):
    """
    Knobs shared by every search strategy.

    Budget:
    - **max_steps**: BFS levels / DFS depth; MCTS runs
      ``max_steps * n_generate_sample`` iterations
    - **n_generate_sample**: candidates requested per expansion
    - **n_select_sample**: candidates kept per expansion

    Selection:
    - **greedy**: keep the highest-valued valid candidates
    - **sample**: value-weighted random draws (seed with ``seed``)

    ``n_solution_sample`` is accepted for compatibility with existing
    configurations; no strategy reads it.

    ``parser`` and ``evaluator`` are strategy objects and are left out of
    serialized configs. Without an explicit evaluator a DefaultEvaluator is
    built from ``valid_threshold``.
    """

    max_steps: int = Field(default=3, ge=0)
    method_select: MethodSelect = MethodSelect.GREEDY
    n_generate_sample: int = Field(default=5, ge=1)
    n_select_sample: int = Field(default=3, ge=1)
    n_solution_sample: int = Field(default=5, ge=1)
    valid_threshold: float = Field(default=3.0, ge=0, le=10)
    seed: Optional[int] = None

    parser: BaseParser = Field(default_factory=DefaultParser, exclude=True)
    evaluator: Optional[BaseEvaluator] = Field(default=None, exclude=True)

    class Config:
        extra = "forbid"
        arbitrary_types_allowed = True

    @model_validator(mode="after")
    def _default_evaluator(self) -> "ThoughtSolverConfig":
        if self.evaluator is None:
            self.evaluator = DefaultEvaluator(self.valid_threshold)
        return self


class LLMConfig(BaseModel):
    """Configuration for the text-generation collaborator."""
    provider: Literal["gemini"] = "gemini"
    model: str = "gemini-2.5-flash"
    temperature: float = Field(default=0.7, ge=0, le=2.0)
    api_key_env: str = "GEMINI_API_KEY"
    timeout: Optional[float] = Field(default=None, gt=0)  # Seconds per call, None = unbounded

    class Config:
        extra = "forbid"


class OutputConfig(BaseModel):
    """Configuration for output settings."""
    verbosity: Literal["silent", "minimal", "normal", "verbose", "debug"] = "normal"
    format: Literal["text", "json", "markdown"] = "text"
    show_tree: bool = False

    class Config:
        extra = "forbid"


class Config(BaseModel):
    """
    Main configuration for the Tree of Thought engine.

    Usage Patterns:

    **Default Configuration**:
    >>> config = Config()
    >>> config.strategy
    <Strategy.BFS: 'BFS'>

    **Programmatic Customization**:
    >>> config = Config()
    >>> config.strategy = Strategy.MCTS
    >>> config.solver.max_steps = 5
    >>> config.output.verbosity = "verbose"

    **YAML Configuration**:
    >>> config = Config.from_yaml("tot.yaml")
    >>> config.to_yaml("tot.updated.yaml")
    """

    strategy: Strategy = Strategy.BFS
    solver: ThoughtSolverConfig = Field(default_factory=ThoughtSolverConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    class Config:
        extra = "forbid"

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Load configuration from a dictionary."""
        return cls(**data)

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        with open(path, "w") as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def to_dict(self) -> dict:
        """Convert configuration to a plain (YAML/JSON-safe) dictionary."""
        return self.model_dump(mode="json")


def get_default_config() -> Config:
    """Get a default configuration suited to quick interactive runs."""
    return Config(
        strategy=Strategy.BFS,
        solver=ThoughtSolverConfig(
            max_steps=3,
            n_generate_sample=3,
            n_select_sample=2,
        ),
    )
