"""
Tree of Thought Reasoning Engine

Decomposes a problem into discrete "thoughts", asks a language model for
candidate next thoughts, scores and prunes them, and explores the resulting
thought tree with a pluggable search strategy (BFS, DFS or MCTS).

## API Reference

### Simple Interface
```python
from tot_reasoning import reason

print(reason("Schedule four meetings without overlaps", strategy="BFS"))
```

### Advanced Interface
```python
from tot_reasoning import TreeOfThought, ThoughtSolverConfig, Strategy
from tot_reasoning.llm import GeminiLLM

config = ThoughtSolverConfig(max_steps=3, n_generate_sample=3, n_select_sample=2)
tot = TreeOfThought(GeminiLLM(), strategy=Strategy.MCTS, config=config)
answer = await tot.solve("Solve the logic puzzle ...")
tot.visualize()
```

### CLI Usage
```bash
tot-reason solve "Plan a product launch" --strategy DFS --max-steps 4
tot-reason config > tot.yaml
```

## Key Components

- **TreeOfThought**: facade selecting and running a strategy
- **BFSSolver / DFSSolver / MCTSSolver**: the search strategies
- **ThoughtNode / ThoughtTree**: the thought data structure
- **BaseParser / BaseEvaluator**: pluggable prompt building and scoring
- **Config / ThoughtSolverConfig**: configuration
"""

from tot_reasoning.config import (
    Config,
    ThoughtSolverConfig,
    LLMConfig,
    OutputConfig,
    MethodSelect,
    Strategy,
)
from tot_reasoning.core import (
    ThoughtNode,
    ThoughtTree,
    BaseParser,
    DefaultParser,
    BaseEvaluator,
    DefaultEvaluator,
)
from tot_reasoning.exceptions import (
    ThoughtSolverError,
    GenerationParseError,
    EvaluationError,
    FatalPropagationError,
)
from tot_reasoning.llm import LLMProvider
from tot_reasoning.solvers import ThoughtSolverBase, BFSSolver, DFSSolver, MCTSSolver
from tot_reasoning.tot import TreeOfThought, create_solver, create_tree_of_thought
from tot_reasoning.reason import reason, areason

__version__ = "0.1.0"

__all__ = [
    # Main interfaces
    "reason",
    "areason",
    "TreeOfThought",
    "create_solver",
    "create_tree_of_thought",

    # Solvers
    "ThoughtSolverBase",
    "BFSSolver",
    "DFSSolver",
    "MCTSSolver",

    # Data structures and strategies
    "ThoughtNode",
    "ThoughtTree",
    "BaseParser",
    "DefaultParser",
    "BaseEvaluator",
    "DefaultEvaluator",
    "LLMProvider",

    # Configuration
    "Config",
    "ThoughtSolverConfig",
    "LLMConfig",
    "OutputConfig",
    "MethodSelect",
    "Strategy",

    # Errors
    "ThoughtSolverError",
    "GenerationParseError",
    "EvaluationError",
    "FatalPropagationError",
]
