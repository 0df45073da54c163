"""Integration tests for the full tree-of-thought pipeline."""

import asyncio
import tempfile

import pytest

from tot_reasoning import TreeOfThought, areason
from tot_reasoning.config import Config, Strategy, ThoughtSolverConfig
from tot_reasoning.llm import LLMProvider, TimeoutLLM

from conftest import ScriptedLLM


class SlowLLM(LLMProvider):
    """Collaborator that never answers in time."""

    def __init__(self, delay: float = 1.0):
        self.delay = delay
        self.calls = 0

    async def chat(self, prompt: str) -> str:
        self.calls += 1
        await asyncio.sleep(self.delay)
        return "too late"


def _puzzle_llm() -> ScriptedLLM:
    """Rewards the branch that reasons about Alice first."""
    def propose(state):
        return [f"{state} | Alice", f"{state} | Bob"]

    def score(thought):
        last = thought.rsplit(" | ", 1)[-1]
        return "8 - consistent" if last == "Alice" else "4 - unclear"

    return ScriptedLLM(propose=propose, score=score)


# =============================================================================
# END-TO-END SCENARIOS
# =============================================================================

class TestScenarios:
    def test_bfs_two_children_one_step(self):
        """Two children scoring 5, one step, keep two: prompt plus first child."""
        llm = ScriptedLLM()
        tot = TreeOfThought(llm, Strategy.BFS, ThoughtSolverConfig(max_steps=1, n_select_sample=2))

        result = asyncio.run(tot.solve("Solve X"))

        assert result == "Solve X\nSolve X -> t1"
        root = tot.get_thought_tree().root
        assert [c.value for c in root.children] == [5.0, 5.0]

    def test_unscoreable_children_fail_threshold(self):
        """Replies without a number score 1, below the default threshold 3."""
        llm = ScriptedLLM(score=lambda thought: "It depends.")
        tot = TreeOfThought(llm, Strategy.BFS, ThoughtSolverConfig(max_steps=2))

        result = asyncio.run(tot.solve("Solve X"))

        root = tot.get_thought_tree().root
        assert all(not c.valid_status for c in root.children)
        assert all(c.value == 1.0 for c in root.children)
        # Invalid leaves still count as leaves in the final pick
        assert result == "Solve X\nSolve X -> t1"
        assert len(llm.propose_calls) == 1

    def test_missing_json_block_ends_search(self):
        llm = ScriptedLLM(propose=lambda state: "Let me think about this step by step.")
        for strategy in Strategy:
            tot = TreeOfThought(llm, strategy, ThoughtSolverConfig(max_steps=2))
            assert asyncio.run(tot.solve("Solve X")) == "Solve X"
            assert tot.get_thought_tree().root.children == []

    @pytest.mark.parametrize("strategy", list(Strategy))
    def test_every_strategy_follows_better_branch(self, strategy):
        tot = TreeOfThought(_puzzle_llm(), strategy, ThoughtSolverConfig(max_steps=2))

        result = asyncio.run(tot.solve("Who owns the zebra?"))

        steps = result.split("\n")
        assert steps[0] == "Who owns the zebra?"
        assert steps[1] == "Who owns the zebra? | Alice"


# =============================================================================
# CONFIGURATION AND COLLABORATOR WIRING
# =============================================================================

class TestPipelineWiring:
    @pytest.mark.parametrize("strategy", ["BFS", "DFS", "MCTS"])
    def test_yaml_config_drives_search(self, strategy):
        config = Config.from_dict({
            "strategy": strategy,
            "solver": {"max_steps": 1, "n_generate_sample": 2, "n_select_sample": 1},
            "output": {"verbosity": "silent"},
        })
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            config.to_yaml(f.name)
            loaded = Config.from_yaml(f.name)

        llm = _puzzle_llm()
        result = asyncio.run(areason("Who owns the zebra?", llm=llm, config=loaded))

        assert result == "Who owns the zebra?\nWho owns the zebra? | Alice"

    def test_timeouts_are_contained(self):
        slow = SlowLLM(delay=1.0)
        llm = TimeoutLLM(slow, timeout=0.01)
        tot = TreeOfThought(llm, Strategy.BFS, ThoughtSolverConfig(max_steps=3))

        result = asyncio.run(tot.solve("Solve X"))

        assert result == "Solve X"
        assert slow.calls == 1

    def test_timeout_wrapper_passes_fast_replies(self):
        llm = TimeoutLLM(ScriptedLLM(), timeout=5.0)
        tot = TreeOfThought(llm, Strategy.DFS, ThoughtSolverConfig(max_steps=1))

        assert asyncio.run(tot.solve("Solve X")) == "Solve X\nSolve X -> t1"

    def test_stats_after_solve(self):
        tot = TreeOfThought(ScriptedLLM(), Strategy.BFS, ThoughtSolverConfig(max_steps=2, n_select_sample=2))
        asyncio.run(tot.solve("Solve X"))

        assert tot.solver.stats() == {
            "strategy": "BFS",
            "nodes": 7,
            "generations": 3,
            "evaluations": 6,
        }
