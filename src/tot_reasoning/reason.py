"""
Simple interface for tree-of-thought reasoning.

- reason(): run one search synchronously and return the solution path
- areason(): the same as a coroutine, for callers already in an event loop
"""

from __future__ import annotations

import asyncio

from tot_reasoning.config import Config, Strategy, get_default_config
from tot_reasoning.llm import LLMProvider, create_llm
from tot_reasoning.tot import TreeOfThought
from tot_reasoning.utils.logging import set_verbosity


async def areason(
    prompt: str,
    llm: LLMProvider | None = None,
    strategy: Strategy | str | None = None,
    config: Config | None = None,
) -> str:
    """
    Run tree-of-thought reasoning on a prompt.

    Args:
        prompt: The problem statement
        llm: Collaborator to use (built from ``config.llm`` if None)
        strategy: Overrides ``config.strategy``
        config: Full configuration (sensible defaults if None)

    Returns:
        The solution path, one thought per line, starting with ``prompt``
    """
    config = config or get_default_config()
    set_verbosity(config.output.verbosity)

    llm = llm or create_llm(config.llm)
    tot = TreeOfThought(llm, strategy=strategy or config.strategy, config=config.solver)
    return await tot.solve(prompt)


def reason(
    prompt: str,
    llm: LLMProvider | None = None,
    strategy: Strategy | str | None = None,
    config: Config | None = None,
) -> str:
    """
    Synchronous wrapper around ``areason``.

    Examples:
        >>> from tot_reasoning import reason
        >>> print(reason("Plan a three-day trip to Kyoto", strategy="DFS"))
    """
    return asyncio.run(areason(prompt, llm=llm, strategy=strategy, config=config))
