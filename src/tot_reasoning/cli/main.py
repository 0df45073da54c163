"""
Main CLI application for tree-of-thought reasoning.

Commands:
- solve: Run a tree-of-thought search on a query
- config: Print the default configuration as YAML
- version: Show version information
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console

app = typer.Typer(
    name="tot-reason",
    help="""
Tree of Thought Reasoning Engine

Breaks a problem into thoughts, asks a language model for candidate next
steps, scores them and searches the thought tree with BFS, DFS or MCTS.

Quick start:
  tot-reason solve "Plan a product launch"
  tot-reason solve "Solve the puzzle ..." --strategy MCTS --max-steps 2

For help with any command: tot-reason COMMAND --help
""",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


@app.command()
def solve(
    query: str = typer.Argument(..., help="The problem statement to reason about"),

    # Search settings
    strategy: Optional[str] = typer.Option(
        None,
        "--strategy", "-s",
        help="Search strategy: BFS (level by level), DFS (depth first) or MCTS (UCB1 tree search)",
    ),
    max_steps: Optional[int] = typer.Option(
        None,
        "--max-steps", "-n",
        help="Search depth for BFS/DFS; MCTS runs max-steps x generate iterations",
        min=0,
    ),
    generate: Optional[int] = typer.Option(
        None,
        "--generate", "-g",
        help="Candidate thoughts requested per expansion",
        min=1,
    ),
    select: Optional[int] = typer.Option(
        None,
        "--select",
        help="Candidate thoughts kept per expansion",
        min=1,
    ),
    method: Optional[str] = typer.Option(
        None,
        "--method", "-m",
        help="Selection method: greedy (top scores) or sample (score-weighted draws)",
    ),
    threshold: Optional[float] = typer.Option(
        None,
        "--threshold",
        help="Minimum 0-10 score for a thought to stay valid",
        min=0.0,
        max=10.0,
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Random seed for sample selection",
    ),

    # Collaborator settings
    model: Optional[str] = typer.Option(
        None,
        "--model",
        help="Gemini model used to propose and score thoughts",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Per-call timeout in seconds for the language model",
        min=0.0,
    ),

    # Configuration and output
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="YAML config file; command-line options override it",
        exists=True,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Save the solution and thought tree to a JSON file",
    ),
    format: str = typer.Option(
        "text",
        "--format", "-f",
        help="Output format: text, json or markdown",
    ),
    show_tree: bool = typer.Option(
        False,
        "--show-tree",
        help="Print the explored thought tree after solving",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug output"),
    silent: bool = typer.Option(False, "--silent", help="Suppress all output except the result"),
):
    """
    Run a tree-of-thought search on a query.

    Examples:
        # Basic usage
        tot-reason solve "How should we migrate the billing database?"

        # Deeper DFS with stricter pruning
        tot-reason solve "Design a caching layer" --strategy DFS --max-steps 4 --threshold 5

        # Save the explored tree for analysis
        tot-reason solve "Plan a launch" --output run.json --show-tree
    """
    from tot_reasoning.config import Config
    from tot_reasoning.exceptions import FatalPropagationError
    from tot_reasoning.llm import create_llm
    from tot_reasoning.tot import TreeOfThought
    from tot_reasoning.utils.logging import print_header, print_result, set_verbosity

    verbosity = "normal"
    if silent:
        verbosity = "silent"
    elif debug:
        verbosity = "debug"
    elif verbose:
        verbosity = "verbose"

    # Load config, then apply CLI overrides
    try:
        cfg = Config.from_yaml(config) if config else Config()
        data = cfg.to_dict()
        overrides = {
            "max_steps": max_steps,
            "n_generate_sample": generate,
            "n_select_sample": select,
            "method_select": method.lower() if method else None,
            "valid_threshold": threshold,
            "seed": seed,
        }
        data["solver"].update({k: v for k, v in overrides.items() if v is not None})
        if strategy:
            data["strategy"] = strategy.upper()
        if model:
            data["llm"]["model"] = model
        if timeout is not None:
            data["llm"]["timeout"] = timeout
        data["output"].update({"verbosity": verbosity, "format": format})
        if show_tree:
            data["output"]["show_tree"] = True
        cfg = Config.from_dict(data)
    except ValidationError as e:
        console.print("[red]Invalid configuration:[/red]")
        console.print(str(e), markup=False)
        raise typer.Exit(1)

    set_verbosity(cfg.output.verbosity)

    try:
        llm = create_llm(cfg.llm)
    except ValueError as e:
        console.print(f"[red]Could not create language model client: {e}[/red]")
        console.print(f"[dim]Set {cfg.llm.api_key_env} in your environment or .env file[/dim]")
        raise typer.Exit(1)

    tot = TreeOfThought(llm, strategy=cfg.strategy, config=cfg.solver)

    if not silent:
        print_header(f"Tree of Thought ({cfg.strategy.value})")

    try:
        solution = asyncio.run(tot.solve(query))
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        raise typer.Exit(130)
    except FatalPropagationError as e:
        console.print(f"[red]Search failed: {e}[/red]")
        raise typer.Exit(1)

    tree = tot.get_thought_tree()
    stats = tot.solver.stats()
    result_data = {
        "query": query,
        "strategy": cfg.strategy.value,
        "solution": solution,
        "steps": solution.split("\n"),
        "stats": stats,
    }

    if cfg.output.format == "json":
        console.print_json(data=result_data)
    elif cfg.output.format == "markdown":
        steps = "\n".join(f"{i}. {step}" for i, step in enumerate(result_data["steps"][1:], 1))
        console.print(f"# Solution\n\n**Problem:** {query}\n\n{steps}", markup=False)
    elif silent:
        console.print(solution, markup=False)
    else:
        print_result(solution, **stats)

    if cfg.output.show_tree:
        tree.show(console)

    if output:
        with open(output, "w", encoding="utf-8") as f:
            json.dump({**result_data, "tree": tree.to_dict()}, f, indent=2, ensure_ascii=False)
        if not silent:
            console.print(f"\n[dim]Results saved to {output}[/dim]")


@app.command("config")
def show_config():
    """Print the default configuration as YAML (a starting point for --config)."""
    from tot_reasoning.config import get_default_config

    typer.echo(yaml.safe_dump(get_default_config().to_dict(), sort_keys=False))


@app.command()
def version():
    """Show version information."""
    from tot_reasoning import __version__

    console.print(f"tot-reasoning [bold]{__version__}[/bold]")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
