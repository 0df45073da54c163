"""Logging utilities for the Tree of Thought engine."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Any

from rich.console import Console
from rich.logging import RichHandler


_console = Console(safe_box=True)


class LogLevel(IntEnum):
    """Log verbosity levels."""
    SILENT = 0
    MINIMAL = 1
    NORMAL = 2
    VERBOSE = 3
    DEBUG = 4


# Global verbosity setting
_verbosity = LogLevel.NORMAL
_logger: logging.Logger | None = None


def get_console() -> Console:
    """Get the shared rich console."""
    return _console


def set_verbosity(level: LogLevel | str | int) -> None:
    """Set the global verbosity level."""
    global _verbosity

    if isinstance(level, str):
        level = LogLevel[level.upper()]
    elif isinstance(level, int):
        level = LogLevel(level)

    _verbosity = level

    if _logger:
        if level == LogLevel.SILENT:
            _logger.setLevel(logging.CRITICAL + 1)
        elif level == LogLevel.MINIMAL:
            _logger.setLevel(logging.WARNING)
        elif level == LogLevel.NORMAL:
            _logger.setLevel(logging.INFO)
        else:  # VERBOSE and DEBUG
            _logger.setLevel(logging.DEBUG)


def get_verbosity() -> LogLevel:
    """Get the current verbosity level."""
    return _verbosity


def get_logger(name: str = "tot_reasoning") -> logging.Logger:
    """Get a configured logger instance."""
    global _logger

    if _logger is None:
        _logger = logging.getLogger(name)
        _logger.handlers.clear()

        handler = RichHandler(
            console=_console,
            show_time=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        _logger.addHandler(handler)

        set_verbosity(_verbosity)

    return _logger


def log_event(
    event: str,
    level: LogLevel = LogLevel.NORMAL,
    **kwargs: Any,
) -> None:
    """Log an event with optional structured data."""
    if _verbosity < level:
        return

    logger = get_logger()

    if kwargs:
        details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
        message = f"[{event}] {details}"
    else:
        message = f"[{event}]"

    if level <= LogLevel.MINIMAL:
        logger.warning(message)
    elif level == LogLevel.NORMAL:
        logger.info(message)
    else:
        logger.debug(message)


def log_evaluation(node_id: str, score: float, valid: bool, **extra: Any) -> None:
    """Log a single node evaluation (verbose level)."""
    log_event(
        f"Node {node_id}",
        level=LogLevel.VERBOSE,
        score=f"{score:.2f}",
        valid=valid,
        **extra,
    )


def print_header(title: str) -> None:
    """Print a styled header."""
    if _verbosity >= LogLevel.MINIMAL:
        _console.print()
        _console.print(f"[bold blue]{'-' * 60}[/bold blue]")
        _console.print(f"[bold blue]  {title}[/bold blue]")
        _console.print(f"[bold blue]{'-' * 60}[/bold blue]")
        _console.print()


def print_result(result: str, **stats: Any) -> None:
    """Print the final solution path."""
    if _verbosity >= LogLevel.MINIMAL:
        _console.print()
        _console.print("[bold green]Solution[/bold green]")
        _console.print(f"[dim]{'-' * 60}[/dim]")
        _console.print(result, markup=False)
        _console.print(f"[dim]{'-' * 60}[/dim]")

        if stats:
            stat_str = " | ".join(f"{k}: {v}" for k, v in stats.items())
            _console.print(f"[dim]{stat_str}[/dim]")
        _console.print()
