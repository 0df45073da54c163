"""Utility modules for the Tree of Thought engine."""

from tot_reasoning.utils.logging import get_logger, set_verbosity, LogLevel, log_event

__all__ = [
    "get_logger",
    "set_verbosity",
    "LogLevel",
    "log_event",
]
