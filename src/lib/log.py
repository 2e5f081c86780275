"""
Centralized logging using Loguru with context-aware verbosity.

This module provides a LOG() function that respects the current ProgramState's
verbosity level without requiring explicit state passing.

Diagnostics always go to stderr: stdout carries search results, and the
default verbosity (0) keeps the logger silent.

Usage:
    from lib.log import LOG, state_connectToLogger

    # Once the ProgramState exists:
    state_connectToLogger(state)

    # Anywhere in that context:
    LOG("Stage progress appears if verbosity >= 1", level=1)
    LOG("Per-source details appear if verbosity >= 2", level=2)
    LOG("Per-match trace appears if verbosity >= 3", level=3)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# Context variable to hold current ProgramState
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

# Configure loguru with hgrep-specific format
logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <18}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()  # Remove default handler
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Connect a ProgramState to the logging context.

    Makes the state's verbosity setting available to LOG() calls
    throughout the current context.

    Args:
        state: ProgramState instance with verbosity attribute
    """
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=progress, 2=detail, 3=trace)
        **kwargs: Additional loguru metadata

    Example:
        LOG("Built 2 stages", level=1)
        LOG("Skipping unreadable source: missing.html", level=2)
        LOG("Leaf match <li> in index.html", level=3)
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        logger.opt(depth=1).debug(message, **kwargs)
