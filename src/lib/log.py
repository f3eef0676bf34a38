"""
Centralized logging using Loguru with context-aware verbosity.

LOG() respects the verbosity of whichever ProgramState is connected to the
current context, so the compiler core can log without having the CLI state
passed through every call.

With no state connected (library use, tests) LOG() is silent.

Usage:
    from stav.lib.log import LOG, state_connectToLogger

    # At the start of the CLI pipeline:
    state_connectToLogger(state)

    # Anywhere downstream:
    LOG("Shown at default verbosity", level=1)
    LOG("Shown with -v", level=2)
    LOG("Shown with -vv", level=3)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# Context variable to hold current ProgramState
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{module: <10}</cyan>:<cyan>{function: <16}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()  # Remove default handler
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Connect a ProgramState to the logging context.

    Args:
        state: ProgramState instance with verbosity attribute
    """
    _program_state.set(state)


def verbosity_get() -> int:
    """Verbosity of the connected state, 0 when none is connected"""
    state = _program_state.get()
    if state is None or not hasattr(state, 'verbosity'):
        return 0
    return state.verbosity


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        **kwargs: Additional loguru metadata

    Example:
        LOG("Read 120 characters", level=2)
        LOG("Token 7: \"Hello\"", level=3)
    """
    if verbosity_get() >= level:
        logger.opt(depth=1).debug(message, **kwargs)
