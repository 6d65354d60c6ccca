"""
Centralized logging using Loguru with context-aware verbosity.

LOG() respects the verbosity of the ProgramState bound to the current
context, so transformation code deep in lib/ can report progress without
having the state passed down to it.

Usage:
    from printdown.lib.log import LOG, state_connectToLogger

    # At start of a pipeline run:
    state_connectToLogger(state)

    # Anywhere in that context:
    LOG("Replaced 3 tokens", level=1)
    LOG("Found theme-color directive", level=2)
    LOG("Protected ranges: [(0, 12), (40, 44)]", level=3)

Outside a connected context (e.g. library use, tests) LOG() is silent.
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# Context variable to hold current ProgramState
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <7}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Connect a ProgramState to the logging context.

    Args:
        state: ProgramState instance with verbosity attribute
    """
    _program_state.set(state)


def verbosity_get() -> int:
    """Verbosity of the connected state, 0 when nothing is connected"""
    state = _program_state.get()
    if state is None or not hasattr(state, 'verbosity'):
        return 0
    return state.verbosity


def LOG(message: str, level: int = 1, warning: bool = False, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        warning: Emit at loguru WARNING level instead of DEBUG
        **kwargs: Additional loguru metadata

    Verbosity levels:
        1 = Normal output (default)
        2 = Verbose (-v)
        3 = Debug (-vv or higher)
    """
    if verbosity_get() < level:
        return

    # opt(depth=1) so {function}/{line} point at the caller, not LOG itself
    if warning:
        logger.opt(depth=1).warning(message, **kwargs)
    else:
        logger.opt(depth=1).debug(message, **kwargs)
