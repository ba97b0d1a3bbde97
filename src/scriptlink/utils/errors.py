"""
Exceptions and logging error boundaries for ScriptLink.
"""

import logging
from functools import wraps
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class ScriptLinkError(Exception):
    """Base exception for all ScriptLink errors."""


class ConfigurationError(ScriptLinkError):
    """Raised when the configuration file can't be read or is invalid."""


class ScriptExecutionError(ScriptLinkError):
    """Raised when a button script cannot be run or exits unsuccessfully."""

    def __init__(self, message: str, script_path: str = "", stderr: str = ""):
        super().__init__(message)
        self.script_path = script_path
        self.stderr = stderr


class ScriptOutputError(ScriptLinkError):
    """Raised when a script's output can't be used as display settings."""


def error_boundary(*, default_return: Any = None, log_level: int = logging.ERROR) -> Callable[[F], F]:
    """
    Log any exception raised by the decorated function and return a default.

    Used around device writes, where a failure for one key must not stop
    the caller. The traceback is only logged at ERROR level and above.

    Example:
        >>> @error_boundary(default_return=False)
        ... def render_key(deck, key, image):
        ...     deck.set_key_image(key, image)
        ...     return True
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.log(
                    log_level,
                    f"{func.__qualname__} failed: {e}",
                    exc_info=log_level >= logging.ERROR,
                )
                return default_return

        return wrapper  # type: ignore

    return decorator


def safe_execute(func: Callable[[], Any], description: str) -> bool:
    """
    Call ``func`` and log, rather than raise, any exception.

    Returns:
        True if ``func`` completed, False if it raised
    """
    try:
        func()
        return True
    except Exception as e:
        logger.error(f"{description} failed: {e}", exc_info=True)
        return False
