"""
Helpers that log relay failures with their full cause, for the server log only.
"""

import logging
from typing import List, Optional


def _safe_str(obj) -> str:
    """
    Convert an object to string without letting a broken __str__ escape.

    Args:
        obj: The object to convert to string

    Returns:
        A string representation of the object, falling back to safe alternatives
    """
    try:
        return str(obj)
    except Exception:
        try:
            return repr(obj)
        except Exception:
            return f"<{type(obj).__name__} object (string conversion failed)>"


def _safe_get_exceptions(exception_group) -> List[BaseException]:
    try:
        return list(exception_group.exceptions)
    except Exception:
        return []


def _cause_chain(exception: BaseException) -> List[BaseException]:
    """Return the explicit ``raise ... from`` chain below ``exception``."""
    chain = []
    seen = {id(exception)}
    current = getattr(exception, "__cause__", None)
    while current is not None and id(current) not in seen:
        chain.append(current)
        seen.add(id(current))
        current = getattr(current, "__cause__", None)
    return chain


def log_exception_with_details(
    logger: logging.Logger,
    prefix: str,
    exception: Optional[BaseException],
    level: int = logging.ERROR,
) -> None:
    """
    Log an exception with its cause chain and, for exception groups, every
    sub-exception. Never raises, even for broken exception objects.

    Args:
        logger: The logger instance to use
        prefix: Prefix for the log message (e.g., "[Feed]", "[Startup]")
        exception: The exception to log
        level: The logging level to use (default: ERROR)
    """
    try:
        safe_prefix = _safe_str(prefix) if prefix is not None else ""
        if exception is None:
            logger.log(level, f"{safe_prefix} Exception: None")
            return

        sub_exceptions = _safe_get_exceptions(exception)
        if sub_exceptions:
            logger.log(
                level,
                f"{safe_prefix} Exception with {len(sub_exceptions)} sub-exceptions: "
                f"{_safe_str(exception)}",
            )
            for i, sub_exc in enumerate(sub_exceptions):
                logger.log(
                    level,
                    f"{safe_prefix} Sub-exception {i+1}: "
                    f"{type(sub_exc).__name__}: {_safe_str(sub_exc)}",
                    exc_info=sub_exc,
                )
            return

        message = f"{safe_prefix} Exception: {type(exception).__name__}: {_safe_str(exception)}"
        for cause in _cause_chain(exception):
            message += f" | caused by {type(cause).__name__}: {_safe_str(cause)}"
        logger.log(level, message, exc_info=exception)
    except Exception:
        try:
            logger.log(logging.ERROR, f"{prefix} Exception (logging failed)")
        except Exception:
            # nothing left to report through
            pass


def format_exception_message(exception: Optional[BaseException]) -> str:
    """
    Format an exception and its cause chain as a single line.

    Args:
        exception: The exception to format

    Returns:
        A formatted string describing the exception
    """
    if exception is None:
        return "None"
    sub_exceptions = _safe_get_exceptions(exception)
    if sub_exceptions:
        joined = "; ".join(
            f"{type(sub_exc).__name__}: {_safe_str(sub_exc)}" for sub_exc in sub_exceptions
        )
        return f"{_safe_str(exception)} (Sub-exceptions: {joined})"
    parts = [_safe_str(exception)]
    parts.extend(
        f"caused by {type(cause).__name__}: {_safe_str(cause)}"
        for cause in _cause_chain(exception)
    )
    return " | ".join(parts)
