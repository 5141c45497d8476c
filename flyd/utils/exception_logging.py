"""
Helpers for logging exceptions raised by the upstream HTTP client.
"""

import logging


def _safe_str(obj) -> str:
    """
    Safely convert an object to string, handling cases where __str__ or __repr__ might fail.
    """
    try:
        return str(obj)
    except Exception:
        try:
            return repr(obj)
        except Exception:
            return f"<{type(obj).__name__} object (string conversion failed)>"


def format_exception_message(exception: BaseException) -> str:
    """
    Format an exception for a response body.

    httpx raises some transport errors with an empty message, in which case
    the exception type name is used instead.
    """
    if exception is None:
        return "None"
    message = _safe_str(exception)
    return message or type(exception).__name__


def log_exception_with_details(
    logger: logging.Logger,
    prefix: str,
    exception: BaseException,
    level: int = logging.ERROR,
) -> None:
    """
    Log an exception together with the exception that caused it, if any.

    Args:
        logger: The logger instance to use
        prefix: Prefix for the log message (e.g., "[Machines-New]")
        exception: The exception to log
        level: The logging level to use (default: ERROR)
    """
    message = f"{prefix} {type(exception).__name__}: {format_exception_message(exception)}"
    cause = exception.__cause__ or exception.__context__
    if cause is not None:
        message += f" (caused by {type(cause).__name__}: {format_exception_message(cause)})"
    logger.log(level, message, exc_info=exception)
