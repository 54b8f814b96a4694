"""Use case error handling utilities.

Use cases catch exceptions internally and return responses carrying a
success flag and an error message, so callers check response.success instead
of catching every domain exception type. KeyboardInterrupt and SystemExit
are always re-raised.
"""

import logging

from tfview.domain.exceptions import TfviewDomainError

logger = logging.getLogger(__name__)


def format_error_message(exception: Exception, operation_name: str) -> str:
    """Format an exception into a user-friendly error message.

    - TfviewDomainError: the error's message, plus its hint when present
    - OSError: adds context about permissions and filesystem access
    - ValueError/RuntimeError: the exception message with operation context
    - anything else: a generic "internal error" message

    Args:
        exception: The exception that was caught.
        operation_name: Name of the operation (e.g., "history").

    Returns:
        User-friendly error message string.
    """
    if isinstance(exception, TfviewDomainError):
        if exception.hint:
            return f"{exception.message}\nHint: {exception.hint}"
        return exception.message
    elif isinstance(exception, OSError):
        return f"I/O error: {exception}. Check file permissions and filesystem access."
    elif isinstance(exception, (ValueError, RuntimeError)):
        return f"{operation_name.capitalize()} error: {exception}"
    else:
        return f"Internal error during {operation_name}. Check logs for details."


def log_use_case_error(exception: Exception, operation_name: str) -> None:
    """Log an exception from a use case.

    Expected failures are logged at ERROR; anything unexpected is logged
    with its traceback.
    """
    if isinstance(exception, TfviewDomainError):
        logger.error("%s failed: %s", operation_name, exception.message)
    elif isinstance(exception, (OSError, ValueError, RuntimeError)):
        logger.error("Error during %s: %s", operation_name, exception)
    else:
        logger.exception("Unexpected error during %s", operation_name)
