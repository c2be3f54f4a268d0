"""
Logging for the crossquote library.

Every module logs to a child of the ``crossquote`` logger. The library
installs no output of its own; scripts call configure_logging() to send
records to a console stream. Batch and per-claim events go through the
helpers below so their wording stays the same across entry points.
"""

import logging
import sys
from typing import Optional, TextIO


LOGGER_NAME = "crossquote"
CONSOLE_HANDLER_NAME = "crossquote-console"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Logger for a crossquote module.

    ``get_logger("engine")`` and ``get_logger("crossquote.engine")`` name the
    same logger; without a name the library logger itself is returned.
    """
    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def _level_number(level: int | str) -> int:
    if isinstance(level, int):
        return level
    number = logging.getLevelName(level.strip().upper())
    # Unknown names come back as "Level <name>"
    return number if isinstance(number, int) else logging.INFO


def _remove_console(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if handler.get_name() == CONSOLE_HANDLER_NAME or isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)


def configure_logging(
    level: int | str = logging.INFO,
    stream: Optional[TextIO] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    Send crossquote records at ``level`` and above to a console stream.

    Calling it again replaces the console handler it installed before;
    handlers attached by the application are left alone.

    Args:
        level: Level number or name such as "debug" (unknown names mean INFO)
        stream: Output stream (default: sys.stderr)
        format_string: Record format (default: DEFAULT_FORMAT)

    Returns:
        The library logger
    """
    number = _level_number(level)
    logger = get_logger()
    _remove_console(logger)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(CONSOLE_HANDLER_NAME)
    handler.setLevel(number)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(number)
    return logger


def enable_debug_logging(stream: Optional[TextIO] = None) -> None:
    """Log every alignment and verification step to the console."""
    configure_logging(logging.DEBUG, stream=stream)


def disable_logging() -> None:
    """Remove the console handler installed by configure_logging()."""
    logger = get_logger()
    _remove_console(logger)
    logger.addHandler(logging.NullHandler())


_logger = get_logger()


def log_batch_start(mode: str, language: str, total_claims: int) -> None:
    """Log batch start event."""
    _logger.info(f"Starting {mode} batch: {total_claims} claims ({language})")


def log_batch_complete(mode: str, done: int, total: int, duration: float) -> None:
    """Log batch complete event."""
    _logger.info(f"{mode.capitalize()} batch complete: {done}/{total} claims in {duration:.1f}s")


def log_claim_aligned(reference: str, language: str, strategy: str, length: int) -> None:
    """Log an individual alignment."""
    _logger.debug(f"Aligned {reference} -> {language}: strategy={strategy}, chars={length}")


def log_claim_verified(reference: str, language: str, status: str, coverage: float | None) -> None:
    """Log an individual verification."""
    cov = f"{coverage:.2f}" if coverage is not None else "n/a"
    _logger.debug(f"Verified {reference} ({language}): status={status}, coverage={cov}")


def log_warning(message: str, **context) -> None:
    """Log a warning with optional context."""
    if context:
        ctx_str = ", ".join(f"{k}={v}" for k, v in context.items())
        _logger.warning(f"{message} ({ctx_str})")
    else:
        _logger.warning(message)


def log_error(message: str, exc_info: bool = False, **context) -> None:
    """Log an error with optional context and exception info."""
    if context:
        ctx_str = ", ".join(f"{k}={v}" for k, v in context.items())
        _logger.error(f"{message} ({ctx_str})", exc_info=exc_info)
    else:
        _logger.error(message, exc_info=exc_info)
