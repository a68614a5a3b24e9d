"""
Logging configuration for lintscope.

Every diagnostic goes through the ``lintscope`` logger. Out of the box it is
printed to stdout by a rich handler, tagged with ``[custom-lint]``, so a host
that never configures logging still sees it. The console shows INFO and
above; ``set_log_file`` mirrors every record, DEBUG included, into an
append-only file as bare message lines.
"""

import logging
import threading
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from .exceptions import ErrorCode, LogFileError

LOGGER_NAME = "lintscope"
LOG_PREFIX = "[custom-lint]"

_lock = threading.RLock()
_console_handler: Optional[logging.Handler] = None
_file_handler: Optional[logging.FileHandler] = None


def _make_console_handler(stderr: bool, verbose: bool, level: int = logging.INFO) -> logging.Handler:
    handler = RichHandler(
        console=Console(stderr=stderr, soft_wrap=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_time=verbose,
        show_level=verbose,
        show_path=verbose,
    )
    handler.setFormatter(logging.Formatter(f"{LOG_PREFIX} %(message)s"))
    handler.setLevel(level)
    return handler


def _install_console_handler(logger: logging.Logger, handler: logging.Handler) -> None:
    global _console_handler
    if _console_handler is not None:
        logger.removeHandler(_console_handler)
        _console_handler.close()
    _console_handler = handler
    logger.addHandler(handler)
    logger.propagate = False


def _package_logger() -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    with _lock:
        if _console_handler is None:
            _install_console_handler(logger, _make_console_handler(stderr=False, verbose=False))
            logger.setLevel(logging.DEBUG)
    return logger


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[Union[str, Path]] = None
) -> logging.Logger:
    """
    Configure logging for command-line use.

    The console handler moves to stderr so stdout stays free for command
    output. The levels below apply to the console only; a log file mirror
    always receives DEBUG.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Suppress all but ERROR level logging
        log_file: Optional file path to mirror logs to

    Returns:
        Configured logger instance for lintscope
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    with _lock:
        _install_console_handler(logger, _make_console_handler(stderr=True, verbose=verbose, level=level))
        logger.setLevel(logging.DEBUG)

    if log_file:
        set_log_file(log_file)

    return logger


def set_log_file(path: Optional[Union[str, Path]]) -> bool:
    """
    Mirror diagnostics into ``path``, opened in append mode.

    The previous file, if any, is closed first. ``None`` only releases the
    current file. Records are flushed as they are written.

    Returns:
        False if the file could not be opened; the error is logged, not raised.
    """
    global _file_handler
    logger = _package_logger()

    with _lock:
        if _file_handler is not None:
            logger.removeHandler(_file_handler)
            _file_handler.close()
            _file_handler = None

        if path is None:
            return True

        path = Path(path)
        try:
            handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        except (OSError, ValueError) as e:
            error = LogFileError(
                f"Cannot open log file: {e}",
                ErrorCode.LS300,
                context={"path": str(path)},
            )
            logger.warning("%s", error)
            return False

        handler.setFormatter(logging.Formatter("%(message)s"))
        handler.setLevel(logging.DEBUG)
        logger.addHandler(handler)
        _file_handler = handler

    return True


def current_log_file() -> Optional[Path]:
    """Path of the active log mirror, or None."""
    handler = _file_handler
    if handler is None:
        return None
    return Path(handler.baseFilename)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (e.g., 'lintscope.session')
              If None, returns the root lintscope logger

    Returns:
        Logger instance
    """
    root = _package_logger()
    if name is None:
        return root

    if not name.startswith(LOGGER_NAME):
        name = f"{LOGGER_NAME}.{name}"

    return logging.getLogger(name)
