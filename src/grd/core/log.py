"""Logging setup using Rich on stderr."""

import logging

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["setup_logging", "stderr_console"]

# stdout is reserved for results (file names, query output)
stderr_console = Console(stderr=True)

_HANDLER_NAME = "grd_rich_handler"

LEVELS = {
    0: logging.WARNING,
    1: logging.INFO,
}


def setup_logging(verbosity: int = 0) -> None:
    """Attach a Rich handler to the ``grd`` logger (idempotent).

    Args:
        verbosity: 0 for warnings only, 1 for info, 2 or more for debug
            (including httpx request logs)
    """
    level = LEVELS.get(verbosity, logging.DEBUG)

    logger = logging.getLogger("grd")
    handler = next((h for h in logger.handlers if h.name == _HANDLER_NAME), None)
    if handler is None:
        handler = RichHandler(
            console=stderr_console,
            show_time=False,
            show_path=verbosity > 1,
            markup=False,
            rich_tracebacks=True,
        )
        handler.name = _HANDLER_NAME
        logger.addHandler(handler)
        logger.propagate = False

    handler.setLevel(level)
    logger.setLevel(level)

    if level <= logging.DEBUG:
        http_logger = logging.getLogger("httpx")
        http_logger.setLevel(logging.DEBUG)
        if handler not in http_logger.handlers:
            http_logger.addHandler(handler)
