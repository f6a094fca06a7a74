"""Console logging setup for the mdpost CLI"""

import logging

from rich.console import Console
from rich.logging import RichHandler


PROJECT_PREFIX = "mdpost"
BASE_LEVEL = logging.WARNING


def effective_level(verbose: int = 0, quiet: int = 0) -> int:
    """Each -v lowers the threshold one step from WARNING, each -q raises it; clamped to DEBUG..CRITICAL."""
    level = BASE_LEVEL - (10 * verbose) + (10 * quiet)
    return max(logging.DEBUG, min(logging.CRITICAL, level))


def config_console_handler(level: int = logging.INFO, debug_mode: bool = False) -> RichHandler:
    """Return a stderr RichHandler; debug_mode adds paths and tracebacks with locals."""
    handler = RichHandler(
        console=Console(stderr=True),
        level=level,
        show_time=debug_mode,
        show_path=debug_mode,
        rich_tracebacks=True,
        tracebacks_show_locals=debug_mode,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def configure_logging(verbose: int = 0, quiet: int = 0) -> int:
    """Install the console handler on the root logger and return the effective level."""
    level = effective_level(verbose, quiet)
    logging.basicConfig(
        level=level,
        handlers=[config_console_handler(level, debug_mode=level <= logging.DEBUG)],
        force=True,
    )
    logging.getLogger(PROJECT_PREFIX).debug("logging configured at %s", logging.getLevelName(level))
    return level
