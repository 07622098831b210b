import logging
import os

_VERBOSITY_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def level_for_verbosity(verbosity: int) -> int:
    """Map a -v count to a logging level (0 warning, 1 info, 2+ debug)."""
    return _VERBOSITY_LEVELS.get(verbosity, logging.DEBUG if verbosity > 1 else logging.WARNING)


def configure_logging(verbosity: int = 0) -> int:
    """Configure the root logger for the maze tools and return the level used.

    ZEUS_LOG_LEVEL (e.g. "DEBUG") wins over the verbosity count when set.
    """
    level = level_for_verbosity(verbosity)
    level_name = os.getenv("ZEUS_LOG_LEVEL")
    if level_name:
        level = getattr(logging, level_name.upper(), level)
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    )
    return level
