import sys

from loguru import logger

from .config import Config


VERBOSE = Config.VERBOSE
LOG_PATH = Config.LOG_PATH
LOG_LEVEL = Config.LOG_LEVEL
LOG_ROTATION = Config.LOG_ROTATION
LOG_RETENTION = Config.LOG_RETENTION


def _add_file_sink():
    logger.add(
        LOG_PATH,
        rotation=LOG_ROTATION,
        retention=LOG_RETENTION,
        level=LOG_LEVEL,
    )


# Log to a file
if LOG_PATH:
    _add_file_sink()


def configure_console(verbose=VERBOSE):
    """Reset sinks for command-line use: stderr at WARNING, or LOG_LEVEL when verbose."""
    logger.remove()
    logger.add(sink=sys.stderr, level=LOG_LEVEL if verbose else "WARNING")
    if LOG_PATH:
        _add_file_sink()
