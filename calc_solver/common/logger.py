"""Package-wide logger."""
import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger("calc_solver")


def configure_logging(level: str = "INFO") -> None:
    """
    Send package logs to the current stderr at the given level.

    Calling it again replaces the previous handler.

    :param str level: Logging level name (e.g. "DEBUG", "INFO")
    """
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level.upper())
