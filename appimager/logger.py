import logging
import sys

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def setup_logger(verbose: bool = False, quiet: bool = False) -> None:
    root_logger = logging.getLogger()

    if root_logger.handlers:
        return

    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))

    root_logger.setLevel(level)
    root_logger.addHandler(handler)
