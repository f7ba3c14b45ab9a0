import logging
import sys


logger = logging.getLogger("repocache")

_HANDLER_NAME = "repocache-cli"


def configure_logging(debug: bool):
    """
    Configures the logging system based on the debug flag.

    The handler is replaced on every call so it always writes to the current
    sys.stderr.
    """
    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    log_level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(log_level)
    logger.addHandler(handler)
