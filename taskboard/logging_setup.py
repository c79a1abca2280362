import logging
import sys
from typing import Optional

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

# third-party loggers that are only interesting when something breaks
_NOISY = ("passlib", "sqlalchemy.engine", "httpx", "urllib3")

# the console handler installed by the last setup_logging() call
_handler: Optional[logging.Handler] = None


def setup_logging(level: str = "INFO") -> None:
    """
    Configure console logging for the API and the seed script.

    Safe to call more than once: the previous console handler is replaced,
    handlers installed by anyone else are left alone.
    """
    global _handler

    root = logging.getLogger()
    root.setLevel(level)

    if _handler is not None:
        root.removeHandler(_handler)

    _handler = logging.StreamHandler(sys.stdout)
    _handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(_handler)

    for name in _NOISY:
        logging.getLogger(name).setLevel(logging.WARNING)
