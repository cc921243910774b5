"""
Root logger setup for the tracker API, driven by the LOG_* settings.
"""
import logging
import sys
from typing import List, Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Per-request access lines, SQL echo and the client's HTTP pool chatter
NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "urllib3")


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    fmt: str = DEFAULT_FORMAT,
    datefmt: str = DEFAULT_DATE_FORMAT,
) -> None:
    """
    Send application logs to stdout, and to ``log_file`` when one is set.
    Calling it again replaces the handlers from the previous call.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(numeric_level)
        root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
