import itertools
import logging
import os
import sys
from typing import Optional, TextIO

LOGGER_NAME = "sentinels"

LINE_FORMAT = "%(asctime)s.%(msecs)03d | %(levelname)s | %(name)s | %(seq)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class _CycleSequence(logging.Filter):
    """Stamps each record with a process-wide counter; sub-second cycles share timestamps."""

    def __init__(self) -> None:
        super().__init__()
        self._counter = itertools.count(1)

    def filter(self, record: logging.LogRecord) -> bool:
        record.seq = next(self._counter)  # type: ignore[attr-defined]
        return True


_sequence = _CycleSequence()


def _resolve_level(level: str) -> str:
    name = (level or os.getenv("LOG_LEVEL", "INFO")).strip().upper()
    if name not in LEVELS:
        raise RuntimeError(f"Invalid LOG_LEVEL: {name}")
    return name


def setup_logger(level: str = "", stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Configure the "sentinels" logger: one handler on `stream` (stdout by
    default), records tagged with a sequence number. Safe to call repeatedly.
    """
    name = _resolve_level(level)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(name)
    logger.propagate = False
    for h in list(logger.handlers):
        logger.removeHandler(h)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.addFilter(_sequence)
    handler.setFormatter(logging.Formatter(fmt=LINE_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return logger
