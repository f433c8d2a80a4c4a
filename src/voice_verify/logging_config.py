from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the package logger.

    Safe to call more than once (app startup and CLI both call it);
    only one handler is ever attached. Unknown level names fall back to INFO.
    """
    logger = logging.getLogger("voice_verify")
    logger.setLevel(LOG_LEVELS.get(level.upper(), logging.INFO))

    if not any(getattr(h, "_voice_verify", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._voice_verify = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
