"""Logging setup for scripts and the CLI harness.

Library modules only create loggers; handlers are installed by whoever runs
the process.
"""

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | int = logging.INFO) -> None:
    """Install a root stream handler at *level*.

    ``httpx`` and ``httpcore`` are capped at WARNING so that request lines
    do not drown out SDK debug output.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(level=level, format=_FORMAT)
    logging.getLogger("verify_privacy").setLevel(level)
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(max(level, logging.WARNING))
