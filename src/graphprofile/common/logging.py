"""Process-wide logging setup for the graphprofile CLI."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Transport libraries that log every request.
_CHATTY_LOGGERS = ("httpx", "httpcore")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure the root logger for CLI output.

    Enrichment events (missing identity claims, directory failures) surface at
    WARNING and ERROR; ``level=logging.DEBUG`` adds the per-query and
    unmodeled-payload traces. ``force=True`` replaces existing handlers.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
