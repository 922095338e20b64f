"""
Process-wide logging setup.

Modules log through `logging.getLogger(__name__)` with `event key=value`
messages; this only installs the handler and level once per process.
"""

from __future__ import annotations

import logging
import sys

from . import config

_configured = False


def configure_logging() -> None:
    global _configured
    if _configured:
        return

    level = getattr(logging, config.log_level(), logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)

    # asyncpg/httpx are chatty at DEBUG.
    for name in ("asyncpg", "httpx", "httpcore"):
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    _configured = True
