"""
Logging setup for scripts and embedding applications.

Library modules only create module-level loggers
(``logging.getLogger(__name__)``); handlers are installed here, once,
by whoever runs the engine.
"""

import logging

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """Install a stream handler on the root logger at *level*."""
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved
    logging.basicConfig(level=level, format=_FORMAT)
