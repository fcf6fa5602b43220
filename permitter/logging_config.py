from __future__ import annotations

import logging


def configure_app_logging(level: str = "INFO") -> None:
    """
    Minimal logging configuration for this repo.

    Notes:
    - Plain stdlib logging; uvicorn already installs handlers.
    - Only the `permitter` logger level is set here. Set `PERMITTER_LOG_LEVEL=DEBUG`
      to see every attribute the enforcer drops.
    """

    normalized = level.upper()
    logging.getLogger("permitter").setLevel(normalized)
    logging.getLogger("permitter").propagate = True
