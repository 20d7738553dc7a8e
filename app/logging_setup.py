from __future__ import annotations

import logging
import sys

# third-party loggers that are too chatty at INFO
_QUIET = ("sqlalchemy.engine", "uvicorn.access", "httpx", "passlib")

def setup_logging(level: str | int = logging.INFO) -> None:
    """
    Configure root logging once: a single stderr handler with a compact format.
    Calling it again only adjusts the level.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    if not any(getattr(h, "_task_api", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s")
        )
        handler._task_api = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    for name in _QUIET:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
