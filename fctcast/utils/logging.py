"""Rich-backed logging setup for fctcast."""

from __future__ import annotations

import logging
from typing import Optional

from rich.logging import RichHandler

NOISY_LOGGERS = ("urllib3", "web3", "websockets")


def setup_logging(level: str | int = "INFO") -> None:
    """Route the root logger through a Rich handler and quiet the HTTP/RPC stacks."""

    if isinstance(level, str):
        numeric_level = logging.getLevelName(level.upper())
        if not isinstance(numeric_level, int):
            raise ValueError(f"Unknown log level {level!r}")
    else:
        numeric_level = level
    logging.basicConfig(
        level=numeric_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, markup=False, show_path=False)],
        force=True,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger, ensuring setup has been applied."""

    if not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)


__all__ = ["setup_logging", "get_logger"]
