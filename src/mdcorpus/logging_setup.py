"""Centralized logging configuration"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler


LOG_LEVEL_ENV = "MDCORPUS_LOG_LEVEL"

console = Console(stderr=True)


def _resolve_level(level: str | None) -> int:
    name = (level or os.getenv(LOG_LEVEL_ENV) or "INFO").upper()
    return getattr(logging, name, logging.INFO)


def configure_logging(level: str = None) -> None:
    """Install one Rich handler on the root logger; repeated calls only adjust the level."""
    root = logging.getLogger()
    root.setLevel(_resolve_level(level))

    for handler in root.handlers:
        if isinstance(handler, RichHandler) and getattr(handler, "_mdcorpus_managed", False):
            return

    handler = RichHandler(console=console, show_path=False, rich_tracebacks=False, markup=False)
    handler._mdcorpus_managed = True
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root.addHandler(handler)
