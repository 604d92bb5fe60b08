from __future__ import annotations
import logging
from rich.logging import RichHandler

ROOT = "facemeshkit"

def get_logger(name: str | None = None) -> logging.Logger:
    if not name or name == ROOT or name.startswith(ROOT + "."):
        return logging.getLogger(name or ROOT)
    return logging.getLogger(f"{ROOT}.{name}")

def setup_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a rich console handler to the package logger (once)."""
    logger = logging.getLogger(ROOT)
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
    return logger
