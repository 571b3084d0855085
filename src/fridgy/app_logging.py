"""Logging configuration helpers."""

import logging

_VISIBLE_CHARS = 4


def configure_logging() -> None:
    """Configure application logging with a single stream handler."""
    logger = logging.getLogger("fridgy")
    logger.setLevel(logging.INFO)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def mask_secret(value: str | None) -> str:
    """Mask all but the last few characters of a key for log output."""
    if not value:
        return "<unset>"
    if len(value) <= _VISIBLE_CHARS:
        return "*" * len(value)
    return "*" * (len(value) - _VISIBLE_CHARS) + value[-_VISIBLE_CHARS:]
