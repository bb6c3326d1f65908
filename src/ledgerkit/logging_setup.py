"""Logging for the ``ledgerkit`` package.

Engine modules call ``get_logger(__name__)`` and never attach handlers; they
log query shapes at DEBUG and capped catch-up runs at WARNING. The CLI calls
``configure_logging`` with the value of ``--log-level`` (which click already
reads from ``LEDGERKIT_LOG_LEVEL``).
"""

import logging
import os
import sys
from typing import IO

LOG_LEVEL_ENV = "LEDGERKIT_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_PKG_LOGGER_NAME = "ledgerkit"
_HANDLER_NAME = "ledgerkit"
_CONFIGURED = False


def _parse_level(level: int | str | None) -> int:
    """Convert a level number or name to an int, falling back to INFO."""
    if isinstance(level, int) and not isinstance(level, bool):
        return level
    if isinstance(level, str):
        name = level.strip().upper()
        if name.isdigit():
            return int(name)
        numeric = logging.getLevelName(name)
        if isinstance(numeric, int):
            return numeric
    return logging.INFO


def resolve_level(level: int | str | None = None) -> int:
    """An explicit level wins over ``LEDGERKIT_LOG_LEVEL``; default is INFO."""
    if level is None or level == "":
        level = os.getenv(LOG_LEVEL_ENV)
    return _parse_level(level)


def package_handler() -> logging.Handler | None:
    """Return the handler installed by ``configure_logging``, if any."""
    for handler in logging.getLogger(_PKG_LOGGER_NAME).handlers:
        if handler.get_name() == _HANDLER_NAME:
            return handler
    return None


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
    force: bool = False,
) -> None:
    """Install the package's single stream handler.

    Repeated calls are no-ops unless ``force`` is set, in which case the
    previously installed handler is replaced rather than stacked.

    Args:
        level: Level as int or name. When None, ``LEDGERKIT_LOG_LEVEL`` is
            used if set, otherwise INFO. Unknown names mean INFO.
        fmt: Optional format string
        stream: Output stream, defaults to the current ``sys.stderr``
        force: Reconfigure even if already configured
    """
    global _CONFIGURED
    if _CONFIGURED and not force:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler) or h.get_name() == _HANDLER_NAME:
            logger.removeHandler(h)

    numeric_level = resolve_level(level)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    logger.setLevel(numeric_level)
    logger.addHandler(handler)
    # CLI output must not be duplicated by a host's root handlers
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger, keeping the package silent until configured."""
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not any(
        isinstance(h, logging.NullHandler) for h in pkg_logger.handlers
    ):
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
