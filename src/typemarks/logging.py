# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console status lines for the CLI and opt-in debug logging for the package."""

from __future__ import annotations

import logging
import sys
from functools import lru_cache
from typing import Final

from rich.console import Console
from rich.text import Text

PACKAGE_LOGGER_NAME: Final[str] = "typemarks"
_VERBOSE_FLAG: Final[str] = "_typemarks_verbose_configured"


@lru_cache(maxsize=1)
def get_console() -> Console:
    """Return the console shared by the table renderer and the status lines.

    Rich decides per print whether the current stdout is a terminal, so the
    cached console follows redirected or captured streams.
    """

    return Console(soft_wrap=True, highlight=False)


def _status(symbol: str, style: str, msg: str, use_emoji: bool) -> None:
    line = f"{symbol} {msg}" if use_emoji else msg
    get_console().print(Text(line, style=style))


def ok(msg: str, *, use_emoji: bool = True) -> None:
    """Report that SOURCE produced no markers."""

    _status("✅", "green", msg, use_emoji)


def warn(msg: str, *, use_emoji: bool = True) -> None:
    _status("⚠️", "yellow", msg, use_emoji)


def fail(msg: str, *, use_emoji: bool = True) -> None:
    """Report a failure that ends the command with exit code 2."""

    _status("❌", "bold red", msg, use_emoji)


def configure_verbose_logging() -> logging.Logger:
    """Stream package debug records to stderr, once per process.

    Returns:
        logging.Logger: The package logger.
    """

    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if getattr(logger, _VERBOSE_FLAG, False):
        return logger
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    setattr(logger, _VERBOSE_FLAG, True)
    return logger


__all__ = ["PACKAGE_LOGGER_NAME", "configure_verbose_logging", "fail", "get_console", "ok", "warn"]
