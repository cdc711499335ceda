# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared across typemarks."""

from __future__ import annotations


class TypemarksError(Exception):
    """Base class for errors raised by typemarks."""


class ConfigError(TypemarksError):
    """Raised when configuration input is invalid."""


class DocumentLineError(TypemarksError, IndexError):
    """Raised when a document line cannot be retrieved."""


class AnalysisCancelled(TypemarksError):
    """Raised when an analysis is cancelled before parsing begins."""


class RunnerError(TypemarksError, RuntimeError):
    """Raised when the type checker process cannot be started."""


__all__ = [
    "AnalysisCancelled",
    "ConfigError",
    "DocumentLineError",
    "RunnerError",
    "TypemarksError",
]
