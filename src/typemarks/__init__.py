# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Turn mypy text output into editor markers."""

from __future__ import annotations

from importlib import metadata

from .analysis import MypyAnalysis, analyze_output
from .models import DiagnosticLine, Location, Marker
from .severity import Severity

__all__ = [
    "DiagnosticLine",
    "Location",
    "Marker",
    "MypyAnalysis",
    "Severity",
    "__version__",
    "analyze_output",
]

try:
    __version__ = metadata.version("typemarks")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
