# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pipeline turning mypy output for one document into markers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from os import PathLike
from typing import Final

from .config import MarkerConfig
from .document import Document
from .errors import AnalysisCancelled
from .grouping import group_diagnostics
from .markers import render_groups
from .models import Marker
from .parsers import iter_diagnostic_lines, split_output
from .paths import filter_relevant
from .suppression import filter_suppressed

LOGGER = logging.getLogger(__name__)

_CRASH_MARKERS: Final[tuple[str, ...]] = ("Traceback (most recent call last)", "INTERNAL ERROR")

CancelCheck = Callable[[], bool]


class MypyAnalysis:
    """Convert mypy output into the markers of a single document.

    Each call to :meth:`analyze` starts from fresh parsing and grouping state;
    the result is also kept on :attr:`markers`. ``base_dir`` is the directory
    mypy ran in and resolves relative paths such as ``../pkg/mod.py``.
    """

    def __init__(
        self,
        document: Document,
        config: MarkerConfig | None = None,
        *,
        is_cancelled: CancelCheck | None = None,
        base_dir: str | PathLike[str] | None = None,
    ) -> None:
        self.document = document
        self.config = config or MarkerConfig()
        self.base_dir = base_dir
        self._is_cancelled = is_cancelled
        self.markers: list[Marker] = []

    def analyze(self, stdout: str | Sequence[str], stderr: str | Sequence[str] = "") -> list[Marker]:
        """Run parsing, path filtering, grouping, rendering and suppression.

        Args:
            stdout: Standard output of the mypy run.
            stderr: Standard error of the mypy run; only logged.

        Returns:
            list[Marker]: Markers in emission order.

        Raises:
            AnalysisCancelled: If cancellation was requested before parsing started.
        """

        if self._is_cancelled is not None and self._is_cancelled():
            raise AnalysisCancelled("analysis cancelled before parsing")
        self._log_stderr(stderr)

        diagnostics = filter_relevant(
            iter_diagnostic_lines(split_output(stdout)),
            self.document.path,
            case_sensitive=self.config.case_sensitive_paths,
            base_dir=self.base_dir,
        )
        groups = group_diagnostics(diagnostics)
        candidates = render_groups(groups, prefix=self.config.message_prefix)
        self.markers = filter_suppressed(candidates, self.document, tokens=self.config.suppression_tokens)
        LOGGER.debug(
            "produced %d marker(s) from %d group(s) for %s",
            len(self.markers),
            len(groups),
            self.document.path or "<unsaved buffer>",
        )
        return self.markers

    @staticmethod
    def _log_stderr(stderr: str | Sequence[str]) -> None:
        text = stderr if isinstance(stderr, str) else "\n".join(stderr)
        if not text.strip():
            return
        LOGGER.debug("mypy stderr:\n%s", text)
        if any(marker in text for marker in _CRASH_MARKERS):
            LOGGER.warning("mypy reported an internal failure on stderr")


def analyze_output(
    stdout: str | Sequence[str],
    document: Document,
    *,
    stderr: str | Sequence[str] = "",
    config: MarkerConfig | None = None,
    base_dir: str | PathLike[str] | None = None,
) -> list[Marker]:
    """Return the markers mypy output produces for ``document``."""

    return MypyAnalysis(document, config, base_dir=base_dir).analyze(stdout, stderr)


__all__ = ["CancelCheck", "MypyAnalysis", "analyze_output"]
