# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parse mypy text output into :class:`DiagnosticLine` records."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator, Sequence
from typing import Final

from .models import DiagnosticLine
from .severity import severity_from_label

LOGGER = logging.getLogger(__name__)

# ``path`` is lazy so that Windows drive letters (``C:\pkg\mod.py``) stay in the path.
# ``--show-error-end`` appends ``:end_line:end_col``, which is read and dropped.
_DIAGNOSTIC_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?P<path>.+?):(?P<line>\d+)(?::(?P<col>\d+)(?::\d+:\d+)?)?:\s*(?P<severity>[A-Za-z]+):(?P<message>.*)$"
)


def split_output(stdout: str | Sequence[str]) -> list[str]:
    """Normalise string-based output into a list of lines.

    Args:
        stdout: Raw text blob or an already split sequence of lines.

    Returns:
        list[str]: Output lines without trailing newline characters.
    """

    if isinstance(stdout, str):
        return stdout.splitlines()
    return [str(item).rstrip("\r\n") for item in stdout]


def parse_diagnostic_line(raw: str) -> DiagnosticLine | None:
    """Parse a single mypy output line.

    The message body is stripped so that the indentation mypy uses for nested
    notes (``"    Expected:"``) is dropped.

    Args:
        raw: One line of mypy stdout.

    Returns:
        DiagnosticLine | None: Parsed record, or ``None`` for summary lines,
        blank lines and lines carrying an unknown severity word.
    """

    match = _DIAGNOSTIC_PATTERN.match(raw.strip())
    if match is None:
        return None
    severity = severity_from_label(match.group("severity"))
    if severity is None:
        return None
    line = int(match.group("line"))
    col_text = match.group("col")
    col = int(col_text) if col_text is not None else None
    if line < 1 or (col is not None and col < 1):
        return None
    return DiagnosticLine(
        path=match.group("path"),
        line=line,
        col=col,
        severity=severity,
        text=match.group("message").strip(),
    )


def iter_diagnostic_lines(lines: Iterable[str]) -> Iterator[DiagnosticLine]:
    """Yield every parseable diagnostic from ``lines`` in order.

    Args:
        lines: Raw output lines.

    Yields:
        DiagnosticLine: Parsed diagnostics; other lines are skipped.
    """

    for raw_line in lines:
        diagnostic = parse_diagnostic_line(raw_line)
        if diagnostic is None:
            if raw_line.strip():
                LOGGER.debug("skipping non-diagnostic line: %s", raw_line)
            continue
        yield diagnostic


__all__ = ["iter_diagnostic_lines", "parse_diagnostic_line", "split_output"]
