# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Decide whether a reported diagnostic path refers to the analysed document."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Final

from .models import DiagnosticLine

LOGGER = logging.getLogger(__name__)

_Pathish = str | PathLike[str] | Path
_WINDOWS_SEPARATOR: Final[str] = "\\"
PATH_SEPARATOR: Final[str] = "/"
_CURRENT_DIR: Final[str] = "."
_PARENT_DIR: Final[str] = ".."


def path_segments(path: _Pathish, *, case_sensitive: bool = True) -> tuple[str, ...]:
    """Split ``path`` into comparable segments regardless of the separator style.

    Args:
        path: Path reported by mypy or owned by the document.
        case_sensitive: When ``False`` every segment is case-folded.

    Returns:
        tuple[str, ...]: Non-empty segments with ``.`` components removed and
        ``..`` components collapsed into their parent where one is present.
    """

    text = str(path).strip().replace(_WINDOWS_SEPARATOR, PATH_SEPARATOR)
    segments: list[str] = []
    for part in text.split(PATH_SEPARATOR):
        if not part or part == _CURRENT_DIR:
            continue
        if part == _PARENT_DIR and segments and segments[-1] != _PARENT_DIR:
            segments.pop()
            continue
        segments.append(part)
    if case_sensitive:
        return tuple(segments)
    return tuple(part.casefold() for part in segments)


def is_absolute_path(path: str) -> bool:
    """Return ``True`` for POSIX absolute paths and Windows paths carrying a drive."""

    text = path.strip()
    return PurePosixPath(text).is_absolute() or bool(PureWindowsPath(text).drive)


@dataclass(slots=True)
class PathFilter:
    """Accept only diagnostics that point at the analysed document.

    A reported path matches when its segments form a trailing suffix of the
    document path, which covers both project-relative and absolute paths.
    When ``base_dir`` names the directory mypy ran in, relative paths are
    also joined onto it first so that ``../pkg/mod.py`` resolves to the file
    it names. Without a document path (an unsaved buffer checked through a
    snapshot) every diagnostic is accepted.
    """

    document_path: _Pathish | None
    case_sensitive: bool = True
    base_dir: _Pathish | None = None
    _document_segments: tuple[str, ...] | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        if self.document_path is not None:
            self._document_segments = path_segments(self.document_path, case_sensitive=self.case_sensitive)

    def matches_path(self, reported: str) -> bool:
        """Return ``True`` when ``reported`` identifies the document file.

        Args:
            reported: Path string as printed by mypy.

        Returns:
            bool: ``True`` when the path, as printed or joined onto ``base_dir``,
            is a trailing suffix of the document path.
        """

        if self._document_segments is None:
            return True
        if self._is_suffix(path_segments(reported, case_sensitive=self.case_sensitive)):
            return True
        if self.base_dir is None or is_absolute_path(reported):
            return False
        joined = f"{self.base_dir}{PATH_SEPARATOR}{reported.strip()}"
        return self._is_suffix(path_segments(joined, case_sensitive=self.case_sensitive))

    def _is_suffix(self, candidate: tuple[str, ...]) -> bool:
        document = self._document_segments or ()
        if not candidate or len(candidate) > len(document):
            return False
        return document[-len(candidate) :] == candidate

    def accepts(self, diagnostic: DiagnosticLine) -> bool:
        """Return ``True`` when ``diagnostic`` is relevant for the document.

        Args:
            diagnostic: Parsed diagnostic line.

        Returns:
            bool: Whether the diagnostic should reach the grouping engine.
        """

        return self.matches_path(diagnostic.path)


def filter_relevant(
    diagnostics: Iterable[DiagnosticLine],
    document_path: _Pathish | None,
    *,
    case_sensitive: bool = True,
    base_dir: _Pathish | None = None,
) -> Iterator[DiagnosticLine]:
    """Yield the diagnostics that refer to ``document_path``.

    Args:
        diagnostics: Parsed diagnostics in output order.
        document_path: On-disk path of the document, or ``None`` when unknown.
        case_sensitive: Whether path segments are compared case-sensitively.
        base_dir: Directory mypy ran in, used to resolve relative reported paths.

    Yields:
        DiagnosticLine: Diagnostics accepted by :class:`PathFilter`.
    """

    path_filter = PathFilter(document_path, case_sensitive=case_sensitive, base_dir=base_dir)
    for diagnostic in diagnostics:
        if path_filter.accepts(diagnostic):
            yield diagnostic
        else:
            LOGGER.debug("ignoring diagnostic for unrelated file %s", diagnostic.path)


__all__ = ["PATH_SEPARATOR", "PathFilter", "filter_relevant", "is_absolute_path", "path_segments"]
