# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Drop markers whose source line carries an inline suppression comment."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from functools import lru_cache
from typing import Final

from .document import Document, run_with_document_synched
from .models import Marker

LOGGER = logging.getLogger(__name__)

DEFAULT_SUPPRESSION_TOKENS: Final[tuple[str, ...]] = ("noqa",)


@lru_cache(maxsize=32)
def _suppression_pattern(tokens: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(token) for token in tokens)
    return re.compile(rf"#.*?\b(?:{alternatives})\b", re.IGNORECASE)


def has_suppression_comment(
    source_line: str,
    tokens: Sequence[str] = DEFAULT_SUPPRESSION_TOKENS,
) -> bool:
    """Return ``True`` when ``source_line`` holds a ``#`` comment with a suppression token.

    Args:
        source_line: Text of the source line the marker points at.
        tokens: Words recognised as suppressions, matched case-insensitively on
            word boundaries.

    Returns:
        bool: ``True`` for lines such as ``x = 1  # noqa`` or ``y = 2  # NOQA: E501``.
    """

    if not tokens or "#" not in source_line:
        return False
    return _suppression_pattern(tuple(tokens)).search(source_line) is not None


def filter_suppressed(
    markers: Iterable[Marker],
    document: Document,
    *,
    tokens: Sequence[str] = DEFAULT_SUPPRESSION_TOKENS,
) -> list[Marker]:
    """Return ``markers`` minus those whose source line is suppressed.

    Lines are read under the document lock. A line the document fails to
    return, for any reason, keeps its marker.

    Args:
        markers: Candidate markers in emission order.
        document: Document the markers belong to.
        tokens: Suppression words to look for.

    Returns:
        list[Marker]: Markers that should be shown, order preserved.
    """

    candidates = list(markers)

    def _collect(doc: Document) -> list[Marker]:
        kept: list[Marker] = []
        for marker in candidates:
            try:
                source_line = doc.get_line(marker.line)
            except Exception as exc:
                LOGGER.warning("cannot check suppression for line %s: %s", marker.line, exc)
                kept.append(marker)
                continue
            if has_suppression_comment(source_line, tokens):
                LOGGER.debug("marker at line %s suppressed by inline comment", marker.line)
                continue
            kept.append(marker)
        return kept

    return run_with_document_synched(document, _collect)


__all__ = ["DEFAULT_SUPPRESSION_TOKENS", "filter_suppressed", "has_suppression_comment"]
