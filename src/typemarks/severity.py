# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity vocabulary emitted by mypy."""

    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"

    @property
    def is_primary(self) -> bool:
        """Return ``True`` when the severity anchors a merged group.

        Returns:
            bool: ``True`` for errors and warnings, ``False`` for notes.
        """

        return self in _PRIMARY_SEVERITIES


_PRIMARY_SEVERITIES: Final[frozenset[Severity]] = frozenset({Severity.ERROR, Severity.WARNING})
_SEVERITY_BY_LABEL: Final[dict[str, Severity]] = {severity.value: severity for severity in Severity}


def severity_from_label(label: str) -> Severity | None:
    """Map an exact mypy severity word to :class:`Severity`.

    Args:
        label: Severity word as printed by mypy (``error``, ``warning``, ``note``).

    Returns:
        Severity | None: Matching severity, or ``None`` for any other word. The
        lookup is case-sensitive because mypy only ever prints lowercase labels.
    """

    return _SEVERITY_BY_LABEL.get(label)


__all__ = ["Severity", "severity_from_label"]
