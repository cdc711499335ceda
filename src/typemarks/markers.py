# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render flushed diagnostic groups into editor markers."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final

from .grouping import Group
from .models import Marker

DEFAULT_MESSAGE_PREFIX: Final[str] = "Mypy: "
_FRAGMENT_SEPARATOR: Final[str] = "\n"


def render_group(group: Group, *, prefix: str = DEFAULT_MESSAGE_PREFIX) -> Marker:
    """Return the marker describing ``group``.

    The message is ``prefix`` followed by every fragment of the group joined by
    newlines. Merged groups are positioned at their primary diagnostic and
    note runs at their first note.

    Args:
        group: Merged group or standalone note run.
        prefix: Text prepended to the first fragment.

    Returns:
        Marker: Marker ready for suppression filtering.
    """

    location = group.location
    return Marker(
        line=location.line,
        col=location.col,
        message=prefix + _FRAGMENT_SEPARATOR.join(group.texts()),
        severity=group.severity,
    )


def render_groups(groups: Iterable[Group], *, prefix: str = DEFAULT_MESSAGE_PREFIX) -> list[Marker]:
    """Render ``groups`` preserving emission order."""

    return [render_group(group, prefix=prefix) for group in groups]


__all__ = ["DEFAULT_MESSAGE_PREFIX", "render_group", "render_groups"]
