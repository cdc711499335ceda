# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""State machine attaching mypy notes to the errors they explain."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TypeAlias

from .models import DiagnosticLine, Location
from .severity import Severity


@dataclass(slots=True)
class MergedGroup:
    """Primary diagnostic plus the notes reported at its exact location."""

    primary: DiagnosticLine
    attachments: list[DiagnosticLine] = field(default_factory=list)

    @property
    def location(self) -> Location:
        return self.primary.location

    @property
    def severity(self) -> Severity:
        return self.primary.severity

    def texts(self) -> list[str]:
        """Return message fragments in encounter order, primary first."""

        return [self.primary.text, *(note.text for note in self.attachments)]


@dataclass(slots=True)
class NoteRun:
    """Consecutive notes sharing one location with no primary to attach to."""

    notes: list[DiagnosticLine]

    def __post_init__(self) -> None:
        if not self.notes:
            raise ValueError("a note run requires at least one note")

    @property
    def location(self) -> Location:
        return self.notes[0].location

    @property
    def severity(self) -> Severity:
        return Severity.NOTE

    def texts(self) -> list[str]:
        """Return note texts in encounter order."""

        return [note.text for note in self.notes]


Group: TypeAlias = MergedGroup | NoteRun


@dataclass(slots=True)
class DiagnosticGrouper:
    """Group diagnostics using two slots: a pending primary and a note run.

    Each call to :meth:`feed` returns the groups flushed by that transition;
    :meth:`finish` flushes whatever remains, note run first, then the pending
    primary, and resets the grouper.
    """

    pending_primary: MergedGroup | None = None
    note_run: NoteRun | None = None

    def feed(self, diagnostic: DiagnosticLine) -> list[Group]:
        """Advance the state machine with ``diagnostic``.

        Args:
            diagnostic: Next accepted diagnostic in output order.

        Returns:
            list[Group]: Groups completed by this transition, in emission order.
        """

        if diagnostic.severity.is_primary:
            flushed = self._flush()
            self.pending_primary = MergedGroup(diagnostic)
            return flushed
        return self._feed_note(diagnostic)

    def finish(self) -> list[Group]:
        """Flush the remaining state at end of stream.

        Returns:
            list[Group]: The open note run (if any) followed by the pending primary (if any).
        """

        return self._flush()

    def _feed_note(self, note: DiagnosticLine) -> list[Group]:
        pending = self.pending_primary
        if self.note_run is None and pending is not None and pending.location == note.location:
            pending.attachments.append(note)
            return []
        if self.note_run is None:
            self.note_run = NoteRun([note])
            return []
        if self.note_run.location == note.location:
            self.note_run.notes.append(note)
            return []
        finished = self.note_run
        self.note_run = NoteRun([note])
        return [finished]

    def _flush(self) -> list[Group]:
        flushed: list[Group] = []
        if self.note_run is not None:
            flushed.append(self.note_run)
        if self.pending_primary is not None:
            flushed.append(self.pending_primary)
        self.note_run = None
        self.pending_primary = None
        return flushed


def group_diagnostics(diagnostics: Iterable[DiagnosticLine]) -> list[Group]:
    """Group a complete diagnostic sequence with a fresh :class:`DiagnosticGrouper`.

    Args:
        diagnostics: Accepted diagnostics in output order.

    Returns:
        list[Group]: Groups in emission order.
    """

    grouper = DiagnosticGrouper()
    groups: list[Group] = []
    for diagnostic in diagnostics:
        groups.extend(grouper.feed(diagnostic))
    groups.extend(grouper.finish())
    return groups


__all__ = ["DiagnosticGrouper", "Group", "MergedGroup", "NoteRun", "group_diagnostics"]
