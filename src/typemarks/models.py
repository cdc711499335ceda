# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the typemarks package."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from pydantic import BaseModel, ConfigDict, Field

from .severity import Severity

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]


@dataclass(frozen=True, slots=True)
class Location:
    """Line and optional column used to decide whether diagnostics merge.

    A location without a column never equals one with a column, even when the
    lines agree.
    """

    line: int
    col: int | None = None

    def __str__(self) -> str:
        return f"{self.line}" if self.col is None else f"{self.line}:{self.col}"


class DiagnosticLine(BaseModel):
    """Single ``path:line[:col]: severity: text`` record parsed from mypy output."""

    model_config = ConfigDict(frozen=True)

    path: str
    line: int = Field(ge=1)
    col: int | None = Field(default=None, ge=1)
    severity: Severity
    text: str

    @property
    def location(self) -> Location:
        """Return the merge key of this diagnostic.

        Returns:
            Location: ``(line, col)`` pair reported by mypy.
        """

        return Location(self.line, self.col)


class Marker(BaseModel):
    """Annotation handed to the editor once grouping and filtering finish."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=1)
    col: int | None = None
    message: str
    severity: Severity = Severity.ERROR

    @property
    def location(self) -> Location:
        """Return the marker position as a :class:`Location`."""

        return Location(self.line, self.col)

    def to_dict(self) -> dict[str, JsonValue]:
        """Return a JSON-compatible mapping describing the marker.

        Returns:
            dict[str, JsonValue]: Mapping with ``line``, ``col``, ``severity`` and ``message`` keys.
        """

        return {
            "line": self.line,
            "col": self.col,
            "severity": self.severity.value,
            "message": self.message,
        }


__all__ = ["DiagnosticLine", "JsonValue", "Location", "Marker"]
