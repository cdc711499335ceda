# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Document access used while filtering markers."""

from __future__ import annotations

import threading
from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from pathlib import Path
from typing import Protocol, TypeVar, runtime_checkable

from .errors import DocumentLineError

_T = TypeVar("_T")


@runtime_checkable
class Document(Protocol):
    """Editor buffer being analysed."""

    @property
    def path(self) -> Path | None:
        """Return the on-disk path, or ``None`` for an unsaved buffer."""

        raise NotImplementedError

    def get_line(self, number: int) -> str:
        """Return the text of the 1-based line ``number`` without its newline.

        Raises:
            DocumentLineError: If ``number`` is outside the document.
        """

        raise NotImplementedError


@runtime_checkable
class SynchronizedDocument(Document, Protocol):
    """Document exposing a lock that guards concurrent edits."""

    @property
    def lock(self) -> AbstractContextManager[object]:
        """Return the lock held while reading the document."""

        raise NotImplementedError


class TextDocument:
    """In-memory :class:`SynchronizedDocument` backed by a string."""

    def __init__(self, text: str, path: Path | str | None = None) -> None:
        self._lock = threading.RLock()
        self._path = Path(path) if path is not None else None
        self._lines: list[str] = []
        self.set(text)

    @classmethod
    def from_file(cls, path: Path) -> TextDocument:
        """Load ``path`` from disk and bind the document to it."""

        return cls(path.read_text(encoding="utf-8"), path=path)

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def lock(self) -> AbstractContextManager[object]:
        return self._lock

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def set(self, text: str) -> None:
        """Replace the whole document content.

        Args:
            text: New document text; ``\\n`` and ``\\r\\n`` line endings are accepted.
        """

        with self._lock:
            self._lines = [line.rstrip("\r") for line in text.split("\n")]

    def get_line(self, number: int) -> str:
        if number < 1 or number > len(self._lines):
            raise DocumentLineError(f"line {number} is outside the document (1..{len(self._lines)})")
        return self._lines[number - 1]


def run_with_document_synched(document: Document, callback: Callable[[Document], _T]) -> _T:
    """Run ``callback`` while holding the document lock when one is exposed.

    Args:
        document: Document to read.
        callback: Function receiving the document.

    Returns:
        _T: Whatever ``callback`` returns. The lock is released even when it raises.
    """

    lock = getattr(document, "lock", None)
    guard: AbstractContextManager[object] = lock if lock is not None else nullcontext()
    with guard:
        return callback(document)


__all__ = ["Document", "SynchronizedDocument", "TextDocument", "run_with_document_synched"]
