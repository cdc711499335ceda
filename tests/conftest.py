# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from mypy_samples import PROTOCOL_SOURCE
from typemarks.document import TextDocument


@pytest.fixture
def protocol_document() -> TextDocument:
    """Return an unsaved buffer holding :data:`PROTOCOL_SOURCE`."""

    return TextDocument(PROTOCOL_SOURCE)


@pytest.fixture
def snippet_file(tmp_path: Path) -> Path:
    """Write :data:`PROTOCOL_SOURCE` to ``snippet.py`` and return its path."""

    path = tmp_path / "snippet.py"
    path.write_text(PROTOCOL_SOURCE, encoding="utf-8")
    return path
