# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""End-to-end tests turning mypy output into markers."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from mypy_samples import INCOMPATIBLE, PROTOCOL_SOURCE, conflict_output, expected_notes
from typemarks.analysis import MypyAnalysis, analyze_output
from typemarks.config import MarkerConfig
from typemarks.document import TextDocument
from typemarks.errors import AnalysisCancelled


def test_markers_message(protocol_document: TextDocument) -> None:
    analysis = MypyAnalysis(protocol_document)
    analysis.analyze(conflict_output(), "")

    assert len(analysis.markers) == 1
    marker = analysis.markers[0]
    assert marker.message == f"Mypy: {INCOMPATIBLE}\n{expected_notes()}"
    assert (marker.line, marker.col) == (26, 11)


def test_markers_message_without_col(protocol_document: TextDocument) -> None:
    markers = analyze_output(conflict_output(error_location="26"), protocol_document)

    assert len(markers) == 2
    assert markers[0].message == f"Mypy: {expected_notes()}"
    assert (markers[0].line, markers[0].col) == (26, 11)
    assert markers[1].message == f"Mypy: {INCOMPATIBLE}"
    assert (markers[1].line, markers[1].col) == (26, None)


def test_invalid_type_ignore_comment() -> None:
    document = TextDocument(
        "def method(a: int):\n"
        "    pass\n"
        "\n"
        "method('')  # type: ignore -- error due to this comment\n"
        "method('')  # This is not reported due to the invalid type ignore in the other line"
    )
    markers = analyze_output('snippet2.py:4: error: Invalid "type: ignore" comment', document)

    assert [marker.message for marker in markers] == ['Mypy: Invalid "type: ignore" comment']


def test_noqa_suppresses_marker() -> None:
    document = TextDocument(PROTOCOL_SOURCE + " # noqa")
    assert analyze_output(conflict_output(), document) == []


def test_messages_from_another_file() -> None:
    document = TextDocument("some_variable = 10", path=Path("/sample/src/package1/module1.py"))
    output = (
        " src\\package1-stubs\\__init__.pyi:10:1: error: Name 'logger' already defined on line 9\n"
        "Found 1 error in 1 file (checked 1 source file)\n"
    )
    assert analyze_output(output, document) == []


def test_known_path_keeps_own_diagnostics() -> None:
    document = TextDocument("some_variable = 10", path=Path("/sample/src/package1/module1.py"))
    output = "src/package1/module1.py:1:1: error: Name 'x' is not defined\n"
    markers = analyze_output(output, document)
    assert [marker.message for marker in markers] == ["Mypy: Name 'x' is not defined"]


def test_unknown_path_accepts_any_reported_file() -> None:
    document = TextDocument("value = 1\n")
    markers = analyze_output("/tmp/snapshot_1234.py:1:1: error: problem\n", document)
    assert len(markers) == 1


def test_summary_line_between_diagnostics_does_not_flush(protocol_document: TextDocument) -> None:
    output = "\n".join(
        [
            "snippet.py:26:11: error: E",
            "Found 1 error in 1 file (checked 1 source file)",
            "snippet.py:26:11: note: N",
        ]
    )
    markers = analyze_output(output, protocol_document)
    assert [marker.message for marker in markers] == ["Mypy: E\nN"]


def test_analysis_is_idempotent(protocol_document: TextDocument) -> None:
    analysis = MypyAnalysis(protocol_document)
    first = analysis.analyze(conflict_output(error_location="26"))
    second = analysis.analyze(conflict_output(error_location="26"))
    assert first == second
    assert len(second) == 2


def test_config_prefix_and_tokens(protocol_document: TextDocument) -> None:
    config = MarkerConfig(message_prefix="[mypy] ", suppression_tokens=("nomypy",))
    markers = analyze_output("snippet.py:26: error: E\n", protocol_document, config=config)
    assert [marker.message for marker in markers] == ["[mypy] E"]

    suppressed = TextDocument(PROTOCOL_SOURCE + "  # nomypy")
    assert analyze_output("snippet.py:26: error: E\n", suppressed, config=config) == []


def test_cancelled_before_parsing(protocol_document: TextDocument) -> None:
    analysis = MypyAnalysis(protocol_document, is_cancelled=lambda: True)
    with pytest.raises(AnalysisCancelled):
        analysis.analyze(conflict_output())
    assert analysis.markers == []


def test_stderr_is_logged(protocol_document: TextDocument, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="typemarks.analysis"):
        analyze_output(
            "",
            protocol_document,
            stderr="Traceback (most recent call last):\n  boom",
        )
    assert "mypy stderr" in caplog.text
    assert any(record.levelno == logging.WARNING for record in caplog.records)


def test_out_of_range_marker_is_kept(caplog: pytest.LogCaptureFixture) -> None:
    document = TextDocument("x = 1")
    with caplog.at_level(logging.WARNING, logger="typemarks.suppression"):
        markers = analyze_output("snippet.py:99: error: stale line\n", document)
    assert [marker.message for marker in markers] == ["Mypy: stale line"]
    assert "99" in caplog.text


def _seven_notes(location: str) -> list[str]:
    return [f"f.py:{location}: note: N_{index}" for index in range(1, 8)]


def test_seven_notes_merge_into_error(protocol_document: TextDocument) -> None:
    output = "\n".join(
        ["f.py:26:11: error: E", *_seven_notes("26:11"), "Found 1 error in 1 file (checked 1 source file)"]
    )
    markers = analyze_output(output, protocol_document)
    assert [marker.message for marker in markers] == ["Mypy: E\nN_1\nN_2\nN_3\nN_4\nN_5\nN_6\nN_7"]
    assert (markers[0].line, markers[0].col) == (26, 11)


def test_seven_notes_split_from_error_without_column(protocol_document: TextDocument) -> None:
    output = "\n".join(
        ["f.py:26: error: E", *_seven_notes("26:11"), "Found 1 error in 1 file (checked 1 source file)"]
    )
    markers = analyze_output(output, protocol_document)
    assert [marker.message for marker in markers] == ["Mypy: N_1\nN_2\nN_3\nN_4\nN_5\nN_6\nN_7", "Mypy: E"]
    assert [(marker.line, marker.col) for marker in markers] == [(26, 11), (26, None)]
