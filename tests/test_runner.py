# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the mypy subprocess wrapper."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

import pytest

from typemarks import runner
from typemarks.config import MarkerConfig
from typemarks.errors import RunnerError
from typemarks.runner import ToolOutput, build_mypy_command, run_mypy


def test_build_mypy_command(tmp_path: Path) -> None:
    config = MarkerConfig(mypy_args=("--strict",))
    target = tmp_path / "mod.py"
    assert build_mypy_command(target, config) == ["mypy", "--strict", str(target)]


def test_run_mypy_captures_output(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, Any]] = []

    def _fake_run(command: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        calls.append({"command": command, **kwargs})
        return subprocess.CompletedProcess(command, 1, stdout="mod.py:1: error: boom\n", stderr="")

    monkeypatch.setattr(runner.shutil, "which", lambda name: f"/usr/bin/{name}")
    monkeypatch.setattr(runner.subprocess, "run", _fake_run)

    result = run_mypy(tmp_path / "mod.py", cwd=tmp_path)

    assert result == ToolOutput(stdout="mod.py:1: error: boom\n", stderr="", returncode=1)
    assert calls[0]["command"][0] == "/usr/bin/mypy"
    assert calls[0]["command"][-1] == str(tmp_path / "mod.py")
    assert calls[0]["check"] is False
    assert calls[0]["capture_output"] is True
    assert calls[0]["cwd"] == str(tmp_path)


def test_run_mypy_missing_executable(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(runner.shutil, "which", lambda name: None)
    with pytest.raises(RunnerError, match="not found on PATH"):
        run_mypy(tmp_path / "mod.py", MarkerConfig(mypy_executable="no-such-mypy"))


def test_run_mypy_start_failure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def _fail(command: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        raise PermissionError("denied")

    monkeypatch.setattr(runner.subprocess, "run", _fail)
    executable = tmp_path / "mypy"
    with pytest.raises(RunnerError, match="failed to start"):
        run_mypy(tmp_path / "mod.py", MarkerConfig(mypy_executable=str(executable)))
