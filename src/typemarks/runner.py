# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrapper around the mypy subprocess."""

from __future__ import annotations

import logging
import shutil

# Bandit: subprocess usage is intentional, arguments are normalised and ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .config import MarkerConfig
from .errors import RunnerError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ToolOutput:
    """Captured result of a type checker invocation."""

    stdout: str
    stderr: str
    returncode: int


def _normalize_args(args: Sequence[str]) -> list[str]:
    if not args:
        raise RunnerError("subprocess command requires at least one argument")

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        raise RunnerError(f"Executable '{head}' was not found on PATH")
    return [resolved, *rest]


def build_mypy_command(target: Path, config: MarkerConfig) -> list[str]:
    """Return the argument vector used to check ``target``."""

    return [config.mypy_executable, *config.mypy_args, str(target)]


def run_mypy(target: Path, config: MarkerConfig | None = None, *, cwd: Path | None = None) -> ToolOutput:
    """Run mypy against ``target`` and capture its output.

    A non-zero exit status is expected whenever mypy reports errors and is not
    treated as a failure.

    Args:
        target: File to type check.
        config: Settings providing the executable and its arguments.
        cwd: Working directory for the process; paths in the output are relative to it.

    Returns:
        ToolOutput: Captured stdout, stderr and exit status.

    Raises:
        RunnerError: If the executable cannot be found or started.
    """

    active = config or MarkerConfig()
    command = _normalize_args(build_mypy_command(target, active))
    LOGGER.debug("running %s", " ".join(command))
    try:
        completed = subprocess.run(  # nosec B603
            command,
            cwd=str(cwd) if cwd is not None else None,
            check=False,
            capture_output=True,
            text=True,
            stdin=subprocess.DEVNULL,
        )
    except OSError as exc:
        raise RunnerError(f"failed to start {command[0]}: {exc}") from exc
    return ToolOutput(stdout=completed.stdout, stderr=completed.stderr, returncode=completed.returncode)


__all__ = ["ToolOutput", "build_mypy_command", "run_mypy"]
