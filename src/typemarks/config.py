# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model and ``[tool.typemarks]`` loading."""

from __future__ import annotations

import re
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import ConfigError
from .markers import DEFAULT_MESSAGE_PREFIX
from .suppression import DEFAULT_SUPPRESSION_TOKENS

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "typemarks"
DEFAULT_MYPY_ARGS: Final[tuple[str, ...]] = ("--show-column-numbers", "--follow-imports=silent")
_TOKEN_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\w+$")


class MarkerConfig(BaseModel):
    """Settings shaping how mypy output becomes markers."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    message_prefix: str = DEFAULT_MESSAGE_PREFIX
    suppression_tokens: tuple[str, ...] = DEFAULT_SUPPRESSION_TOKENS
    case_sensitive_paths: bool = True
    mypy_executable: str = "mypy"
    mypy_args: tuple[str, ...] = DEFAULT_MYPY_ARGS

    @field_validator("suppression_tokens")
    @classmethod
    def _validate_tokens(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Ensure every suppression token is a single word.

        Args:
            value: Tokens supplied by the caller.

        Returns:
            tuple[str, ...]: Stripped, de-duplicated tokens.

        Raises:
            ValueError: If a token is empty or contains non-word characters.
        """

        tokens: list[str] = []
        for raw in value:
            token = raw.strip()
            if not _TOKEN_PATTERN.match(token):
                raise ValueError(f"invalid suppression token {raw!r}")
            tokens.append(token)
        return tuple(dict.fromkeys(tokens))

    @field_validator("mypy_executable")
    @classmethod
    def _validate_executable(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("mypy_executable must not be empty")
        return value.strip()


def find_pyproject(start: Path | None = None) -> Path | None:
    """Return the nearest ``pyproject.toml`` walking up from ``start``.

    Args:
        start: Directory to start from; defaults to the working directory.

    Returns:
        Path | None: Path to the first ``pyproject.toml`` found, or ``None``.
    """

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / PYPROJECT_FILENAME
        if candidate.is_file():
            return candidate
    return None


def _normalise_keys(section: Mapping[str, Any]) -> dict[str, Any]:
    return {str(key).replace("-", "_"): value for key, value in section.items()}


def config_from_mapping(section: Mapping[str, Any]) -> MarkerConfig:
    """Build a :class:`MarkerConfig` from a ``[tool.typemarks]`` style mapping.

    Raises:
        ConfigError: If the mapping holds unknown keys or invalid values.
    """

    try:
        return MarkerConfig.model_validate(_normalise_keys(section))
    except ValidationError as exc:
        raise ConfigError(f"invalid typemarks configuration: {exc}") from exc


def load_config(path: Path | None = None) -> MarkerConfig:
    """Load configuration from ``pyproject.toml``.

    Args:
        path: Explicit ``pyproject.toml``; when omitted the nearest one above the
            working directory is used.

    Returns:
        MarkerConfig: Configuration from ``[tool.typemarks]`` or defaults when
        the file or the section is absent.

    Raises:
        ConfigError: If the file cannot be parsed or holds invalid settings.
    """

    source = path if path is not None else find_pyproject()
    if source is None or not source.is_file():
        return MarkerConfig()
    try:
        with source.open("rb") as handle:
            data = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"cannot read {source}: {exc}") from exc
    tool_section = data.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return MarkerConfig()
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return MarkerConfig()
    if not isinstance(section, Mapping):
        raise ConfigError(f"[tool.{PYPROJECT_SECTION_KEY}] in {source} must be a table")
    return config_from_mapping(section)


__all__ = [
    "DEFAULT_MYPY_ARGS",
    "MarkerConfig",
    "config_from_mapping",
    "find_pyproject",
    "load_config",
]
