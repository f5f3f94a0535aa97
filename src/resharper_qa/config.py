# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Analyzer configuration properties and their validation."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigurationError
from .models import ToolInvocation

PROPERTY_PREFIX: Final[str] = "resharper"
PROJECT_NAME_PROPERTY_KEY: Final[str] = "resharper.projectName"
SOLUTION_FILE_PROPERTY_KEY: Final[str] = "resharper.solutionFile"
INSPECTCODE_PATH_PROPERTY_KEY: Final[str] = "resharper.inspectCodePath"
TIMEOUT_MINUTES_PROPERTY_KEY: Final[str] = "resharper.timeoutMinutes"

KNOWN_PROPERTY_KEYS: Final[tuple[str, ...]] = (
    PROJECT_NAME_PROPERTY_KEY,
    SOLUTION_FILE_PROPERTY_KEY,
    INSPECTCODE_PATH_PROPERTY_KEY,
    TIMEOUT_MINUTES_PROPERTY_KEY,
)

DEFAULT_TIMEOUT_MINUTES: Final[int] = 10
_WINDOWS_EXECUTABLE: Final[str] = "inspectcode.exe"
_POSIX_EXECUTABLE: Final[str] = "inspectcode.sh"


def default_executable() -> str:
    """Return the platform-specific ``inspectcode`` binary name.

    Returns:
        str: ``inspectcode.exe`` on Windows, ``inspectcode.sh`` elsewhere.
    """

    return _WINDOWS_EXECUTABLE if os.name == "nt" else _POSIX_EXECUTABLE


class AnalyzerSettings(BaseModel):
    """Host-provided configuration for ``inspectcode`` runs.

    Required keys are optional here so that a missing value can be reported
    by :meth:`require_invocation` with the property name instead of a generic
    validation error.
    """

    model_config = ConfigDict(frozen=True)

    project_name: str | None = None
    solution_file: str | None = None
    inspectcode_path: str | None = None
    timeout_minutes: int = Field(default=DEFAULT_TIMEOUT_MINUTES, gt=0)

    @classmethod
    def from_properties(cls, properties: Mapping[str, object]) -> AnalyzerSettings:
        """Build settings from a flat ``resharper.*`` property mapping.

        Blank strings are treated as unset.

        Args:
            properties: Host properties keyed by their dotted names.

        Returns:
            AnalyzerSettings: Parsed settings.

        Raises:
            ConfigurationError: If the timeout is not a positive integer.
        """

        return cls(
            project_name=_optional_text(properties.get(PROJECT_NAME_PROPERTY_KEY)),
            solution_file=_optional_text(properties.get(SOLUTION_FILE_PROPERTY_KEY)),
            inspectcode_path=_optional_text(properties.get(INSPECTCODE_PATH_PROPERTY_KEY)),
            timeout_minutes=_timeout_minutes(properties.get(TIMEOUT_MINUTES_PROPERTY_KEY)),
        )

    @property
    def executable(self) -> str:
        """Return the configured ``inspectcode`` path or the platform default."""
        return self.inspectcode_path or default_executable()

    def check_required(self) -> None:
        """Ensure the project name and solution file are both set.

        Raises:
            ConfigurationError: Naming the first missing property.
        """

        if not self.project_name:
            raise ConfigurationError(PROJECT_NAME_PROPERTY_KEY)
        if not self.solution_file:
            raise ConfigurationError(SOLUTION_FILE_PROPERTY_KEY)

    def require_invocation(self, *, settings_file: Path, report_file: Path) -> ToolInvocation:
        """Return the :class:`ToolInvocation` described by these settings.

        Args:
            settings_file: Destination of the generated DotSettings file.
            report_file: Destination of the ``inspectcode`` XML report.

        Returns:
            ToolInvocation: Fully resolved invocation arguments.

        Raises:
            ConfigurationError: If the project name or solution file is missing.
        """

        self.check_required()
        return ToolInvocation(
            executable=self.executable,
            project_name=self.project_name,
            solution_file=self.solution_file,
            settings_file=settings_file,
            report_file=report_file,
            timeout_minutes=self.timeout_minutes,
        )

    @property
    def solution_dir(self) -> Path | None:
        """Return the directory holding the solution file, when configured."""
        if not self.solution_file:
            return None
        return Path(self.solution_file).expanduser().absolute().parent


def _optional_text(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _timeout_minutes(value: object) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        return DEFAULT_TIMEOUT_MINUTES
    if isinstance(value, bool):
        raise ConfigurationError(TIMEOUT_MINUTES_PROPERTY_KEY, "must be a positive integer")
    try:
        minutes = int(str(value).strip()) if not isinstance(value, int) else value
    except ValueError as exc:
        raise ConfigurationError(TIMEOUT_MINUTES_PROPERTY_KEY, "must be a positive integer") from exc
    if minutes <= 0:
        raise ConfigurationError(TIMEOUT_MINUTES_PROPERTY_KEY, "must be a positive integer")
    return minutes


def parse_property_overrides(values: list[str] | tuple[str, ...]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` override tokens.

    Args:
        values: Raw tokens such as ``resharper.projectName=MyLibrary``.

    Returns:
        dict[str, str]: Parsed overrides; later tokens win.

    Raises:
        ConfigurationError: If a token has no ``=`` separator or an empty key.
    """

    overrides: dict[str, str] = {}
    for token in values:
        key, sep, value = token.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigurationError(token or "<empty>", "must use the KEY=VALUE form")
        overrides[key] = value.strip()
    return overrides


def load_settings_file(path: Path) -> dict[str, object]:
    """Load ``resharper.*`` properties from a TOML file.

    The file holds a ``[resharper]`` table whose entries are flattened into
    dotted property names, e.g. ``projectName`` becomes ``resharper.projectName``.

    Args:
        path: TOML file to read.

    Returns:
        dict[str, object]: Flattened properties.

    Raises:
        ConfigurationError: If the file cannot be read or is not valid TOML.
    """

    try:
        payload = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigurationError(str(path), f"could not be loaded: {exc}") from exc
    table = payload.get(PROPERTY_PREFIX, {})
    if not isinstance(table, dict):
        raise ConfigurationError(PROPERTY_PREFIX, "must be a TOML table")
    properties: dict[str, object] = {f"{PROPERTY_PREFIX}.{key}": value for key, value in table.items()}
    solution = properties.get(SOLUTION_FILE_PROPERTY_KEY)
    if isinstance(solution, str) and solution and not Path(solution).is_absolute():
        properties[SOLUTION_FILE_PROPERTY_KEY] = str(path.parent / solution)
    return properties


__all__ = [
    "AnalyzerSettings",
    "DEFAULT_TIMEOUT_MINUTES",
    "INSPECTCODE_PATH_PROPERTY_KEY",
    "KNOWN_PROPERTY_KEYS",
    "PROJECT_NAME_PROPERTY_KEY",
    "SOLUTION_FILE_PROPERTY_KEY",
    "TIMEOUT_MINUTES_PROPERTY_KEY",
    "default_executable",
    "load_settings_file",
    "parse_property_overrides",
]
