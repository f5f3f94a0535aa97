# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the resharper_qa package."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


class Binding(BaseModel):
    """Language and check repository served by one pipeline instance."""

    model_config = ConfigDict(frozen=True)

    language_key: str = Field(min_length=1)
    repository_key: str = Field(min_length=1)

    @property
    def settings_file_name(self) -> str:
        """Return the DotSettings file name reserved for this binding."""
        return f"{self.repository_key}.DotSettings"

    @property
    def report_file_name(self) -> str:
        """Return the report file name reserved for this binding."""
        return f"{self.repository_key}-report.xml"

    def __str__(self) -> str:
        return f"{self.language_key}/{self.repository_key}"


class CheckKey(BaseModel):
    """Fully qualified check identifier: repository plus check id."""

    model_config = ConfigDict(frozen=True)

    repository: str
    rule: str

    def __str__(self) -> str:
        return f"{self.repository}:{self.rule}"


@runtime_checkable
class FileHandle(Protocol):
    """Host file handle carrying the absolute path and language tag."""

    @property
    def path(self) -> str:
        """Return the absolute path of the file."""
        ...

    @property
    def language(self) -> str | None:
        """Return the language key assigned by the host, if any."""
        ...


class WorkspaceFile(BaseModel):
    """Default :class:`FileHandle` implementation used by in-memory indexes."""

    model_config = ConfigDict(frozen=True)

    path: str
    language: str | None = None


class RawFinding(BaseModel):
    """Report entry as parsed from the ``inspectcode`` output, before validation."""

    model_config = ConfigDict(frozen=True)

    report_line: int
    check_id: str
    file_path: str | None = None
    line: int | None = Field(default=None, ge=1)
    message: str

    @property
    def has_location(self) -> bool:
        """Return ``True`` when both the file path and the line are present."""
        return self.file_path is not None and self.line is not None


@dataclass(frozen=True, slots=True)
class ResolvedDiagnostic:
    """Accepted finding mapped to a workspace file and ready for the host sink."""

    check_key: CheckKey
    file: FileHandle
    line: int
    message: str

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible representation of the diagnostic.

        Returns:
            dict[str, Any]: Mapping with repository, rule, file, line and message keys.
        """

        return {
            "repository": self.check_key.repository,
            "rule": self.check_key.rule,
            "file": self.file.path,
            "line": self.line,
            "message": self.message,
        }


class ToolInvocation(BaseModel):
    """Fully resolved arguments for a single ``inspectcode`` run."""

    model_config = ConfigDict(frozen=True)

    executable: str = Field(min_length=1)
    project_name: str = Field(min_length=1)
    solution_file: str = Field(min_length=1)
    settings_file: Path
    report_file: Path
    timeout_minutes: int = Field(gt=0)

    @property
    def timeout_seconds(self) -> float:
        """Return the wall-clock budget expressed in seconds."""
        return float(self.timeout_minutes * 60)


__all__ = [
    "Binding",
    "CheckKey",
    "FileHandle",
    "RawFinding",
    "ResolvedDiagnostic",
    "ToolInvocation",
    "WorkspaceFile",
]
