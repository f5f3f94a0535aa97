# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy raised by the ReSharper analysis pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .process import ProcessOutcome

_OUTPUT_PREVIEW_LIMIT = 2000


class ResharperQAError(Exception):
    """Base class for fatal errors that abort the run of a single binding."""


class ConfigurationError(ResharperQAError):
    """Raised when a required configuration key is missing or invalid."""

    def __init__(self, key: str, reason: str | None = None) -> None:
        """Initialise the error with the offending property ``key``.

        Args:
            key: Configuration property name that failed validation.
            reason: Optional explanation replacing the default "must be set" text.
        """

        message = reason or "must be set"
        super().__init__(f'The property "{key}" {message}.')
        self.key = key


class SettingsWriteError(ResharperQAError):
    """Raised when the DotSettings file cannot be written."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"Unable to write ReSharper settings to {path}: {cause}")
        self.path = path


class ReportCleanupError(ResharperQAError):
    """Raised when the report left by a previous run cannot be removed."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"Unable to remove the previous ReSharper report {path}: {cause}")
        self.path = path


class AnalyzerRunError(ResharperQAError):
    """Common base for failures of the ``inspectcode`` subprocess."""

    def __init__(self, message: str, outcome: ProcessOutcome) -> None:
        """Initialise the error with the captured process ``outcome``.

        Args:
            message: Summary describing the failure.
            outcome: Explicit process result including captured output.
        """

        super().__init__(message)
        self.outcome = outcome

    @property
    def stdout(self) -> str:
        """Return the standard output captured before the failure."""

        return self.outcome.stdout

    @property
    def stderr(self) -> str:
        """Return the standard error captured before the failure."""

        return self.outcome.stderr


class AnalyzerExecutionError(AnalyzerRunError):
    """Raised when ``inspectcode`` cannot be launched or exits with a non-zero status."""


class AnalyzerTimeoutError(AnalyzerRunError):
    """Raised when ``inspectcode`` exceeds its wall-clock budget and is killed."""


class AnalyzerCancelledError(AnalyzerRunError):
    """Raised when the host cancels a run while ``inspectcode`` is in flight."""


class ReportParseError(ResharperQAError):
    """Raised when the ``inspectcode`` report cannot be decoded."""

    def __init__(
        self,
        path: Path,
        reason: str,
        *,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialise the error with the report ``path`` and parse location.

        Args:
            path: Report file that failed to parse.
            reason: Description of the decoding problem.
            line: One-based line in the report where the problem was detected.
            column: Column in the report where the problem was detected.
        """

        location = str(path)
        if line is not None:
            location = f"{location}:{line}"
            if column is not None:
                location = f"{location}:{column}"
        super().__init__(f"Unable to parse the ReSharper report {location}: {reason}")
        self.path = path
        self.reason = reason
        self.line = line
        self.column = column


def format_output_preview(text: str) -> str:
    """Return ``text`` trimmed to the tail shown in error messages."""

    stripped = text.strip()
    if len(stripped) <= _OUTPUT_PREVIEW_LIMIT:
        return stripped
    return "..." + stripped[-_OUTPUT_PREVIEW_LIMIT:]


__all__ = [
    "AnalyzerCancelledError",
    "AnalyzerExecutionError",
    "AnalyzerRunError",
    "AnalyzerTimeoutError",
    "ConfigurationError",
    "ReportCleanupError",
    "ReportParseError",
    "ResharperQAError",
    "SettingsWriteError",
    "format_output_preview",
]
