# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Narrow host-facing protocols consumed by the analysis pipeline."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from .models import FileHandle, ResolvedDiagnostic


@runtime_checkable
class WorkspaceIndex(Protocol):
    """Read-only mapping from absolute file path to host file handle."""

    __slots__ = ()

    @abstractmethod
    def lookup(self, path: str) -> FileHandle | None:
        """Return the file handle registered under ``path``.

        Args:
            path: Absolute path reported by the analyzer.

        Returns:
            FileHandle | None: Matching handle, or ``None`` when the path is unknown.
        """


@runtime_checkable
class ActiveCheckSet(Protocol):
    """Read-only view of the checks enabled for one check repository."""

    __slots__ = ()

    @abstractmethod
    def contains(self, check_id: str) -> bool:
        """Return ``True`` when ``check_id`` is active in the quality profile.

        Args:
            check_id: Analyzer check identifier, without repository prefix.

        Returns:
            bool: ``True`` when the check is active.
        """

    @abstractmethod
    def identifiers(self) -> Sequence[str]:
        """Return the active check identifiers in profile order.

        Returns:
            Sequence[str]: Active check identifiers.
        """


@runtime_checkable
class DiagnosticSink(Protocol):
    """Host receiver for accepted diagnostics."""

    __slots__ = ()

    @abstractmethod
    def accept(self, diagnostic: ResolvedDiagnostic) -> None:
        """Record a single accepted ``diagnostic``.

        Args:
            diagnostic: Diagnostic produced by the reconciler.
        """


@runtime_checkable
class RunLogger(Protocol):
    """Side channel for messages produced while analysing a binding."""

    __slots__ = ()

    @abstractmethod
    def debug(self, message: str) -> None:
        """Emit a debug ``message``.

        Args:
            message: Message text describing internal progress.
        """

    @abstractmethod
    def info(self, message: str) -> None:
        """Emit an informational ``message``.

        Args:
            message: Message text, such as the reason a finding was skipped.
        """

    @abstractmethod
    def warn(self, message: str) -> None:
        """Emit a warning ``message``.

        Args:
            message: Message text describing a recoverable problem.
        """


__all__ = [
    "ActiveCheckSet",
    "DiagnosticSink",
    "RunLogger",
    "WorkspaceIndex",
]
