# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""In-memory implementations of the host workspace, profile and sink protocols."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator, Sequence
from pathlib import PurePath

from pydantic import BaseModel, ConfigDict

from .interfaces import ActiveCheckSet, DiagnosticSink, WorkspaceIndex
from .models import FileHandle, ResolvedDiagnostic


def path_key(path: str | os.PathLike[str]) -> str:
    """Return the lookup key used for ``path`` by :class:`InMemoryWorkspaceIndex`.

    Redundant separators and ``.`` segments are collapsed; ``..`` segments and
    symlinks are left untouched so matching stays exact.

    Args:
        path: Absolute path supplied by the host or the analyzer report.

    Returns:
        str: Normalised path string.
    """

    return str(PurePath(os.fspath(path)))


class InMemoryWorkspaceIndex(WorkspaceIndex):
    """Workspace index backed by a dictionary keyed on absolute paths."""

    def __init__(self, files: Iterable[FileHandle] = ()) -> None:
        """Index ``files`` by their normalised absolute path.

        Args:
            files: File handles supplied by the host.

        Raises:
            ValueError: If two handles share the same path.
        """

        self._files: dict[str, FileHandle] = {}
        for handle in files:
            self.add(handle)

    def add(self, handle: FileHandle) -> None:
        """Register ``handle`` in the index.

        Args:
            handle: File handle to register.

        Raises:
            ValueError: If another handle is already registered for the same path.
        """

        key = path_key(handle.path)
        if key in self._files:
            raise ValueError(f"Duplicate workspace file: {handle.path}")
        self._files[key] = handle

    def lookup(self, path: str) -> FileHandle | None:
        return self._files.get(path_key(path))

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[FileHandle]:
        return iter(self._files.values())


class ActiveChecks(ActiveCheckSet):
    """Ordered, duplicate-free set of active check identifiers."""

    __slots__ = ("_ordered", "_members")

    def __init__(self, identifiers: Iterable[str] = ()) -> None:
        self._ordered: tuple[str, ...] = tuple(dict.fromkeys(identifiers))
        self._members = frozenset(self._ordered)

    def contains(self, check_id: str) -> bool:
        return check_id in self._members

    def identifiers(self) -> Sequence[str]:
        return self._ordered

    def __contains__(self, check_id: object) -> bool:
        return check_id in self._members

    def __len__(self) -> int:
        return len(self._ordered)

    def __repr__(self) -> str:
        return f"ActiveChecks({list(self._ordered)!r})"


class ActiveRule(BaseModel):
    """Rule activated in the host quality profile."""

    model_config = ConfigDict(frozen=True)

    repository: str
    rule: str


class ActiveProfile:
    """Host quality profile spanning every check repository."""

    def __init__(self, rules: Iterable[ActiveRule] = ()) -> None:
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[ActiveRule, ...]:
        """Return every active rule in profile order."""
        return self._rules

    def for_repository(self, repository_key: str) -> ActiveChecks:
        """Return the checks active for ``repository_key``.

        Args:
            repository_key: Check repository served by a binding.

        Returns:
            ActiveChecks: Active check identifiers of that repository only.
        """

        return ActiveChecks(rule.rule for rule in self._rules if rule.repository == repository_key)


class CollectingSink(DiagnosticSink):
    """Diagnostic sink that keeps accepted diagnostics in arrival order."""

    def __init__(self) -> None:
        self.diagnostics: list[ResolvedDiagnostic] = []

    def accept(self, diagnostic: ResolvedDiagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def __len__(self) -> int:
        return len(self.diagnostics)


__all__ = [
    "ActiveChecks",
    "ActiveProfile",
    "ActiveRule",
    "CollectingSink",
    "InMemoryWorkspaceIndex",
    "path_key",
]
