# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reconcile raw report findings with the host workspace and quality profile."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from .interfaces import ActiveCheckSet, RunLogger, WorkspaceIndex
from .models import Binding, CheckKey, RawFinding, ResolvedDiagnostic


class SkipReason(str, Enum):
    """Why a raw finding did not become a diagnostic."""

    NO_LOCATION = "no_location"
    UNKNOWN_FILE = "unknown_file"
    FOREIGN_LANGUAGE = "foreign_language"
    INACTIVE_CHECK = "inactive_check"

    @property
    def logged(self) -> bool:
        """Return ``True`` when skipping for this reason emits a log message.

        Findings on files of another language are skipped silently: a single
        report covers every language of the solution and each binding only
        owns its own files.
        """

        return self is not SkipReason.FOREIGN_LANGUAGE


@dataclass(frozen=True, slots=True)
class Decision:
    """Outcome of reconciling one :class:`RawFinding`."""

    finding: RawFinding
    diagnostic: ResolvedDiagnostic | None = None
    skip: SkipReason | None = None

    @property
    def accepted(self) -> bool:
        """Return ``True`` when the finding produced a diagnostic."""
        return self.diagnostic is not None


class Reconciler:
    """Decide, per finding, whether it is reported, skipped silently, or skipped with a log."""

    def __init__(
        self,
        binding: Binding,
        workspace: WorkspaceIndex,
        active_checks: ActiveCheckSet,
        logger: RunLogger,
    ) -> None:
        self._binding = binding
        self._workspace = workspace
        self._active_checks = active_checks
        self._logger = logger

    def evaluate(self, finding: RawFinding) -> Decision:
        """Return the decision for ``finding`` without logging it.

        The checks run in a fixed order; the language comparison comes before
        the activation check so inactive checks on foreign files stay silent.

        Args:
            finding: Raw finding parsed from the report.

        Returns:
            Decision: Accepted diagnostic or the skip reason.
        """

        if finding.file_path is None or finding.line is None:
            return Decision(finding, skip=SkipReason.NO_LOCATION)
        handle = self._workspace.lookup(finding.file_path)
        if handle is None:
            return Decision(finding, skip=SkipReason.UNKNOWN_FILE)
        if handle.language != self._binding.language_key:
            return Decision(finding, skip=SkipReason.FOREIGN_LANGUAGE)
        if not self._active_checks.contains(finding.check_id):
            return Decision(finding, skip=SkipReason.INACTIVE_CHECK)
        diagnostic = ResolvedDiagnostic(
            check_key=CheckKey(repository=self._binding.repository_key, rule=finding.check_id),
            file=handle,
            line=finding.line,
            message=finding.message,
        )
        return Decision(finding, diagnostic=diagnostic)

    def decisions(self, findings: Iterable[RawFinding]) -> Iterator[Decision]:
        """Yield a decision per finding, logging the skips that warrant it.

        Args:
            findings: Raw findings in report order.

        Yields:
            Decision: One decision per finding, in the same order.
        """

        for finding in findings:
            decision = self.evaluate(finding)
            if decision.skip is not None and decision.skip.logged:
                self._logger.info(skip_message(finding, decision.skip))
            yield decision

    def reconcile(self, findings: Iterable[RawFinding]) -> Iterator[ResolvedDiagnostic]:
        """Yield the accepted diagnostics of ``findings`` in report order.

        Args:
            findings: Raw findings in report order.

        Yields:
            ResolvedDiagnostic: Diagnostics for accepted findings only.
        """

        for decision in self.decisions(findings):
            if decision.diagnostic is not None:
                yield decision.diagnostic


def skip_message(finding: RawFinding, reason: SkipReason) -> str:
    """Return the log message explaining why ``finding`` was skipped.

    Args:
        finding: Skipped finding.
        reason: Reason returned by :meth:`Reconciler.evaluate`.

    Returns:
        str: Human readable message referencing the report line.

    Raises:
        ValueError: If ``reason`` is a silent skip reason.
    """

    if reason is SkipReason.NO_LOCATION:
        detail = "which has no associated file."
    elif reason is SkipReason.UNKNOWN_FILE:
        detail = f'whose file "{finding.file_path}" is not in the workspace.'
    elif reason is SkipReason.INACTIVE_CHECK:
        detail = f'because the rule "{finding.check_id}" is either missing or inactive in the quality profile.'
    else:
        raise ValueError(f"{reason.name} skips are not logged")
    return f"Skipping the ReSharper issue at line {finding.report_line} {detail}"


__all__ = ["Decision", "Reconciler", "SkipReason", "skip_message"]
