# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Sequence settings emission, ``inspectcode`` execution, parsing and reconciliation."""

from __future__ import annotations

import shlex
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .config import AnalyzerSettings
from .errors import ReportCleanupError, ResharperQAError
from .interfaces import ActiveCheckSet, DiagnosticSink, RunLogger, WorkspaceIndex
from .logging import LogCollector
from .models import Binding
from .process import CancelToken, ProcessOutcome, ProcessRunner, build_command
from .reconciler import Reconciler, SkipReason
from .report import ReportParser
from .settings_writer import DotSettingsWriter
from .workspace import ActiveProfile


@dataclass(frozen=True, slots=True)
class AnalysisContext:
    """Host collaborators for a single binding run."""

    settings: AnalyzerSettings
    work_dir: Path
    workspace: WorkspaceIndex
    active_checks: ActiveCheckSet
    sink: DiagnosticSink
    cancel: CancelToken | None = None


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Counts describing a completed binding run."""

    binding: Binding
    outcome: ProcessOutcome
    emitted: int
    skipped: Mapping[SkipReason, int] = field(default_factory=dict)

    @property
    def total_skipped(self) -> int:
        """Return the number of findings that did not become diagnostics."""
        return sum(self.skipped.values())


@dataclass(frozen=True, slots=True)
class BindingResult:
    """Result of one binding within a multi-binding run."""

    binding: Binding
    summary: RunSummary | None = None
    error: ResharperQAError | None = None

    @property
    def ok(self) -> bool:
        """Return ``True`` when the binding completed without a fatal error."""
        return self.error is None


class AnalysisOrchestrator:
    """Run the ReSharper pipeline for one :class:`Binding`."""

    def __init__(
        self,
        binding: Binding,
        *,
        logger: RunLogger | None = None,
        writer: DotSettingsWriter | None = None,
        runner: ProcessRunner | None = None,
        parser: ReportParser | None = None,
    ) -> None:
        """Initialise the orchestrator.

        Args:
            binding: Language and check repository served by this instance.
            logger: Side channel receiving skip and progress messages.
            writer: Settings emitter; defaults to :class:`DotSettingsWriter`.
            runner: Subprocess runner; defaults to :class:`ProcessRunner`.
            parser: Report parser; defaults to a :class:`ReportParser` resolving
                relative paths against the solution directory.
        """

        self.binding = binding
        self._logger: RunLogger = logger if logger is not None else LogCollector()
        self._writer = writer or DotSettingsWriter()
        self._runner = runner or ProcessRunner()
        self._parser = parser

    def execute(self, context: AnalysisContext) -> RunSummary:
        """Analyse the workspace and forward accepted diagnostics to the sink.

        Args:
            context: Host collaborators for this run.

        Returns:
            RunSummary: Emitted and skipped finding counts.

        Raises:
            ConfigurationError: If the project name or solution file is missing;
                raised before any file is written or process launched.
            SettingsWriteError: If the settings file cannot be written.
            ReportCleanupError: If the report of a previous run cannot be removed.
            AnalyzerExecutionError: If ``inspectcode`` fails to launch or exits non-zero.
            AnalyzerTimeoutError: If ``inspectcode`` exceeds its budget.
            AnalyzerCancelledError: If ``context.cancel`` is triggered mid-run.
            ReportParseError: If the report cannot be decoded.
        """

        settings = context.settings
        invocation = settings.require_invocation(
            settings_file=context.work_dir / self.binding.settings_file_name,
            report_file=context.work_dir / self.binding.report_file_name,
        )

        self._writer.write(context.active_checks.identifiers(), invocation.settings_file)
        _discard_previous_report(invocation.report_file)
        self._logger.debug(f"[{self.binding}] running {shlex.join(build_command(invocation))}")
        outcome = self._runner.run(invocation, cancel=context.cancel)
        outcome.raise_for_status()

        parser = self._parser or ReportParser(base_dir=settings.solution_dir)
        findings = parser.parse(invocation.report_file)

        reconciler = Reconciler(self.binding, context.workspace, context.active_checks, self._logger)
        emitted = 0
        skipped: Counter[SkipReason] = Counter()
        for decision in reconciler.decisions(findings):
            if decision.diagnostic is not None:
                context.sink.accept(decision.diagnostic)
                emitted += 1
            elif decision.skip is not None:
                skipped[decision.skip] += 1
        self._logger.debug(f"[{self.binding}] {emitted} diagnostic(s) reported, {sum(skipped.values())} skipped")
        return RunSummary(binding=self.binding, outcome=outcome, emitted=emitted, skipped=dict(skipped))


def _discard_previous_report(report_file: Path) -> None:
    """Remove ``report_file`` so a run that writes no report cannot reuse a stale one."""

    try:
        report_file.unlink(missing_ok=True)
    except OSError as exc:
        raise ReportCleanupError(report_file, exc) from exc


def run_bindings(
    bindings: Iterable[Binding],
    *,
    settings: AnalyzerSettings,
    work_dir: Path,
    workspace: WorkspaceIndex,
    profile: ActiveProfile,
    sink: DiagnosticSink,
    logger: RunLogger | None = None,
    cancel: CancelToken | None = None,
    runner: ProcessRunner | None = None,
) -> list[BindingResult]:
    """Run each binding in turn, isolating fatal errors per binding.

    Args:
        bindings: Bindings to analyse.
        settings: Analyzer configuration shared by every binding.
        work_dir: Directory receiving the per-binding settings and report files.
        workspace: Host workspace index.
        profile: Host quality profile covering every check repository.
        sink: Receiver for accepted diagnostics.
        logger: Side channel shared by every binding.
        cancel: Optional token aborting the in-flight binding.
        runner: Optional shared subprocess runner.

    Returns:
        list[BindingResult]: One result per binding, in input order.
    """

    results: list[BindingResult] = []
    for binding in bindings:
        orchestrator = AnalysisOrchestrator(binding, logger=logger, runner=runner)
        context = AnalysisContext(
            settings=settings,
            work_dir=work_dir,
            workspace=workspace,
            active_checks=profile.for_repository(binding.repository_key),
            sink=sink,
            cancel=cancel,
        )
        try:
            summary = orchestrator.execute(context)
        except ResharperQAError as exc:
            if logger is not None:
                logger.warn(f"[{binding}] analysis aborted: {exc}")
            results.append(BindingResult(binding=binding, error=exc))
            continue
        results.append(BindingResult(binding=binding, summary=summary))
    return results


__all__ = [
    "AnalysisContext",
    "AnalysisOrchestrator",
    "BindingResult",
    "RunSummary",
    "run_bindings",
]
