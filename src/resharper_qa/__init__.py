# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Integrate JetBrains ReSharper ``inspectcode`` findings into a host code-quality platform."""

from __future__ import annotations

from .bindings import BUILTIN_BINDINGS, CSHARP, VBNET, binding_for_language
from .config import AnalyzerSettings
from .errors import (
    AnalyzerCancelledError,
    AnalyzerExecutionError,
    AnalyzerRunError,
    AnalyzerTimeoutError,
    ConfigurationError,
    ReportCleanupError,
    ReportParseError,
    ResharperQAError,
    SettingsWriteError,
)
from .interfaces import ActiveCheckSet, DiagnosticSink, RunLogger, WorkspaceIndex
from .logging import ConsoleRunLogger, LogCollector
from .models import Binding, CheckKey, RawFinding, ResolvedDiagnostic, ToolInvocation, WorkspaceFile
from .orchestrator import AnalysisContext, AnalysisOrchestrator, BindingResult, RunSummary, run_bindings
from .process import CancelToken, ProcessOutcome, ProcessRunner, RunStatus
from .reconciler import Decision, Reconciler, SkipReason
from .report import ReportParser
from .settings_writer import DotSettingsWriter
from .workspace import ActiveChecks, ActiveProfile, ActiveRule, CollectingSink, InMemoryWorkspaceIndex

__all__ = [
    "BUILTIN_BINDINGS",
    "CSHARP",
    "VBNET",
    "ActiveCheckSet",
    "ActiveChecks",
    "ActiveProfile",
    "ActiveRule",
    "AnalysisContext",
    "AnalysisOrchestrator",
    "AnalyzerCancelledError",
    "AnalyzerExecutionError",
    "AnalyzerRunError",
    "AnalyzerSettings",
    "AnalyzerTimeoutError",
    "Binding",
    "BindingResult",
    "CancelToken",
    "CheckKey",
    "CollectingSink",
    "ConfigurationError",
    "ConsoleRunLogger",
    "Decision",
    "DiagnosticSink",
    "DotSettingsWriter",
    "InMemoryWorkspaceIndex",
    "LogCollector",
    "ProcessOutcome",
    "ProcessRunner",
    "RawFinding",
    "Reconciler",
    "ReportCleanupError",
    "ReportParseError",
    "ReportParser",
    "ResharperQAError",
    "ResolvedDiagnostic",
    "RunLogger",
    "RunStatus",
    "RunSummary",
    "SettingsWriteError",
    "SkipReason",
    "ToolInvocation",
    "WorkspaceFile",
    "WorkspaceIndex",
    "binding_for_language",
    "run_bindings",
]
