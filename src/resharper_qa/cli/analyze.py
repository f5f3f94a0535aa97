# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Analyze CLI command: run inspectcode for each binding and render the results."""

from __future__ import annotations

import json
from collections.abc import Sequence

import typer
from rich.table import Table

from ..bindings import select_bindings
from ..config import (
    KNOWN_PROPERTY_KEYS,
    PROPERTY_PREFIX,
    AnalyzerSettings,
    load_settings_file,
    parse_property_overrides,
)
from ..errors import ConfigurationError
from ..interfaces import RunLogger
from ..logging import ConsoleRunLogger, LogCollector
from ..manifest import load_manifest
from ..models import ResolvedDiagnostic
from ..orchestrator import BindingResult, run_bindings
from ..workspace import CollectingSink
from .options import (
    COLOR_OPTION,
    DEFAULT_WORK_DIR,
    EMOJI_OPTION,
    JSON_OPTION,
    LANGUAGE_OPTION,
    MANIFEST_OPTION,
    QUIET_OPTION,
    SET_OPTION,
    SETTINGS_OPTION,
    VERBOSE_OPTION,
    WORK_DIR_OPTION,
    AnalyzeOptions,
    build_analyze_options,
)

EXIT_CLEAN = 0
EXIT_DIAGNOSTICS = 1
EXIT_FAILURE = 2


def analyze_command(
    manifest: MANIFEST_OPTION,
    settings: SETTINGS_OPTION = None,
    set_values: SET_OPTION = None,
    language: LANGUAGE_OPTION = None,
    work_dir: WORK_DIR_OPTION = DEFAULT_WORK_DIR,
    as_json: JSON_OPTION = False,
    quiet: QUIET_OPTION = False,
    verbose: VERBOSE_OPTION = False,
    emoji: EMOJI_OPTION = True,
    color: COLOR_OPTION = True,
) -> None:
    """Run ReSharper inspectcode and report the diagnostics it finds.

    Raises:
        typer.Exit: Always raised to terminate the command with an exit status.
    """

    options = build_analyze_options(
        manifest=manifest,
        settings=settings,
        overrides=set_values,
        languages=language,
        work_dir=work_dir,
        as_json=as_json,
        quiet=quiet,
        verbose=verbose,
        emoji=emoji,
        color=color,
    )
    raise typer.Exit(code=run_analysis(options))


def run_analysis(options: AnalyzeOptions) -> int:
    """Execute the analysis described by ``options``.

    Args:
        options: Normalised CLI options.

    Returns:
        int: ``0`` when no diagnostics were reported, ``1`` when diagnostics were
        reported, ``2`` on configuration errors or when any binding was aborted.
    """

    console = ConsoleRunLogger(
        use_emoji=options.use_emoji,
        use_color=options.use_color,
        quiet=options.quiet,
        verbose=options.verbose,
    )
    try:
        settings = _load_settings(options, console)
        settings.check_required()
        manifest = load_manifest(options.manifest)
        workspace = manifest.workspace_index(options.manifest.parent)
        bindings = select_bindings(options.languages)
    except (ConfigurationError, KeyError) as exc:
        message = exc.args[0] if isinstance(exc, KeyError) else str(exc)
        console.fail(message)
        return EXIT_FAILURE

    logger: RunLogger = LogCollector() if options.as_json else console
    sink = CollectingSink()
    results = run_bindings(
        bindings,
        settings=settings,
        work_dir=options.work_dir,
        workspace=workspace,
        profile=manifest.profile(),
        sink=sink,
        logger=logger,
    )

    if isinstance(logger, LogCollector):
        typer.echo(json.dumps(_json_payload(sink.diagnostics, results, logger), indent=2))
    else:
        _render_diagnostics(sink.diagnostics, console)
        _render_results(results, console)

    if any(not result.ok for result in results):
        return EXIT_FAILURE
    return EXIT_DIAGNOSTICS if sink.diagnostics else EXIT_CLEAN


def _load_settings(options: AnalyzeOptions, console: ConsoleRunLogger) -> AnalyzerSettings:
    properties: dict[str, object] = {}
    if options.settings is not None:
        properties.update(load_settings_file(options.settings))
    properties.update(parse_property_overrides(options.overrides))
    unknown = sorted(
        key for key in properties if key.startswith(f"{PROPERTY_PREFIX}.") and key not in KNOWN_PROPERTY_KEYS
    )
    if unknown and not options.as_json:
        console.warn(f"Ignoring unknown properties: {', '.join(unknown)}")
    return AnalyzerSettings.from_properties(properties)


def _render_diagnostics(diagnostics: Sequence[ResolvedDiagnostic], console: ConsoleRunLogger) -> None:
    if not diagnostics:
        return
    console.section("Diagnostics")
    table = Table(show_header=True, header_style="bold")
    table.add_column("File")
    table.add_column("Line", justify="right")
    table.add_column("Rule")
    table.add_column("Message")
    for diagnostic in diagnostics:
        table.add_row(diagnostic.file.path, str(diagnostic.line), str(diagnostic.check_key), diagnostic.message)
    console.render(table)


def _render_results(results: Sequence[BindingResult], console: ConsoleRunLogger) -> None:
    console.section("Summary")
    for result in results:
        if result.summary is not None:
            summary = result.summary
            console.ok(f"{result.binding}: {summary.emitted} diagnostic(s), {summary.total_skipped} finding(s) skipped")
        else:
            console.fail(f"{result.binding}: {result.error}")


def _json_payload(
    diagnostics: Sequence[ResolvedDiagnostic],
    results: Sequence[BindingResult],
    collector: LogCollector,
) -> dict[str, object]:
    bindings: list[dict[str, object]] = []
    for result in results:
        entry: dict[str, object] = {
            "language": result.binding.language_key,
            "repository": result.binding.repository_key,
            "ok": result.ok,
        }
        if result.summary is not None:
            entry["emitted"] = result.summary.emitted
            entry["skipped"] = {reason.value: count for reason, count in result.summary.skipped.items()}
        if result.error is not None:
            entry["error"] = str(result.error)
        bindings.append(entry)
    return {
        "diagnostics": [diagnostic.to_dict() for diagnostic in diagnostics],
        "bindings": bindings,
        "log": collector.messages(),
    }


__all__ = ["analyze_command", "run_analysis"]
