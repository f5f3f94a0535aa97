# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Data structures for the analyze CLI command."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

DEFAULT_WORK_DIR = Path(".resharper-qa")

MANIFEST_OPTION = Annotated[
    Path,
    typer.Option(
        "--manifest",
        "-m",
        help="JSON manifest listing workspace files and active rules.",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
]
SETTINGS_OPTION = Annotated[
    Path | None,
    typer.Option(
        "--settings",
        "-s",
        help="TOML file holding a [resharper] table of analyzer properties.",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
]
SET_OPTION = Annotated[
    list[str] | None,
    typer.Option(
        "--set",
        help="Override an analyzer property, e.g. --set resharper.projectName=MyLibrary.",
        metavar="KEY=VALUE",
    ),
]
LANGUAGE_OPTION = Annotated[
    list[str] | None,
    typer.Option(
        "--language",
        "-l",
        help="Limit the run to specific languages (cs, vbnet). Defaults to every language.",
    ),
]
WORK_DIR_OPTION = Annotated[
    Path,
    typer.Option("--work-dir", help="Directory receiving generated settings and reports."),
]
JSON_OPTION = Annotated[
    bool,
    typer.Option("--json", help="Print diagnostics and run results as JSON."),
]
QUIET_OPTION = Annotated[
    bool,
    typer.Option("--quiet", "-q", help="Hide skipped-finding messages."),
]
VERBOSE_OPTION = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show the inspectcode command line and run counts."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]
COLOR_OPTION = Annotated[
    bool,
    typer.Option("--color/--no-color", help="Toggle colour output."),
]


@dataclass(slots=True)
class AnalyzeOptions:
    """Normalised CLI inputs for the analyze command."""

    manifest: Path
    settings: Path | None
    overrides: tuple[str, ...]
    languages: tuple[str, ...]
    work_dir: Path
    as_json: bool
    quiet: bool
    verbose: bool
    use_emoji: bool
    use_color: bool


def build_analyze_options(
    *,
    manifest: Path,
    settings: Path | None,
    overrides: list[str] | None,
    languages: list[str] | None,
    work_dir: Path,
    as_json: bool,
    quiet: bool,
    verbose: bool,
    emoji: bool,
    color: bool,
) -> AnalyzeOptions:
    """Construct :class:`AnalyzeOptions` from Typer parameters.

    Args:
        manifest: Workspace manifest path.
        settings: Optional TOML settings file.
        overrides: ``KEY=VALUE`` property overrides.
        languages: Requested language keys.
        work_dir: Directory receiving generated files.
        as_json: Flag selecting JSON output.
        quiet: Flag hiding skipped-finding messages.
        verbose: Flag enabling debug messages.
        emoji: Flag controlling emoji usage in CLI output.
        color: Flag controlling colour usage in CLI output.

    Returns:
        AnalyzeOptions: Structured CLI options.
    """

    return AnalyzeOptions(
        manifest=manifest.expanduser().resolve(),
        settings=settings.expanduser().resolve() if settings is not None else None,
        overrides=tuple(overrides or ()),
        languages=tuple(languages or ()),
        work_dir=work_dir.expanduser().resolve(),
        as_json=as_json,
        quiet=quiet,
        verbose=verbose,
        use_emoji=emoji,
        use_color=color,
    )


__all__ = [
    "AnalyzeOptions",
    "COLOR_OPTION",
    "DEFAULT_WORK_DIR",
    "EMOJI_OPTION",
    "JSON_OPTION",
    "LANGUAGE_OPTION",
    "MANIFEST_OPTION",
    "QUIET_OPTION",
    "SETTINGS_OPTION",
    "SET_OPTION",
    "VERBOSE_OPTION",
    "WORK_DIR_OPTION",
    "build_analyze_options",
]
