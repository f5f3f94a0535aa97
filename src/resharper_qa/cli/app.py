# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring the available commands."""

from __future__ import annotations

import typer

from .analyze import analyze_command
from .bindings import bindings_command

app = typer.Typer(
    help="Run JetBrains ReSharper inspectcode and reconcile its findings with a workspace.",
    no_args_is_help=True,
    add_completion=False,
)
app.command("analyze")(analyze_command)
app.command("bindings")(bindings_command)

__all__ = ["app"]
