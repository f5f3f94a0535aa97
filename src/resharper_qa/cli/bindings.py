# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""List the built-in language bindings."""

from __future__ import annotations

import typer

from ..bindings import BUILTIN_BINDINGS


def bindings_command() -> None:
    """Print each built-in language key and its check repository."""

    for binding in BUILTIN_BINDINGS:
        typer.echo(f"{binding.language_key}\t{binding.repository_key}")


__all__ = ["bindings_command"]
