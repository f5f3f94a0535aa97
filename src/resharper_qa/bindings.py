# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Built-in language bindings supported by ``inspectcode``."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final

from .models import Binding

CSHARP: Final[Binding] = Binding(language_key="cs", repository_key="resharper-cs")
VBNET: Final[Binding] = Binding(language_key="vbnet", repository_key="resharper-vbnet")

BUILTIN_BINDINGS: Final[tuple[Binding, ...]] = (CSHARP, VBNET)


def binding_for_language(language_key: str) -> Binding:
    """Return the built-in binding serving ``language_key``.

    Args:
        language_key: Host language key such as ``cs`` or ``vbnet``.

    Returns:
        Binding: Matching built-in binding.

    Raises:
        KeyError: If no built-in binding serves the language.
    """

    for binding in BUILTIN_BINDINGS:
        if binding.language_key == language_key:
            return binding
    known = ", ".join(binding.language_key for binding in BUILTIN_BINDINGS)
    raise KeyError(f"Unknown language '{language_key}' (expected one of: {known})")


def select_bindings(language_keys: Iterable[str] | None) -> tuple[Binding, ...]:
    """Return the bindings for ``language_keys``, or every built-in binding.

    Args:
        language_keys: Requested language keys; ``None`` or empty selects all.

    Returns:
        tuple[Binding, ...]: Bindings in request order, without duplicates.
    """

    keys = list(dict.fromkeys(language_keys or ()))
    if not keys:
        return BUILTIN_BINDINGS
    return tuple(binding_for_language(key) for key in keys)


__all__ = ["BUILTIN_BINDINGS", "CSHARP", "VBNET", "binding_for_language", "select_bindings"]
