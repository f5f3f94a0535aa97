# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Emit the ReSharper DotSettings file enabling the active checks."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Final
from xml.sax.saxutils import escape

from .errors import SettingsWriteError

DOTSETTINGS_HEADER: Final[str] = (
    '<wpf:ResourceDictionary xml:space="preserve"'
    ' xmlns:x="http://schemas.microsoft.com/winfx/2006/xaml"'
    ' xmlns:s="clr-namespace:System;assembly=mscorlib"'
    ' xmlns:ss="urn:shemas-jetbrains-com:settings-storage-xaml"'
    ' xmlns:wpf="http://schemas.microsoft.com/winfx/2006/xaml/presentation">'
)
DOTSETTINGS_FOOTER: Final[str] = "</wpf:ResourceDictionary>"
ENABLED_SEVERITY: Final[str] = "WARNING"
_SEVERITY_KEY_TEMPLATE: Final[str] = (
    "/Default/CodeInspection/Highlighting/InspectionSeverities/={check_id}/@EntryIndexedValue"
)


def render_dotsettings(check_ids: Iterable[str]) -> str:
    """Return the DotSettings document enabling ``check_ids``.

    Duplicates are dropped while the first-seen order is kept.

    Args:
        check_ids: Check identifiers active for the binding's repository.

    Returns:
        str: XML document text terminated by a newline.
    """

    lines = [DOTSETTINGS_HEADER]
    for check_id in dict.fromkeys(check_ids):
        key = escape(_SEVERITY_KEY_TEMPLATE.format(check_id=check_id), {'"': "&quot;"})
        lines.append(f'  <s:String x:Key="{key}">{ENABLED_SEVERITY}</s:String>')
    lines.append(DOTSETTINGS_FOOTER)
    return "\n".join(lines) + "\n"


class DotSettingsWriter:
    """Write the settings file consumed by ``inspectcode`` through ``/profile``."""

    def write(self, check_ids: Iterable[str], destination: Path) -> Path:
        """Write ``check_ids`` to ``destination``, replacing any existing file.

        Args:
            check_ids: Active check identifiers, in profile order.
            destination: Path of the DotSettings file.

        Returns:
            Path: The written ``destination``.

        Raises:
            SettingsWriteError: If the file or its parent directory cannot be written.
        """

        document = render_dotsettings(check_ids)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_text(document, encoding="utf-8")
        except OSError as exc:
            raise SettingsWriteError(destination, exc) from exc
        return destination


__all__ = ["DotSettingsWriter", "render_dotsettings"]
