# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parse the XML report written by ``inspectcode``.

The report looks like::

    <Report ToolsVersion="...">
      <IssueTypes>...</IssueTypes>
      <Issues>
        <Project Name="MyLibrary">
          <Issue TypeId="RedundantUsingDirective" File="MyLibrary/Class1.cs"
                 Offset="0-13" Line="1" Message="Using directive is not required" />
        </Project>
      </Issues>
    </Report>

``TypeId`` and ``Message`` are mandatory on every ``Issue``; ``File`` and
``Line`` are omitted for findings without a precise location.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path, PurePath
from typing import Final, NoReturn
from xml.sax import SAXParseException
from xml.sax.handler import ContentHandler
from xml.sax.xmlreader import AttributesImpl, Locator

from defusedxml import sax as defused_sax
from defusedxml.common import DefusedXmlException

from .errors import ReportParseError
from .models import RawFinding

REPORT_ELEMENT: Final[str] = "Report"
ISSUE_ELEMENT: Final[str] = "Issue"
TYPE_ID_ATTRIBUTE: Final[str] = "TypeId"
FILE_ATTRIBUTE: Final[str] = "File"
LINE_ATTRIBUTE: Final[str] = "Line"
MESSAGE_ATTRIBUTE: Final[str] = "Message"


class _InvalidReport(Exception):
    """Internal signal raised from SAX callbacks; converted to ReportParseError."""

    def __init__(self, reason: str, line: int | None, column: int | None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.line = line
        self.column = column


class _ReportHandler(ContentHandler):
    """SAX handler collecting one :class:`RawFinding` per ``Issue`` element."""

    def __init__(self, base_dir: Path | None) -> None:
        super().__init__()
        self._base_dir = base_dir
        self._locator: Locator | None = None
        self._seen_root = False
        self.findings: list[RawFinding] = []

    def setDocumentLocator(self, locator: Locator) -> None:  # noqa: N802 - SAX API
        self._locator = locator

    def startElement(self, name: str, attrs: AttributesImpl) -> None:  # noqa: N802 - SAX API
        if not self._seen_root:
            self._seen_root = True
            if name != REPORT_ELEMENT:
                self._invalid(f"expected a <{REPORT_ELEMENT}> root element, found <{name}>")
            return
        if name == ISSUE_ELEMENT:
            self.findings.append(self._finding(attrs))

    def _finding(self, attrs: AttributesImpl) -> RawFinding:
        return RawFinding(
            report_line=self._line() or 0,
            check_id=self._required(attrs, TYPE_ID_ATTRIBUTE),
            file_path=self._file_path(attrs.get(FILE_ATTRIBUTE)),
            line=self._line_number(attrs.get(LINE_ATTRIBUTE)),
            message=self._required(attrs, MESSAGE_ATTRIBUTE),
        )

    def _required(self, attrs: AttributesImpl, attribute: str) -> str:
        value = attrs.get(attribute)
        if value is None or not value.strip():
            self._invalid(f'missing required attribute "{attribute}" on <{ISSUE_ELEMENT}>')
        return value

    def _file_path(self, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        candidate = PurePath(value.strip())
        if self._base_dir is not None and not candidate.is_absolute():
            return str(self._base_dir / candidate)
        return str(candidate)

    def _line_number(self, value: str | None) -> int | None:
        if value is None or not value.strip():
            return None
        try:
            number = int(value.strip())
        except ValueError:
            self._invalid(f'expected an integer "{LINE_ATTRIBUTE}" attribute, found "{value}"')
        if number < 1:
            self._invalid(f'expected a positive "{LINE_ATTRIBUTE}" attribute, found "{value}"')
        return number

    def _line(self) -> int | None:
        return self._locator.getLineNumber() if self._locator is not None else None

    def _invalid(self, reason: str) -> NoReturn:
        column = self._locator.getColumnNumber() if self._locator is not None else None
        raise _InvalidReport(reason, self._line(), column)


class ReportParser:
    """Decode an ``inspectcode`` report into :class:`RawFinding` records."""

    def __init__(self, *, base_dir: Path | None = None) -> None:
        """Initialise the parser.

        Args:
            base_dir: Directory used to resolve relative ``File`` attributes,
                normally the directory holding the solution file.
        """

        self._base_dir = base_dir

    def parse(self, report_file: Path) -> Iterator[RawFinding]:
        """Return the findings of ``report_file`` in document order.

        The whole document is validated before the iterator is returned, so a
        malformed report never yields partial results.

        Args:
            report_file: XML report written by ``inspectcode``.

        Returns:
            Iterator[RawFinding]: Single-pass iterator over the findings.

        Raises:
            ReportParseError: If the file is missing, unreadable or malformed.
        """

        handler = _ReportHandler(self._base_dir)
        try:
            with report_file.open("rb") as stream:
                defused_sax.parse(stream, handler, forbid_dtd=True)
        except OSError as exc:
            raise ReportParseError(report_file, f"unable to read the report: {exc}") from exc
        except SAXParseException as exc:
            raise ReportParseError(
                report_file,
                exc.getMessage(),
                line=exc.getLineNumber(),
                column=exc.getColumnNumber(),
            ) from exc
        except DefusedXmlException as exc:
            raise ReportParseError(report_file, f"forbidden XML construct: {exc}") from exc
        except _InvalidReport as exc:
            raise ReportParseError(report_file, exc.reason, line=exc.line, column=exc.column) from exc
        return iter(handler.findings)


__all__ = ["ReportParser"]
