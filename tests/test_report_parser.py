# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the inspectcode XML report parser."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from resharper_qa.errors import ReportParseError
from resharper_qa.report import ReportParser


def _report(*issues: str) -> str:
    body = "\n".join(f"      {issue}" for issue in issues)
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        "<Report>\n"
        "  <Issues>\n"
        '    <Project Name="MyLibrary">\n'
        f"{body}\n"
        "    </Project>\n"
        "  </Issues>\n"
        "</Report>\n"
    )


def test_scenario_report_yields_every_issue_in_order(
    tmp_path: Path,
    scenario_report: str,
    write_report: Callable[[str], Path],
) -> None:
    report = write_report(scenario_report.replace("${basedir}", str(tmp_path)))

    findings = list(ReportParser().parse(report))

    assert [finding.check_id for finding in findings] == [
        "AccessToDisposedClosure",
        "AccessToDisposedClosure",
        "AccessToDisposedClosure",
        "AccessToDisposedClosure",
        "AccessToForEachVariableInClosure",
        "AccessToDisposedClosure",
        "InactiveRule",
    ]
    assert findings[0].file_path is None
    assert findings[0].line == 1
    assert not findings[0].has_location
    assert findings[1].file_path == str(tmp_path / "Class2.cs")
    assert findings[1].line is None
    assert findings[3].file_path == str(tmp_path / "Class4.cs")
    assert findings[3].line == 4
    assert findings[3].message == "Second message"
    assert findings[3].has_location


def test_report_line_points_at_the_issue_element(write_report: Callable[[str], Path]) -> None:
    report = write_report(_report('<Issue TypeId="A" File="/src/A.cs" Line="2" Message="m" />'))

    (finding,) = ReportParser().parse(report)

    assert finding.report_line == 5


def test_relative_files_resolve_against_base_dir(tmp_path: Path, write_report: Callable[[str], Path]) -> None:
    report = write_report(_report('<Issue TypeId="A" File="MyLibrary/Class1.cs" Line="2" Message="m" />'))

    (finding,) = ReportParser(base_dir=tmp_path).parse(report)

    assert finding.file_path == str(tmp_path / "MyLibrary" / "Class1.cs")


def test_absolute_files_ignore_base_dir(tmp_path: Path, write_report: Callable[[str], Path]) -> None:
    absolute = tmp_path / "elsewhere" / "Class1.cs"
    report = write_report(_report(f'<Issue TypeId="A" File="{absolute}" Line="2" Message="m" />'))

    (finding,) = ReportParser(base_dir=tmp_path / "solution").parse(report)

    assert finding.file_path == str(absolute)


def test_report_without_issues_is_empty(write_report: Callable[[str], Path]) -> None:
    report = write_report('<?xml version="1.0"?>\n<Report><Issues /></Report>\n')

    assert list(ReportParser().parse(report)) == []


def test_result_is_single_pass(write_report: Callable[[str], Path]) -> None:
    report = write_report(_report('<Issue TypeId="A" Message="m" />'))

    findings = ReportParser().parse(report)

    assert len(list(findings)) == 1
    assert list(findings) == []


def test_malformed_xml_reports_location(write_report: Callable[[str], Path]) -> None:
    report = write_report('<?xml version="1.0"?>\n<Report>\n  <Issues>\n    <Issue TypeId="A"\n</Report>\n')

    with pytest.raises(ReportParseError) as excinfo:
        ReportParser().parse(report)

    assert excinfo.value.path == report
    assert excinfo.value.line is not None


def test_truncated_report_yields_nothing(write_report: Callable[[str], Path]) -> None:
    full = _report('<Issue TypeId="A" Message="m" />', '<Issue TypeId="B" Message="n" />')
    report = write_report(full[: full.index("</Project>")])

    with pytest.raises(ReportParseError):
        ReportParser().parse(report)


def test_missing_report_is_a_parse_error(tmp_path: Path) -> None:
    missing = tmp_path / "absent.xml"

    with pytest.raises(ReportParseError, match="unable to read"):
        ReportParser().parse(missing)


def test_unexpected_root_element_is_rejected(write_report: Callable[[str], Path]) -> None:
    report = write_report('<?xml version="1.0"?>\n<Results><Issue TypeId="A" Message="m" /></Results>\n')

    with pytest.raises(ReportParseError, match="<Report>"):
        ReportParser().parse(report)


@pytest.mark.parametrize(
    ("issue", "expected"),
    [
        ('<Issue File="/src/A.cs" Line="2" Message="m" />', '"TypeId"'),
        ('<Issue TypeId="A" File="/src/A.cs" Line="2" />', '"Message"'),
        ('<Issue TypeId="A" File="/src/A.cs" Line="two" Message="m" />', "integer"),
        ('<Issue TypeId="A" File="/src/A.cs" Line="0" Message="m" />', "positive"),
    ],
)
def test_invalid_issue_attributes_are_rejected(
    issue: str,
    expected: str,
    write_report: Callable[[str], Path],
) -> None:
    report = write_report(_report(issue))

    with pytest.raises(ReportParseError) as excinfo:
        ReportParser().parse(report)

    assert expected in excinfo.value.reason
    assert excinfo.value.line == 5


def test_document_type_declarations_are_forbidden(write_report: Callable[[str], Path]) -> None:
    report = write_report(
        '<?xml version="1.0"?>\n'
        '<!DOCTYPE Report [<!ENTITY boom "boom">]>\n'
        '<Report><Issues><Issue TypeId="A" Message="&boom;" /></Issues></Report>\n'
    )

    with pytest.raises(ReportParseError, match="forbidden"):
        ReportParser().parse(report)
