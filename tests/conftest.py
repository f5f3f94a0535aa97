# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

from resharper_qa.models import RawFinding

# Seven findings covering every reconciliation branch; ``${basedir}`` stands
# for the solution directory and is substituted by the fake inspectcode.
SCENARIO_REPORT = """<?xml version="1.0" encoding="utf-8"?>
<Report ToolsVersion="2023.3">
  <Information>
    <Solution>Example.sln</Solution>
  </Information>
  <IssueTypes>
    <IssueType Id="AccessToDisposedClosure" Category="Potential Code Quality Issues" Severity="WARNING" />
  </IssueTypes>
  <Issues>
    <Project Name="MyLibrary">
      <Issue TypeId="AccessToDisposedClosure" Line="1" Message="Dummy message" />
      <Issue TypeId="AccessToDisposedClosure" File="${basedir}/Class2.cs" Message="Dummy message" />
      <Issue TypeId="AccessToDisposedClosure" File="${basedir}/Class3.cs" Line="3" Message="First message" />
      <Issue TypeId="AccessToDisposedClosure" File="${basedir}/Class4.cs" Line="4" Message="Second message" />
      <Issue TypeId="AccessToForEachVariableInClosure" File="${basedir}/Class5.cs" Line="5" Message="Third message" />
      <Issue TypeId="AccessToDisposedClosure" File="${basedir}/Class6.cs" Line="6" Message="Fourth message" />
      <Issue TypeId="InactiveRule" File="${basedir}/Class7.cs" Line="7" Message="Fifth message" />
    </Project>
  </Issues>
</Report>
"""

SCENARIO_ACTIVE_CHECKS = ("AccessToDisposedClosure", "AccessToForEachVariableInClosure")

FAKE_INSPECTCODE = """#!{python}
import pathlib
import sys

options = dict(arg[1:].split("=", 1) for arg in sys.argv[1:] if arg.startswith("/") and "=" in arg)
solution = pathlib.Path(sys.argv[-1]).resolve()
template = pathlib.Path({template!r}).read_text(encoding="utf-8")
pathlib.Path(options["output"]).write_text(template.replace("${{basedir}}", str(solution.parent)), encoding="utf-8")
pathlib.Path({argv_log!r}).write_text("\\n".join(sys.argv[1:]), encoding="utf-8")
"""


@pytest.fixture
def scenario_report() -> str:
    """Return the seven-issue report with a ``${basedir}`` placeholder."""

    return SCENARIO_REPORT


@pytest.fixture
def scenario_active_checks() -> tuple[str, ...]:
    """Return the checks active in the scenario quality profile."""

    return SCENARIO_ACTIVE_CHECKS


@pytest.fixture
def scenario_findings(solution_dir: Path) -> list[RawFinding]:
    """Return the seven scenario findings with paths under ``solution_dir``."""

    rows: list[tuple[int, str, str | None, int | None, str]] = [
        (100, "AccessToDisposedClosure", None, 1, "Dummy message"),
        (200, "AccessToDisposedClosure", "Class2.cs", None, "Dummy message"),
        (400, "AccessToDisposedClosure", "Class3.cs", 3, "First message"),
        (500, "AccessToDisposedClosure", "Class4.cs", 4, "Second message"),
        (600, "AccessToForEachVariableInClosure", "Class5.cs", 5, "Third message"),
        (700, "AccessToDisposedClosure", "Class6.cs", 6, "Fourth message"),
        (800, "InactiveRule", "Class7.cs", 7, "Fifth message"),
    ]
    return [
        RawFinding(
            report_line=report_line,
            check_id=check_id,
            file_path=str(solution_dir / name) if name is not None else None,
            line=line,
            message=message,
        )
        for report_line, check_id, name, line, message in rows
    ]


@pytest.fixture
def solution_dir(tmp_path: Path) -> Path:
    """Return a solution directory holding an empty ``Example.sln``."""

    root = tmp_path / "solution"
    root.mkdir()
    (root / "Example.sln").write_text("", encoding="utf-8")
    return root


@pytest.fixture
def write_report(tmp_path: Path) -> Callable[[str], Path]:
    """Return a helper writing report text to a fresh file."""

    counter = {"value": 0}

    def _write(text: str) -> Path:
        counter["value"] += 1
        path = tmp_path / f"report-{counter['value']}.xml"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def fake_inspectcode(tmp_path: Path) -> tuple[Path, Path]:
    """Return an executable emulating inspectcode and the file recording its arguments."""

    if os.name == "nt":
        pytest.skip("fake inspectcode relies on a POSIX shebang")
    template = tmp_path / "report-template.xml"
    template.write_text(SCENARIO_REPORT, encoding="utf-8")
    argv_log = tmp_path / "inspectcode-argv.txt"
    script = tmp_path / "bin" / "inspectcode.sh"
    script.parent.mkdir()
    script.write_text(
        FAKE_INSPECTCODE.format(python=sys.executable, template=str(template), argv_log=str(argv_log)),
        encoding="utf-8",
    )
    script.chmod(0o755)
    return script, argv_log
