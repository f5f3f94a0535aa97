# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the workspace manifest, workspace index and built-in bindings."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from resharper_qa.bindings import BUILTIN_BINDINGS, CSHARP, VBNET, binding_for_language, select_bindings
from resharper_qa.errors import ConfigurationError
from resharper_qa.manifest import load_manifest
from resharper_qa.models import FileHandle, WorkspaceFile
from resharper_qa.workspace import ActiveChecks, ActiveProfile, ActiveRule, InMemoryWorkspaceIndex


def _write_manifest(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_manifest_resolves_relative_paths(tmp_path: Path) -> None:
    manifest_path = _write_manifest(
        tmp_path / "workspace.json",
        {
            "files": [
                {"path": "src/Class1.cs", "language": "cs"},
                {"path": str(tmp_path / "abs" / "Module1.vb"), "language": "vbnet"},
            ],
            "activeRules": [{"repository": "resharper-cs", "rule": "RedundantUsingDirective"}],
        },
    )

    manifest = load_manifest(manifest_path)
    index = manifest.workspace_index(tmp_path)

    handle = index.lookup(str(tmp_path / "src" / "Class1.cs"))
    assert handle is not None
    assert handle.language == "cs"
    assert index.lookup(str(tmp_path / "abs" / "Module1.vb")) is not None
    assert len(index) == 2
    assert manifest.profile().for_repository("resharper-cs").identifiers() == ("RedundantUsingDirective",)


def test_manifest_rejects_unknown_fields(tmp_path: Path) -> None:
    manifest_path = _write_manifest(tmp_path / "workspace.json", {"files": [], "rules": []})

    with pytest.raises(ConfigurationError, match="not a valid workspace manifest"):
        load_manifest(manifest_path)


def test_manifest_rejects_duplicate_files(tmp_path: Path) -> None:
    manifest_path = _write_manifest(
        tmp_path / "workspace.json",
        {"files": [{"path": "a.cs", "language": "cs"}, {"path": "./a.cs", "language": "cs"}]},
    )

    with pytest.raises(ConfigurationError) as excinfo:
        load_manifest(manifest_path).workspace_index(tmp_path)

    assert excinfo.value.key == "files"


def test_missing_manifest_is_a_configuration_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="could not be read"):
        load_manifest(tmp_path / "absent.json")


def test_workspace_file_satisfies_file_handle_protocol() -> None:
    assert isinstance(WorkspaceFile(path="/src/a.cs", language="cs"), FileHandle)


def test_index_rejects_duplicate_paths() -> None:
    index = InMemoryWorkspaceIndex([WorkspaceFile(path="/src/a.cs", language="cs")])

    with pytest.raises(ValueError, match="Duplicate"):
        index.add(WorkspaceFile(path="/src//a.cs", language="vbnet"))


def test_active_checks_deduplicate_and_keep_order() -> None:
    checks = ActiveChecks(["B", "A", "B"])

    assert checks.identifiers() == ("B", "A")
    assert checks.contains("A")
    assert "C" not in checks
    assert len(checks) == 2


def test_profile_filters_by_repository() -> None:
    profile = ActiveProfile(
        [
            ActiveRule(repository="resharper-cs", rule="A"),
            ActiveRule(repository="resharper-vbnet", rule="B"),
            ActiveRule(repository="other", rule="C"),
        ]
    )

    assert profile.for_repository("resharper-vbnet").identifiers() == ("B",)
    assert profile.for_repository("missing").identifiers() == ()


def test_builtin_bindings() -> None:
    assert BUILTIN_BINDINGS == (CSHARP, VBNET)
    assert binding_for_language("vbnet") is VBNET
    assert str(CSHARP) == "cs/resharper-cs"
    assert CSHARP.settings_file_name == "resharper-cs.DotSettings"
    assert VBNET.report_file_name == "resharper-vbnet-report.xml"


def test_select_bindings() -> None:
    assert select_bindings(None) == BUILTIN_BINDINGS
    assert select_bindings(["vbnet", "cs", "vbnet"]) == (VBNET, CSHARP)
    with pytest.raises(KeyError, match="fsharp"):
        select_bindings(["fsharp"])
