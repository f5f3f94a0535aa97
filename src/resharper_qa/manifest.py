# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""JSON manifest describing a host workspace and its quality profile.

The command line acts as a minimal host: instead of discovering files it
reads them, together with the active rules, from a manifest such as::

    {
      "files": [{"path": "src/Class1.cs", "language": "cs"}],
      "activeRules": [{"repository": "resharper-cs", "rule": "RedundantUsingDirective"}]
    }

Relative file paths are resolved against the manifest's directory.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError
from .models import WorkspaceFile
from .workspace import ActiveProfile, ActiveRule, InMemoryWorkspaceIndex


class ManifestFile(BaseModel):
    """Workspace file entry of the manifest."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str = Field(min_length=1)
    language: str | None = None


class WorkspaceManifest(BaseModel):
    """Workspace files and active rules supplied to the command line."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    files: tuple[ManifestFile, ...] = ()
    active_rules: tuple[ActiveRule, ...] = Field(default=(), alias="activeRules")

    def workspace_index(self, base_dir: Path) -> InMemoryWorkspaceIndex:
        """Return an index over the manifest files.

        Args:
            base_dir: Directory used to resolve relative file paths.

        Returns:
            InMemoryWorkspaceIndex: Index keyed by absolute path.

        Raises:
            ConfigurationError: If two entries resolve to the same path.
        """

        try:
            return InMemoryWorkspaceIndex(
                WorkspaceFile(path=str(_absolute(entry.path, base_dir)), language=entry.language)
                for entry in self.files
            )
        except ValueError as exc:
            raise ConfigurationError("files", f"is invalid: {exc}") from exc

    def profile(self) -> ActiveProfile:
        """Return the quality profile described by the manifest."""
        return ActiveProfile(self.active_rules)


def _absolute(raw: str, base_dir: Path) -> Path:
    path = Path(raw).expanduser()
    return path if path.is_absolute() else (base_dir / path).absolute()


def load_manifest(path: Path) -> WorkspaceManifest:
    """Read and validate the manifest stored at ``path``.

    Args:
        path: JSON manifest file.

    Returns:
        WorkspaceManifest: Validated manifest.

    Raises:
        ConfigurationError: If the file cannot be read or does not validate.
    """

    try:
        return WorkspaceManifest.model_validate_json(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(str(path), f"could not be read: {exc}") from exc
    except ValidationError as exc:
        raise ConfigurationError(str(path), f"is not a valid workspace manifest: {exc}") from exc


__all__ = ["ManifestFile", "WorkspaceManifest", "load_manifest"]
