"""
component_builder.config — Build settings resolved from the environment.

Environment variables (all optional):
    COMPONENT_MANIFEST_FILE   root manifest (default <project>/manifest.hda)
    COMPONENT_FOLDER          base folder for manifest-relative paths (default unset)
    COMPONENT_EXCLUDE_FILES   exclusion regex (default DEFAULT_EXCLUDE_PATTERN)
    COMPONENT_ENVIRONMENT     environment tag selecting <file>.<tag> variants
    COMPONENT_NAME            explicit component name (wins over auto-detection)
    COMPONENT_ZIP             output archive (default <manifest dir>/.build/<name>.zip)

CLI flags override every value.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

from component_builder.exclusion import DEFAULT_EXCLUDE_PATTERN

DEFAULT_MANIFEST_NAME = "manifest.hda"
DEFAULT_BUILD_DIR = ".build"


def _env(name: str) -> str:
    return os.environ.get(name, "").strip()


@dataclass(frozen=True)
class BuildSettings:
    manifest_file: Path
    component_folder: str = ""
    exclude_files: str = DEFAULT_EXCLUDE_PATTERN
    environment: str = ""
    component_name: str | None = None
    output_path: Path | None = None

    @classmethod
    def from_env(cls, project_dir: Path | str | None = None) -> BuildSettings:
        project = Path(project_dir) if project_dir is not None else Path.cwd()
        manifest_file = _env("COMPONENT_MANIFEST_FILE")
        output_path = _env("COMPONENT_ZIP")
        return cls(
            manifest_file=Path(manifest_file) if manifest_file else project / DEFAULT_MANIFEST_NAME,
            component_folder=_env("COMPONENT_FOLDER"),
            exclude_files=_env("COMPONENT_EXCLUDE_FILES") or DEFAULT_EXCLUDE_PATTERN,
            environment=_env("COMPONENT_ENVIRONMENT"),
            component_name=_env("COMPONENT_NAME") or None,
            output_path=Path(output_path) if output_path else None,
        )

    def with_overrides(self, **overrides: object) -> BuildSettings:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def default_output_path(manifest_file: Path, component_name: str) -> Path:
    """Default archive location: <manifest dir>/.build/<component_name>.zip."""
    return Path(manifest_file).parent / DEFAULT_BUILD_DIR / f"{component_name}.zip"
