"""Shared fixtures: HDA rendering and a sample component project on disk."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import pytest

COMPONENT = "MyComponent"

HdaSections = dict[str, tuple[list[str], list[list[str]]]]


def render_hda(result_sets: HdaSections, local_data: dict[str, str] | None = None) -> str:
    lines = ['<?hda version="11.1.1.8.0" jcharset=UTF8 encoding=utf-8?>']
    lines.append("@Properties LocalData")
    for key, value in (local_data or {"blDateFormat": "M/d/yy"}).items():
        lines.append(f"{key}={value}")
    lines.append("@end")
    for name, (fields, rows) in result_sets.items():
        lines.append(f"@ResultSet {name}")
        lines.append(str(len(fields)))
        lines.extend(fields)
        for row in rows:
            lines.extend(row)
        lines.append("@end")
    return "\n".join(lines) + "\n"


@pytest.fixture
def write_hda() -> Callable[..., Path]:
    def _write(path: Path, result_sets: HdaSections, **kwargs: dict[str, str]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_hda(result_sets, **kwargs), encoding="utf-8")
        return path

    return _write


@dataclass(frozen=True)
class ComponentProject:
    root: Path
    manifest_file: Path
    component_folder: Path

    @property
    def component_manifest(self) -> Path:
        return self.component_folder / f"{COMPONENT}.hda"


def _write(path: Path, content: str | bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")


@pytest.fixture
def component_project(tmp_path: Path, write_hda: Callable[..., Path]) -> ComponentProject:
    """A component laid out the way the content server expects it.

    project/
        manifest.hda                 Manifest: component + lib/helper.jar
        MyComponent/
            MyComponent.hda          ResourceDefinition: resource, template, environment
            resources/mycomponent_resource.htm
            templates/{mycomponent_templates.hda, page.htm, .DS_Store, .svn/entries}
            mycomponent_environment.cfg (+ .prod variant)
            lib/helper.jar
    """
    root = tmp_path / "project"
    folder = root / COMPONENT

    manifest_file = write_hda(
        root / "manifest.hda",
        {
            "Manifest": (
                ["entryType", "location"],
                [
                    ["component", f"{COMPONENT}/{COMPONENT}.hda"],
                    ["componentExtra", f"{COMPONENT}/lib/helper.jar"],
                ],
            )
        },
    )
    write_hda(
        folder / f"{COMPONENT}.hda",
        {
            "ResourceDefinition": (
                ["type 6 30", "filename 6 100", "tables 6 100", "loadOrder 3 4"],
                [
                    ["resource", "resources/mycomponent_resource.htm", "", "10"],
                    ["template", "templates/mycomponent_templates.hda", "", "10"],
                    ["environment", "mycomponent_environment.cfg", "", "10"],
                ],
            )
        },
    )

    _write(folder / "resources" / "mycomponent_resource.htm", "<@dynamichtml my_include@>")
    _write(folder / "templates" / "mycomponent_templates.hda", "@ResultSet IntradocTemplates\n")
    _write(folder / "templates" / "page.htm", "<html></html>")
    _write(folder / "templates" / ".DS_Store", b"\x00\x01")
    _write(folder / "templates" / ".svn" / "entries", "12")
    _write(folder / "mycomponent_environment.cfg", "MyComponent_Mode=default\n")
    _write(folder / "mycomponent_environment.cfg.prod", "MyComponent_Mode=prod\n")
    _write(folder / "lib" / "helper.jar", b"PK\x03\x04jar-bytes")

    return ComponentProject(root=root, manifest_file=manifest_file, component_folder=folder)
