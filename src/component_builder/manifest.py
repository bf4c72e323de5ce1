"""
component_builder.manifest — Load a named result set from an HDA manifest.
"""

from __future__ import annotations

from pathlib import Path

from component_builder.exceptions import MissingSectionError
from component_builder.hda import load_binder
from component_builder.models import ManifestRow


def load_section(path: Path | None, section_name: str) -> list[ManifestRow]:
    """Return the rows of result set section_name from the manifest at path.

    Raises:
        NotFoundError:       path is unset, missing or unreadable.
        ParseError:          the document is not valid HDA.
        MissingSectionError: the document has no such result set.
    """
    binder = load_binder(path)
    result_set = binder.result_set(section_name)
    if result_set is None:
        raise MissingSectionError(path=str(path), section=section_name)
    return [ManifestRow(row) for row in result_set.rows]
