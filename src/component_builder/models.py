"""
component_builder.models — Value types shared by the build pipeline.

Manifest rows are read once and never mutated. The component context is the
only mutable value and it only allows the component name to be set once.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from types import MappingProxyType

# ---------------------------------------------------------------------------
# Section and archive layout constants
# ---------------------------------------------------------------------------

MANIFEST_SECTION = "Manifest"
RESOURCE_SECTION = "ResourceDefinition"
MANIFEST_ARCHIVE_NAME = "manifest.hda"
COMPONENT_ARCHIVE_ROOT = "component"


class EntryType(StrEnum):
    COMPONENT = "component"


class ResourceType(StrEnum):
    TEMPLATE = "template"
    ENVIRONMENT = "environment"


# ---------------------------------------------------------------------------
# Manifest rows
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ManifestRow:
    """One row of a manifest result set, keyed by column name.

    Root manifest rows carry ``entryType`` and ``location``; component
    resource rows carry ``type`` and ``filename``. Missing columns read as "".
    """

    values: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def get(self, column: str) -> str:
        return self.values.get(column) or ""

    @property
    def entry_type(self) -> str:
        return self.get("entryType")

    @property
    def location(self) -> str:
        return self.get("location")

    @property
    def resource_type(self) -> str:
        return self.get("type")

    @property
    def filename(self) -> str:
        return self.get("filename")

    @property
    def is_component(self) -> bool:
        return self.entry_type == EntryType.COMPONENT


# ---------------------------------------------------------------------------
# Listing entries
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ListingEntry:
    """A filesystem source mapped to one archive-internal path.

    source is None when no base folder was configured; the archive writer
    rejects such entries when it tries to read them.
    """

    source: Path | None
    archive_path: str

    @property
    def sort_key(self) -> str:
        return "" if self.source is None else str(self.source)


# ---------------------------------------------------------------------------
# Component context
# ---------------------------------------------------------------------------


@dataclass
class ComponentContext:
    """Build-scoped component name and environment tag.

    The name is fixed by the first call to ``fix_name`` (or at construction
    when configured explicitly); later candidates are ignored.
    """

    name: str | None = None
    environment: str = ""

    def fix_name(self, candidate: str) -> str:
        if self.name is None and candidate:
            self.name = candidate
        return self.name or candidate

    @property
    def base_archive_path(self) -> str:
        return f"{COMPONENT_ARCHIVE_ROOT}/{self.name}/"
