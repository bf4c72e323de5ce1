"""
component_builder — Package content server components into deployable zips.

A root HDA manifest lists the component's files; component entries point at
the component's own manifest whose ResourceDefinition rows add templates,
environment-specific configuration and plain resources. The result is a zip
with manifest.hda at the root and everything else under component/<name>/.
"""

from component_builder.archive import ArchiveReport, read_entry_names, write_archive
from component_builder.builder import BuildResult, ComponentPlan, build_component, plan_component
from component_builder.config import BuildSettings
from component_builder.exceptions import (
    ConfigurationError,
    DuplicateEntryError,
    ManifestError,
    MissingSectionError,
    NotFoundError,
    PackagingError,
    ParseError,
    PublishError,
    UnreadableEntryError,
    WriteError,
)
from component_builder.exclusion import DEFAULT_EXCLUDE_PATTERN, ExclusionFilter
from component_builder.listing import Listing, build_listing
from component_builder.manifest import load_section

__all__ = [
    "DEFAULT_EXCLUDE_PATTERN",
    "ArchiveReport",
    "BuildResult",
    "BuildSettings",
    "ComponentPlan",
    "ConfigurationError",
    "DuplicateEntryError",
    "ExclusionFilter",
    "Listing",
    "ManifestError",
    "MissingSectionError",
    "NotFoundError",
    "PackagingError",
    "ParseError",
    "PublishError",
    "UnreadableEntryError",
    "WriteError",
    "build_component",
    "build_listing",
    "load_section",
    "plan_component",
    "read_entry_names",
    "write_archive",
]
