"""
component_builder.listing — Build the source -> archive path listing.

Reads the root manifest's Manifest result set and, for every component entry,
that component's ResourceDefinition result set. The result is an in-memory
Listing consumed once by the archive writer.

Two passes over the root manifest:
    1. Fix the component name: explicit configuration, else the file stem of
       the first component entry's manifest. No name -> ConfigurationError.
    2. Resolve every row (and every resource of component rows) to a
       ListingEntry rooted under component/<name>/.

Component manifests are read one level deep only.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path, PurePosixPath

from aws_lambda_powertools import Logger

from component_builder.exceptions import ConfigurationError, DuplicateEntryError, ParseError
from component_builder.manifest import load_section
from component_builder.models import (
    MANIFEST_ARCHIVE_NAME,
    MANIFEST_SECTION,
    RESOURCE_SECTION,
    ComponentContext,
    ListingEntry,
    ManifestRow,
    ResourceType,
)
from component_builder.paths import (
    resolve_entry_path,
    resolve_environment_path,
    resolve_template_folder,
    strip_component_prefix,
)

logger = Logger(service="component-builder")


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------


class Listing:
    """Mapping of filesystem source -> ListingEntry.

    Adding an entry for a source already present replaces it. Two different
    sources may not claim the same archive path. Iteration is ordered by the
    source path string.
    """

    def __init__(self, component_name: str | None = None) -> None:
        self.component_name = component_name
        self._entries: dict[Path | None, ListingEntry] = {}
        self._sources_by_archive_path: dict[str, Path | None] = {}

    def add(self, source: Path | None, archive_path: str) -> ListingEntry:
        claimed_by = self._sources_by_archive_path.get(archive_path, source)
        if claimed_by != source:
            raise DuplicateEntryError(
                archive_path=archive_path, existing=claimed_by, incoming=source
            )

        previous = self._entries.get(source)
        if previous is not None and previous.archive_path != archive_path:
            logger.debug(
                "Listing entry replaced",
                source=str(source),
                previous=previous.archive_path,
                archive_path=archive_path,
            )
            del self._sources_by_archive_path[previous.archive_path]

        entry = ListingEntry(source=source, archive_path=archive_path)
        self._entries[source] = entry
        self._sources_by_archive_path[archive_path] = source
        return entry

    def get(self, source: Path | None) -> str | None:
        entry = self._entries.get(source)
        return None if entry is None else entry.archive_path

    def archive_paths(self) -> list[str]:
        return [entry.archive_path for entry in self]

    def as_dict(self) -> dict[str, str]:
        return {entry.sort_key: entry.archive_path for entry in self}

    def __iter__(self) -> Iterator[ListingEntry]:
        return iter(sorted(self._entries.values(), key=lambda entry: entry.sort_key))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, source: object) -> bool:
        return source in self._entries


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _archive_form(path: str) -> str:
    return path.replace("\\", "/")


def component_name_from_manifest(location: str) -> str:
    """Component name is the manifest file name without its extension."""
    return PurePosixPath(_archive_form(location)).stem


def determine_component_name(rows: list[ManifestRow], context: ComponentContext) -> str:
    """Fix context.name from the first component row unless already configured."""
    if context.name is None:
        for row in rows:
            if row.is_component and row.location:
                context.fix_name(component_name_from_manifest(row.location))
                break
    if not context.name:
        raise ConfigurationError("No component name specified or auto detected")
    logger.info("Component name determined", component_name=context.name)
    return context.name


def _require(value: str, column: str, manifest_file: Path | None) -> str:
    if not value:
        raise ParseError(f"Row in {manifest_file} has no {column}", path=manifest_file)
    return value


# ---------------------------------------------------------------------------
# Listing construction
# ---------------------------------------------------------------------------


def add_component_resources(
    listing: Listing,
    component_manifest: Path | None,
    base_folder: str | Path | None,
    context: ComponentContext,
) -> None:
    """Add every ResourceDefinition row of a component manifest to listing."""
    if component_manifest is not None:
        context.fix_name(component_name_from_manifest(component_manifest.name))
    resources = load_section(component_manifest, RESOURCE_SECTION)
    logger.info(
        "Adding component resources",
        manifest=str(component_manifest),
        resources=len(resources),
    )

    base_archive_path = context.base_archive_path
    for row in resources:
        filename = _require(row.filename, "filename", component_manifest)
        archive_path = base_archive_path + _archive_form(
            strip_component_prefix(filename, context.name)
        )

        if row.resource_type == ResourceType.TEMPLATE:
            # Templates span several files; the whole folder is packaged.
            source = resolve_template_folder(base_folder, filename)
        elif row.resource_type == ResourceType.ENVIRONMENT:
            source = resolve_environment_path(base_folder, filename, context.environment)
        else:
            source = resolve_entry_path(base_folder, filename)
        listing.add(source, archive_path)


def add_manifest_row(
    listing: Listing,
    row: ManifestRow,
    base_folder: str | Path | None,
    context: ComponentContext,
    manifest_file: Path | None = None,
) -> ListingEntry:
    """Add one root manifest row; component rows pull in their resources."""
    location = strip_component_prefix(
        _require(row.location, "location", manifest_file), context.name
    )
    source = resolve_entry_path(base_folder, location)
    entry = listing.add(source, context.base_archive_path + _archive_form(location))

    if row.is_component:
        add_component_resources(listing, source, base_folder, context)
    return entry


def build_listing(
    manifest_file: Path | str,
    base_folder: str | Path | None,
    environment: str | None = None,
    component_name: str | None = None,
    context: ComponentContext | None = None,
) -> Listing:
    """Build the complete listing for the root manifest at manifest_file.

    A caller-supplied context takes the place of environment and
    component_name, and carries the fixed component name back out.

    Raises:
        ConfigurationError: no component name configured or detectable.
        ManifestError:      the root or a component manifest cannot be read.
        DuplicateEntryError: two sources claim one archive path.
    """
    manifest_path = Path(manifest_file)
    if context is None:
        context = ComponentContext(name=component_name or None, environment=environment or "")

    rows = load_section(manifest_path, MANIFEST_SECTION)
    determine_component_name(rows, context)

    listing = Listing(component_name=context.name)
    for row in rows:
        add_manifest_row(listing, row, base_folder, context, manifest_path)
    # Added last so a row naming the manifest file itself cannot displace it.
    listing.add(manifest_path, MANIFEST_ARCHIVE_NAME)

    logger.info("Listing built", component_name=context.name, entries=len(listing))
    return listing
