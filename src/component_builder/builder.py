"""
component_builder.builder — End-to-end component build.

    settings -> listing -> output path -> archive

The listing is complete (and the component name known) before the output
file is opened, so configuration errors never leave a file behind.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from aws_lambda_powertools import Logger

from component_builder.archive import ArchiveReport, write_archive
from component_builder.config import BuildSettings, default_output_path
from component_builder.exclusion import ExclusionFilter
from component_builder.listing import Listing, build_listing

logger = Logger(service="component-builder")


@dataclass(frozen=True)
class ComponentPlan:
    component_name: str
    output_path: Path
    listing: Listing
    # Paths a folder walk must not package, beyond the output itself.
    skip_paths: tuple[Path, ...] = ()


@dataclass(frozen=True)
class BuildResult:
    component_name: str
    output_path: Path
    listing: Listing
    report: ArchiveReport


def plan_component(settings: BuildSettings) -> ComponentPlan:
    """Resolve the listing and output path without writing anything."""
    listing = build_listing(
        settings.manifest_file,
        settings.component_folder,
        environment=settings.environment,
        component_name=settings.component_name,
    )
    component_name = listing.component_name or ""
    if settings.output_path is not None:
        return ComponentPlan(
            component_name=component_name, output_path=settings.output_path, listing=listing
        )

    output_path = default_output_path(settings.manifest_file, component_name)
    return ComponentPlan(
        component_name=component_name,
        output_path=output_path,
        listing=listing,
        skip_paths=(output_path.parent,),
    )


def build_component(settings: BuildSettings) -> BuildResult:
    """Build the component archive described by settings."""
    exclusion = ExclusionFilter(settings.exclude_files)
    plan = plan_component(settings)
    logger.info(
        "Building component",
        component_name=plan.component_name,
        output=str(plan.output_path),
        environment=settings.environment or None,
    )
    report = write_archive(plan.listing, plan.output_path, exclusion, skip=plan.skip_paths)
    logger.info(
        "Component archive written",
        output=str(report.output_path),
        entries=len(report.entries),
        sha256=report.sha256,
    )
    return BuildResult(
        component_name=plan.component_name,
        output_path=plan.output_path,
        listing=plan.listing,
        report=report,
    )
