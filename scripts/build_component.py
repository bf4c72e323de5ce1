#!/usr/bin/env python3
"""
build_component.py — Build a content server component zip from its manifest.

Reads the root manifest.hda, follows the component entry into the component's
own .hda (ResourceDefinition), and writes:

    manifest.hda
    component/<componentName>/...

Defaults come from COMPONENT_* environment variables (see
component_builder.config); flags override them.

Exit codes:
    0  Archive written (or listing printed with --dry-run)
    1  Build failed (missing manifest, unreadable entry, no component name, ...)

Usage:
    uv run python scripts/build_component.py --component-folder src/MyComponent
    uv run python scripts/build_component.py --env prod --publish-bucket my-artifacts
    uv run python scripts/build_component.py --dry-run --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from component_builder.builder import build_component, plan_component
from component_builder.config import BuildSettings
from component_builder.exceptions import PackagingError
from component_builder.publish import publish_archive

logger = logging.getLogger("build_component")
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(description="Build a component zip from manifest.hda")
    parser.add_argument("--project-dir", type=Path, default=None, help="Project root (default cwd)")
    parser.add_argument("--manifest-file", type=Path, default=None, help="Root manifest.hda")
    parser.add_argument(
        "--component-folder",
        default=None,
        help="Folder manifest locations are resolved against",
    )
    parser.add_argument("--exclude-files", default=None, help="Regex of names to skip")
    parser.add_argument(
        "--env",
        dest="environment",
        default=None,
        help="Environment tag; prefers <file>.<env> for environment resources",
    )
    parser.add_argument("--component-name", default=None, help="Override component name")
    parser.add_argument("--output", type=Path, default=None, help="Output zip path")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the resolved listing without writing the archive",
    )
    parser.add_argument("--json", action="store_true", help="Emit JSON output")
    parser.add_argument(
        "--publish-bucket",
        default=None,
        help="Upload the archive to this S3 bucket after building",
    )
    return parser.parse_args(argv)


def resolve_settings(args: argparse.Namespace) -> BuildSettings:
    return BuildSettings.from_env(args.project_dir).with_overrides(
        manifest_file=args.manifest_file,
        component_folder=args.component_folder,
        exclude_files=args.exclude_files,
        environment=args.environment,
        component_name=args.component_name,
        output_path=args.output,
    )


def _emit(result: dict[str, object], json_output: bool) -> None:
    if json_output:
        print(json.dumps(result, indent=2))
        return
    print(f"Component: {result['component']}")
    print(f"Archive:   {result['output']}")
    for archive_path in result["entries"]:  # type: ignore[attr-defined]
        print(f"  {archive_path}")
    if result.get("sha256"):
        print(f"sha256={result['sha256']}")
    if result.get("published"):
        print(f"Published: {result['published']}")


def run(args: argparse.Namespace) -> int:
    settings = resolve_settings(args)

    if args.dry_run:
        plan = plan_component(settings)
        _emit(
            {
                "component": plan.component_name,
                "output": str(plan.output_path),
                "entries": plan.listing.archive_paths(),
                "listing": plan.listing.as_dict(),
            },
            args.json,
        )
        return 0

    result = build_component(settings)
    summary: dict[str, object] = {
        "component": result.component_name,
        "output": str(result.output_path),
        "entries": list(result.report.entries),
        "sha256": result.report.sha256,
    }

    if args.publish_bucket:
        published = publish_archive(
            result.output_path,
            bucket=args.publish_bucket,
            component_name=result.component_name,
            environment=settings.environment,
        )
        summary["published"] = f"s3://{published.bucket}/{published.key}"

    _emit(summary, args.json)
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    args = parse_args(argv)
    try:
        return run(args)
    except PackagingError as exc:
        logger.error("build_component failed: %s", exc)
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
