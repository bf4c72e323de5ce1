"""
component_builder.paths — Resolve manifest entries to filesystem paths.

An unset base folder resolves to None instead of a path. The archive writer
decides whether that is fatal when it tries to read the entry.
"""

from __future__ import annotations

from pathlib import Path

from aws_lambda_powertools import Logger

logger = Logger(service="component-builder")

_SEPARATORS = ("/", "\\")


def _is_unset(base_folder: str | Path | None) -> bool:
    return base_folder is None or base_folder == ""


def _native(relative_path: str) -> str:
    return relative_path.replace("\\", "/")


def strip_component_prefix(path: str, component_name: str | None) -> str:
    """Drop one leading ``<component_name>/`` (or ``\\``) from path."""
    if not component_name:
        return path
    for sep in _SEPARATORS:
        prefix = f"{component_name}{sep}"
        if path.startswith(prefix):
            return path[len(prefix) :]
    return path


def resolve_entry_path(base_folder: str | Path | None, relative_path: str) -> Path | None:
    """Join base_folder and relative_path; None when no base folder is configured."""
    if _is_unset(base_folder):
        return None
    return Path(base_folder) / _native(relative_path)


def resolve_environment_path(
    base_folder: str | Path | None, filename: str, environment: str | None
) -> Path | None:
    """Prefer ``<filename>.<environment>`` when it exists, else ``<filename>``.

    A missing variant is not an error: it is logged as a warning and the
    default file is used.
    """
    default = resolve_entry_path(base_folder, filename)
    if default is None:
        return None
    if environment:
        variant = default.with_name(f"{default.name}.{environment}")
        if variant.exists():
            logger.info("Using environment file", path=str(variant), environment=environment)
            return variant
        logger.warning("Environment file not found", path=str(variant), environment=environment)
    logger.info("Using default file", path=str(default))
    return default


def resolve_template_folder(base_folder: str | Path | None, filename: str) -> Path | None:
    """Template resources are packaged by folder: return the file's parent directory."""
    path = resolve_entry_path(base_folder, filename)
    return None if path is None else path.parent
