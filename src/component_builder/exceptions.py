"""
component_builder.exceptions — Build failure taxonomy.

Every failure surfaced to the CLI derives from PackagingError so the glue
layer can catch one type and still print a precise message. Original causes
are chained with ``raise ... from exc``.
"""

from __future__ import annotations

from pathlib import Path


class PackagingError(RuntimeError):
    """Base class for component build errors."""


class ConfigurationError(PackagingError):
    """Raised when required configuration is missing or invalid."""


class ManifestError(PackagingError):
    """Base class for manifest loading errors.

    Attributes:
        path: The manifest file that could not be used.
    """

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        self.path = path
        super().__init__(message)


class NotFoundError(ManifestError):
    """Raised when a manifest file does not exist or cannot be read."""


class ParseError(ManifestError):
    """Raised when a manifest document is malformed."""


class MissingSectionError(ManifestError):
    """Raised when a manifest does not contain the requested result set."""

    def __init__(self, *, path: Path | str, section: str) -> None:
        self.section = section
        super().__init__(f"Resultset {section} doesn't exist in file {path}", path=path)


class DuplicateEntryError(PackagingError):
    """Raised when two different sources map to the same archive path."""

    def __init__(self, *, archive_path: str, existing: Path | None, incoming: Path | None) -> None:
        self.archive_path = archive_path
        self.existing = existing
        self.incoming = incoming
        super().__init__(
            f"Archive path {archive_path!r} claimed by both {existing} and {incoming}"
        )


class UnreadableEntryError(PackagingError):
    """Raised when a listed source path cannot be read at write time."""

    def __init__(self, message: str, *, source: Path | None) -> None:
        self.source = source
        super().__init__(message)


class WriteError(PackagingError):
    """Raised when the archive cannot accept an entry or cannot be finalized."""


class PublishError(PackagingError):
    """Raised when the finished archive cannot be uploaded."""
