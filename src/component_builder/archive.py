"""
component_builder.archive — Write a listing into a component zip.

Directory sources are walked recursively; every name at every level goes
through the exclusion filter. Archive-internal paths always use "/".

Each archive name is written once. A folder walk and a file entry that reach
the same source under the same name produce one entry; different sources
under one name raise DuplicateEntryError. The output file (and any path
passed in ``skip``) is never packaged, even when a walked folder contains it.

Known limitation: symlinked directories are followed and cycles are not
detected.
"""

from __future__ import annotations

import hashlib
import os
import zipfile
from collections.abc import Iterable
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import BinaryIO

from aws_lambda_powertools import Logger

from component_builder.exceptions import DuplicateEntryError, UnreadableEntryError, WriteError
from component_builder.exclusion import ExclusionFilter
from component_builder.models import ListingEntry

logger = Logger(service="component-builder")

BUFFER_SIZE = 64 * 1024


@dataclass(frozen=True)
class ArchiveReport:
    output_path: Path
    entries: tuple[str, ...]
    sha256: str


def sha256_file(path: Path) -> str:
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(BUFFER_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def _read_chunk(handle: BinaryIO, source: Path) -> bytes:
    try:
        return handle.read(BUFFER_SIZE)
    except OSError as exc:
        raise UnreadableEntryError(f"file cannot be read: {source}", source=source) from exc


# ---------------------------------------------------------------------------
# Writer
# ---------------------------------------------------------------------------


class _ComponentZip:
    """One open output zip plus the names written into it so far."""

    def __init__(
        self, archive: zipfile.ZipFile, exclusion: ExclusionFilter, skip: frozenset[Path]
    ) -> None:
        self._archive = archive
        self._exclusion = exclusion
        self._skip = skip
        # archive name -> resolved source, in write order
        self.written: dict[str, Path] = {}

    def add_path(self, source: Path | None, archive_path: str) -> None:
        if source is None:
            raise UnreadableEntryError(
                f"No component folder configured; cannot read source for {archive_path}",
                source=None,
            )
        if not source.exists() or not os.access(source, os.R_OK):
            raise UnreadableEntryError(f"file cannot be read: {source}", source=source)

        if source.is_dir():
            self._add_folder(source, archive_path)
        else:
            self._add_file(source, archive_path)

    def _add_folder(self, folder: Path, archive_path: str) -> None:
        archive_path = archive_path.rstrip("/\\")
        try:
            children = sorted(folder.iterdir(), key=lambda child: child.name)
        except OSError as exc:
            raise UnreadableEntryError(f"folder cannot be read: {folder}", source=folder) from exc

        for child in children:
            if not self._exclusion.should_include(child.name):
                continue
            if child.resolve() in self._skip:
                logger.debug("Skipping build output", path=str(child))
                continue
            self.add_path(child, f"{archive_path}/{child.name}")

    def _add_file(self, source: Path, archive_path: str) -> None:
        try:
            info = zipfile.ZipInfo.from_file(source, arcname=archive_path, strict_timestamps=False)
        except OSError as exc:
            raise UnreadableEntryError(f"file cannot be read: {source}", source=source) from exc

        resolved = source.resolve()
        existing = self.written.get(info.filename)
        if existing == resolved:
            logger.debug("Archive entry already written", entry=info.filename)
            return
        if existing is not None:
            raise DuplicateEntryError(
                archive_path=info.filename, existing=existing, incoming=resolved
            )

        try:
            handle = source.open("rb")
        except OSError as exc:
            raise UnreadableEntryError(f"file cannot be read: {source}", source=source) from exc

        info.compress_type = zipfile.ZIP_DEFLATED
        with handle:
            try:
                with self._archive.open(info, mode="w") as target:
                    for chunk in iter(partial(_read_chunk, handle, source), b""):
                        target.write(chunk)
            except (OSError, ValueError, zipfile.LargeZipFile) as exc:
                raise WriteError(f"error writing to zip: {source}") from exc

        self.written[info.filename] = resolved
        logger.info("Added archive entry", entry=info.filename)


def write_archive(
    listing: Iterable[ListingEntry],
    output_path: Path | str,
    exclusion: ExclusionFilter | None = None,
    skip: Iterable[Path] = (),
) -> ArchiveReport:
    """Write every listing entry into a fresh zip at output_path.

    An existing file at output_path is truncated. Entries are processed in
    listing order and the first failure aborts the write; the zip is still
    closed, and the partial file on disk must be treated as invalid.

    Folder walks never descend into output_path or any path in skip.

    Raises:
        UnreadableEntryError: a source is unresolved, missing or unreadable.
        DuplicateEntryError:  two different sources produce one entry name.
        WriteError:           the zip cannot be opened, written or finalized.
    """
    exclusion = exclusion or ExclusionFilter()
    output = Path(output_path)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        archive = zipfile.ZipFile(output, mode="w", compression=zipfile.ZIP_DEFLATED)
    except OSError as exc:
        raise WriteError(f"Unable to open zip file for output: {output}") from exc

    logger.info("Saving component archive", output=str(output))
    writer = _ComponentZip(
        archive, exclusion, frozenset(Path(path).resolve() for path in (output, *skip))
    )
    try:
        for entry in listing:
            writer.add_path(entry.source, entry.archive_path)
    except Exception:
        # The write failure is the error reported; a close failure is only logged.
        try:
            archive.close()
        except (OSError, ValueError) as close_exc:
            logger.warning("Unable to close zip file", output=str(output), error=str(close_exc))
        raise

    try:
        archive.close()
    except (OSError, ValueError) as exc:
        raise WriteError(f"Unable to close zip file: {output}") from exc

    return ArchiveReport(
        output_path=output, entries=tuple(writer.written), sha256=sha256_file(output)
    )


def read_entry_names(path: Path | str) -> list[str]:
    """Return the file entry names stored in the zip at path."""
    target = Path(path)
    try:
        with zipfile.ZipFile(target, mode="r") as archive:
            return [name for name in archive.namelist() if not name.endswith("/")]
    except (OSError, zipfile.BadZipFile) as exc:
        raise UnreadableEntryError(f"Not a readable zip archive: {target}", source=target) from exc
