"""
component_builder.hda — Minimal reader for HDA binder documents.

HDA is the section-based key/value format used for component manifests:

    <?hda version="11.1.1.8.0" jcharset=UTF8 encoding=utf-8?>
    @Properties LocalData
    blDateFormat=M/d/yy
    @end
    @ResultSet Manifest
    2
    entryType
    location
    component
    MyComponent/MyComponent.hda
    @end

A result set block declares its field count, one field definition per line
(only the first token is the field name; type and length suffixes are
ignored), then every value on its own line until ``@end``.

Read-only: nothing here serializes binders back to text.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from component_builder.exceptions import NotFoundError, ParseError

ENCODING = "utf-8"

_HEADER_PREFIX = "<?hda"
_END = "@end"
_PROPERTIES = "@Properties"
_RESULT_SET = "@ResultSet"


@dataclass(frozen=True)
class ResultSet:
    name: str
    fields: tuple[str, ...]
    rows: tuple[dict[str, str], ...] = ()


@dataclass
class DataBinder:
    """Parsed HDA document: local properties plus named result sets."""

    local_data: dict[str, str] = field(default_factory=dict)
    result_sets: dict[str, ResultSet] = field(default_factory=dict)

    def result_set(self, name: str) -> ResultSet | None:
        return self.result_sets.get(name)


class _Lines:
    """Line cursor that remembers line numbers for error messages."""

    def __init__(self, text: str) -> None:
        self._lines = text.splitlines()
        self._pos = 0

    @property
    def lineno(self) -> int:
        return self._pos

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        if self._pos >= len(self._lines):
            raise StopIteration
        line = self._lines[self._pos]
        self._pos += 1
        return line

    def take(self, what: str) -> str:
        try:
            return next(self)
        except StopIteration:
            raise ParseError(f"Unexpected end of document while reading {what}") from None


def _read_block(lines: _Lines, what: str) -> list[str]:
    body: list[str] = []
    while True:
        line = lines.take(what)
        if line.strip() == _END:
            return body
        body.append(line)


def _parse_properties(lines: _Lines, binder: DataBinder) -> None:
    for line in _read_block(lines, "properties"):
        if not line.strip():
            continue
        key, sep, value = line.partition("=")
        if not sep:
            raise ParseError(f"Line {lines.lineno}: expected key=value, got {line!r}")
        binder.local_data[key.strip()] = value


def _parse_result_set(name: str, lines: _Lines) -> ResultSet:
    if not name:
        raise ParseError(f"Line {lines.lineno}: result set without a name")

    count_line = lines.take(f"field count of {name}").strip()
    try:
        field_count = int(count_line)
    except ValueError:
        raise ParseError(
            f"Line {lines.lineno}: field count of {name} is not a number: {count_line!r}"
        ) from None
    if field_count < 0:
        raise ParseError(f"Line {lines.lineno}: negative field count for {name}")

    fields: list[str] = []
    for _ in range(field_count):
        definition = lines.take(f"field definitions of {name}").split()
        if not definition or definition[0] == _END:
            raise ParseError(f"Line {lines.lineno}: missing field definition in {name}")
        fields.append(definition[0])

    values = _read_block(lines, f"rows of {name}")
    if field_count == 0:
        if values:
            raise ParseError(f"Result set {name} has values but no fields")
        return ResultSet(name=name, fields=())
    if len(values) % field_count:
        raise ParseError(
            f"Result set {name} has {len(values)} values, not a multiple of {field_count} fields"
        )

    rows = tuple(
        dict(zip(fields, values[start : start + field_count], strict=True))
        for start in range(0, len(values), field_count)
    )
    return ResultSet(name=name, fields=tuple(fields), rows=rows)


def parse_binder(text: str) -> DataBinder:
    """Parse HDA text into a DataBinder. Raises ParseError on malformed input."""
    binder = DataBinder()
    lines = _Lines(text.lstrip("\ufeff"))
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith(_HEADER_PREFIX) or line.startswith("#"):
            continue
        if line.startswith(_PROPERTIES):
            _parse_properties(lines, binder)
        elif line.startswith(_RESULT_SET):
            name = line[len(_RESULT_SET) :].strip()
            result_set = _parse_result_set(name, lines)
            binder.result_sets[result_set.name] = result_set
        elif line.startswith("@"):
            # Other block kinds (option lists and the like) are skipped whole.
            _read_block(lines, line.split()[0])
        else:
            raise ParseError(f"Line {lines.lineno}: unexpected content {line!r}")
    return binder


def load_binder(path: Path | None) -> DataBinder:
    """Read and parse the HDA document at path."""
    if path is None or not Path(path).is_file():
        raise NotFoundError(f"File {path} does not exist", path=path)
    try:
        text = Path(path).read_text(encoding=ENCODING)
    except UnicodeDecodeError as exc:
        raise ParseError(f"Error opening {path}: not valid {ENCODING}", path=path) from exc
    except OSError as exc:
        raise NotFoundError(f"File {path} cannot be read", path=path) from exc
    try:
        return parse_binder(text)
    except ParseError as exc:
        raise ParseError(f"Error parsing {path}: {exc}", path=path) from exc
