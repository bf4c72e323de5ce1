"""
component_builder.exclusion — Name filter applied while walking directories.
"""

from __future__ import annotations

import re

from component_builder.exceptions import ConfigurationError

# Version control folders, macOS resource forks and metadata, Windows
# thumbnail caches, content server lock markers.
DEFAULT_EXCLUDE_PATTERN = r".*\.svn|.*\.git|\._.*|\.DS_Store|thumbs\.db|lockwait\.dat"


class ExclusionFilter:
    """Full-match predicate over file and directory names.

    ``readme.svn.txt`` is kept by ``\\.svn|\\.git`` because the whole name
    must match, not a substring of it.
    """

    def __init__(self, pattern: str | None = None) -> None:
        self.pattern = pattern if pattern is not None else DEFAULT_EXCLUDE_PATTERN
        try:
            self._regex = re.compile(self.pattern)
        except re.error as exc:
            raise ConfigurationError(f"Invalid exclude pattern {self.pattern!r}: {exc}") from exc

    def should_include(self, name: str) -> bool:
        return self._regex.fullmatch(name) is None

    def __call__(self, name: str) -> bool:
        return self.should_include(name)
