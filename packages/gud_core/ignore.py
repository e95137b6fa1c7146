"""Ignore-pattern matching for gud.

Loads the .gudignore file from the project root and exposes a single
predicate, `is_ignored(path)`, consumed by the staging area and the
working-tree scanner.

Pattern syntax is gitignore-style (via pathspec): `#` lines and blank
lines are skipped, `*` stays within one path segment and `**` crosses
path separators.

Execution Context:
    Library module - imported by repository and worktree

Dependencies:
    - pathspec: gitignore-style pattern matching

Metadata:
    Version: 0.1.0
    Author: gud Team
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable
from typing import Iterable

import pathspec


logger = logging.getLogger(__name__)

IGNORE_FILE = ".gudignore"

IgnorePredicate = Callable[[str], bool]


def parse_ignore_lines(
        lines: Iterable[str],
) -> list[str]:
    """Strip comments and blank lines from raw ignore-file lines.

    Args:
        lines: Raw lines of an ignore file.

    Returns:
        Usable patterns in file order.
    """
    patterns = []
    for raw in lines:
        line = raw.strip()
        if line and not line.startswith("#"):
            patterns.append(line)
    return patterns


class IgnoreRules:
    """Compiled ignore patterns.

    Attributes:
        patterns: Patterns the rules were built from.
    """

    def __init__(
            self,
            patterns: Iterable[str] = (),
    ) -> None:
        self.patterns = parse_ignore_lines(patterns)
        self._spec = pathspec.GitIgnoreSpec.from_lines(self.patterns)

    @classmethod
    def from_file(
            cls,
            ignore_path: Path,
    ) -> IgnoreRules:
        """Build rules from an ignore file, empty when the file is absent."""
        if not ignore_path.is_file():
            return cls()

        lines = ignore_path.read_text(encoding="utf-8", errors="replace").splitlines()
        rules = cls(lines)
        logger.debug("Loaded %d ignore pattern(s) from %s", len(rules.patterns), ignore_path)
        return rules

    def is_ignored(
            self,
            path: str,
    ) -> bool:
        """Check whether a repository-relative path is ignored."""
        if not self.patterns:
            return False
        return self._spec.match_file(path.replace("\\", "/"))

    __call__ = is_ignored


def load_ignore_rules(
        root: Path | str,
) -> IgnoreRules:
    """Load .gudignore from a project root."""
    return IgnoreRules.from_file(Path(root) / IGNORE_FILE)
