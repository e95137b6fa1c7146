"""Working-tree scanner for gud.

Execution Context:
    Library module - imported by diff/status

Metadata:
    Version: 0.1.0
    Author: gud Team
"""
from __future__ import annotations

import logging
import os
from pathlib import Path

from gud_core.ignore import IgnorePredicate
from gud_core.repository import DEFAULT_REMOTE_DIR
from gud_core.repository import GUD_DIR
from gud_core.repository import Repository


logger = logging.getLogger(__name__)

# Directories never scanned: the state directory and the default in-tree remote
EXCLUDED_DIRS = frozenset({GUD_DIR, DEFAULT_REMOTE_DIR})


def scan_working_tree(
        root: Path | str,
        is_ignored: IgnorePredicate,
) -> dict[str, str]:
    """Read every tracked-candidate file under a project root.

    Args:
        root: Project root.
        is_ignored: Predicate on repository-relative POSIX paths.

    Returns:
        Mapping of repository-relative POSIX path to file content.
    """
    root = Path(root)
    files: dict[str, str] = {}

    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        if current == root:
            dirnames[:] = [d for d in dirnames if d not in EXCLUDED_DIRS]
        dirnames.sort()

        for name in sorted(filenames):
            file_path = current / name
            rel_path = file_path.relative_to(root).as_posix()
            if not file_path.is_file() or is_ignored(rel_path):
                continue
            files[rel_path] = file_path.read_bytes().decode("utf-8", errors="replace")

    logger.debug("Scanned %d working-tree file(s) under %s", len(files), root)
    return files


def working_files(
        repo: Repository,
) -> dict[str, str]:
    """Scan a repository's working tree with its own ignore rules."""
    return scan_working_tree(repo.root, repo.is_ignored)
