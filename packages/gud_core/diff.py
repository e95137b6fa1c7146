"""Snapshot diffing and working-tree status.

Compares the working tree, the staging area and the latest commit to
classify files. "Latest commit" is always the record with the newest
timestamp in the whole store, whichever branch it was made on.

Execution Context:
    Library module - imported by CLI diff and status commands

Dependencies:
    - deepdiff: Snapshot comparison

Metadata:
    Version: 0.1.0
    Author: gud Team
"""
from __future__ import annotations

import difflib
from dataclasses import dataclass
from dataclasses import field

from deepdiff import DeepDiff

from gud_core.repository import Repository
from gud_core.worktree import working_files


# ---- Data Classes -------------------------------------------------------------------------------------------


@dataclass
class FileChange:
    """Represents a change to a single file.

    Attributes:
        path: Repository-relative path.
        change_type: 'added', 'removed' or 'modified'.
    """

    path: str
    change_type: str  # 'added', 'removed', 'modified'

    @property
    def marker(
            self,
    ) -> str:
        """Single-character marker used in diff output."""
        return CHANGE_MARKERS[self.change_type]


CHANGE_MARKERS = {
    "added": "+",
    "modified": "~",
    "removed": "-",
}


@dataclass
class SnapshotDiff:
    """Represents differences between two snapshots.

    Attributes:
        changes: File-level changes, sorted by path.
        current: Newer snapshot compared.
        previous: Older snapshot compared.
    """

    changes: list[FileChange] = field(default_factory=list)
    current: dict[str, str] = field(default_factory=dict)
    previous: dict[str, str] = field(default_factory=dict)

    @property
    def has_changes(
            self,
    ) -> bool:
        """Check if any changes exist."""
        return bool(self.changes)

    @property
    def added(
            self,
    ) -> list[FileChange]:
        """Get added files."""
        return [c for c in self.changes if c.change_type == "added"]

    @property
    def modified(
            self,
    ) -> list[FileChange]:
        """Get modified files."""
        return [c for c in self.changes if c.change_type == "modified"]

    @property
    def removed(
            self,
    ) -> list[FileChange]:
        """Get removed files."""
        return [c for c in self.changes if c.change_type == "removed"]


@dataclass
class WorkingStatus:
    """Classification of working-tree files.

    Attributes:
        modified: Paths changed since the latest commit and not staged as-is.
        staged: Every path in the staging area.
        untracked: Paths in neither the latest commit nor the staging area.
        last_commit_id: ID of the commit compared against, if any.
    """

    modified: list[str] = field(default_factory=list)
    staged: list[str] = field(default_factory=list)
    untracked: list[str] = field(default_factory=list)
    last_commit_id: str | None = None


# ---- Diff Functions -----------------------------------------------------------------------------------------


_TREE_KEYS = {
    "dictionary_item_added": "added",
    "values_changed": "modified",
    "type_changes": "modified",
    "dictionary_item_removed": "removed",
}


def diff_snapshots(
        current: dict[str, str],
        previous: dict[str, str],
) -> SnapshotDiff:
    """Compare two path-to-content snapshots.

    Args:
        current: Newer snapshot (typically the working tree).
        previous: Older snapshot (typically the latest commit).

    Returns:
        SnapshotDiff listing added, modified and removed paths.
    """
    result = SnapshotDiff(current=current, previous=previous)
    tree = DeepDiff(previous, current, view="tree")

    for key, change_type in _TREE_KEYS.items():
        for level in tree.get(key, []):
            path = level.path(output_format="list")[0]
            result.changes.append(FileChange(path=str(path), change_type=change_type))

    result.changes.sort(key=lambda c: c.path)
    return result


def diff_working_tree(
        repo: Repository,
) -> SnapshotDiff:
    """Compare the working tree against the latest commit.

    The staging area is not consulted.
    """
    last = repo.latest_commit()
    return diff_snapshots(working_files(repo), last.files if last else {})


def get_status(
        repo: Repository,
) -> WorkingStatus:
    """Classify working-tree files against the latest commit and staging area."""
    working = working_files(repo)
    staged = repo.get_staging()
    last = repo.latest_commit()
    last_files = last.files if last else {}

    status = WorkingStatus(
        staged=sorted(staged),
        last_commit_id=last.id if last else None,
    )
    for path, content in sorted(working.items()):
        if path in last_files:
            if content != last_files[path] and staged.get(path) != content:
                status.modified.append(path)
        elif path not in staged:
            status.untracked.append(path)
    return status


# ---- Formatting Functions -----------------------------------------------------------------------------------


def format_diff_lines(
        snapshot_diff: SnapshotDiff,
) -> list[str]:
    """Render each change as `<marker> <path>`, added and modified first."""
    ordered = snapshot_diff.added + snapshot_diff.modified + snapshot_diff.removed
    return [f"{change.marker} {change.path}" for change in ordered]


def unified_file_diff(
        path: str,
        old: str,
        new: str,
) -> str:
    """Line-level unified diff for one file."""
    lines = difflib.unified_diff(
        old.splitlines(keepends=True),
        new.splitlines(keepends=True),
        fromfile=f"a/{path}",
        tofile=f"b/{path}",
    )
    return "".join(lines)
