"""Branch merge and rebase for gud.

A merge writes the target branch's head snapshot over the working tree,
checks out the base branch and then runs the ordinary commit path. It
stages nothing itself, so the merge commit is only created when the
staging area already holds something. Rebase is a merge followed by
checking the target branch back out; commits are not replayed.

Execution Context:
    Library module - imported by CLI merge and rebase commands

Dependencies:
    - gud_core.repository: Repository state

Metadata:
    Version: 0.1.0
    Author: gud Team
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field

from gud_core.errors import NoCommitsError
from gud_core.errors import NothingToCommitError
from gud_core.models import Commit
from gud_core.repository import Repository


logger = logging.getLogger(__name__)


# ---- Data Classes -------------------------------------------------------------------------------------------


@dataclass
class MergeResult:
    """Result of a merge or rebase.

    Attributes:
        base: Branch merged into.
        target: Branch merged from.
        source_commit: Head commit of the target branch.
        written_files: Paths overwritten in the working tree.
        commit: Merge commit, None when there was nothing to commit.
        current_branch: Branch checked out when the operation finished.
    """

    base: str
    target: str
    source_commit: Commit
    written_files: list[str] = field(default_factory=list)
    commit: Commit | None = None
    current_branch: str = ""

    @property
    def committed(
            self,
    ) -> bool:
        """Whether a merge commit was recorded."""
        return self.commit is not None


# ---- Merge Functions ----------------------------------------------------------------------------------------


def merge_message(
        base: str,
        target: str,
) -> str:
    """Commit message used for a merge."""
    return f"Merge branch '{target}' into '{base}'"


def merge_branches(
        repo: Repository,
        base: str,
        target: str,
) -> MergeResult:
    """Merge `target` into `base`.

    Args:
        repo: Repository to operate on.
        base: Branch that receives the merge.
        target: Branch whose head snapshot is applied.

    Returns:
        MergeResult describing what happened.

    Raises:
        NoCommitsError: If `target` has no head commit.
        IOFailureError: If a working-tree file cannot be written. Files
            written before the failure stay changed and HEAD is not moved.
    """
    source = repo.branch_tip(target)
    if source is None:
        msg = f"No commits found on target branch: {target}"
        raise NoCommitsError(msg)

    # Last write wins, no comparison with the working tree
    written = repo.write_snapshot(source.files)

    repo.switch_branch(base)

    result = MergeResult(
        base=base,
        target=target,
        source_commit=source,
        written_files=written,
    )
    try:
        result.commit = repo.create_commit(merge_message(base, target))
    except NothingToCommitError:
        logger.debug("Merge of %s into %s produced no commit: staging area empty", target, base)

    result.current_branch = repo.get_current_branch()
    return result


def rebase_branches(
        repo: Repository,
        base: str,
        target: str,
) -> MergeResult:
    """Merge `target` into `base`, then check `target` out again.

    HEAD is moved to `target` even when the merge fails; the merge
    error is raised after the switch.
    """
    try:
        result = merge_branches(repo, base, target)
    finally:
        repo.switch_branch(target)
    result.current_branch = target
    return result
