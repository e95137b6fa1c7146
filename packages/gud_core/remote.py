"""Remote operations module for gud.

A remote is a second filesystem location holding its own commit-record
directory. Push copies every local record there, always overwriting.
Pull copies remote records that do not exist locally by ID and never
touches existing local records. Clone copies a remote repository's
whole .gud directory into a new location.

Execution Context:
    Library module - imported by CLI push/pull/clone commands

Dependencies:
    - shutil: File and tree copies
    - gud_core.repository: Repository state

Metadata:
    Version: 0.1.0
    Author: gud Team
"""
from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

from gud_core.errors import IOFailureError
from gud_core.errors import NotFoundError
from gud_core.models import Commit
from gud_core.repository import COMMITS_DIR
from gud_core.repository import DEFAULT_REMOTE_DIR
from gud_core.repository import GUD_DIR
from gud_core.repository import Repository


logger = logging.getLogger(__name__)


# ---- Constants ----------------------------------------------------------------------------------------------


REMOTE_ENV_VAR = "GUD_REMOTE"


# ---- Data Classes -------------------------------------------------------------------------------------------


@dataclass
class SyncResult:
    """Outcome of a push or pull.

    Attributes:
        copied: Record file names copied.
        skipped: Record file names left alone because they already existed.
        failed: Record file names that could not be copied, with the error.
    """

    copied: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[tuple[str, str]] = field(default_factory=list)


# ---- Module Functions ---------------------------------------------------------------------------------------


def resolve_remote_path(
        repo: Repository,
        remote: Path | str | None = None,
) -> Path:
    """Work out where the remote lives.

    Order: explicit argument, the repository's remote_url file, the
    GUD_REMOTE environment variable, then `<root>/.gud_remote`.
    Relative locations are taken from the repository root.
    """
    location = remote or repo.get_remote_url() or os.getenv(REMOTE_ENV_VAR)
    if not location:
        return repo.root / DEFAULT_REMOTE_DIR

    path = Path(location).expanduser()
    if not path.is_absolute():
        path = repo.root / path
    return path


def remote_commits_dir(
        remote_path: Path,
) -> Path:
    """Commit directory of a remote.

    A remote that is itself a repository keeps records under
    `.gud/commits`; a bare mirror keeps them under `commits`.
    """
    if (remote_path / GUD_DIR).is_dir():
        return remote_path / GUD_DIR / COMMITS_DIR
    return remote_path / COMMITS_DIR


def _record_files(
        directory: Path,
) -> list[Path]:
    return sorted(p for p in directory.iterdir() if p.is_file())


def clone_repository(
        remote_path: Path | str,
        target_dir: Path | str,
) -> Repository:
    """Copy a remote repository's .gud directory into `target_dir`.

    Args:
        remote_path: Directory containing the remote's .gud folder.
        target_dir: Directory to create and copy into.

    Returns:
        Repository rooted at `target_dir`.

    Raises:
        NotFoundError: If the remote has no .gud directory.
        IOFailureError: If the copy fails.
    """
    source = Path(remote_path) / GUD_DIR
    if not source.is_dir():
        msg = f"No gud repository found at {remote_path}"
        raise NotFoundError(msg)

    target = Path(target_dir)
    try:
        target.mkdir(parents=True, exist_ok=True)
        shutil.copytree(source, target / GUD_DIR, dirs_exist_ok=True)
    except (OSError, shutil.Error) as copy_error:
        msg = f"Error copying repository: {copy_error}"
        raise IOFailureError(msg, target) from copy_error

    logger.debug("Cloned %s into %s", source, target)
    return Repository(target)


# ---- Remote Operations Class --------------------------------------------------------------------------------


class RemoteOperations:
    """Handles push, pull and preview against a filesystem remote.

    Attributes:
        repo: Local Repository instance.
        remote_path: Resolved remote location.
    """

    def __init__(
            self,
            repo: Repository,
            remote: Path | str | None = None,
    ) -> None:
        """Initialize remote operations.

        Args:
            repo: Local repository.
            remote: Remote location override.
        """
        self.repo = repo
        self.remote_path = resolve_remote_path(repo, remote)

    @property
    def commits_dir(
            self,
    ) -> Path:
        """Remote commit directory."""
        return remote_commits_dir(self.remote_path)

    # ---- Push Operations ------------------------------------------------------------------------------------

    def push(
            self,
    ) -> SyncResult:
        """Copy every local commit record to the remote, overwriting.

        Raises:
            IOFailureError: If the remote or local commit directory
                cannot be prepared or listed.
        """
        result = SyncResult()
        destination = self.commits_dir
        try:
            destination.mkdir(parents=True, exist_ok=True)
            sources = _record_files(self.repo.commits_dir)
        except OSError as dir_error:
            msg = f"Failed to prepare remote commits directory: {dir_error}"
            raise IOFailureError(msg, destination) from dir_error

        for src in sources:
            try:
                shutil.copyfile(src, destination / src.name)
            except OSError as copy_error:
                logger.warning("Error writing remote commit file %s: %s", src.name, copy_error)
                result.failed.append((src.name, str(copy_error)))
                continue
            result.copied.append(src.name)

        logger.debug("Pushed %d record(s) to %s", len(result.copied), destination)
        return result

    # ---- Pull Operations ------------------------------------------------------------------------------------

    def pull(
            self,
    ) -> SyncResult:
        """Copy remote commit records that are missing locally.

        A local record with the same ID is never overwritten, whatever
        the remote copy contains.

        Raises:
            NotFoundError: If the remote has no commit directory.
            IOFailureError: If the local commit directory cannot be prepared.
        """
        result = SyncResult()
        source_dir = self.commits_dir
        if not source_dir.is_dir():
            msg = f"Error reading remote commits directory: {source_dir}"
            raise NotFoundError(msg)

        try:
            self.repo.commits_dir.mkdir(parents=True, exist_ok=True)
            sources = _record_files(source_dir)
        except OSError as dir_error:
            msg = f"Failed to prepare local commits directory: {dir_error}"
            raise IOFailureError(msg, self.repo.commits_dir) from dir_error

        for src in sources:
            dst = self.repo.commits_dir / src.name
            if dst.exists():
                logger.debug("Commit %s already exists locally, skipping", src.name)
                result.skipped.append(src.name)
                continue
            try:
                shutil.copyfile(src, dst)
            except OSError as copy_error:
                logger.warning("Error writing local commit file %s: %s", src.name, copy_error)
                result.failed.append((src.name, str(copy_error)))
                continue
            result.copied.append(src.name)

        logger.debug("Pulled %d record(s) from %s", len(result.copied), source_dir)
        return result

    # ---- Preview --------------------------------------------------------------------------------------------

    def list_remote_commits(
            self,
    ) -> list[Commit]:
        """Load remote commit records, oldest first. Unreadable ones are skipped."""
        source_dir = self.commits_dir
        if not source_dir.is_dir():
            return []

        commits = []
        for path in _record_files(source_dir):
            try:
                commits.append(Commit.load(path))
            except IOFailureError as load_error:
                logger.warning("Skipping unreadable remote record: %s", load_error)
        return sorted(commits, key=lambda c: c.timestamp)

    def preview(
            self,
    ) -> list[Commit]:
        """Remote commits newer than the current branch's head.

        Every remote commit is listed when the branch has no head.
        """
        tip = self.repo.branch_tip(self.repo.get_current_branch())
        remote_commits = self.list_remote_commits()
        if tip is None:
            return remote_commits
        return [c for c in remote_commits if c.timestamp > tip.timestamp]
