"""Local repository management for gud.

Handles creation, validation and manipulation of the .gud directory:
the commit store, the branch and tag registries, the HEAD pointer, the
staging area and the append-only history log.

A Repository is the explicit context value every operation runs
against. Nothing is cached between calls; each method reads the state
files it needs and writes back what it changes.

Execution Context:
    Library module - imported by CLI commands and the other gud_core modules

Dependencies:
    - gud_core.models: Data models
    - gud_core.ignore: Ignore predicate

Metadata:
    Version: 0.1.0
    Author: gud Team
"""
from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import Any
from typing import Iterable

from gud_core.errors import AlreadyExistsError
from gud_core.errors import CannotDeleteCurrentError
from gud_core.errors import IOFailureError
from gud_core.errors import NoLinesSelectedError
from gud_core.errors import NotFoundError
from gud_core.errors import NothingToCommitError
from gud_core.errors import NotStagedError
from gud_core.ignore import IgnorePredicate
from gud_core.ignore import load_ignore_rules
from gud_core.models import Branch
from gud_core.models import Commit
from gud_core.models import LogEntry
from gud_core.models import RepoConfig
from gud_core.models import Tag
from gud_core.models import now_timestamp


logger = logging.getLogger(__name__)


# ---- Constants ----------------------------------------------------------------------------------------------


GUD_DIR = ".gud"
COMMITS_DIR = "commits"
BRANCHES_DIR = "branches"
BRANCHES_FILE = "branches.json"
HEAD_FILE = "HEAD"
STAGING_FILE = "staging_area"
TAGS_FILE = "tags"
LOG_FILE = "logs"
REMOTE_URL_FILE = "remote_url"
CONFIG_FILE = "config.json"
DEFAULT_BRANCH = "main"
DEFAULT_REMOTE_DIR = ".gud_remote"
COMMIT_ID_LENGTH = 16


# ---- Repository Class ---------------------------------------------------------------------------------------


class Repository:
    """Manages a local gud repository.

    Attributes:
        root: Project root containing the .gud folder.
        gud_dir: Path to the .gud directory.
    """

    def __init__(
            self,
            root: Path | str,
            is_ignored: IgnorePredicate | None = None,
    ) -> None:
        """Initialize repository at given root path.

        Args:
            root: Directory containing or to contain the .gud folder.
            is_ignored: Ignore predicate. Defaults to the rules in the
                root's .gudignore, loaded on first use.
        """
        self.root = Path(root).resolve()
        self.gud_dir = self.root / GUD_DIR
        self._is_ignored = is_ignored

    # ---- Path Properties ------------------------------------------------------------------------------------

    @property
    def commits_dir(
            self,
    ) -> Path:
        """Path to commits directory."""
        return self.gud_dir / COMMITS_DIR

    @property
    def branches_dir(
            self,
    ) -> Path:
        """Path to branches directory."""
        return self.gud_dir / BRANCHES_DIR

    @property
    def branches_path(
            self,
    ) -> Path:
        """Path to branches/branches.json."""
        return self.branches_dir / BRANCHES_FILE

    @property
    def head_path(
            self,
    ) -> Path:
        """Path to HEAD file."""
        return self.gud_dir / HEAD_FILE

    @property
    def staging_path(
            self,
    ) -> Path:
        """Path to the staging area file."""
        return self.gud_dir / STAGING_FILE

    @property
    def tags_path(
            self,
    ) -> Path:
        """Path to tags file."""
        return self.gud_dir / TAGS_FILE

    @property
    def log_path(
            self,
    ) -> Path:
        """Path to the history log."""
        return self.gud_dir / LOG_FILE

    @property
    def remote_url_path(
            self,
    ) -> Path:
        """Path to remote_url file."""
        return self.gud_dir / REMOTE_URL_FILE

    @property
    def config_path(
            self,
    ) -> Path:
        """Path to config.json."""
        return self.gud_dir / CONFIG_FILE

    @property
    def is_ignored(
            self,
    ) -> IgnorePredicate:
        """Ignore predicate for repository-relative paths."""
        if self._is_ignored is None:
            self._is_ignored = load_ignore_rules(self.root)
        return self._is_ignored

    # ---- Repository State -----------------------------------------------------------------------------------

    def exists(
            self,
    ) -> bool:
        """Check if the .gud directory exists."""
        return self.gud_dir.is_dir()

    # ---- Initialization -------------------------------------------------------------------------------------

    def init(
            self,
    ) -> None:
        """Initialize a new repository.

        Creates the .gud directory with an empty staging area, empty tag
        map, empty log and a `main` branch without commits.

        Raises:
            AlreadyExistsError: If a repository already exists here.
            IOFailureError: If the structure cannot be written.
        """
        if self.exists():
            msg = f"gud repository already exists at {self.gud_dir}"
            raise AlreadyExistsError(msg)

        try:
            self.commits_dir.mkdir(parents=True)
            self.branches_dir.mkdir(parents=True)
            self.head_path.write_text(DEFAULT_BRANCH, encoding="utf-8")
            self.log_path.write_text("", encoding="utf-8")
        except OSError as init_error:
            msg = f"Failed to initialize repository: {init_error}"
            raise IOFailureError(msg, self.gud_dir) from init_error

        self._write_json(self.staging_path, {})
        self._write_json(self.tags_path, {})
        self._write_branches({DEFAULT_BRANCH: ""})
        logger.debug("Initialized repository at %s", self.gud_dir)

    # ---- JSON Helpers ---------------------------------------------------------------------------------------

    @staticmethod
    def _read_json_map(
            path: Path,
    ) -> dict[str, str]:
        """Read a JSON string map, empty when missing or unreadable."""
        if not path.exists():
            return {}

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Could not read %s, treating it as empty", path)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): "" if v is None else str(v) for k, v in data.items()}

    @staticmethod
    def _write_json(
            path: Path,
            data: dict[str, Any],
    ) -> None:
        """Write a JSON map, creating the parent directory if needed."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as write_error:
            msg = f"Error writing {path}: {write_error}"
            raise IOFailureError(msg, path) from write_error

    # ---- HEAD Operations ------------------------------------------------------------------------------------

    def get_current_branch(
            self,
    ) -> str:
        """Get name of the checked-out branch (`main` when HEAD is missing)."""
        if not self.head_path.exists():
            return DEFAULT_BRANCH
        try:
            name = self.head_path.read_text(encoding="utf-8").strip()
        except (OSError, ValueError) as read_error:
            msg = f"Error reading HEAD: {read_error}"
            raise IOFailureError(msg, self.head_path) from read_error
        return name or DEFAULT_BRANCH

    def switch_branch(
            self,
            name: str,
    ) -> None:
        """Point HEAD at a branch.

        The branch is not required to exist. A commit made while HEAD
        names an unknown branch registers it.

        Args:
            name: Branch name to check out.
        """
        try:
            self.head_path.write_text(name, encoding="utf-8")
        except OSError as write_error:
            msg = f"Error writing HEAD: {write_error}"
            raise IOFailureError(msg, self.head_path) from write_error
        logger.debug("HEAD now points at %s", name)

    def get_head_commit(
            self,
    ) -> str | None:
        """Get the head commit ID of the current branch."""
        return self.get_branch_commit(self.get_current_branch())

    # ---- Branch Operations ----------------------------------------------------------------------------------

    def _read_branches(
            self,
    ) -> dict[str, str]:
        return self._read_json_map(self.branches_path)

    def _write_branches(
            self,
            branches: dict[str, str],
    ) -> None:
        self._write_json(self.branches_path, branches)

    def list_branches(
            self,
    ) -> list[Branch]:
        """List all branches, marking the checked-out one.

        Returns:
            Branches sorted by name.
        """
        current = self.get_current_branch()
        return [
            Branch(name=name, commit_id=head or None, current=name == current)
            for name, head in sorted(self._read_branches().items())
        ]

    def get_branch_commit(
            self,
            branch: str,
    ) -> str | None:
        """Get head commit ID for a branch.

        Returns:
            Commit ID, or None if the branch is unknown or has no commits.
        """
        return self._read_branches().get(branch) or None

    def create_branch(
            self,
            name: str,
    ) -> Branch:
        """Create a branch at the current branch's head.

        Raises:
            AlreadyExistsError: If the branch already exists.
        """
        branches = self._read_branches()
        if name in branches:
            msg = f"Branch already exists: {name}"
            raise AlreadyExistsError(msg)

        head = branches.get(self.get_current_branch(), "")
        branches[name] = head
        self._write_branches(branches)
        return Branch(name=name, commit_id=head or None)

    def delete_branch(
            self,
            name: str,
    ) -> None:
        """Delete a branch.

        Raises:
            NotFoundError: If the branch does not exist.
            CannotDeleteCurrentError: If the branch is checked out.
        """
        branches = self._read_branches()
        if name not in branches:
            msg = f"Branch not found: {name}"
            raise NotFoundError(msg)
        if name == self.get_current_branch():
            msg = f"Cannot delete current branch: {name}"
            raise CannotDeleteCurrentError(msg)

        del branches[name]
        self._write_branches(branches)

    def update_branch(
            self,
            name: str,
            commit_id: str,
    ) -> None:
        """Set a branch head, registering the branch if needed."""
        branches = self._read_branches()
        branches[name] = commit_id
        self._write_branches(branches)

    # ---- Tag Operations -------------------------------------------------------------------------------------

    def list_tags(
            self,
    ) -> list[Tag]:
        """List all tags sorted by name."""
        return [Tag(name=name, commit_id=cid) for name, cid in sorted(self._read_json_map(self.tags_path).items())]

    def create_tag(
            self,
            name: str,
            commit_id: str,
    ) -> Tag:
        """Create or overwrite a tag. The commit is not checked."""
        tags = self._read_json_map(self.tags_path)
        tags[name] = commit_id
        self._write_json(self.tags_path, tags)
        return Tag(name=name, commit_id=commit_id)

    def delete_tag(
            self,
            name: str,
    ) -> None:
        """Delete a tag.

        Raises:
            NotFoundError: If the tag does not exist.
        """
        tags = self._read_json_map(self.tags_path)
        if name not in tags:
            msg = f"Tag not found: {name}"
            raise NotFoundError(msg)
        del tags[name]
        self._write_json(self.tags_path, tags)

    def get_tag(
            self,
            name: str,
    ) -> str:
        """Get the commit ID a tag points to.

        Raises:
            NotFoundError: If the tag does not exist.
        """
        tags = self._read_json_map(self.tags_path)
        if name not in tags:
            msg = f"Tag not found: {name}"
            raise NotFoundError(msg)
        return tags[name]

    def resolve_ref(
            self,
            commit_or_tag: str,
    ) -> str:
        """Resolve a tag name to its commit ID, passing commit IDs through."""
        tags = self._read_json_map(self.tags_path)
        return tags.get(commit_or_tag, commit_or_tag)

    # ---- Staging Operations ---------------------------------------------------------------------------------

    def get_staging(
            self,
    ) -> dict[str, str]:
        """Get current staging area contents."""
        return self._read_json_map(self.staging_path)

    def _write_staging(
            self,
            staged: dict[str, str],
    ) -> None:
        self._write_json(self.staging_path, staged)

    def stage(
            self,
            path: str,
            content: str,
    ) -> bool:
        """Stage content for a path.

        Args:
            path: Repository-relative path.
            content: Content to stage.

        Returns:
            False if the path is ignored (nothing staged), True otherwise.
        """
        if self.is_ignored(path):
            logger.debug("Not staging ignored path %s", path)
            return False

        staged = self.get_staging()
        staged[path] = content
        self._write_staging(staged)
        return True

    def stage_file(
            self,
            path: str,
    ) -> bool:
        """Stage the on-disk content of a file.

        Returns:
            False if the path is ignored, True otherwise.

        Raises:
            NotFoundError: If the file does not exist.
        """
        if self.is_ignored(path):
            logger.debug("Not staging ignored path %s", path)
            return False
        return self.stage(path, self.read_working_file(path))

    def unstage(
            self,
            path: str,
    ) -> None:
        """Remove a path from the staging area.

        Raises:
            NotStagedError: If the path is not staged.
        """
        staged = self.get_staging()
        if path not in staged:
            msg = f"File is not staged: {path}"
            raise NotStagedError(msg)
        del staged[path]
        self._write_staging(staged)

    def stage_partial(
            self,
            path: str,
            selected_lines: Iterable[int],
    ) -> str:
        """Stage only the selected lines of a file.

        The staged content is the selected lines, in file order, joined
        with newlines. Unselected lines are dropped entirely.

        Args:
            path: Repository-relative path.
            selected_lines: Zero-based indices of lines to keep.

        Returns:
            The staged content.

        Raises:
            NotFoundError: If the file does not exist.
            NoLinesSelectedError: If no valid line is selected.
        """
        lines = self.file_lines(path)
        wanted = {i for i in selected_lines if 0 <= i < len(lines)}
        if not wanted:
            msg = f"No lines staged for {path}"
            raise NoLinesSelectedError(msg)

        content = "\n".join(line for i, line in enumerate(lines) if i in wanted)
        staged = self.get_staging()
        staged[path] = content
        self._write_staging(staged)
        return content

    def clear_staging(
            self,
    ) -> None:
        """Empty the staging area."""
        self._write_staging({})

    # ---- Working Files --------------------------------------------------------------------------------------

    def relative_path(
            self,
            path: Path | str,
            cwd: Path | str | None = None,
    ) -> str:
        """Convert a user-supplied path into a repository-relative POSIX path.

        Args:
            path: Absolute path, or path relative to `cwd`.
            cwd: Directory relative paths are taken from (defaults to cwd).

        Raises:
            NotFoundError: If the path lies outside the repository.
        """
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = Path(cwd or Path.cwd()) / candidate
        resolved = candidate.resolve()
        try:
            return resolved.relative_to(self.root).as_posix()
        except ValueError as outside_error:
            msg = f"Path is outside the repository: {path}"
            raise NotFoundError(msg) from outside_error

    def read_working_file(
            self,
            path: str,
    ) -> str:
        """Read a working-tree file.

        Raises:
            NotFoundError: If the file does not exist.
        """
        file_path = self.root / path
        if not file_path.is_file():
            msg = f"File not found: {path}"
            raise NotFoundError(msg)
        try:
            return file_path.read_bytes().decode("utf-8", errors="replace")
        except OSError as read_error:
            msg = f"Error reading {path}: {read_error}"
            raise IOFailureError(msg, path) from read_error

    def file_lines(
            self,
            path: str,
    ) -> list[str]:
        """Split a working-tree file on newlines."""
        return self.read_working_file(path).split("\n")

    def write_working_file(
            self,
            path: str,
            content: str,
    ) -> None:
        """Write content to a working-tree file, creating parent directories.

        Raises:
            IOFailureError: If the write fails.
        """
        file_path = self.root / path
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content, encoding="utf-8", newline="")
        except OSError as write_error:
            msg = f"Error writing file {path}: {write_error}"
            raise IOFailureError(msg, path) from write_error

    def write_snapshot(
            self,
            files: dict[str, str],
    ) -> list[str]:
        """Write every path of a snapshot to the working tree.

        Stops at the first failure; files written before it stay changed.

        Returns:
            Paths written, in write order.
        """
        written = []
        for path, content in files.items():
            self.write_working_file(path, content)
            written.append(path)
        logger.debug("Wrote %d file(s) to the working tree", len(written))
        return written

    # ---- Commit Operations ----------------------------------------------------------------------------------

    def get_commit(
            self,
            commit_id: str,
    ) -> Commit:
        """Load a commit by ID.

        Raises:
            NotFoundError: If no record exists for the ID.
        """
        commit_path = self.commits_dir / f"{commit_id}.json"
        if not commit_id or not commit_path.is_file():
            msg = f"Commit not found: {commit_id}"
            raise NotFoundError(msg)
        return Commit.load(commit_path)

    def has_commit(
            self,
            commit_id: str,
    ) -> bool:
        """Check whether a commit record exists."""
        return bool(commit_id) and (self.commits_dir / f"{commit_id}.json").is_file()

    def list_commits(
            self,
    ) -> list[Commit]:
        """Load every commit record. Unreadable records are skipped."""
        if not self.commits_dir.is_dir():
            return []

        commits = []
        for path in sorted(self.commits_dir.glob("*.json")):
            try:
                commits.append(Commit.load(path))
            except IOFailureError as load_error:
                logger.warning("Skipping unreadable commit record: %s", load_error)
        return commits

    def latest_commit(
            self,
    ) -> Commit | None:
        """Get the commit with the newest timestamp across all branches."""
        commits = self.list_commits()
        if not commits:
            return None
        return max(commits, key=lambda c: (c.timestamp, c.id))

    def branch_tip(
            self,
            branch: str,
    ) -> Commit | None:
        """Load a branch's head commit, None if it has none."""
        head = self.get_branch_commit(branch)
        if not head or not self.has_commit(head):
            return None
        return self.get_commit(head)

    def _generate_commit_id(
            self,
            files: dict[str, str],
            message: str,
            branch: str,
            timestamp: str,
    ) -> str:
        """Generate a commit ID that no stored record uses.

        The ID hashes the snapshot, message, branch, timestamp and a
        sequence counter. The counter starts at the number of stored
        records and is bumped until the ID is free.
        """
        sequence = len(list(self.commits_dir.glob("*.json")))
        while True:
            content = json.dumps({
                "files": files,
                "message": message,
                "branch": branch,
                "timestamp": timestamp,
                "sequence": sequence,
            }, sort_keys=True)
            commit_id = hashlib.sha256(content.encode()).hexdigest()[:COMMIT_ID_LENGTH]
            if not self.has_commit(commit_id):
                return commit_id
            sequence += 1

    def create_commit(
            self,
            message: str,
    ) -> Commit:
        """Create a commit from the staging area on the current branch.

        The snapshot is the branch head's snapshot with every staged path
        overlaid. The branch head moves to the new commit, the staging
        area is cleared and a log line is appended.

        Raises:
            NothingToCommitError: If the staging area is empty.
        """
        staged = self.get_staging()
        if not staged:
            raise NothingToCommitError("Nothing to commit.")

        branch = self.get_current_branch()
        tip = self.branch_tip(branch)

        files = dict(tip.files) if tip else {}
        files.update(staged)

        timestamp = now_timestamp()
        commit = Commit.create(
            commit_id=self._generate_commit_id(files, message, branch, timestamp),
            message=message,
            files=files,
            branch=branch,
            timestamp=timestamp,
        )
        commit.save(self.commits_dir)
        self.update_branch(branch, commit.id)
        self.clear_staging()
        self.append_log(LogEntry(commit_id=commit.id, branch=branch, message=message))
        logger.debug("Created commit %s on %s with %d file(s)", commit.id, branch, len(files))
        return commit

    def amend_commit(
            self,
            message: str,
            files: dict[str, str] | None = None,
    ) -> Commit:
        """Rewrite the current branch's head commit in place.

        Message and timestamp are always replaced. The snapshot is
        replaced by `files` when given, otherwise by the staging area
        when it is non-empty (the staging area is then cleared). The ID
        does not change.

        Raises:
            NotFoundError: If the current branch has no head commit.
        """
        commit = self.branch_tip(self.get_current_branch())
        if commit is None:
            raise NotFoundError("No commits to amend.")

        staged = self.get_staging() if files is None else {}
        replacement = files if files is not None else staged
        if replacement:
            commit.files = dict(replacement)

        commit.message = message
        commit.timestamp = now_timestamp()
        commit.save(self.commits_dir)

        if staged:
            self.clear_staging()
        self.append_log(LogEntry(commit_id=commit.id, branch=commit.branch, message=message, amended=True))
        logger.debug("Amended commit %s", commit.id)
        return commit

    def restore_commit(
            self,
            commit_or_tag: str,
    ) -> Commit:
        """Write a commit's full snapshot to the working tree.

        Args:
            commit_or_tag: Commit ID or tag name.

        Raises:
            NotFoundError: If the commit does not exist.
            IOFailureError: On the first file that cannot be written.
        """
        commit = self.get_commit(self.resolve_ref(commit_or_tag))
        self.write_snapshot(commit.files)
        return commit

    def checkout_file(
            self,
            commit_or_tag: str,
            path: str,
    ) -> Commit:
        """Write one file from a commit to the working tree.

        Raises:
            NotFoundError: If the commit or the file in it does not exist.
        """
        commit = self.get_commit(self.resolve_ref(commit_or_tag))
        if path not in commit.files:
            msg = f"File not found in commit: {path}"
            raise NotFoundError(msg)
        self.write_working_file(path, commit.files[path])
        return commit

    # ---- History Log ----------------------------------------------------------------------------------------

    def append_log(
            self,
            entry: LogEntry,
    ) -> None:
        """Append one entry to the history log."""
        try:
            with self.log_path.open("a", encoding="utf-8") as log_file:
                log_file.write(entry.to_line() + "\n")
        except OSError as write_error:
            msg = f"Error writing log: {write_error}"
            raise IOFailureError(msg, self.log_path) from write_error

    # ---- Config Operations ----------------------------------------------------------------------------------

    def get_config(
            self,
    ) -> RepoConfig:
        """Load user configuration, defaults when none is saved."""
        if not self.config_path.exists():
            return RepoConfig()
        return RepoConfig.load(self.config_path)

    def update_config(
            self,
            config: RepoConfig,
    ) -> None:
        """Save user configuration."""
        config.save(self.config_path)

    def get_remote_url(
            self,
    ) -> str | None:
        """Get the configured remote location, None if unset."""
        if not self.remote_url_path.exists():
            return None
        try:
            url = self.remote_url_path.read_text(encoding="utf-8").strip()
        except (OSError, ValueError) as read_error:
            msg = f"Error reading remote URL: {read_error}"
            raise IOFailureError(msg, self.remote_url_path) from read_error
        return url or None

    def set_remote_url(
            self,
            url: str,
    ) -> None:
        """Save the remote location."""
        try:
            self.remote_url_path.write_text(url, encoding="utf-8")
        except OSError as write_error:
            msg = f"Error writing remote URL: {write_error}"
            raise IOFailureError(msg, self.remote_url_path) from write_error


# ---- Module Functions ---------------------------------------------------------------------------------------


def find_repository(
        start_path: Path | str | None = None,
) -> Repository | None:
    """Find a gud repository in the current or parent directories.

    Returns:
        Repository if found, None otherwise.
    """
    current = Path(start_path or Path.cwd()).resolve()

    while True:
        repo = Repository(current)
        if repo.exists():
            return repo
        if current == current.parent:
            return None
        current = current.parent


def init_repository(
        path: Path | str | None = None,
) -> Repository:
    """Initialize a new repository (defaults to cwd)."""
    repo = Repository(path or Path.cwd())
    repo.init()
    return repo
