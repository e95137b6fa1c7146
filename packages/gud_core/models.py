"""Data models for gud version control.

Defines the records persisted under the .gud directory: commits,
branches, tags, history log entries and the user configuration.

Execution Context:
    Library module - imported by other gud_core modules

Dependencies:
    - dataclasses: Data class decorators

Metadata:
    Version: 0.1.0
    Author: gud Team
"""
from __future__ import annotations

import json
from dataclasses import asdict
from dataclasses import dataclass
from dataclasses import field
from dataclasses import fields
from datetime import datetime
from pathlib import Path
from typing import Any

from gud_core.errors import IOFailureError


CONFIG_VERSION = "1.0"
AMENDED_SUFFIX = " (amended)"


def now_timestamp() -> str:
    """Current local time as an ISO 8601 string with microseconds."""
    return datetime.now().isoformat(timespec="microseconds")


def _known_fields(
        cls: type,
        data: dict[str, Any],
) -> dict[str, Any]:
    """Drop keys the dataclass does not declare."""
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in names}


# ---- Data Model Classes -------------------------------------------------------------------------------------


@dataclass
class Commit:
    """Full snapshot of tracked files with version control metadata.

    Commits carry no parent pointer. Ordering comes from timestamps and
    from the append-only history log.

    Attributes:
        id: Unique commit identifier.
        message: Commit message describing changes.
        timestamp: ISO 8601 formatted timestamp.
        files: Complete snapshot, repository-relative path to content.
        branch: Branch the commit was created on.
    """

    id: str
    message: str
    timestamp: str
    files: dict[str, str] = field(default_factory=dict)
    branch: str = ""

    @classmethod
    def create(
            cls,
            commit_id: str,
            message: str,
            files: dict[str, str] | None = None,
            branch: str = "",
            timestamp: str | None = None,
    ) -> Commit:
        """Create a new commit stamped with the current time.

        Args:
            commit_id: Unique identifier for the commit.
            message: Commit message.
            files: Snapshot contents.
            branch: Branch the commit belongs to.
            timestamp: Explicit timestamp (defaults to now).

        Returns:
            New Commit instance.
        """
        return cls(
            id=commit_id,
            message=message,
            timestamp=timestamp or now_timestamp(),
            files=dict(files or {}),
            branch=branch,
        )

    def to_dict(
            self,
    ) -> dict[str, Any]:
        """Convert commit to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(
            cls,
            data: dict[str, Any],
    ) -> Commit:
        """Create commit from dictionary.

        Unknown keys are ignored and missing optional keys fall back to
        defaults, so records written by other versions still load.

        Args:
            data: Dictionary with commit fields.

        Returns:
            Commit instance.
        """
        known = _known_fields(cls, data)
        known.setdefault("message", "")
        known.setdefault("timestamp", "")
        known["files"] = dict(known.get("files") or {})
        known["branch"] = known.get("branch") or ""
        return cls(**known)

    def save(
            self,
            commits_dir: Path,
    ) -> Path:
        """Save commit to `<commits_dir>/<id>.json`.

        Returns:
            Path to saved commit file.
        """
        filepath = commits_dir / f"{self.id}.json"
        try:
            commits_dir.mkdir(parents=True, exist_ok=True)
            filepath.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        except OSError as write_error:
            msg = f"Error writing commit file {filepath}: {write_error}"
            raise IOFailureError(msg, filepath) from write_error
        return filepath

    @classmethod
    def load(
            cls,
            filepath: Path,
    ) -> Commit:
        """Load commit from file.

        Raises:
            IOFailureError: If commit file cannot be read or parsed.
        """
        try:
            data = json.loads(filepath.read_text(encoding="utf-8"))
            return cls.from_dict(data)
        except (OSError, ValueError, TypeError, AttributeError) as file_error:
            msg = f"Failed to load commit from {filepath}: {file_error}"
            raise IOFailureError(msg, filepath) from file_error


@dataclass
class Branch:
    """Named pointer to a head commit.

    Attributes:
        name: Branch name.
        commit_id: Head commit ID, None when the branch has no commits.
        current: Whether the branch is checked out.
    """

    name: str
    commit_id: str | None = None
    current: bool = False


@dataclass
class Tag:
    """Named reference to a commit ID."""

    name: str
    commit_id: str


@dataclass
class LogEntry:
    """One line of the append-only history log.

    Attributes:
        commit_id: Commit the entry refers to.
        branch: Branch recorded at commit time.
        message: Commit message.
        amended: Whether the entry was written by an amend.
    """

    commit_id: str
    branch: str
    message: str
    amended: bool = False

    def to_line(
            self,
    ) -> str:
        """Render as `<id> [<branch>] <message>` with an amend suffix."""
        line = f"{self.commit_id} [{self.branch}] {self.message}"
        if self.amended:
            line += AMENDED_SUFFIX
        return line

    @classmethod
    def from_line(
            cls,
            line: str,
    ) -> LogEntry | None:
        """Parse a log line, returning None for malformed lines."""
        parts = line.rstrip("\n").split(" ", 2)
        if len(parts) < 3 or not (parts[1].startswith("[") and parts[1].endswith("]")):
            return None

        message = parts[2]
        amended = message.endswith(AMENDED_SUFFIX)
        if amended:
            message = message[: -len(AMENDED_SUFFIX)]
        return cls(
            commit_id=parts[0],
            branch=parts[1][1:-1],
            message=message,
            amended=amended,
        )


@dataclass
class RepoConfig:
    """User identity stored in .gud/config.json.

    Attributes:
        version: Config format version.
        username: Author name.
        email: Author email.
    """

    version: str = CONFIG_VERSION
    username: str = ""
    email: str = ""

    def to_dict(
            self,
    ) -> dict[str, Any]:
        """Convert config to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(
            cls,
            data: dict[str, Any],
    ) -> RepoConfig:
        """Create config from dictionary, tolerating older layouts."""
        return cls(
            version=data.get("version", CONFIG_VERSION),
            username=data.get("username", ""),
            email=data.get("email", ""),
        )

    def save(
            self,
            config_path: Path,
    ) -> None:
        """Save config to file."""
        try:
            config_path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        except OSError as write_error:
            msg = f"Error writing config {config_path}: {write_error}"
            raise IOFailureError(msg, config_path) from write_error

    @classmethod
    def load(
            cls,
            config_path: Path,
    ) -> RepoConfig:
        """Load config from file.

        Raises:
            IOFailureError: If config file cannot be loaded.
        """
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
            return cls.from_dict(data)
        except (OSError, ValueError, AttributeError) as file_error:
            msg = f"Failed to load config from {config_path}: {file_error}"
            raise IOFailureError(msg, config_path) from file_error
