"""Tests for remote operations module.

Execution Context:
    Test module - run via pytest

Dependencies:
    - pytest: Test framework
    - gud_core.remote: Module under test
"""
from __future__ import annotations

import json
import tempfile
from pathlib import Path

import pytest

from gud_core.errors import IOFailureError
from gud_core.errors import NotFoundError
from gud_core.models import Commit
from gud_core.remote import REMOTE_ENV_VAR
from gud_core.remote import RemoteOperations
from gud_core.remote import clone_repository
from gud_core.remote import remote_commits_dir
from gud_core.remote import resolve_remote_path
from gud_core.repository import Repository


# ---- Fixtures ------------------------------------------------------------------------------------------------


@pytest.fixture
def remote_dir() -> Path:
    """Separate temporary directory acting as a remote."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture(autouse=True)
def no_remote_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's environment from choosing a remote."""
    monkeypatch.delenv(REMOTE_ENV_VAR, raising=False)


# ---- Remote Resolution Tests --------------------------------------------------------------------------------


class TestResolveRemotePath:
    """Tests for remote location lookup."""

    def test_default_in_tree(self, initialized_repo: Repository) -> None:
        """Test the fallback remote is .gud_remote under the root."""
        assert resolve_remote_path(initialized_repo) == initialized_repo.root / ".gud_remote"

    def test_environment_variable(
            self,
            initialized_repo: Repository,
            remote_dir: Path,
            monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test GUD_REMOTE is used when no URL is configured."""
        monkeypatch.setenv(REMOTE_ENV_VAR, str(remote_dir))

        assert resolve_remote_path(initialized_repo) == remote_dir

    def test_configured_url_wins(
            self,
            initialized_repo: Repository,
            remote_dir: Path,
            monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test the remote_url file takes priority over the environment."""
        monkeypatch.setenv(REMOTE_ENV_VAR, "/somewhere/else")
        initialized_repo.set_remote_url(str(remote_dir))

        assert resolve_remote_path(initialized_repo) == remote_dir

    def test_relative_location(self, initialized_repo: Repository) -> None:
        """Test relative locations are taken from the repository root."""
        assert resolve_remote_path(initialized_repo, "mirror") == initialized_repo.root / "mirror"

    def test_commits_dir_layout(self, initialized_repo: Repository, remote_dir: Path) -> None:
        """Test repository remotes use .gud/commits, bare ones use commits."""
        assert remote_commits_dir(remote_dir) == remote_dir / "commits"
        assert remote_commits_dir(initialized_repo.root) == initialized_repo.commits_dir


# ---- Push Tests ---------------------------------------------------------------------------------------------


class TestPush:
    """Tests for pushing commit records."""

    def test_push_copies_records(self, repo_with_commit: Repository, remote_dir: Path) -> None:
        """Test every local record reaches the remote."""
        head = repo_with_commit.get_head_commit()

        result = RemoteOperations(repo_with_commit, remote_dir).push()

        assert result.copied == [f"{head}.json"]
        assert (remote_dir / "commits" / f"{head}.json").is_file()

    def test_push_default_remote(self, repo_with_commit: Repository) -> None:
        """Test pushing without configuration writes into .gud_remote."""
        RemoteOperations(repo_with_commit).push()

        assert len(list((repo_with_commit.root / ".gud_remote" / "commits").iterdir())) == 1

    def test_push_overwrites(self, repo_with_commit: Repository, remote_dir: Path) -> None:
        """Test push replaces a differing remote record."""
        head = repo_with_commit.get_head_commit()
        remote_record = remote_dir / "commits" / f"{head}.json"
        remote_record.parent.mkdir(parents=True)
        remote_record.write_text("stale")

        RemoteOperations(repo_with_commit, remote_dir).push()

        assert remote_record.read_text() == (repo_with_commit.commits_dir / f"{head}.json").read_text()


# ---- Pull Tests ---------------------------------------------------------------------------------------------


class TestPull:
    """Tests for pulling commit records."""

    def test_pull_missing_remote(self, initialized_repo: Repository, remote_dir: Path) -> None:
        """Test pulling from a remote without a commits directory."""
        with pytest.raises(NotFoundError):
            RemoteOperations(initialized_repo, remote_dir).pull()

    def test_pull_copies_new_records(self, initialized_repo: Repository, remote_dir: Path) -> None:
        """Test records missing locally are copied."""
        Commit.create(commit_id="remote1", message="m", files={"r.txt": "r"}).save(remote_dir / "commits")

        result = RemoteOperations(initialized_repo, remote_dir).pull()

        assert result.copied == ["remote1.json"]
        assert initialized_repo.get_commit("remote1").files == {"r.txt": "r"}

    def test_pull_never_overwrites(self, repo_with_commit: Repository, remote_dir: Path) -> None:
        """Test a local record with the same ID is left untouched."""
        head = repo_with_commit.get_head_commit()
        local_record = repo_with_commit.commits_dir / f"{head}.json"
        before = local_record.read_text()
        tampered = json.loads(before)
        tampered["message"] = "rewritten remotely"
        (remote_dir / "commits").mkdir()
        (remote_dir / "commits" / f"{head}.json").write_text(json.dumps(tampered))

        result = RemoteOperations(repo_with_commit, remote_dir).pull()

        assert result.skipped == [f"{head}.json"]
        assert result.copied == []
        assert local_record.read_text() == before

    def test_pull_local_commits_dir_blocked(self, initialized_repo: Repository, remote_dir: Path) -> None:
        """Test an unusable local commits directory raises IOFailureError."""
        Commit.create(commit_id="remote1", message="m", files={}).save(remote_dir / "commits")
        initialized_repo.commits_dir.rmdir()
        initialized_repo.commits_dir.write_text("not a directory")

        with pytest.raises(IOFailureError):
            RemoteOperations(initialized_repo, remote_dir).pull()

    def test_pull_does_not_move_branches(self, repo_with_commit: Repository, remote_dir: Path) -> None:
        """Test pulled records are not attached to any branch."""
        head = repo_with_commit.get_head_commit()
        Commit.create(commit_id="remote1", message="m", files={}).save(remote_dir / "commits")

        RemoteOperations(repo_with_commit, remote_dir).pull()

        assert repo_with_commit.get_head_commit() == head

    def test_push_then_pull_between_repositories(
            self,
            repo_with_commit: Repository,
            remote_dir: Path,
    ) -> None:
        """Test records travel from one repository to another through a remote."""
        mirror = remote_dir / "mirror"
        RemoteOperations(repo_with_commit, mirror).push()
        other = Repository(remote_dir / "other")
        other.init()

        RemoteOperations(other, mirror).pull()

        assert other.has_commit(repo_with_commit.get_head_commit())


# ---- Preview Tests ------------------------------------------------------------------------------------------


class TestPreview:
    """Tests for listing remote commits."""

    def test_preview_without_local_commits(self, initialized_repo: Repository, remote_dir: Path) -> None:
        """Test every remote commit is listed when the branch has no head."""
        Commit.create(commit_id="r1", message="one", timestamp="2026-01-01T00:00:00.000000").save(
            remote_dir / "commits"
        )

        preview = RemoteOperations(initialized_repo, remote_dir).preview()

        assert [c.id for c in preview] == ["r1"]

    def test_preview_only_newer(self, repo_with_commit: Repository, remote_dir: Path) -> None:
        """Test only commits newer than the branch head are listed."""
        commits = remote_dir / "commits"
        Commit.create(commit_id="old", message="o", timestamp="2000-01-01T00:00:00.000000").save(commits)
        Commit.create(commit_id="new", message="n", timestamp="2999-01-01T00:00:00.000000").save(commits)

        preview = RemoteOperations(repo_with_commit, remote_dir).preview()

        assert [c.id for c in preview] == ["new"]

    def test_preview_missing_remote(self, initialized_repo: Repository, remote_dir: Path) -> None:
        """Test a remote without records previews nothing."""
        assert RemoteOperations(initialized_repo, remote_dir).preview() == []


# ---- Clone Tests --------------------------------------------------------------------------------------------


class TestClone:
    """Tests for cloning a repository."""

    def test_clone_copies_state(self, repo_with_commit: Repository, remote_dir: Path) -> None:
        """Test the clone has the same commits, branches and HEAD."""
        target = remote_dir / "clone"

        cloned = clone_repository(repo_with_commit.root, target)

        assert cloned.root == target
        assert cloned.get_head_commit() == repo_with_commit.get_head_commit()
        assert cloned.get_commit(cloned.get_head_commit()).files == {"f.txt": "hello"}
        assert cloned.get_current_branch() == "main"

    def test_clone_does_not_write_working_tree(self, repo_with_commit: Repository, remote_dir: Path) -> None:
        """Test only the .gud directory is copied."""
        target = remote_dir / "clone"

        clone_repository(repo_with_commit.root, target)

        assert not (target / "f.txt").exists()

    def test_clone_missing_source(self, remote_dir: Path) -> None:
        """Test cloning a directory without a repository."""
        with pytest.raises(NotFoundError):
            clone_repository(remote_dir, remote_dir / "clone")
