"""Tests for the gud command-line interface.

Runs commands through click's CliRunner inside a temporary project
directory and checks the printed output.

Execution Context:
    Test module - run via pytest

Dependencies:
    - pytest: Test framework
    - click.testing: Command runner
    - gud_cli.main: Module under test
"""
from __future__ import annotations

import tempfile
from pathlib import Path

import pytest
from click.testing import CliRunner

from gud_cli.main import cli
from gud_core.remote import REMOTE_ENV_VAR
from gud_core.repository import Repository


# ---- Fixtures ------------------------------------------------------------------------------------------------


@pytest.fixture
def runner() -> CliRunner:
    """Click test runner."""
    return CliRunner()


@pytest.fixture
def project_dir(monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty temporary project directory set as the working directory."""
    monkeypatch.delenv(REMOTE_ENV_VAR, raising=False)
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir).resolve()
        monkeypatch.chdir(path)
        yield path


@pytest.fixture
def cli_repo(runner: CliRunner, project_dir: Path) -> Path:
    """Project directory with an initialized repository."""
    runner.invoke(cli, ["init"])
    return project_dir


def commit_file(
        runner: CliRunner,
        path: Path,
        content: str,
        message: str,
) -> str:
    """Write, add and commit a file, returning the printed commit ID."""
    path.write_text(content)
    runner.invoke(cli, ["add", path.name])
    result = runner.invoke(cli, ["commit", message])
    first_line = result.output.splitlines()[0]
    return first_line.split("Committed: ", 1)[1].strip()


# ---- Init Tests ---------------------------------------------------------------------------------------------


class TestInitCommand:
    """Tests for gud init."""

    def test_init(self, runner: CliRunner, project_dir: Path) -> None:
        """Test init creates the repository."""
        result = runner.invoke(cli, ["init"])

        assert result.exit_code == 0
        assert "Initialized empty gud repository" in result.output
        assert (project_dir / ".gud" / "HEAD").read_text() == "main"

    def test_init_twice(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test a second init reports an error and exits normally."""
        result = runner.invoke(cli, ["init"])

        assert result.exit_code == 0
        assert "already exists" in result.output

    def test_command_outside_repository(self, runner: CliRunner, project_dir: Path) -> None:
        """Test commands report a missing repository."""
        result = runner.invoke(cli, ["status"])

        assert result.exit_code == 0
        assert "Not a gud repository" in result.output

    def test_version(self, runner: CliRunner) -> None:
        """Test --version output."""
        result = runner.invoke(cli, ["--version"])

        assert "0.1.0" in result.output


# ---- Staging and Commit Tests -------------------------------------------------------------------------------


class TestStagingCommands:
    """Tests for add, add-p, unstage, commit and amend."""

    def test_add_and_commit(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test staging then committing a file."""
        (cli_repo / "notes.txt").write_text("hello")

        added = runner.invoke(cli, ["add", "notes.txt"])
        committed = runner.invoke(cli, ["commit", "first", "draft"])

        assert "Added to staging: notes.txt" in added.output
        assert "Committed: " in committed.output
        head = Repository(cli_repo).get_head_commit()
        assert Repository(cli_repo).get_commit(head).message == "first draft"

    def test_add_missing_argument(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test a usage line when the file is missing."""
        result = runner.invoke(cli, ["add"])

        assert result.exit_code == 0
        assert "Usage: gud add <file>" in result.output

    def test_add_missing_file(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test adding a file that does not exist."""
        result = runner.invoke(cli, ["add", "ghost.txt"])

        assert result.exit_code == 0
        assert "File not found" in result.output

    def test_add_ignored_file(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test ignored files are reported and not staged."""
        (cli_repo / ".gudignore").write_text("*.log\n")
        (cli_repo / "debug.log").write_text("noise")

        result = runner.invoke(cli, ["add", "debug.log"])

        assert "File ignored: debug.log" in result.output
        assert Repository(cli_repo).get_staging() == {}

    def test_commit_nothing_staged(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test committing an empty staging area."""
        result = runner.invoke(cli, ["commit", "empty"])

        assert result.exit_code == 0
        assert "Nothing to commit." in result.output

    def test_commit_missing_message(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test a usage line without a message."""
        result = runner.invoke(cli, ["commit"])

        assert "Usage: gud commit <message>" in result.output

    def test_unstage(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test unstaging a staged file and an unstaged one."""
        (cli_repo / "a.txt").write_text("a")
        runner.invoke(cli, ["add", "a.txt"])

        removed = runner.invoke(cli, ["unstage", "a.txt"])
        missing = runner.invoke(cli, ["unstage", "a.txt"])

        assert "Unstaged: a.txt" in removed.output
        assert "not staged" in missing.output
        assert missing.exit_code == 0

    def test_add_p_selected_lines(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test interactive staging of chosen lines."""
        (cli_repo / "lines.txt").write_text("one\ntwo\nthree")

        result = runner.invoke(cli, ["add-p", "lines.txt"], input="y\nn\ny\n")

        assert "Interactive add done for lines.txt" in result.output
        assert Repository(cli_repo).get_staging() == {"lines.txt": "one\nthree"}

    def test_add_p_quit_without_selection(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test quitting before choosing any line stages nothing."""
        (cli_repo / "lines.txt").write_text("one\ntwo")

        result = runner.invoke(cli, ["add-p", "lines.txt"], input="q\n")

        assert "No lines staged." in result.output
        assert Repository(cli_repo).get_staging() == {}

    def test_amend(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test amending the head commit keeps its ID."""
        commit_id = commit_file(runner, cli_repo / "a.txt", "a", "frist")

        result = runner.invoke(cli, ["amend", "first"])

        assert f"Amended commit: {commit_id}" in result.output
        assert Repository(cli_repo).get_commit(commit_id).message == "first"

    def test_amend_without_commits(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test amend on an empty branch."""
        result = runner.invoke(cli, ["amend", "nothing"])

        assert "No commits to amend." in result.output


# ---- Status and Diff Tests ----------------------------------------------------------------------------------


class TestInspectionCommands:
    """Tests for status, diff and log."""

    def test_status_sections(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test modified, staged and untracked files are listed."""
        commit_file(runner, cli_repo / "tracked.txt", "v1", "first")
        (cli_repo / "tracked.txt").write_text("v2")
        (cli_repo / "staged.txt").write_text("s")
        runner.invoke(cli, ["add", "staged.txt"])
        (cli_repo / "loose.txt").write_text("l")

        result = runner.invoke(cli, ["status"])

        assert "On branch: main" in result.output
        assert " * tracked.txt" in result.output
        assert " + staged.txt" in result.output
        assert " ? loose.txt" in result.output

    def test_diff(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test diff markers against the latest commit."""
        commit_file(runner, cli_repo / "keep.txt", "k", "first")
        (cli_repo / "keep.txt").write_text("changed")
        (cli_repo / "extra.txt").write_text("x")

        result = runner.invoke(cli, ["diff"])

        assert "Differences:" in result.output
        assert "+ extra.txt" in result.output
        assert "~ keep.txt" in result.output

    def test_diff_verbose(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test line-level output for modified files."""
        commit_file(runner, cli_repo / "keep.txt", "one\n", "first")
        (cli_repo / "keep.txt").write_text("two\n")

        result = runner.invoke(cli, ["diff", "-v"])

        assert "~ keep.txt" in result.output
        assert "+two" in result.output

    def test_status_unreadable_head(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test a corrupt HEAD is reported instead of crashing."""
        (cli_repo / ".gud" / "HEAD").write_bytes(b"\xff\xfe")

        result = runner.invoke(cli, ["status"])

        assert result.exit_code == 0
        assert result.exception is None
        assert "Error reading HEAD" in result.output

    def test_log(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test the history graph."""
        commit_id = commit_file(runner, cli_repo / "a.txt", "a", "first")

        result = runner.invoke(cli, ["log"])

        assert "Commit history:" in result.output
        assert f"* {commit_id[:7]} (main) first" in result.output

    def test_log_empty(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test log without commits."""
        result = runner.invoke(cli, ["log"])

        assert "No commits yet." in result.output

    def test_log_file(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test per-file history."""
        commit_file(runner, cli_repo / "a.txt", "a", "first")

        found = runner.invoke(cli, ["log", "a.txt"])
        missing = runner.invoke(cli, ["log", "b.txt"])

        assert "History for file: a.txt" in found.output
        assert "No history for file: b.txt" in missing.output


# ---- Branch and Tag Tests -----------------------------------------------------------------------------------


class TestBranchCommands:
    """Tests for branch, switch, tag and get-tag."""

    def test_branch_lifecycle(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test creating, listing and deleting a branch."""
        created = runner.invoke(cli, ["branch", "create", "dev"])
        listed = runner.invoke(cli, ["branch", "list"])
        deleted = runner.invoke(cli, ["branch", "delete", "dev"])

        assert "Created branch: dev" in created.output
        assert "* main" in listed.output
        assert "  dev" in listed.output
        assert "Deleted branch: dev" in deleted.output

    def test_delete_current_branch(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test the checked-out branch cannot be deleted."""
        result = runner.invoke(cli, ["branch", "delete", "main"])

        assert result.exit_code == 0
        assert "Cannot delete current branch" in result.output

    def test_branch_usage(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test usage and unknown subcommands."""
        usage = runner.invoke(cli, ["branch"])
        unknown = runner.invoke(cli, ["branch", "rename"])

        assert "Usage: gud branch" in usage.output
        assert "Unknown branch command" in unknown.output

    def test_switch(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test switching HEAD."""
        result = runner.invoke(cli, ["switch", "dev"])

        assert "Switched to branch: dev" in result.output
        assert (cli_repo / ".gud" / "HEAD").read_text() == "dev"

    def test_tag_round_trip(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test tagging a commit and reading the tag back."""
        commit_id = commit_file(runner, cli_repo / "a.txt", "a", "first")

        tagged = runner.invoke(cli, ["tag", "create", "v1", commit_id])
        fetched = runner.invoke(cli, ["get-tag", "v1"])

        assert f"Tagged commit {commit_id} as 'v1'" in tagged.output
        assert commit_id in fetched.output

    def test_tag_list_empty(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test listing without tags."""
        result = runner.invoke(cli, ["tag", "list"])

        assert "No tags found." in result.output

    def test_tag_delete_missing(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test deleting an unknown tag."""
        result = runner.invoke(cli, ["tag", "delete", "v9"])

        assert result.exit_code == 0
        assert "Tag not found: v9" in result.output


# ---- Restore Tests ------------------------------------------------------------------------------------------


class TestRestoreCommands:
    """Tests for restore, revert and checkout-file."""

    def test_restore(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test restoring a commit rewrites the file."""
        commit_id = commit_file(runner, cli_repo / "a.txt", "original", "first")
        (cli_repo / "a.txt").write_text("scribbled")

        result = runner.invoke(cli, ["restore", commit_id])

        assert f"Restored commit: {commit_id}" in result.output
        assert (cli_repo / "a.txt").read_text() == "original"

    def test_revert_by_tag(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test reverting to a tagged commit."""
        commit_id = commit_file(runner, cli_repo / "a.txt", "original", "first")
        runner.invoke(cli, ["tag", "create", "stable", commit_id])
        (cli_repo / "a.txt").write_text("scribbled")

        result = runner.invoke(cli, ["revert", "stable"])

        assert "Reverted working directory to commit:" in result.output
        assert (cli_repo / "a.txt").read_text() == "original"

    def test_restore_unknown(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test restoring an unknown commit."""
        result = runner.invoke(cli, ["restore", "nope"])

        assert result.exit_code == 0
        assert "Commit not found: nope" in result.output

    def test_checkout_file(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test checking out a single file."""
        commit_id = commit_file(runner, cli_repo / "a.txt", "original", "first")
        (cli_repo / "a.txt").write_text("scribbled")

        runner.invoke(cli, ["checkout-file", commit_id, "a.txt"])

        assert (cli_repo / "a.txt").read_text() == "original"


# ---- Merge Tests --------------------------------------------------------------------------------------------


class TestMergeCommands:
    """Tests for merge and rebase."""

    def test_merge_with_empty_staging(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test a merge overwrites files but records no commit."""
        commit_file(runner, cli_repo / "f.txt", "hello", "first")
        runner.invoke(cli, ["branch", "create", "dev"])
        runner.invoke(cli, ["switch", "dev"])
        commit_file(runner, cli_repo / "f.txt", "hello dev", "dev change")
        runner.invoke(cli, ["switch", "main"])
        (cli_repo / "f.txt").write_text("hello")

        result = runner.invoke(cli, ["merge", "main", "dev"])

        assert "Merging branch 'dev' into 'main'" in result.output
        assert "Nothing to commit." in result.output
        assert "Merge completed." in result.output
        assert (cli_repo / "f.txt").read_text() == "hello dev"

    def test_merge_without_target_commits(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test merging a branch with no commits."""
        runner.invoke(cli, ["branch", "create", "dev"])

        result = runner.invoke(cli, ["merge", "main", "dev"])

        assert result.exit_code == 0
        assert "No commits found on target branch: dev" in result.output

    def test_rebase_ends_on_target(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test rebase leaves HEAD on the target branch."""
        commit_file(runner, cli_repo / "f.txt", "hello", "first")
        runner.invoke(cli, ["branch", "create", "dev"])

        result = runner.invoke(cli, ["rebase", "main", "dev"])

        assert "Rebase completed." in result.output
        assert (cli_repo / ".gud" / "HEAD").read_text() == "dev"

    def test_rebase_without_target_commits_switches(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test a failed rebase merge is reported and HEAD still moves."""
        commit_file(runner, cli_repo / "f.txt", "hello", "first")

        result = runner.invoke(cli, ["rebase", "main", "ghost"])

        assert result.exit_code == 0
        assert "No commits found on target branch: ghost" in result.output
        assert "Switched to branch: ghost" in result.output
        assert "Rebase completed." in result.output
        assert (cli_repo / ".gud" / "HEAD").read_text() == "ghost"

    def test_merge_usage(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test merge without branches prints usage."""
        result = runner.invoke(cli, ["merge"])

        assert "Usage: gud merge" in result.output


# ---- Remote Tests -------------------------------------------------------------------------------------------


class TestRemoteCommands:
    """Tests for push, pull, remote-url, remote-preview and clone."""

    def test_push_and_pull(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test pushing to the default remote then pulling back."""
        commit_id = commit_file(runner, cli_repo / "a.txt", "a", "first")

        pushed = runner.invoke(cli, ["push"])
        pulled = runner.invoke(cli, ["pull"])

        assert "Pushed 1 commit(s) to remote." in pushed.output
        assert (cli_repo / ".gud_remote" / "commits" / f"{commit_id}.json").is_file()
        assert "already exists locally, skipping." in pulled.output
        assert "Pulled 0 commit(s) from remote." in pulled.output

    def test_pull_without_remote(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test pulling before anything was pushed."""
        result = runner.invoke(cli, ["pull"])

        assert result.exit_code == 0
        assert "Error reading remote commits directory" in result.output

    def test_remote_url(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test setting and showing the remote URL."""
        empty = runner.invoke(cli, ["remote-url"])
        runner.invoke(cli, ["remote-url", "mirror"])
        shown = runner.invoke(cli, ["remote-url"])

        assert "No remote URL configured." in empty.output
        assert "Remote URL: mirror" in shown.output

    def test_clone(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test cloning the repository into a sibling directory."""
        commit_id = commit_file(runner, cli_repo / "a.txt", "a", "first")

        result = runner.invoke(cli, ["clone", str(cli_repo), "copy"])

        assert "Repository cloned to copy" in result.output
        assert Repository(cli_repo / "copy").has_commit(commit_id)


# ---- Config Tests -------------------------------------------------------------------------------------------


class TestConfigCommand:
    """Tests for gud config."""

    def test_set_and_show(self, runner: CliRunner, cli_repo: Path) -> None:
        """Test saving and displaying identity."""
        saved = runner.invoke(cli, ["config", "alice", "alice@example.com"])
        shown = runner.invoke(cli, ["config"])

        assert "User config saved." in saved.output
        assert "alice@example.com" in shown.output
