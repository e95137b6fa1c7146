"""Shared test fixtures for gud_core tests.

Provides:
- temporary project directories
- initialized repositories, with and without commits
"""
from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from gud_core.repository import Repository


@pytest.fixture
def temp_repo_dir() -> Path:
    """Create temporary directory for repository tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def initialized_repo(temp_repo_dir: Path) -> Repository:
    """Create and initialize a repository."""
    repo = Repository(temp_repo_dir)
    repo.init()
    return repo


@pytest.fixture
def repo_with_commit(initialized_repo: Repository) -> Repository:
    """Repository with `f.txt` = "hello" committed on main."""
    (initialized_repo.root / "f.txt").write_text("hello")
    initialized_repo.stage_file("f.txt")
    initialized_repo.create_commit("first")
    return initialized_repo
