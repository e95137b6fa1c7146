"""gud Core Library.

Provides local version control for a project's files: the commit store,
branch and tag registries, staging area, diff/status, merge/rebase and
filesystem remotes.

Execution Context:
    Library package - imported by the CLI and other applications

Dependencies:
    - deepdiff: Snapshot comparison
    - pathspec: Ignore patterns

Metadata:
    Version: 0.1.0
    Author: gud Team
"""
from __future__ import annotations

from gud_core.errors import GudError
from gud_core.models import Branch
from gud_core.models import Commit
from gud_core.models import LogEntry
from gud_core.models import RepoConfig
from gud_core.models import Tag
from gud_core.repository import Repository

__version__ = "0.1.0"

__all__ = [
    "Branch",
    "Commit",
    "GudError",
    "LogEntry",
    "RepoConfig",
    "Repository",
    "Tag",
    "__version__",
]
