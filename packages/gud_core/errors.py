"""Exception hierarchy for gud.

Every error raised by the core library derives from GudError, which is
itself a RuntimeError so callers that only care about "the operation
failed" can keep catching RuntimeError.

Execution Context:
    Library module - imported by all gud_core modules and the CLI

Metadata:
    Version: 0.1.0
    Author: gud Team
"""
from __future__ import annotations

from pathlib import Path


class GudError(RuntimeError):
    """Base class for all gud errors."""


# ---- Lookup Errors ------------------------------------------------------------------------------------------


class NotFoundError(GudError):
    """A commit, branch, tag or file does not exist."""


class NoCommitsError(NotFoundError):
    """A branch has no head commit."""


class AlreadyExistsError(GudError):
    """A branch with the requested name already exists."""


# ---- Invalid Operations -------------------------------------------------------------------------------------


class InvalidOperationError(GudError):
    """The requested operation is not allowed in the current state."""


class NothingToCommitError(InvalidOperationError):
    """Commit requested with an empty staging area."""


class NotStagedError(InvalidOperationError):
    """Unstage requested for a path that is not staged."""


class NoLinesSelectedError(InvalidOperationError):
    """Partial staging requested with an empty line selection."""


class CannotDeleteCurrentError(InvalidOperationError):
    """Deletion of the checked-out branch was requested."""


# ---- Filesystem Errors --------------------------------------------------------------------------------------


class IOFailureError(GudError):
    """A filesystem read or write failed.

    Attributes:
        path: The path that could not be read or written.
    """

    def __init__(
            self,
            message: str,
            path: Path | str | None = None,
    ) -> None:
        super().__init__(message)
        self.path = str(path) if path is not None else None
