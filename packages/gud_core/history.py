"""Commit history for gud.

History is a flat, append-only log written at commit and amend time.
Commits carry no parent pointers, so nothing here walks a graph.

Execution Context:
    Library module - imported by the CLI log command

Metadata:
    Version: 0.1.0
    Author: gud Team
"""
from __future__ import annotations

from dataclasses import dataclass

from gud_core.errors import IOFailureError
from gud_core.models import AMENDED_SUFFIX
from gud_core.models import Commit
from gud_core.models import LogEntry
from gud_core.repository import Repository


SHORT_ID_LENGTH = 7


@dataclass
class LogLine:
    """A log line, parsed when possible.

    Attributes:
        raw: Line as stored.
        entry: Parsed entry, None for malformed lines.
    """

    raw: str
    entry: LogEntry | None = None


def read_log(
        repo: Repository,
) -> list[LogLine]:
    """Read the history log in write order."""
    if not repo.log_path.exists():
        return []

    try:
        text = repo.log_path.read_text(encoding="utf-8").strip()
    except (OSError, ValueError) as read_error:
        msg = f"Error reading log: {read_error}"
        raise IOFailureError(msg, repo.log_path) from read_error
    if not text:
        return []
    return [LogLine(raw=line, entry=LogEntry.from_line(line)) for line in text.split("\n")]


def format_log_graph(
        lines: list[LogLine],
) -> list[str]:
    """Render log lines as an indented text graph.

    Each entry is indented one `| ` deeper than the previous one.
    """
    rendered = []
    for i, line in enumerate(lines):
        if line.entry is None:
            rendered.append(line.raw)
            continue
        entry = line.entry
        message = entry.message + (AMENDED_SUFFIX if entry.amended else "")
        indent = "| " * i
        rendered.append(f"{indent}* {entry.commit_id[:SHORT_ID_LENGTH]} ({entry.branch}) {message}")
    return rendered


def file_history(
        repo: Repository,
        path: str,
) -> list[Commit]:
    """Every commit whose snapshot contains `path`, newest first."""
    commits = [c for c in repo.list_commits() if path in c.files]
    return sorted(commits, key=lambda c: c.timestamp, reverse=True)
