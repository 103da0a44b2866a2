"""Shared test fixtures."""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest

from versionist.core.commits import BODY_SENTINEL

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def format_log_record(
    subject: str,
    body: str = "",
    *,
    commit_hash: str = "0" * 40,
    author: str = "Versionist",
) -> str:
    """Format one commit the way ``git log`` prints it with the YAML pretty format."""
    body_lines = [BODY_SENTINEL, *body.split("\n")] if body else [BODY_SENTINEL, ""]
    indented = "\n".join(f"    {line}" if line else "" for line in body_lines)
    return "\n".join(
        [
            f"- hash: {commit_hash}",
            "  author: >-",
            f"    {author}",
            "  subject: >-",
            f"    {subject}",
            "  body: |-",
            indented,
        ]
    )


def format_log(*records: str) -> str:
    """Join formatted records into a full ``git log`` output."""
    return "\n".join(records) + "\n"


def format_footer(tags: dict[str, str]) -> str:
    return "\n".join(f"{key}: {value}" for key, value in tags.items())


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        [
            "git",
            "-c",
            "user.name=Versionist",
            "-c",
            "user.email=versionist@example.com",
            "-c",
            "commit.gpgsign=false",
            "-c",
            "tag.gpgsign=false",
            *args,
        ],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """An empty git repository."""
    _git(tmp_path, "init", "--quiet")
    return tmp_path


@pytest.fixture
def git():
    """Run git commands in a repository."""
    return _git


@pytest.fixture
def create_commit(git_repo: Path) -> Callable[..., str]:
    """Create an empty commit with optional footer tags, returning its hash."""

    def _create(title: str, tags: dict[str, str] | None = None, body: str = "") -> str:
        parts = [title]
        if body:
            parts.extend(["", body])
        if tags:
            parts.extend(["", format_footer(tags)])

        message_file = git_repo.parent / f"{git_repo.name}-message.txt"
        message_file.write_text("\n".join(parts) + "\n")
        _git(git_repo, "commit", "--quiet", "--allow-empty", "-F", str(message_file))
        return _git(git_repo, "rev-parse", "HEAD").strip()

    return _create
