"""Tests for the git collaborator."""

from __future__ import annotations

import subprocess
from unittest.mock import MagicMock, patch

import pytest
from conftest import requires_git

from versionist.core.commits import parse_git_log_output
from versionist.exceptions import GitError
from versionist.vcs.git import GitRepository


class TestGitRepositoryMocked:
    """Tests for GitRepository with subprocess mocked out."""

    def test_reference_exists(self, tmp_path):
        repo = GitRepository(tmp_path)
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0)
            assert repo.reference_exists("v1.0.0")

            mock_run.return_value = MagicMock(returncode=1)
            assert not repo.reference_exists("v2.0.0")

        args = mock_run.call_args[0][0]
        assert args == ["git", f"--git-dir={tmp_path / '.git'}", "show-ref", "--quiet", "v2.0.0"]

    def test_git_failure(self, tmp_path):
        """Failed git commands raise GitError with stderr."""
        repo = GitRepository(tmp_path)
        error = subprocess.CalledProcessError(128, ["git"], stderr="fatal: bad revision\n")
        with patch("subprocess.run", side_effect=error), pytest.raises(GitError, match="fatal: bad revision"):
            repo.read_history("v1.0.0")

    def test_git_not_installed(self, tmp_path):
        repo = GitRepository(tmp_path)
        with patch("subprocess.run", side_effect=FileNotFoundError), pytest.raises(GitError, match="not found"):
            repo.create_tag("v1.0.0", "abc")

    def test_absolute_git_directory(self, tmp_path):
        repo = GitRepository(tmp_path, tmp_path / "elsewhere.git")
        assert repo.git_directory == tmp_path / "elsewhere.git"


@requires_git
class TestGitRepository:
    """Tests for GitRepository against a real repository."""

    def test_read_history(self, git_repo, create_commit):
        create_commit("feat: implement x", {"Change-Type": "minor"}, body="Some details\n\n    indented code")
        create_commit("fix: fix y", {"Change-Type": "patch"})

        output = GitRepository(git_repo).read_history()
        commits = parse_git_log_output(output)

        assert [commit.subject for commit in commits] == ["fix: fix y", "feat: implement x"]
        assert commits[0].footer == {"Change-Type": "patch"}
        assert commits[1].footer == {"Change-Type": "minor"}
        assert commits[1].body.startswith("Some details\n\n    indented code")
        assert commits[1].author == "Versionist"
        assert len(commits[1].hash) == 40

    def test_read_history_since_reference(self, git_repo, create_commit, git):
        create_commit("feat: implement x", {"Change-Type": "minor"})
        git(git_repo, "tag", "v0.1.0")
        create_commit("fix: fix y", {"Change-Type": "patch"})

        repo = GitRepository(git_repo)
        commits = parse_git_log_output(repo.read_history("v0.1.0"))

        assert [commit.subject for commit in commits] == ["fix: fix y"]
        assert repo.reference_exists("v0.1.0")
        assert not repo.reference_exists("v0.2.0")

    def test_find_commit_and_tag(self, git_repo, create_commit):
        first = create_commit("v0.1.0")
        create_commit("fix: mention v0.1.0 in passing")

        repo = GitRepository(git_repo)
        assert repo.find_commit_by_message("v0.1.0") == first
        assert repo.find_commit_by_message("v9.9.9") is None

        repo.create_tag("v0.1.0", first)
        assert repo.reference_exists("v0.1.0")
