"""Git operations through the ``git`` command line.

Every call goes through ``subprocess.run`` against an explicit git
directory, so the project path and the repository need not coincide.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from versionist.core.commits import get_git_log_arguments
from versionist.exceptions import GitError

logger = logging.getLogger(__name__)

# Separators that cannot appear in commit messages
_FIELD_SEPARATOR = "\x1f"
_RECORD_SEPARATOR = "\x1e"


class GitRepository:
    """A git repository used as the source of project history.

    Args:
        path: Project directory, used as the working directory of git
        git_directory: Path to the ``.git`` directory, relative to path
            or absolute
    """

    def __init__(self, path: Path | str, git_directory: Path | str = ".git") -> None:
        self.path = Path(path)
        git_dir = Path(git_directory)
        self.git_directory = git_dir if git_dir.is_absolute() else self.path / git_dir

    def _run(self, *args: str, check: bool = True) -> subprocess.CompletedProcess[str]:
        command = ["git", f"--git-dir={self.git_directory}", *args]
        logger.debug("Running %s", " ".join(command))
        try:
            return subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=check,
                cwd=self.path,
            )
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"git {args[0]} failed with exit code {e.returncode}",
                stderr=e.stderr,
            ) from e
        except FileNotFoundError as e:
            raise GitError("git not found. Is it installed and on PATH?") from e

    def reference_exists(self, reference: str) -> bool:
        """Check whether a tag, branch or other ref exists."""
        result = self._run("show-ref", "--quiet", reference, check=False)
        return result.returncode == 0

    def read_history(
        self,
        start_reference: str | None = None,
        end_reference: str = "HEAD",
        *,
        include_merge_commits: bool = False,
    ) -> str:
        """Print history between two references in the YAML log format.

        Args:
            start_reference: Exclusive start, or None for the first commit
            end_reference: Inclusive end
            include_merge_commits: Whether merge commits are listed

        Returns:
            Raw ``git log`` output

        Raises:
            GitError: If git fails
        """
        args = get_git_log_arguments(
            str(self.git_directory),
            start_reference=start_reference,
            end_reference=end_reference,
            include_merge_commits=include_merge_commits,
        )
        # get_git_log_arguments() carries its own --git-dir as the first argument
        result = self._run(*args[1:])
        return result.stdout

    def find_commit_by_message(self, message: str) -> str | None:
        """Find the newest commit whose whole message equals message.

        Returns:
            The commit hash, or None when no commit matches
        """
        result = self._run(
            "log",
            f"--format=%H{_FIELD_SEPARATOR}%B{_RECORD_SEPARATOR}",
            "--fixed-strings",
            f"--grep={message}",
        )
        for record in result.stdout.split(_RECORD_SEPARATOR):
            commit_hash, _, body = record.strip().partition(_FIELD_SEPARATOR)
            if commit_hash and body.strip() == message:
                return commit_hash
        return None

    def create_tag(self, name: str, commit: str) -> None:
        """Create a lightweight tag pointing at a commit.

        Raises:
            GitError: If git fails
        """
        self._run("tag", name, commit)
        logger.info("Tagged %s as %s", commit, name)
