"""Version control collaborators."""

from __future__ import annotations

from versionist.vcs.git import GitRepository

__all__ = ["GitRepository"]
