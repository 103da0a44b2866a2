"""Core business logic for versionist.

This package contains the main functionality:
- tags: Footer tag parsing
- commits: git log parsing into commit records
- version: Increment levels and semver helpers
- changelog: Next version calculation and entry rendering
- pipeline: End-to-end orchestration
"""

from __future__ import annotations

from versionist.core.changelog import TemplateData, calculate_next_version, generate_changelog
from versionist.core.commits import Commit, parse_commit, parse_git_log_output
from versionist.core.pipeline import ChangelogPipeline, PipelineResult
from versionist.core.tags import is_tag_line, parse_footer_tag_lines, parse_tag_line
from versionist.core.version import (
    IncrementLevel,
    calculate_next_increment_level,
    get_greater_version,
    increment_version,
    is_valid_increment_level,
)

__all__ = [
    "ChangelogPipeline",
    "Commit",
    "IncrementLevel",
    "PipelineResult",
    "TemplateData",
    "calculate_next_increment_level",
    "calculate_next_version",
    "generate_changelog",
    "get_greater_version",
    "increment_version",
    "is_tag_line",
    "is_valid_increment_level",
    "parse_commit",
    "parse_footer_tag_lines",
    "parse_git_log_output",
    "parse_tag_line",
]
