"""Commit records and ``git log`` output parsing.

Commits are read with a ``--pretty`` format that makes git emit YAML.
Each record has a hash, an author, a subject and a body; the body is then
split into free-form prose and a trailing block of footer tags.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import yaml

from versionist.core.tags import is_tag_line, parse_footer_tag_lines
from versionist.exceptions import InvalidCommitError

# The body always starts with a static line indented like the rest of the
# block. Without it, a body whose first line is indented would make the YAML
# block scalar invalid. The parser drops it again.
BODY_SENTINEL = "XXX"

GIT_LOG_PRETTY_FORMAT = "%n".join(
    [
        "- hash: %H",
        "  author: >-",
        "    %an",
        "  subject: >-",
        "    %s",
        "  body: |-",
        f"    {BODY_SENTINEL}",
        "    %w(0,0,4)%b",
    ]
)


def _identity(value: Any) -> Any:
    return value


@dataclass
class Commit:
    """A commit from project history.

    ``subject`` and ``body`` are usually strings, but parser hooks may turn
    them into richer values (the ``angular`` subject parser returns a
    mapping with ``type``, ``scope`` and ``title``).
    """

    subject: Any
    body: Any
    footer: dict[str, str | None] = field(default_factory=dict)
    hash: str | None = None
    author: str | None = None
    nested: list[Any] | None = None


def get_git_log_revision_range(start_reference: str | None = None, end_reference: str = "HEAD") -> str:
    """Get the ``git log`` revision range.

    Args:
        start_reference: Exclusive start reference, or None for the first commit
        end_reference: Inclusive end reference

    Returns:
        ``start..end``, or just ``end`` when there is no start
    """
    if start_reference:
        return f"{start_reference}..{end_reference}"
    # A single reference lists everything from the root commit up to it
    return end_reference


def get_git_log_arguments(
    git_directory: str,
    *,
    start_reference: str | None = None,
    end_reference: str = "HEAD",
    include_merge_commits: bool = False,
) -> list[str]:
    """Build the ``git`` arguments that print history as YAML.

    Args:
        git_directory: Path to the ``.git`` directory
        start_reference: Exclusive start reference
        end_reference: Inclusive end reference
        include_merge_commits: Whether merge commits are listed

    Returns:
        Argument list, without the leading ``git``

    Raises:
        ValueError: If git_directory is empty
    """
    if not git_directory:
        raise ValueError("Missing the git_directory option")

    args = [f"--git-dir={git_directory}", "log", f"--pretty={GIT_LOG_PRETTY_FORMAT}"]

    if not include_merge_commits:
        args.append("--no-merges")

    args.append(get_git_log_revision_range(start_reference, end_reference))
    return args


def split_footer(body: str) -> tuple[list[str], list[str]]:
    """Split a commit body into prose lines and trailing footer tag lines.

    Lines are scanned from the bottom. The footer is the unbroken run of
    tag lines at the end of the body: the first blank or non-tag line ends
    it, and every line above that belongs to the body whatever its shape.

    Args:
        body: Commit body

    Returns:
        Tuple of (body lines, footer lines), both in original order
    """
    body_lines: list[str] = []
    footer_lines: list[str] = []
    considering_tags = True

    for line in reversed(body.split("\n")):
        is_tag = is_tag_line(line)
        if not line.strip() or not is_tag:
            considering_tags = False

        if considering_tags:
            footer_lines.append(line)
        else:
            body_lines.append(line)

    body_lines.reverse()
    footer_lines.reverse()
    return body_lines, footer_lines


def parse_commit(
    record: dict[str, Any],
    *,
    subject_parser: Callable[[Any], Any] = _identity,
    body_parser: Callable[[Any], Any] = _identity,
    parse_footer_tags: bool = True,
    lower_case_footer_tags: bool = False,
) -> Commit:
    """Turn one raw log record into a Commit.

    Args:
        record: Mapping with ``subject``, ``body`` and optionally ``hash``/``author``
        subject_parser: Hook applied to the subject
        body_parser: Hook applied to the body, after footer extraction
        parse_footer_tags: Whether trailing footer tags are extracted
        lower_case_footer_tags: Also store mixed-case tag keys lower-cased

    Returns:
        The structured commit

    Raises:
        InvalidCommitError: If the subject or the body is missing
    """
    if record.get("subject") is None:
        raise InvalidCommitError("Invalid commit: no subject")

    if record.get("body") is None:
        raise InvalidCommitError("Invalid commit: no body")

    # Drop the sentinel line
    raw_body = "\n".join(str(record["body"]).split("\n")[1:])

    commit_hash = record.get("hash")
    author = record.get("author")
    subject = subject_parser(str(record["subject"]))

    if not parse_footer_tags:
        return Commit(
            subject=subject,
            body=body_parser(raw_body),
            hash=str(commit_hash) if commit_hash is not None else None,
            author=str(author) if author is not None else None,
        )

    body_lines, footer_lines = split_footer(raw_body)

    return Commit(
        subject=subject,
        body=body_parser("\n".join(body_lines)),
        footer=parse_footer_tag_lines(footer_lines, lower_case_footer_tags=lower_case_footer_tags),
        hash=str(commit_hash) if commit_hash is not None else None,
        author=str(author) if author is not None else None,
    )


def parse_git_log_output(
    output: str,
    *,
    subject_parser: Callable[[Any], Any] = _identity,
    body_parser: Callable[[Any], Any] = _identity,
    parse_footer_tags: bool = True,
    lower_case_footer_tags: bool = False,
) -> list[Commit]:
    """Parse YAML ``git log`` output into commits.

    Args:
        output: Output of ``git log`` run with GIT_LOG_PRETTY_FORMAT
        subject_parser: Hook applied to every subject
        body_parser: Hook applied to every body
        parse_footer_tags: Whether trailing footer tags are extracted
        lower_case_footer_tags: Also store mixed-case tag keys lower-cased

    Returns:
        Commits in log order (newest first for plain ``git log``)

    Raises:
        InvalidCommitError: If a record has no subject or no body
    """
    records = yaml.safe_load(output) or []

    return [
        parse_commit(
            record,
            subject_parser=subject_parser,
            body_parser=body_parser,
            parse_footer_tags=parse_footer_tags,
            lower_case_footer_tags=lower_case_footer_tags,
        )
        for record in records
    ]
