"""Footer tag parsing.

A footer tag is a ``Key: value`` line at the end of a commit message, e.g.::

    Change-Type: minor
    Changelog-Entry: Support nested changelogs

Pure implementation: no I/O, no logging.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import NamedTuple

# Identifier, optional whitespace, colon, then end of line or anything
# that does not start a URL scheme (``https://``).
TAG_LINE_PATTERN: re.Pattern[str] = re.compile(r"^[A-Za-z0-9_-]+\s*:(?:[^/]|$)")


class Tag(NamedTuple):
    """A single parsed footer tag."""

    key: str
    value: str | None


@dataclass(frozen=True)
class _FooterAccumulator:
    tags: dict[str, str | None]
    counter: int = 1

    def insert(self, key: str, value: str | None) -> _FooterAccumulator:
        if key in self.tags:
            return _FooterAccumulator(
                tags={**self.tags, f"{key}{self.counter}": value},
                counter=self.counter + 1,
            )
        return _FooterAccumulator(tags={**self.tags, key: value}, counter=self.counter)


def is_tag_line(line: str) -> bool:
    """Check whether a commit line is a footer tag.

    Args:
        line: A single commit message line

    Returns:
        True if the line looks like ``Key: value`` or ``Key:``
    """
    return TAG_LINE_PATTERN.match(line) is not None


def parse_tag_line(line: str) -> Tag:
    """Parse a footer tag line.

    The line is split at the first colon, so values may contain colons
    themselves (``See: https://example.com``).

    Args:
        line: A tag line

    Returns:
        The parsed tag; the value is None when nothing follows the colon
    """
    key, _, value = line.partition(":")
    return Tag(key=key.strip(), value=value.strip() or None)


def parse_footer_tag_lines(
    lines: list[str],
    *,
    lower_case_footer_tags: bool = False,
) -> dict[str, str | None]:
    """Parse footer tag lines into an ordered mapping.

    Blank lines are ignored. A key that was already seen gets a numeric
    suffix taken from a counter shared by all collisions in this call, so
    three ``Foo`` tags become ``Foo``, ``Foo1`` and ``Foo2``.

    Args:
        lines: Footer tag lines, in message order
        lower_case_footer_tags: Also store each mixed-case key lower-cased

    Returns:
        Mapping of tag keys to values, in insertion order
    """
    accumulator = _FooterAccumulator(tags={})

    for line in lines:
        if not line.strip():
            continue

        tag = parse_tag_line(line)
        accumulator = accumulator.insert(tag.key, tag.value)

        if lower_case_footer_tags and tag.key != tag.key.lower():
            accumulator = accumulator.insert(tag.key.lower(), tag.value)

    return accumulator.tags
