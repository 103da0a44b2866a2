"""Tests for footer tag parsing."""

from __future__ import annotations

import pytest

from versionist.core.tags import Tag, is_tag_line, parse_footer_tag_lines, parse_tag_line


class TestIsTagLine:
    """Tests for is_tag_line()."""

    @pytest.mark.parametrize(
        "line",
        [
            "Change-Type: minor",
            "Changelog-Entry: Fix the thing",
            "Foo:",
            "foo_bar : baz",
            "See: https://example.com",
            "X-1:value",
            "-foo-: x",
            "123: x",
        ],
    )
    def test_tag_lines(self, line):
        """Key, optional whitespace and a colon make a tag line."""
        assert is_tag_line(line)

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "Hello World",
            "https://example.com",
            "Foo bar: baz",
            " Foo: bar",
            ": no key",
        ],
    )
    def test_non_tag_lines(self, line):
        """Prose, URLs and keys with spaces are not tag lines."""
        assert not is_tag_line(line)


class TestParseTagLine:
    """Tests for parse_tag_line()."""

    def test_key_and_value_are_trimmed(self):
        """Whitespace around key and value is removed."""
        assert parse_tag_line("Change-Type :  minor ") == Tag(key="Change-Type", value="minor")

    def test_empty_value_is_none(self):
        """A tag without value has None, not an empty string."""
        tag = parse_tag_line("Foo:")
        assert tag.key == "Foo"
        assert tag.value is None

    def test_value_keeps_colons(self):
        """Only the first colon separates key and value."""
        assert parse_tag_line("See: https://example.com").value == "https://example.com"

    def test_round_trip(self):
        """Formatting a tag as `key: value` parses back to the same tag."""
        tag = Tag(key="Changelog-Entry", value="Support nested changelogs")
        assert parse_tag_line(f"{tag.key}: {tag.value}") == tag


class TestParseFooterTagLines:
    """Tests for parse_footer_tag_lines()."""

    def test_simple_footer(self):
        """Every line becomes an entry, in order."""
        result = parse_footer_tag_lines(["Change-Type: patch", "Changelog-Entry: Fix y"])
        assert list(result.items()) == [("Change-Type", "patch"), ("Changelog-Entry", "Fix y")]

    def test_blank_lines_are_skipped(self):
        """Blank lines between tags are ignored."""
        assert parse_footer_tag_lines(["Foo: bar", "", "   ", "Baz: qux"]) == {"Foo": "bar", "Baz": "qux"}

    def test_duplicate_keys_share_a_counter(self):
        """Colliding keys get suffixes from one counter shared across keys."""
        result = parse_footer_tag_lines(["Foo: bar", "Foo: bar", "Bar: baz", "Foo: baz"])
        assert result == {"Foo": "bar", "Foo1": "bar", "Bar": "baz", "Foo2": "baz"}
        assert list(result) == ["Foo", "Foo1", "Bar", "Foo2"]

    def test_triple_key(self):
        """Three identical keys become Foo, Foo1 and Foo2."""
        result = parse_footer_tag_lines(["Foo: v1", "Foo: v2", "Foo: v3"])
        assert result == {"Foo": "v1", "Foo1": "v2", "Foo2": "v3"}

    def test_lower_case_footer_tags(self):
        """Mixed-case keys are also stored lower-cased."""
        result = parse_footer_tag_lines(["Change-Type: minor", "foo: bar"], lower_case_footer_tags=True)
        assert result == {"Change-Type": "minor", "change-type": "minor", "foo": "bar"}

    def test_lower_case_keys_are_not_duplicated(self):
        """Already lower-case keys are inserted once."""
        result = parse_footer_tag_lines(["foo: bar"], lower_case_footer_tags=True)
        assert result == {"foo": "bar"}

    def test_empty_input(self):
        """No lines give an empty mapping."""
        assert parse_footer_tag_lines([]) == {}

    def test_round_trip(self):
        """Formatting a mapping as tag lines and parsing it recovers the mapping."""
        tags = {"Change-Type": "minor", "Changelog-Entry": "Add x", "Signed-off-by": "Jo <jo@example.com>"}
        lines = [f"{key}: {value}" for key, value in tags.items()]
        assert parse_footer_tag_lines(lines) == tags
