"""Built-in changelog entry templates.

Both templates render the commits of one version. A commit with a
``nested`` list (entries of upstream changelogs, each with ``version``,
``date`` and ``commits``) is rendered as a collapsible ``<details>`` block
whose lines are quoted with one more ``>`` per nesting level.
"""

from __future__ import annotations

_COMMON = """\
{% macro prefix(block) %}{% if block %}{{ block }} {% endif %}{% endmacro %}
{% macro render_subject(commit) %}{{ commit.subject }}{% if commit.author %} [{{ commit.author }}]{% endif %}{% endmacro %}
{% macro render_commits(entry, nesting, block) %}
{{ render_header(entry, nesting, block) }}
{{ prefix(block) }}
{% for commit in entry.commits %}
{% if commit.nested %}
{{ prefix(block) }}
{{ prefix(block) }}<details>
{{ prefix(block) }}<summary> {{ render_subject(commit) }} </summary>
{{ prefix(block) }}
{% for nested in commit.nested %}{{ render_commits(nested, nesting ~ "#", block ~ ">") }}{% endfor %}

{{ prefix(block) }}</details>
{{ prefix(block) }}
{% else %}
{{ prefix(block) }}* {{ render_subject(commit) }}
{% endif %}
{% endfor %}
{{ prefix(block) }}
{% endmacro %}
"""

DEFAULT_TEMPLATE = (
    """\
{% macro render_header(entry, nesting, block) %}
{{ prefix(block) }}{{ nesting }} {% if nesting == "#" %}v{% endif %}{{ entry.version }}
{{ prefix(block) }}{{ nesting }}# ({{ entry.date | format_date }})
{%- endmacro %}
"""
    + _COMMON
    + """\
{{ render_commits({"version": version, "date": date, "commits": commits}, "#", "") }}"""
)

ONELINE_TEMPLATE = (
    """\
{% macro render_header(entry, nesting, block) %}
{{ prefix(block) }}{{ nesting }} {{ entry.version }} - {{ entry.date | format_date }}
{%- endmacro %}
"""
    + _COMMON
    + """\
{{ render_commits({"version": version, "date": date, "commits": commits}, "##", "") }}"""
)

INITIAL_CHANGELOG = """\
# Changelog

All notable changes to this project will be documented in this file
automatically by Versionist. DO NOT EDIT THIS FILE MANUALLY!
This project adheres to [Semantic Versioning](http://semver.org/).

"""
