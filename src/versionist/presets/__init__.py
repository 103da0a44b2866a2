"""Built-in presets.

build_default_registry() assembles every preset that ships with
versionist. Callers can register more on the returned registry before
resolving a configuration.
"""

from __future__ import annotations

from versionist.core.templates import DEFAULT_TEMPLATE, ONELINE_TEMPLATE
from versionist.presets import changelog, commits, versions
from versionist.presets.registry import PresetRegistry

__all__ = ["PresetRegistry", "build_default_registry"]


def build_default_registry() -> PresetRegistry:
    """Create a registry holding the built-in presets."""
    registry = PresetRegistry()

    registry.register("subject_parser", "angular", commits.angular_subject)

    registry.register("include_commit_when", "angular", commits.angular_include)
    registry.register("include_commit_when", "has-changetype", commits.has_change_type)
    registry.register("include_commit_when", "has-changelog-entry", commits.has_changelog_entry)

    registry.register("get_increment_level_from_commit", "change-type", commits.change_type_level)
    registry.register("get_increment_level_from_commit", "subject", commits.subject_level)
    registry.register(
        "get_increment_level_from_commit", "change-type-or-subject", commits.change_type_or_subject_level
    )

    registry.register("transform_template_data", "changelog-entry", commits.changelog_entry)

    registry.register("get_changelog_documented_versions", "changelog-headers", changelog.changelog_headers)
    registry.register("get_current_base_version", "latest-documented", changelog.latest_documented)
    registry.register("get_git_reference_from_version", "v-prefix", changelog.v_prefix)
    registry.register("increment_version", "semver", changelog.semver_increment)
    registry.register("add_entry_to_changelog", "prepend", changelog.prepend)
    registry.register("add_entry_to_history_file", "yml-prepend", changelog.yml_prepend)

    registry.register("update_version", "npm", versions.npm)
    registry.register("update_version", "cargo", versions.cargo)
    registry.register("update_version", "pyproject", versions.pyproject)
    registry.register("update_version", "initPy", versions.init_py)
    registry.register("update_version", "init-py", versions.init_py)
    registry.register("update_version", "quoted", versions.quoted)
    registry.register("update_version", "update-version-file", versions.update_version_file)
    registry.register("update_version", "mixed", versions.mixed)

    registry.register("template", "default", DEFAULT_TEMPLATE)
    registry.register("template", "oneline", ONELINE_TEMPLATE)

    return registry
