"""End-to-end tests of the command line against real git repositories."""

from __future__ import annotations

import pytest
from click.testing import CliRunner
from conftest import requires_git

from versionist import __version__
from versionist.cli.main import cli

runner = CliRunner()

CONFIGURATION = """\
subject_parser = "angular"
edit_version = False
add_entry_to_changelog = "prepend"


def include_commit_when(commit):
    return commit.footer.get("Changelog-Entry")


def get_increment_level_from_commit(commit):
    return commit.footer.get("Change-Type")


template = "## {{ version }}\\n\\n{% for commit in commits %}\\n- {{ commit.footer['Changelog-Entry'] | capitalize }}\\n{% endfor %}"
"""

EXPECTED_CHANGELOG = "## 0.1.0\n\n- Fix z\n- Fix y\n- Implement x\n"


@pytest.fixture
def project(git_repo, monkeypatch):
    """A git repository with a versionist.conf.py, as working directory."""
    (git_repo / "versionist.conf.py").write_text(CONFIGURATION)
    monkeypatch.chdir(git_repo)
    return git_repo


@pytest.fixture
def annotated_history(project, create_commit):
    create_commit("feat: implement x", {"Changelog-Entry": "implement x", "Change-Type": "minor"})
    create_commit("fix: fix y", {"Changelog-Entry": "fix y", "Change-Type": "patch"})
    create_commit("fix: fix z", {"Changelog-Entry": "fix z", "Change-Type": "patch"})
    return project


def test_version_option():
    """--version prints the package version."""
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


@requires_git
class TestRun:
    """Tests for the default command."""

    def test_parsable_changelog(self, annotated_history):
        """Three annotated commits produce 0.1.0, newest first."""
        (annotated_history / "CHANGELOG.md").write_text("")

        result = runner.invoke(cli, [])

        assert result.exit_code == 0, result.output
        assert "Done" in result.stdout
        assert (annotated_history / "CHANGELOG.md").read_text() == EXPECTED_CHANGELOG

    def test_dry_run(self, annotated_history):
        """--dry prints the entry and writes nothing."""
        (annotated_history / "CHANGELOG.md").write_text("")

        result = runner.invoke(cli, ["--dry"])

        assert result.exit_code == 0, result.output
        assert "- Implement x" in result.stdout
        assert (annotated_history / "CHANGELOG.md").read_text() == ""

    def test_current(self, annotated_history):
        """--current overrides the base version."""
        (annotated_history / "CHANGELOG.md").write_text("")

        result = runner.invoke(cli, ["--current", "1.4.2"])

        assert result.exit_code == 0, result.output
        assert (annotated_history / "CHANGELOG.md").read_text().startswith("## 1.5.0\n")

    def test_missing_change_type(self, project, create_commit):
        """Commits without change types make the run fail."""
        create_commit("feat: implement x", {"Changelog-Entry": "Implement x"})

        result = runner.invoke(cli, [])

        assert result.exit_code == 1
        assert "No commits were annotated with a change type" in result.output

    def test_explicit_config_file(self, annotated_history):
        """--config selects another configuration file."""
        (annotated_history / "release.conf.py").write_text(CONFIGURATION.replace('"prepend"', '{"preset": "prepend"}'))
        (annotated_history / "versionist.conf.py").unlink()
        (annotated_history / "CHANGELOG.md").write_text("")

        result = runner.invoke(cli, ["--config", "release.conf.py"])

        assert result.exit_code == 0, result.output
        assert (annotated_history / "CHANGELOG.md").read_text() == EXPECTED_CHANGELOG

    def test_invalid_config(self, project, create_commit):
        """Invalid configuration is reported before anything runs."""
        (project / "versionist.conf.py").write_text("update_version = 'gradle'\n")
        create_commit("fix: x", {"Change-Type": "patch"})

        result = runner.invoke(cli, [])

        assert result.exit_code == 1
        assert "Invalid preset: update_version -> gradle" in result.output


@requires_git
class TestGetAndSet:
    """Tests for the get and set commands."""

    def test_get_before_and_after_release(self, annotated_history):
        """get reports the seeded version first, then the released one."""
        config = CONFIGURATION + "\n\ndef get_git_reference_from_version(version):\n    return f'TEST {version}'\n"
        (annotated_history / "versionist.conf.py").write_text(config)
        (annotated_history / "CHANGELOG.md").write_text("")

        initial_version = runner.invoke(cli, ["get", "version"])
        initial_reference = runner.invoke(cli, ["get", "reference"])
        release = runner.invoke(cli, [])
        next_version = runner.invoke(cli, ["get", "version"])
        next_reference = runner.invoke(cli, ["get", "reference"])

        assert release.exit_code == 0, release.output
        assert initial_version.stdout == "0.0.1\n"
        assert initial_reference.stdout == "TEST 0.0.1\n"
        assert next_version.stdout == "0.1.0\n"
        assert next_reference.stdout == "TEST 0.1.0\n"
        assert (annotated_history / "CHANGELOG.md").read_text() == EXPECTED_CHANGELOG

    def test_set(self, annotated_history):
        """set releases the given version whatever the change types say."""
        (annotated_history / "CHANGELOG.md").write_text("")

        result = runner.invoke(cli, ["set", "3.0.1"])

        assert result.exit_code == 0, result.output
        assert (annotated_history / "CHANGELOG.md").read_text() == "## 3.0.1\n\n- Fix z\n- Fix y\n- Implement x\n"

    def test_set_invalid_version(self, annotated_history):
        result = runner.invoke(cli, ["set", "latest"])

        assert result.exit_code == 1
        assert "Invalid version: latest" in result.output

    def test_get_rejects_unknown_target(self, project):
        result = runner.invoke(cli, ["get", "branch"])

        assert result.exit_code != 0
