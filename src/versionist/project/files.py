"""Version updates in plain source files.

Covers ``__version__`` assignments in Python modules, versions quoted
after an arbitrary regex, and bare VERSION files.
"""

from __future__ import annotations

import re
from pathlib import Path

from versionist.exceptions import ProjectError, VersionNotFoundError

INIT_PY_VERSION_PATTERN = (
    r"(__version__\s*=\s*)(['\"])(?:0|[1-9]\d*)\.(?:0|[1-9]\d*)\.(?:0|[1-9]\d*)\2"
)

REGEX_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
}


def parse_regex_flags(flags: str) -> re.RegexFlag:
    """Convert JavaScript-style flag letters (``"im"``) to re flags.

    ``g`` is accepted and ignored: every match is always replaced.

    Raises:
        ProjectError: If a flag letter is unknown
    """
    result = re.RegexFlag(0)
    for letter in flags:
        if letter == "g":
            continue
        if letter not in REGEX_FLAGS:
            raise ProjectError(f"Unsupported regex flag: {letter}")
        result |= REGEX_FLAGS[letter]
    return result


def replace_in_file(file_path: Path, pattern: re.Pattern[str], new_version: str, *, count: int = 0) -> None:
    """Replace the quoted version captured by a pattern.

    The pattern must capture the text before the quote as group 1 and the
    quote character as group 2.

    Raises:
        ProjectError: If the file does not exist
        VersionNotFoundError: If the pattern does not match
    """
    if not file_path.is_file():
        raise ProjectError(f"Version file not found: {file_path}")

    content = file_path.read_text()
    new_content, replaced = pattern.subn(
        lambda match: f"{match.group(1)}{match.group(2)}{new_version}{match.group(2)}",
        content,
        count=count,
    )

    if replaced == 0:
        raise VersionNotFoundError(f"Pattern does not match {file_path}")

    file_path.write_text(new_content)


def update_init_py_version(file_path: Path, new_version: str) -> None:
    """Update ``__version__ = "x.y.z"`` assignments in a Python module."""
    replace_in_file(file_path, re.compile(INIT_PY_VERSION_PATTERN), new_version)


def update_quoted_version(
    cwd: Path,
    new_version: str,
    *,
    file: str,
    regex: str | re.Pattern[str],
    regex_flags: str = "",
    base_dir: str = ".",
) -> Path:
    """Update the quoted version right after a regex match.

    Args:
        cwd: Project directory
        new_version: New version
        file: File to modify, relative to cwd/base_dir
        regex: Pattern leading up to the quoted version
        regex_flags: Extra flag letters, e.g. ``"m"``
        base_dir: Directory under cwd holding the file

    Returns:
        The updated file

    Raises:
        ProjectError: If a path is absolute or the file does not exist
        VersionNotFoundError: If the pattern does not match
    """
    if Path(base_dir).is_absolute():
        raise ProjectError("base_dir option can't be an absolute path")
    if Path(file).is_absolute():
        raise ProjectError("file option can't be an absolute path")

    flags = parse_regex_flags(regex_flags)
    if isinstance(regex, re.Pattern):
        source = regex.pattern
        flags |= regex.flags & ~re.UNICODE
    else:
        source = regex

    target = cwd / base_dir / file
    replace_in_file(target, re.compile(f"({source})([\"']).*?\\2", flags), new_version, count=1)
    return target


def write_version_file(cwd: Path, new_version: str) -> Path:
    """Write the version to a VERSION file, creating it if needed."""
    version_file = cwd / "VERSION"
    version_file.write_text(new_version)
    return version_file
