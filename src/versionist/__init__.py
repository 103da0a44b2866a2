"""versionist: changelog generation and semver bumps from git history.

Commits carry their change type in footer tags (``Change-Type: minor``)
or in their subject. versionist reads the history since the last
documented version, calculates the next version, renders a changelog
entry and updates the project manifests.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
