"""
L1 Domain — Version selection (pure).
"""

from __future__ import annotations

import re

_STABLE_RE = re.compile(r"^\d+\.\d+\.\d+$")


def stable_versions(listing: str) -> list[str]:
    """Plain ``X.Y.Z`` entries of a version listing, in listing order."""
    return [line.strip() for line in listing.splitlines() if _STABLE_RE.match(line.strip())]


def pick_latest_version(listing: str, fallback: str) -> tuple[str, bool]:
    """Pick the "latest" stable version from ``rbenv install --list`` output.

    Latest is the lexicographically last ``X.Y.Z`` entry, matching the
    plain string sort the installer has always used.

    Returns:
        ``(version, found)``; ``found`` is False when *fallback* was used.
    """
    candidates = stable_versions(listing)
    if not candidates:
        return fallback, False
    return max(candidates), True
