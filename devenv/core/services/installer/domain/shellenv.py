"""
L1 Domain — Shell environment updates (pure).

Parses the ``export NAME=value`` lines printed by ``brew shellenv``
and applies them to an environment snapshot. Every function returns
a new dict; the input snapshot is never mutated.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

_EXPORT_RE = re.compile(r"^export\s+([A-Za-z_][A-Za-z0-9_]*)=(.*)$")

# ${PATH+:$PATH} and ${PATH:+:$PATH}: ":<PATH>" when PATH is set, else ""
_PATH_ALT_RE = re.compile(r"\$\{PATH:?\+:\$PATH\}")


def _unquote(value: str) -> str:
    value = value.strip().rstrip(";").strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value.strip("'\"")


def parse_shellenv(output: str) -> list[tuple[str, str]]:
    """Extract ``(name, raw_value)`` pairs from ``export`` lines.

    Lines that are not exports (comments, ``fpath[...]``, blank lines)
    are ignored. Surrounding quotes and a trailing ``;`` are stripped.
    """
    pairs: list[tuple[str, str]] = []
    for line in output.splitlines():
        m = _EXPORT_RE.match(line.strip())
        if m:
            pairs.append((m.group(1), _unquote(m.group(2))))
    return pairs


def apply_shellenv(output: str, env: Mapping[str, str]) -> dict[str, str]:
    """Return a copy of *env* with every export in *output* applied.

    ``$PATH`` / ``${PATH}`` inside a value expands to the PATH in effect
    at that point (so successive PATH exports compose).
    """
    updated = dict(env)
    for name, value in parse_shellenv(output):
        if "$PATH" in value or "${PATH" in value:
            current = updated.get("PATH", "")
            value = _PATH_ALT_RE.sub(lambda _: f":{current}" if current else "", value)
            value = value.replace("${PATH}", current).replace("$PATH", current)
        updated[name] = value
    return updated


def prepend_path(env: Mapping[str, str], directory: str) -> dict[str, str]:
    """Return a copy of *env* with *directory* first on PATH, if absent."""
    updated = dict(env)
    current = updated.get("PATH", "")
    if directory in current.split(":"):
        return updated
    updated["PATH"] = f"{directory}:{current}" if current else directory
    return updated


def ensure_paths(env: Mapping[str, str], directories: Iterable[str]) -> dict[str, str]:
    """Prepend each of *directories* to PATH unless already present."""
    updated = dict(env)
    for directory in directories:
        updated = prepend_path(updated, directory)
    return updated
