"""
L1 Domain — Dependency resolution (pure).

Orders a set of requested packages so that every package comes
after all of its prerequisites. Iterative depth-first walk that tracks
the current path: a back-edge onto the path is a cycle, recorded and
skipped instead of looping.

No I/O, no subprocess.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from devenv.core.models.package import Package

logger = logging.getLogger(__name__)


@dataclass
class ResolutionResult:
    """Installation order for one request."""

    order: list[str] = field(default_factory=list)
    unknown: list[str] = field(default_factory=list)
    cycles: list[list[str]] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        """False when a cycle or a missing prerequisite left packages out."""
        return not self.skipped

    def __iter__(self):
        return iter(self.order)

    def __len__(self) -> int:
        return len(self.order)

    def to_dict(self) -> dict:
        return {
            "order": list(self.order),
            "unknown": list(self.unknown),
            "cycles": [list(c) for c in self.cycles],
            "skipped": list(self.skipped),
            "complete": self.complete,
        }


@dataclass
class _Frame:
    """One package on the walk stack, with its remaining prerequisites."""

    pid: str
    deps: Iterator[str]
    ok: bool = True


def resolve(
    requested: Iterable[str],
    catalog: Mapping[str, Package],
) -> ResolutionResult:
    """Resolve *requested* ids into a dependency-respecting install order.

    - Unknown requested ids are dropped (recorded in ``unknown``),
      never an error.
    - Duplicates resolve once; first-resolved order is kept.
    - Prerequisites are visited in declared order, before the package.
    - A package on a cycle, depending on one, or depending on an id
      missing from the catalog is left out of ``order`` and listed
      in ``skipped``.

    The walk keeps its own stack, so chain depth is not limited by
    the interpreter's recursion limit.

    Args:
        requested: Package ids, in the order the user asked for them.
        catalog: id → descriptor mapping.

    Returns:
        ResolutionResult; ``order`` is a topological order of the
        subgraph reachable from the request.
    """
    result = ResolutionResult()
    resolved: set[str] = set()
    blocked: set[str] = set()
    path: list[str] = []
    on_path: set[str] = set()

    def note_unknown(pid: str) -> None:
        if pid not in result.unknown:
            result.unknown.append(pid)

    def push(frames: list[_Frame], pid: str) -> None:
        frames.append(_Frame(pid, iter(catalog[pid].dependencies)))
        path.append(pid)
        on_path.add(pid)

    for root in requested:
        if root in resolved or root in blocked:
            continue
        if root not in catalog:
            note_unknown(root)
            logger.debug("Unknown package '%s' dropped", root)
            continue

        frames: list[_Frame] = []
        push(frames, root)
        while frames:
            frame = frames[-1]
            dep = next(frame.deps, None)

            if dep is not None:
                if dep in resolved:
                    continue
                if dep in blocked:
                    frame.ok = False
                elif dep in on_path:
                    cycle = path[path.index(dep):] + [dep]
                    result.cycles.append(cycle)
                    logger.warning("Dependency cycle: %s", " → ".join(cycle))
                    frame.ok = False
                elif dep not in catalog:
                    note_unknown(dep)
                    logger.warning(
                        "'%s' depends on unknown package '%s'", frame.pid, dep,
                    )
                    frame.ok = False
                else:
                    push(frames, dep)
                continue

            frames.pop()
            path.pop()
            on_path.discard(frame.pid)
            if frame.ok:
                resolved.add(frame.pid)
                result.order.append(frame.pid)
            else:
                blocked.add(frame.pid)
                result.skipped.append(frame.pid)
                if frames:
                    frames[-1].ok = False

    if result.skipped:
        logger.warning(
            "Could not resolve all dependencies; skipped: %s",
            ", ".join(result.skipped),
        )

    return result


def find_cycles(catalog: Mapping[str, Package]) -> list[list[str]]:
    """Return every dependency cycle reachable in *catalog*."""
    return resolve(catalog.keys(), catalog).cycles
