"""Re-render a document whenever it, or the config file, changes on disk."""

from __future__ import annotations

import importlib
import time
from collections.abc import AsyncIterator, Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Any

# watchfiles yields batches of (change, path) pairs.
ChangeBatch = set[tuple[Any, str]]


@dataclass(frozen=True, slots=True)
class WatchCycleResult:
    exit_code: int
    duration_s: float
    changed_paths: frozenset[Path]


def import_watchfiles() -> ModuleType:
    """Return the watchfiles module, or raise ImportError naming the ``watch`` extra."""
    try:
        return importlib.import_module("watchfiles")
    except ImportError:
        raise ImportError(
            "watchfiles is required for --watch. "
            "Install it with: pip install mobiledoc-html[watch]"
        ) from None


def filter_watched_files(changed: Iterable[Path], *, watched: list[Path]) -> frozenset[Path]:
    """Keep only changed paths that are one of the watched files."""
    targets = {p.resolve() for p in watched}
    return frozenset(p for p in changed if p.resolve() in targets)


def build_cycle_runner(
    render: Callable[[], int],
) -> Callable[[frozenset[Path]], WatchCycleResult]:
    """Wrap a zero-argument render command into a timed watch cycle."""

    def runner(changed: frozenset[Path]) -> WatchCycleResult:
        t0 = time.monotonic()
        rc = render()
        return WatchCycleResult(
            exit_code=rc, duration_s=time.monotonic() - t0, changed_paths=changed
        )

    return runner


async def run_watch_loop(
    *,
    changes_iter: AsyncIterator[ChangeBatch],
    run_cycle: Callable[[frozenset[Path]], WatchCycleResult],
    on_event: Callable[[str], None],
    on_error: Callable[[BaseException], None],
    watched: list[Path],
) -> None:
    """Render once per batch that touches a watched file; errors never stop the loop."""
    async for batch in changes_iter:
        changed = filter_watched_files((Path(p) for _, p in batch), watched=watched)
        if not changed:
            continue

        on_event(f"[watch] {', '.join(sorted(p.name for p in changed))} changed, re-rendering")
        try:
            result = run_cycle(changed)
        except Exception as exc:
            on_error(exc)
            continue

        if result.exit_code == 0:
            on_event(f"[watch] rendered in {result.duration_s:.1f}s")
        else:
            on_event(f"[watch] render failed with exit code {result.exit_code}")
