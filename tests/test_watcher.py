"""Tests for mobiledoc_html.watcher module."""

from __future__ import annotations

import asyncio
import sys
import types
from collections.abc import AsyncIterator
from pathlib import Path

import pytest

from mobiledoc_html.watcher import (
    ChangeBatch,
    WatchCycleResult,
    build_cycle_runner,
    filter_watched_files,
    import_watchfiles,
    run_watch_loop,
)

DOC = Path("/docs/post.json")
CONFIG = Path("/docs/mobiledoc-html.toml")


def test_import_watchfiles_names_the_extra_when_missing(monkeypatch) -> None:
    monkeypatch.setitem(sys.modules, "watchfiles", None)
    with pytest.raises(ImportError, match="pip install mobiledoc-html\\[watch\\]"):
        import_watchfiles()


def test_import_watchfiles_returns_module(monkeypatch) -> None:
    fake = types.ModuleType("watchfiles")
    monkeypatch.setitem(sys.modules, "watchfiles", fake)
    assert import_watchfiles() is fake


def test_filter_keeps_only_watched_files() -> None:
    changed = [DOC, CONFIG, Path("/docs/other.json"), Path("/docs/.post.json.swp")]
    assert filter_watched_files(changed, watched=[DOC, CONFIG]) == frozenset({DOC, CONFIG})
    assert filter_watched_files([Path("/x/y.json")], watched=[DOC]) == frozenset()


async def _batches(batches: list[ChangeBatch]) -> AsyncIterator[ChangeBatch]:
    for batch in batches:
        yield batch


def _run_loop(batches: list[ChangeBatch], run_cycle) -> tuple[list[str], list[BaseException]]:
    messages: list[str] = []
    errors: list[BaseException] = []
    asyncio.run(
        run_watch_loop(
            changes_iter=_batches(batches),
            run_cycle=run_cycle,
            on_event=messages.append,
            on_error=errors.append,
            watched=[DOC, CONFIG],
        )
    )
    return messages, errors


def _cycle(seen: list[frozenset[Path]], exit_code: int = 0):
    def run_cycle(changed: frozenset[Path]) -> WatchCycleResult:
        seen.append(changed)
        return WatchCycleResult(exit_code=exit_code, duration_s=0.5, changed_paths=changed)

    return run_cycle


def test_loop_renders_on_watched_change() -> None:
    seen: list[frozenset[Path]] = []
    messages, _ = _run_loop([{(1, str(CONFIG))}], _cycle(seen))
    assert seen == [frozenset({CONFIG})]
    assert messages == [
        "[watch] mobiledoc-html.toml changed, re-rendering",
        "[watch] rendered in 0.5s",
    ]


def test_loop_ignores_unrelated_changes() -> None:
    seen: list[frozenset[Path]] = []
    messages, _ = _run_loop([{(1, "/docs/readme.md")}], _cycle(seen))
    assert seen == []
    assert messages == []


def test_loop_reports_failed_renders_and_continues() -> None:
    seen: list[frozenset[Path]] = []
    messages, _ = _run_loop([{(1, str(DOC))}, {(2, str(DOC))}], _cycle(seen, exit_code=3))
    assert len(seen) == 2
    assert "[watch] render failed with exit code 3" in messages


def test_loop_continues_after_exception() -> None:
    calls: list[int] = []

    def flaky(changed: frozenset[Path]) -> WatchCycleResult:
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("boom")
        return WatchCycleResult(exit_code=0, duration_s=0.0, changed_paths=changed)

    _, errors = _run_loop([{(1, str(DOC))}, {(1, str(DOC))}], flaky)
    assert len(calls) == 2
    assert len(errors) == 1
    assert isinstance(errors[0], RuntimeError)


def test_build_cycle_runner_times_render() -> None:
    result = build_cycle_runner(lambda: 3)(frozenset({DOC}))
    assert result.exit_code == 3
    assert result.changed_paths == frozenset({DOC})
    assert result.duration_s >= 0.0
