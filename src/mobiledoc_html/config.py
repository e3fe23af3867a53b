"""Configuration loading for the mobiledoc-html command line.

This module is intentionally small and deterministic: it only reads
`mobiledoc-html.toml`, performs light validation, and resolves the card
references it names when a renderer is built.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mobiledoc_html.errors import MobiledocConfigError
from mobiledoc_html.refs import resolve_ref
from mobiledoc_html.renderer import Renderer

CONFIG_FILENAME = "mobiledoc-html.toml"


@dataclass(frozen=True)
class RenderConfig:
    cards: list[str] = field(default_factory=list)
    unknown_card_handler: str | None = None


@dataclass(frozen=True)
class MobiledocConfig:
    version: int = 1
    render: RenderConfig = field(default_factory=RenderConfig)
    card_options: dict[str, Any] = field(default_factory=dict)
    path: Path | None = None


def find_config_file(start: Path) -> Path | None:
    """Walk upward from `start` (file or directory) looking for the config file."""

    cur = start
    try:
        if cur.is_file():
            cur = cur.parent
    except OSError:
        cur = cur.parent

    cur = cur.resolve()
    while True:
        candidate = cur / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if cur.parent == cur:
            return None
        cur = cur.parent


def _as_table(value: Any, *, name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise MobiledocConfigError(f"Expected [{name}] to be a table.")
    return value


def _as_str_list(value: Any, *, name: str) -> list[str]:
    if not isinstance(value, list) or any(not isinstance(x, str) for x in value):
        raise MobiledocConfigError(f"Expected {name} to be a list of strings.")
    return list(value)


def _as_int(value: Any, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise MobiledocConfigError(f"Expected {name} to be an integer.")
    return value


def _as_str(value: Any, *, name: str) -> str:
    if not isinstance(value, str):
        raise MobiledocConfigError(f"Expected {name} to be a string.")
    return value


def load_config(config_path: Path) -> MobiledocConfig:
    """Load and validate a `mobiledoc-html.toml` file."""

    try:
        raw = config_path.read_bytes()
    except FileNotFoundError as e:
        raise MobiledocConfigError(f"Missing {CONFIG_FILENAME} at: {config_path}") from e
    except OSError as e:
        raise MobiledocConfigError(f"Failed reading config file: {config_path}") from e

    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise MobiledocConfigError(f"Config is not valid UTF-8: {config_path}") from e
    except tomllib.TOMLDecodeError as e:
        raise MobiledocConfigError(f"Invalid TOML in {config_path}: {e}") from e

    version = data.get("version", None)
    if version is None:
        raise MobiledocConfigError(f"Missing required `version = 1` in {CONFIG_FILENAME}.")
    version_i = _as_int(version, name="version")
    if version_i != 1:
        raise MobiledocConfigError(f"Unsupported config version: {version_i} (expected 1).")

    render_tbl = _as_table(data.get("render"), name="render")
    card_options = _as_table(data.get("card_options"), name="card_options")

    if "cards" in render_tbl:
        cards = _as_str_list(render_tbl["cards"], name="render.cards")
    else:
        cards = []

    unknown_card_handler: str | None = None
    if "unknown_card_handler" in render_tbl:
        unknown_card_handler = _as_str(
            render_tbl["unknown_card_handler"], name="render.unknown_card_handler"
        )

    return MobiledocConfig(
        version=version_i,
        render=RenderConfig(cards=cards, unknown_card_handler=unknown_card_handler),
        card_options=card_options,
        path=config_path,
    )


def _resolve(ref: str, *, name: str) -> object:
    try:
        return resolve_ref(ref)
    except (ValueError, TypeError) as e:
        raise MobiledocConfigError(f"Invalid reference in {name}: {ref!r} ({e})") from e
    except (ImportError, AttributeError) as e:
        raise MobiledocConfigError(f"Could not resolve {name} entry {ref!r}: {e}") from e


def build_renderer(config: MobiledocConfig) -> Renderer:
    """Resolve the configured references and construct a Renderer.

    A card reference may point at a single card or at a list/tuple of cards.
    """

    cards: list[object] = []
    for ref in config.render.cards:
        obj = _resolve(ref, name="render.cards")
        if isinstance(obj, (list, tuple)):
            cards.extend(obj)
        else:
            cards.append(obj)

    handler = None
    if config.render.unknown_card_handler is not None:
        handler = _resolve(config.render.unknown_card_handler, name="render.unknown_card_handler")
        if not callable(handler):
            raise MobiledocConfigError(
                f"render.unknown_card_handler {config.render.unknown_card_handler!r} "
                "is not callable."
            )

    return Renderer(cards, card_options=config.card_options, unknown_card_handler=handler)
