"""Card definitions, validation and the per-section card lifecycle.

A card is a named plugin that renders a card section to trusted HTML. Cards
are validated once when a registry is built; at render time they receive a
:class:`RenderContext` whose ``env.on_teardown`` hook registers cleanup
callbacks into the current render pass.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from mobiledoc_html.errors import (
    CardNotFoundError,
    InvalidCardError,
    InvalidCardRenderError,
    InvalidCardsArgumentError,
    InvalidCardTypeError,
    MissingRenderError,
)

logger = logging.getLogger("mobiledoc_html.cards")

CARD_TYPE_HTML = "html"

TeardownCallback = Callable[[], object]


@dataclass(frozen=True, slots=True)
class CardEnv:
    name: str
    on_teardown: Callable[[TeardownCallback], None]
    is_in_editor: bool = False


@dataclass(frozen=True, slots=True)
class RenderContext:
    env: CardEnv
    payload: Any
    options: Any


CardRender = Callable[[RenderContext], str | None]


@dataclass(frozen=True, slots=True)
class Card:
    name: str
    render: CardRender
    type: str = CARD_TYPE_HTML


def _card_field(card: object, key: str) -> Any:
    if isinstance(card, Mapping):
        return card.get(key)
    return getattr(card, key, None)


def validate_card(card: object) -> Card:
    """Check a card definition (a :class:`Card` or a mapping) and return it as a Card."""

    name = _card_field(card, "name")
    card_type = _card_field(card, "type")
    render = _card_field(card, "render")

    if card_type != CARD_TYPE_HTML:
        raise InvalidCardTypeError(
            str(name), f'Card "{name}" must be of type "{CARD_TYPE_HTML}", was "{card_type}"'
        )
    if not callable(render):
        raise MissingRenderError(str(name), f'Card "{name}" must define `render`')
    if not isinstance(name, str):
        raise InvalidCardError(repr(name), f"Card name must be a string, got {name!r}")

    if isinstance(card, Card):
        return card
    return Card(name=name, render=render, type=card_type)


class CardRegistry:
    """Name -> card lookup built from an ordered list of card definitions.

    The first card registered under a name wins. Cards in ``fallbacks`` are
    consulted only when no user card matches.
    """

    def __init__(self, cards: Sequence[object] | None, *, fallbacks: Sequence[Card] = ()) -> None:
        if cards is None:
            cards = []
        if not isinstance(cards, (list, tuple)):
            raise InvalidCardsArgumentError(
                f"`cards` must be passed as a list, got {type(cards).__name__}"
            )

        self._cards: dict[str, Card] = {}
        for raw in cards:
            card = validate_card(raw)
            self._cards.setdefault(card.name, card)

        self._fallbacks: dict[str, Card] = {}
        for card in fallbacks:
            self._fallbacks.setdefault(card.name, validate_card(card))

    @property
    def names(self) -> list[str]:
        return list(self._cards)

    def resolve(self, name: str) -> Card | None:
        card = self._cards.get(name)
        if card is None:
            card = self._fallbacks.get(name)
        return card


def _check_card_result(name: str, result: object) -> str:
    if result is None:
        return ""
    if isinstance(result, str):
        return result
    raise InvalidCardRenderError(
        name, f'Card "{name}" must render html, but result was {type(result).__name__}'
    )


def render_card(
    name: str,
    payload: Any,
    *,
    registry: CardRegistry,
    card_options: Any,
    teardown_callbacks: list[TeardownCallback],
    unknown_card_handler: CardRender | None = None,
) -> str:
    """Render one card section's inner HTML.

    Teardown callbacks registered by the card are appended to
    ``teardown_callbacks``, which belongs to the calling render pass.
    """

    def on_teardown(callback: TeardownCallback) -> None:
        teardown_callbacks.append(callback)

    context = RenderContext(
        env=CardEnv(name=name, on_teardown=on_teardown),
        payload={} if payload is None else payload,
        options=card_options,
    )

    card = registry.resolve(name)
    if card is not None:
        return _check_card_result(name, card.render(context))

    if unknown_card_handler is None:
        raise CardNotFoundError(
            name, f'Card "{name}" not found and no unknownCardHandler was configured'
        )

    logger.debug("Card %r not registered; using unknown card handler", name)
    return _check_card_result(name, unknown_card_handler(context))
