"""Document renderer: Mobiledoc 0.2.0 -> HTML plus a teardown handle."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from mobiledoc_html.cards import CardRegistry, CardRender, TeardownCallback
from mobiledoc_html.document import parse_mobiledoc
from mobiledoc_html.image_card import IMAGE_CARD
from mobiledoc_html.sections import RenderPass, render_section

logger = logging.getLogger("mobiledoc_html.renderer")

ROOT_TAG_NAME = "div"


@dataclass(frozen=True, slots=True)
class RenderResult:
    html: str
    teardown: Callable[[], None]


def _make_teardown(callbacks: Sequence[TeardownCallback]) -> Callable[[], None]:
    def teardown() -> None:
        for callback in callbacks:
            callback()

    return teardown


class Renderer:
    """Render Mobiledoc documents to HTML.

    ``cards`` is an ordered list of card definitions (:class:`~mobiledoc_html.cards.Card`
    instances or mappings with ``name``/``type``/``render``), validated here.
    ``card_options`` is passed to every card as ``options``. When a card section
    names an unregistered card, ``unknown_card_handler`` is called with the same
    context a card would get; without one, rendering raises CardNotFoundError.

    An instance can be reused and re-entered (cards may render nested
    documents with it): every ``render`` call keeps its own teardown list.
    """

    def __init__(
        self,
        cards: Sequence[object] | None = None,
        *,
        card_options: Any = None,
        unknown_card_handler: CardRender | None = None,
    ) -> None:
        if unknown_card_handler is not None and not callable(unknown_card_handler):
            raise TypeError(
                f"`unknown_card_handler` must be callable, got {type(unknown_card_handler).__name__}"
            )

        self.registry = CardRegistry(cards, fallbacks=[IMAGE_CARD])
        self.card_options = {} if card_options is None else card_options
        self.unknown_card_handler = unknown_card_handler

    def render(self, mobiledoc: Any) -> RenderResult:
        """Render a wire-format document.

        Raises VersionMismatchError before rendering anything if the version is
        not supported, and propagates card errors; no partial HTML is returned.
        """

        doc = parse_mobiledoc(mobiledoc)
        render_pass = RenderPass(
            markup_types=doc.markup_types,
            registry=self.registry,
            card_options=self.card_options,
            unknown_card_handler=self.unknown_card_handler,
        )

        body = "".join(render_section(section, render_pass) for section in doc.sections)
        logger.debug(
            "Rendered %d section(s), %d teardown callback(s)",
            len(doc.sections),
            len(render_pass.teardown_callbacks),
        )
        return RenderResult(
            html=f"<{ROOT_TAG_NAME}>{body}</{ROOT_TAG_NAME}>",
            teardown=_make_teardown(render_pass.teardown_callbacks),
        )


def render(mobiledoc: Any, **options: Any) -> RenderResult:
    """Render ``mobiledoc`` with a one-off :class:`Renderer` built from ``options``."""

    return Renderer(**options).render(mobiledoc)
