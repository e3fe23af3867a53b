"""Built-in ``image`` card: renders ``payload["src"]`` as an image element."""

from __future__ import annotations

from collections.abc import Mapping

from mobiledoc_html.cards import Card, RenderContext
from mobiledoc_html.markers import escape_attribute

IMAGE_CARD_NAME = "image"


def render_image_card(context: RenderContext) -> str | None:
    payload = context.payload
    src = payload.get("src") if isinstance(payload, Mapping) else None
    if not src:
        return None
    return f'<img src="{escape_attribute(str(src))}">'


IMAGE_CARD = Card(name=IMAGE_CARD_NAME, render=render_image_card)
