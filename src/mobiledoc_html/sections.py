"""Render a single top-level section to an HTML fragment."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from mobiledoc_html.cards import CardRegistry, CardRender, TeardownCallback, render_card
from mobiledoc_html.document import (
    CardSection,
    ImageSection,
    ListSection,
    MarkupSection,
    MarkupType,
    Section,
)
from mobiledoc_html.markers import close_tag, escape_attribute, render_markers
from mobiledoc_html.tag_names import (
    CLASS_NAME_SECTION_TAG_NAMES,
    LIST_ITEM_TAG_NAME,
    is_valid_list_section_tag_name,
    is_valid_markup_section_tag_name,
    list_section_tag_name,
    markup_section_tag_name,
)

logger = logging.getLogger("mobiledoc_html.sections")

CARD_WRAPPER_TAG_NAME = "div"


@dataclass(slots=True)
class RenderPass:
    """State shared by the sections of one ``Renderer.render`` call."""

    markup_types: tuple[MarkupType, ...]
    registry: CardRegistry
    card_options: Any
    unknown_card_handler: CardRender | None = None
    teardown_callbacks: list[TeardownCallback] = field(default_factory=list)


def _open_section_tag(tag_name: str) -> str:
    if tag_name in CLASS_NAME_SECTION_TAG_NAMES:
        return f'<div class="{tag_name}">'
    return f"<{tag_name}>"


def _close_section_tag(tag_name: str) -> str:
    if tag_name in CLASS_NAME_SECTION_TAG_NAMES:
        return close_tag("div")
    return close_tag(tag_name)


def render_markup_section(section: MarkupSection, render_pass: RenderPass) -> str:
    if not is_valid_markup_section_tag_name(section.tag_name):
        logger.debug("Unexpected markup section tag name %r; using default", section.tag_name)
    tag_name = markup_section_tag_name(section.tag_name)
    body = render_markers(section.markers, render_pass.markup_types)
    return f"{_open_section_tag(tag_name)}{body}{_close_section_tag(tag_name)}"


def render_list_section(section: ListSection, render_pass: RenderPass) -> str:
    if not is_valid_list_section_tag_name(section.tag_name):
        logger.debug("Unexpected list section tag name %r; using default", section.tag_name)
    tag_name = list_section_tag_name(section.tag_name)
    items = "".join(
        f"<{LIST_ITEM_TAG_NAME}>"
        f"{render_markers(markers, render_pass.markup_types)}"
        f"{close_tag(LIST_ITEM_TAG_NAME)}"
        for markers in section.items
    )
    return f"<{tag_name}>{items}{close_tag(tag_name)}"


def render_image_section(section: ImageSection, render_pass: RenderPass) -> str:
    return f'<img src="{escape_attribute(section.src)}">'


def render_card_section(section: CardSection, render_pass: RenderPass) -> str:
    inner = render_card(
        section.name,
        section.payload,
        registry=render_pass.registry,
        card_options=render_pass.card_options,
        teardown_callbacks=render_pass.teardown_callbacks,
        unknown_card_handler=render_pass.unknown_card_handler,
    )
    return f"<{CARD_WRAPPER_TAG_NAME}>{inner}{close_tag(CARD_WRAPPER_TAG_NAME)}"


def render_section(section: Section, render_pass: RenderPass) -> str:
    """Dispatch ``section`` to its renderer and return the HTML fragment."""

    if isinstance(section, MarkupSection):
        return render_markup_section(section, render_pass)
    if isinstance(section, ListSection):
        return render_list_section(section, render_pass)
    if isinstance(section, ImageSection):
        return render_image_section(section, render_pass)
    if isinstance(section, CardSection):
        return render_card_section(section, render_pass)
    raise TypeError(f"unknown section: {section!r}")  # pragma: no cover
