"""Rebuild nested inline markup from a flat marker list.

Each marker opens zero or more markup types, contributes a run of text, and
then closes some number of the currently open markups. An explicit stack of
open entries keeps opens and closes aligned: markups whose tag name is not
whitelisted still occupy a slot, they just emit no tags.
"""

from __future__ import annotations

import html
import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final

from mobiledoc_html.document import Marker, MarkupType
from mobiledoc_html.tag_names import markup_type_tag_name
from mobiledoc_html.whitespace import normalize_whitespace

logger = logging.getLogger("mobiledoc_html.markers")

_ATTRIBUTE_NAME = re.compile(r"[A-Za-z_:][-A-Za-z0-9_:.]*")


@dataclass(frozen=True, slots=True)
class OpenTag:
    tag_name: str


class _Suppressed:
    __slots__ = ()

    def __repr__(self) -> str:
        return "SUPPRESSED"


SUPPRESSED: Final = _Suppressed()

StackEntry = OpenTag | _Suppressed


def escape_text(text: str) -> str:
    """Escape text content and preserve its runs of spaces."""

    return normalize_whitespace(html.escape(text, quote=False))


def escape_attribute(value: str) -> str:
    return html.escape(value, quote=True)


def render_attributes(attributes: Sequence[tuple[str, str]]) -> str:
    """Render ``key="value"`` pairs with a leading space each, dropping unusable names."""

    out: list[str] = []
    for key, value in attributes:
        if not _ATTRIBUTE_NAME.fullmatch(key):
            logger.debug("Dropping attribute with invalid name %r", key)
            continue
        out.append(f' {key.lower()}="{escape_attribute(value)}"')
    return "".join(out)


def open_tag(tag_name: str, attributes: Sequence[tuple[str, str]] = ()) -> str:
    return f"<{tag_name}{render_attributes(attributes)}>"


def close_tag(tag_name: str) -> str:
    return f"</{tag_name}>"


def _open_markup(index: int, markup_types: Sequence[MarkupType]) -> tuple[StackEntry, str]:
    if not 0 <= index < len(markup_types):
        logger.debug("Markup index %d is out of range; suppressing", index)
        return SUPPRESSED, ""

    markup = markup_types[index]
    tag_name = markup_type_tag_name(markup.tag_name)
    if tag_name is None:
        logger.debug("Suppressing markup with disallowed tag name %r", markup.tag_name)
        return SUPPRESSED, ""
    return OpenTag(tag_name), open_tag(tag_name, markup.attributes)


def _close(entry: StackEntry) -> str:
    if isinstance(entry, OpenTag):
        return close_tag(entry.tag_name)
    return ""


def render_markers(markers: Sequence[Marker], markup_types: Sequence[MarkupType]) -> str:
    """Render a marker list to an HTML fragment.

    Close counts larger than the number of open entries are clamped. Entries
    still open after the last marker are closed, innermost first, so the
    fragment is always balanced.
    """

    stack: list[StackEntry] = []
    out: list[str] = []

    for marker in markers:
        for index in marker.open_markup_indices:
            entry, html_open = _open_markup(index, markup_types)
            stack.append(entry)
            out.append(html_open)

        out.append(escape_text(marker.text))

        close_count = min(marker.close_count, len(stack))
        if close_count < marker.close_count:
            logger.debug(
                "Marker closes %d markup(s) but only %d are open",
                marker.close_count,
                len(stack),
            )
        for _ in range(close_count):
            out.append(_close(stack.pop()))

    while stack:
        out.append(_close(stack.pop()))

    return "".join(out)
