"""Mobiledoc 0.2.0 document model.

The wire format is a JSON-compatible value::

    {"version": "0.2.0", "sections": [markup_types, sections]}

Sections are positional lists tagged by a numeric type; markers reference
markup types by their index in ``markup_types``. Parsing here is purely
structural. Tag names are kept verbatim; whitelisting happens at render time.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from mobiledoc_html.errors import MalformedMobiledocError, VersionMismatchError

MOBILEDOC_VERSION = "0.2.0"

MARKUP_SECTION_TYPE = 1
IMAGE_SECTION_TYPE = 2
LIST_SECTION_TYPE = 3
CARD_SECTION_TYPE = 10


@dataclass(frozen=True, slots=True)
class MarkupType:
    tag_name: str
    attributes: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True, slots=True)
class Marker:
    open_markup_indices: tuple[int, ...]
    close_count: int
    text: str


@dataclass(frozen=True, slots=True)
class MarkupSection:
    tag_name: str
    markers: tuple[Marker, ...]


@dataclass(frozen=True, slots=True)
class ImageSection:
    src: str


@dataclass(frozen=True, slots=True)
class ListSection:
    tag_name: str
    items: tuple[tuple[Marker, ...], ...]


@dataclass(frozen=True, slots=True)
class CardSection:
    name: str
    payload: Any = field(default_factory=dict)


Section: TypeAlias = MarkupSection | ImageSection | ListSection | CardSection


@dataclass(frozen=True, slots=True)
class Mobiledoc:
    version: str
    markup_types: tuple[MarkupType, ...]
    sections: tuple[Section, ...]


def _as_list(value: Any, *, name: str) -> Sequence[Any]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise MalformedMobiledocError(f"Expected {name} to be a list.")
    return value


def _as_str(value: Any, *, name: str) -> str:
    if not isinstance(value, str):
        raise MalformedMobiledocError(f"Expected {name} to be a string.")
    return value


def _as_int(value: Any, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise MalformedMobiledocError(f"Expected {name} to be an integer.")
    return value


def parse_markup_type(raw: Any) -> MarkupType:
    """Parse ``[tagName]`` or ``[tagName, [key, value, key, value, ...]]``."""

    items = _as_list(raw, name="markup type")
    if not items:
        raise MalformedMobiledocError("Expected markup type to have a tag name.")
    tag_name = _as_str(items[0], name="markup type tag name")

    attributes: list[tuple[str, str]] = []
    if len(items) > 1 and items[1] is not None:
        flat = _as_list(items[1], name="markup type attributes")
        if len(flat) % 2:
            raise MalformedMobiledocError(
                f"Expected attributes of markup type {tag_name!r} to be key/value pairs."
            )
        for i in range(0, len(flat), 2):
            key = _as_str(flat[i], name="attribute name")
            attributes.append((key, str(flat[i + 1])))

    return MarkupType(tag_name=tag_name, attributes=tuple(attributes))


def parse_marker(raw: Any) -> Marker:
    """Parse ``[openMarkupIndices, closeCount, text]``."""

    items = _as_list(raw, name="marker")
    if len(items) != 3:
        raise MalformedMobiledocError(
            "Expected marker to be [openMarkupIndices, closeCount, text]."
        )
    opens = tuple(
        _as_int(i, name="open markup index") for i in _as_list(items[0], name="open markups")
    )
    close_count = _as_int(items[1], name="close count")
    # Negative close counts close nothing.
    return Marker(
        open_markup_indices=opens,
        close_count=max(close_count, 0),
        text=_as_str(items[2], name="marker text"),
    )


def parse_markers(raw: Any) -> tuple[Marker, ...]:
    return tuple(parse_marker(m) for m in _as_list(raw, name="markers"))


def parse_section(raw: Any) -> Section:
    """Parse one section tuple, dispatching on its numeric type."""

    items = _as_list(raw, name="section")
    if not items:
        raise MalformedMobiledocError("Expected section to start with a section type.")
    section_type = _as_int(items[0], name="section type")

    if section_type == MARKUP_SECTION_TYPE and len(items) == 3:
        return MarkupSection(
            tag_name=_as_str(items[1], name="markup section tag name"),
            markers=parse_markers(items[2]),
        )
    if section_type == IMAGE_SECTION_TYPE and len(items) == 2:
        return ImageSection(src=_as_str(items[1], name="image section src"))
    if section_type == LIST_SECTION_TYPE and len(items) == 3:
        return ListSection(
            tag_name=_as_str(items[1], name="list section tag name"),
            items=tuple(parse_markers(item) for item in _as_list(items[2], name="list items")),
        )
    if section_type == CARD_SECTION_TYPE and len(items) in (2, 3):
        payload = items[2] if len(items) == 3 and items[2] is not None else {}
        return CardSection(name=_as_str(items[1], name="card name"), payload=payload)

    raise MalformedMobiledocError(
        f"Cannot render section of type {section_type!r} with {len(items)} element(s)."
    )


def check_version(data: Any) -> str:
    """Return the document version, raising VersionMismatchError unless it is supported."""

    if not isinstance(data, Mapping):
        raise MalformedMobiledocError("Expected mobiledoc to be an object.")
    version = data.get("version")
    if version != MOBILEDOC_VERSION:
        raise VersionMismatchError(version, MOBILEDOC_VERSION)
    return version


def parse_mobiledoc(data: Any) -> Mobiledoc:
    """Parse a wire-format document after checking its version."""

    version = check_version(data)
    if "sections" not in data:
        raise MalformedMobiledocError("Expected mobiledoc to have `sections`.")
    parts = _as_list(data["sections"], name="sections")
    if len(parts) != 2:
        raise MalformedMobiledocError("Expected `sections` to be [markupTypes, sections].")

    markup_types, sections = parts
    return Mobiledoc(
        version=version,
        markup_types=tuple(parse_markup_type(m) for m in _as_list(markup_types, name="markups")),
        sections=tuple(parse_section(s) for s in _as_list(sections, name="sections")),
    )
