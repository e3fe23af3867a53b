"""Whitelisted tag names for sections and inline markups.

Document-supplied tag names are never emitted unless they appear here.
Lookups are case-insensitive and return the lowercase name.
"""

from __future__ import annotations

MARKUP_SECTION_TAG_NAMES = frozenset(
    {"p", "h1", "h2", "h3", "h4", "h5", "h6", "blockquote", "pull-quote", "aside"}
)
LIST_SECTION_TAG_NAMES = frozenset({"ul", "ol"})
MARKUP_TYPE_TAG_NAMES = frozenset({"a", "b", "code", "em", "i", "s", "strong", "sub", "sup", "u"})

DEFAULT_MARKUP_SECTION_TAG_NAME = "p"
DEFAULT_LIST_SECTION_TAG_NAME = "ul"
LIST_ITEM_TAG_NAME = "li"

# Whitelisted section names that are not valid element names; rendered as a
# div carrying the name as its class.
CLASS_NAME_SECTION_TAG_NAMES = frozenset({"pull-quote"})


def _normalize(tag_name: object) -> str:
    if not isinstance(tag_name, str):
        return ""
    return tag_name.strip().lower()


def is_valid_markup_section_tag_name(tag_name: object) -> bool:
    return _normalize(tag_name) in MARKUP_SECTION_TAG_NAMES


def is_valid_list_section_tag_name(tag_name: object) -> bool:
    return _normalize(tag_name) in LIST_SECTION_TAG_NAMES


def markup_section_tag_name(tag_name: object) -> str:
    """Return the lowercase block tag name, or ``p`` if it is not whitelisted."""

    name = _normalize(tag_name)
    return name if name in MARKUP_SECTION_TAG_NAMES else DEFAULT_MARKUP_SECTION_TAG_NAME


def list_section_tag_name(tag_name: object) -> str:
    """Return the lowercase list tag name, or ``ul`` if it is not whitelisted."""

    name = _normalize(tag_name)
    return name if name in LIST_SECTION_TAG_NAMES else DEFAULT_LIST_SECTION_TAG_NAME


def markup_type_tag_name(tag_name: object) -> str | None:
    """Return the lowercase inline tag name, or None if it must be suppressed."""

    name = _normalize(tag_name)
    return name if name in MARKUP_TYPE_TAG_NAMES else None
