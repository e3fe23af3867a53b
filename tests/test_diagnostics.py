"""Tests for mobiledoc_html.diagnostics — error formatting and actionable hints."""

from __future__ import annotations

import json

from mobiledoc_html.diagnostics import format_error_with_hint, format_hint
from mobiledoc_html.errors import (
    CardNotFoundError,
    InvalidCardRenderError,
    InvalidCardTypeError,
    MalformedMobiledocError,
    MobiledocConfigError,
    MobiledocError,
    VersionMismatchError,
)


def test_hint_version_mismatch() -> None:
    hint = format_hint(VersionMismatchError("0.1.0", "0.2.0"))
    assert hint is not None
    assert "0.2.0" in hint


def test_hint_card_not_found() -> None:
    hint = format_hint(CardNotFoundError("x", 'Card "x" not found'))
    assert hint is not None
    assert "unknown_card_handler" in hint


def test_hint_invalid_card_render() -> None:
    hint = format_hint(InvalidCardRenderError("x", "bad"))
    assert hint is not None
    assert "None" in hint


def test_hint_invalid_card_definition() -> None:
    hint = format_hint(InvalidCardTypeError("x", "bad"))
    assert hint is not None
    assert "render" in hint


def test_hint_unresolvable_config_ref() -> None:
    hint = format_hint(MobiledocConfigError("Could not resolve render.cards entry 'a:b'"))
    assert hint is not None
    assert "importable" in hint


def test_no_hint_for_other_config_errors() -> None:
    assert format_hint(MobiledocConfigError("Unsupported config version: 2")) is None


def test_hint_for_bad_input() -> None:
    assert format_hint(MalformedMobiledocError("nope")) is not None
    assert format_hint(json.JSONDecodeError("Expecting value", "", 0)) is not None


def test_hint_for_non_utf8_input() -> None:
    hint = format_hint(MalformedMobiledocError("Input is not valid UTF-8: doc.json"))
    assert hint == "save the document with UTF-8 encoding"


def test_no_hint_for_unknown_errors() -> None:
    assert format_hint(MobiledocError("generic")) is None
    assert format_hint(ValueError("x")) is None


def test_format_error_with_hint() -> None:
    result = format_error_with_hint(CardNotFoundError("x", 'Card "x" not found'))
    assert result.startswith('error: Card "x" not found')
    assert "\nhint: " in result


def test_format_error_without_hint() -> None:
    assert format_error_with_hint(ValueError("plain")) == "error: plain"


def test_format_error_empty_message_uses_repr() -> None:
    assert format_error_with_hint(MobiledocError()) == "error: MobiledocError()"
