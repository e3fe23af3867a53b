from __future__ import annotations

from types import SimpleNamespace

import pytest

from mobiledoc_html.cards import Card, CardRegistry, RenderContext, render_card, validate_card
from mobiledoc_html.errors import (
    CardNotFoundError,
    InvalidCardError,
    InvalidCardRenderError,
    InvalidCardsArgumentError,
    InvalidCardTypeError,
    MissingRenderError,
)
from mobiledoc_html.image_card import IMAGE_CARD


def _hello(context: RenderContext) -> str:
    return f"hello {context.env.name}"


def test_validate_card_accepts_mappings_and_objects() -> None:
    from_mapping = validate_card({"name": "m", "type": "html", "render": _hello})
    from_object = validate_card(SimpleNamespace(name="o", type="html", render=_hello))
    assert from_mapping == Card(name="m", render=_hello)
    assert from_object == Card(name="o", render=_hello)


def test_validate_card_returns_card_instances_unchanged() -> None:
    card = Card(name="c", render=_hello)
    assert validate_card(card) is card


def test_invalid_type_names_the_card() -> None:
    with pytest.raises(InvalidCardTypeError) as excinfo:
        validate_card({"name": "bad", "type": "dom", "render": _hello})
    assert excinfo.value.card_name == "bad"
    assert 'must be of type "html", was "dom"' in str(excinfo.value)


def test_missing_render_names_the_card() -> None:
    with pytest.raises(MissingRenderError) as excinfo:
        validate_card({"name": "bad", "type": "html"})
    assert excinfo.value.card_name == "bad"


def test_non_string_name_is_invalid() -> None:
    with pytest.raises(InvalidCardError):
        validate_card({"name": 3, "type": "html", "render": _hello})


@pytest.mark.parametrize("cards", [{}, {"a": Card(name="a", render=_hello)}, "abc", 3])
def test_registry_requires_a_list(cards: object) -> None:
    with pytest.raises(InvalidCardsArgumentError, match="must be passed as a list"):
        CardRegistry(cards)  # type: ignore[arg-type]


def test_registry_validates_eagerly() -> None:
    good = Card(name="good", render=_hello)
    with pytest.raises(MissingRenderError):
        CardRegistry([good, {"name": "bad", "type": "html", "render": "nope"}])


def test_registry_first_registration_wins() -> None:
    first = Card(name="dup", render=_hello)
    second = Card(name="dup", render=lambda ctx: "second")
    registry = CardRegistry((first, second))
    assert registry.resolve("dup") is first
    assert registry.names == ["dup"]


def test_registry_fallbacks_come_after_user_cards() -> None:
    user_image = Card(name="image", render=_hello)
    assert CardRegistry([], fallbacks=[IMAGE_CARD]).resolve("image") is IMAGE_CARD
    assert CardRegistry([user_image], fallbacks=[IMAGE_CARD]).resolve("image") is user_image
    assert CardRegistry(None).resolve("image") is None


def test_render_card_registers_teardown_into_given_list() -> None:
    callbacks: list = []

    def render(context: RenderContext) -> str:
        context.env.on_teardown(print)
        return "ok"

    out = render_card(
        "c",
        None,
        registry=CardRegistry([Card(name="c", render=render)]),
        card_options={},
        teardown_callbacks=callbacks,
    )
    assert out == "ok"
    assert callbacks == [print]


def test_render_card_not_found_message() -> None:
    with pytest.raises(CardNotFoundError) as excinfo:
        render_card(
            "missing-card",
            {},
            registry=CardRegistry([]),
            card_options={},
            teardown_callbacks=[],
        )
    assert excinfo.value.card_name == "missing-card"
    assert "no unknownCardHandler" in str(excinfo.value)


def test_render_card_rejects_non_string_result() -> None:
    card = Card(name="c", render=lambda ctx: ["<p>"])  # type: ignore[arg-type,return-value]
    registry = CardRegistry([card])
    with pytest.raises(InvalidCardRenderError, match="result was list"):
        render_card("c", {}, registry=registry, card_options={}, teardown_callbacks=[])


def test_card_exceptions_propagate() -> None:
    def boom(context: RenderContext) -> str:
        raise RuntimeError("boom")

    registry = CardRegistry([Card(name="c", render=boom)])
    with pytest.raises(RuntimeError, match="boom"):
        render_card("c", {}, registry=registry, card_options={}, teardown_callbacks=[])


def test_image_card_without_src_renders_nothing() -> None:
    registry = CardRegistry([], fallbacks=[IMAGE_CARD])
    out = render_card("image", {}, registry=registry, card_options={}, teardown_callbacks=[])
    assert out == ""
