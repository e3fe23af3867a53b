from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from mobiledoc_html.cards import Card, CardEnv, CardRegistry, RenderContext
from mobiledoc_html.document import (
    CARD_SECTION_TYPE,
    IMAGE_SECTION_TYPE,
    LIST_SECTION_TYPE,
    MARKUP_SECTION_TYPE,
    MOBILEDOC_VERSION,
)
from mobiledoc_html.errors import (
    CardNotFoundError,
    InvalidCardError,
    InvalidCardRenderError,
    InvalidCardsArgumentError,
    InvalidCardTypeError,
    MalformedMobiledocError,
    MissingRenderError,
    MobiledocConfigError,
    MobiledocError,
    VersionMismatchError,
)
from mobiledoc_html.image_card import IMAGE_CARD
from mobiledoc_html.renderer import Renderer, RenderResult, render


def _package_version() -> str:
    try:
        return version("mobiledoc-html")
    except PackageNotFoundError:
        # Running from a source checkout, or otherwise not installed.
        return "0.0.0"


__version__ = _package_version()

__all__ = [
    "CARD_SECTION_TYPE",
    "IMAGE_CARD",
    "IMAGE_SECTION_TYPE",
    "LIST_SECTION_TYPE",
    "MARKUP_SECTION_TYPE",
    "MOBILEDOC_VERSION",
    "Card",
    "CardEnv",
    "CardNotFoundError",
    "CardRegistry",
    "InvalidCardError",
    "InvalidCardRenderError",
    "InvalidCardTypeError",
    "InvalidCardsArgumentError",
    "MalformedMobiledocError",
    "MissingRenderError",
    "MobiledocConfigError",
    "MobiledocError",
    "RenderContext",
    "RenderResult",
    "Renderer",
    "VersionMismatchError",
    "__version__",
    "render",
]
