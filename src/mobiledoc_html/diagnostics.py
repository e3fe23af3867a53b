"""Error formatting and actionable hints for CLI output.

Keep this module small and dependency-light: it is imported by the CLI layer
and only depends on the error hierarchy.
"""

from __future__ import annotations

import json

from mobiledoc_html.document import MOBILEDOC_VERSION
from mobiledoc_html.errors import (
    CardNotFoundError,
    InvalidCardError,
    InvalidCardRenderError,
    MalformedMobiledocError,
    MobiledocConfigError,
    VersionMismatchError,
)


def format_hint(exc: BaseException) -> str | None:
    """Return an actionable hint for a known error, or None."""
    msg = str(exc)

    if isinstance(exc, VersionMismatchError):
        return f'this renderer only supports documents with "version": "{MOBILEDOC_VERSION}"'

    if isinstance(exc, CardNotFoundError):
        return (
            "add the card to `cards` under [render] in mobiledoc-html.toml, "
            "or set `unknown_card_handler`"
        )

    if isinstance(exc, InvalidCardRenderError):
        return "card render functions must return a string of html or None"

    if isinstance(exc, InvalidCardError):
        return 'cards need a `name`, `type = "html"` and a callable `render`'

    if isinstance(exc, MobiledocConfigError):
        if "Could not resolve" in msg:
            return "check that the module is importable from the current environment"
        return None

    if isinstance(exc, MalformedMobiledocError) and "UTF-8" in msg:
        return "save the document with UTF-8 encoding"

    if isinstance(exc, (MalformedMobiledocError, json.JSONDecodeError)):
        return "the input must be a Mobiledoc JSON document"

    return None


def format_error_with_hint(exc: BaseException) -> str:
    """Format error message + optional hint for stderr output."""
    msg = (str(exc) or repr(exc)).strip()

    result = f"error: {msg}"
    hint = format_hint(exc)
    if hint:
        result += f"\nhint: {hint}"
    return result
