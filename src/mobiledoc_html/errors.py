"""mobiledoc-html exception hierarchy.

Keep this module small and dependency-free: it is imported broadly across the
project and by tests.
"""


class MobiledocError(Exception):
    """Base exception for all mobiledoc-html errors."""


class MobiledocConfigError(MobiledocError):
    """Raised for invalid user configuration."""


class MalformedMobiledocError(MobiledocError):
    """Raised when a document does not have the expected wire structure."""


class VersionMismatchError(MobiledocError):
    """Raised when a document declares an unsupported version."""

    def __init__(self, version: object, expected: str) -> None:
        super().__init__(f'Unexpected Mobiledoc version "{version}" (expected "{expected}")')
        self.version = version
        self.expected = expected


class InvalidCardsArgumentError(MobiledocError):
    """Raised when the `cards` option is not an ordered list of cards."""


class _CardError(MobiledocError):
    def __init__(self, card_name: str, message: str) -> None:
        super().__init__(message)
        self.card_name = card_name


class InvalidCardError(_CardError):
    """Raised when a card definition fails validation."""


class InvalidCardTypeError(InvalidCardError):
    """Raised when a card is not of type "html"."""


class MissingRenderError(InvalidCardError):
    """Raised when a card does not define a callable `render`."""


class CardNotFoundError(_CardError):
    """Raised when a card section names an unregistered card and there is no fallback."""


class InvalidCardRenderError(_CardError):
    """Raised when a card's render function returns something other than html."""
