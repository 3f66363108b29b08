"""Exception classes for the shadow/corner pipeline."""


class ShadowStagError(Exception):
    """Base exception for all pipeline errors."""

    pass


class InvalidImageError(ShadowStagError):
    """Raised for zero-area, malformed or undecodable images."""

    pass


class InvalidParamsError(ShadowStagError, ValueError):
    """Raised when effect parameters are out of range or malformed."""

    pass


class ArithmeticOverflowError(ShadowStagError):
    """Raised when a computed canvas exceeds the configured pixel limit or the available memory."""

    pass
