from __future__ import annotations


class UtaError(Exception):
    pass


class ConversionError(UtaError, ValueError):
    """A single document failed to convert; nothing was produced for it."""


class MalformedMarkup(ConversionError):
    pass


class MalformedTimestamp(ConversionError):
    def __init__(self, text: str):
        super().__init__(f"Malformed timestamp: {text!r}")
        self.text = text


class StructureError(ConversionError):
    pass


class UnsupportedFeature(ConversionError):
    pass


class ValidationError(ConversionError):
    pass


class CatalogError(UtaError, RuntimeError):
    pass


class TokenBootstrapError(CatalogError):
    pass


class CatalogNotFound(CatalogError):
    pass


class MissingCredentials(CatalogError):
    pass
