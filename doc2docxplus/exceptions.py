"""Custom exceptions for doc2docxplus."""
from __future__ import annotations


class Doc2DocxPlusError(RuntimeError):
    """Base class for all doc2docxplus exceptions."""

    client_error: bool = False


class InvalidInputError(Doc2DocxPlusError):
    """Raised when the input is missing, empty, or outside the base64 alphabet."""

    client_error = True


class DecodeError(Doc2DocxPlusError):
    """Raised when a base64 payload passes the alphabet check but cannot be decoded."""

    client_error = True


class DocumentParseError(Doc2DocxPlusError):
    """Raised when the decoded bytes are not a readable legacy Word document."""

    client_error = True


class ConversionError(Doc2DocxPlusError):
    """Raised when mapping or serialization fails unexpectedly."""


class OfficeConnectionError(Doc2DocxPlusError):
    """Raised when the external office server cannot be reached."""


class OfficeConversionError(Doc2DocxPlusError):
    """Raised when the external office server fails to convert a document."""
