"""Top-level package for doc2docxplus.

This module exposes the public API for converting legacy Word 97-2003
documents to DOCX while preserving paragraph layout, lists and character
formatting.
"""
from .converter import DocToDocxConverter, convert_base64, convert_doc_to_docx
from .exceptions import (
    ConversionError,
    DecodeError,
    Doc2DocxPlusError,
    DocumentParseError,
    InvalidInputError,
    OfficeConnectionError,
    OfficeConversionError,
)
from .office import OfficeConnection, convert_with_office_server
from .types import (
    ConversionOptions,
    ConversionResult,
    FontSizePolicy,
    IndentationPolicy,
    ListStyleBinding,
)

__all__ = [
    "ConversionError",
    "ConversionOptions",
    "ConversionResult",
    "DecodeError",
    "Doc2DocxPlusError",
    "DocToDocxConverter",
    "DocumentParseError",
    "FontSizePolicy",
    "IndentationPolicy",
    "InvalidInputError",
    "ListStyleBinding",
    "OfficeConnection",
    "OfficeConnectionError",
    "OfficeConversionError",
    "convert_base64",
    "convert_doc_to_docx",
    "convert_with_office_server",
]

__version__ = "0.1.0"
