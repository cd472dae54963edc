"""Validation routines for doc2docxplus."""
from __future__ import annotations

import base64
import binascii
import logging
import re
from io import BytesIO

from docx import Document

from .exceptions import ConversionError, DecodeError, InvalidInputError

LOGGER = logging.getLogger(__name__)

BASE64_ALPHABET = re.compile(r"^[A-Za-z0-9+/=]+$")
_WHITESPACE = re.compile(r"\s+")


def decode_payload(payload: str | None) -> bytes:
    """Validate a base64 payload and decode it to raw document bytes."""
    if payload is None or not payload.strip():
        raise InvalidInputError("Base64 input cannot be null or empty")

    compact = _WHITESPACE.sub("", payload)
    if not BASE64_ALPHABET.match(compact):
        raise InvalidInputError("Invalid base64 format: input contains characters outside [A-Za-z0-9+/=]")

    try:
        data = base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"Failed to decode base64 content: {exc}") from exc
    LOGGER.debug("Decoded %d base64 characters into %d bytes", len(compact), len(data))
    return data


def validate_input_bytes(data: bytes | None) -> bytes:
    """Reject missing or empty document content."""
    if data is None:
        raise InvalidInputError("Document content cannot be null")
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InvalidInputError(f"Document content must be bytes, got {type(data).__name__}")
    if len(data) == 0:
        raise InvalidInputError("Document content cannot be empty")
    return bytes(data)


def validate_conversion(content: bytes, expected_paragraphs: int) -> None:
    """Validate that the produced DOCX is readable and kept every paragraph."""
    LOGGER.debug("Validating DOCX output (%d bytes)", len(content))
    try:
        document = Document(BytesIO(content))
    except Exception as exc:  # pragma: no cover - python-docx exception types vary
        raise ConversionError("DOCX validation failed: output package is unreadable") from exc

    produced = len(document.paragraphs)
    if produced != expected_paragraphs:
        raise ConversionError(
            f"DOCX paragraph count mismatch: expected {expected_paragraphs}, found {produced}"
        )
