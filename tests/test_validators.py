from __future__ import annotations

import base64
from io import BytesIO

import pytest
from docx import Document

from doc2docxplus.exceptions import ConversionError, DecodeError, InvalidInputError
from doc2docxplus.validators import decode_payload, validate_conversion, validate_input_bytes


@pytest.mark.parametrize("payload", [None, "", "   ", "\n\t"])
def test_decode_payload_rejects_missing_input(payload):
    with pytest.raises(InvalidInputError):
        decode_payload(payload)


def test_decode_payload_rejects_characters_outside_alphabet():
    with pytest.raises(InvalidInputError, match="Invalid base64 format"):
        decode_payload("SGVsbG8$")


def test_decode_payload_reports_bad_padding_as_decode_error():
    with pytest.raises(DecodeError):
        decode_payload("SGVsbG8")


def test_decode_payload_strips_embedded_whitespace():
    encoded = base64.b64encode(b"legacy document bytes").decode("ascii")
    wrapped = "\n".join(encoded[i : i + 8] for i in range(0, len(encoded), 8))
    assert decode_payload(f"  {wrapped}\r\n") == b"legacy document bytes"


def test_decode_error_is_not_an_invalid_input_error():
    assert not issubclass(DecodeError, InvalidInputError)
    assert DecodeError.client_error and InvalidInputError.client_error
    assert not ConversionError.client_error


@pytest.mark.parametrize("data", [None, b"", bytearray()])
def test_validate_input_bytes_rejects_empty(data):
    with pytest.raises(InvalidInputError):
        validate_input_bytes(data)


def test_validate_input_bytes_rejects_text():
    with pytest.raises(InvalidInputError, match="must be bytes"):
        validate_input_bytes("not bytes")


def test_validate_input_bytes_normalizes_buffers():
    assert validate_input_bytes(bytearray(b"abc")) == b"abc"


def _docx_with(paragraphs: int) -> bytes:
    document = Document()
    for index in range(paragraphs):
        document.add_paragraph(f"paragraph {index}")
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def test_validate_conversion_accepts_matching_output():
    validate_conversion(_docx_with(3), 3)


def test_validate_conversion_detects_lost_paragraphs():
    with pytest.raises(ConversionError, match="paragraph count mismatch"):
        validate_conversion(_docx_with(2), 3)


def test_validate_conversion_rejects_unreadable_package():
    with pytest.raises(ConversionError, match="unreadable"):
        validate_conversion(b"PK\x03\x04 not really a zip", 0)
