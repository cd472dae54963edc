from __future__ import annotations

import base64
from io import BytesIO
from unittest.mock import MagicMock, patch

import pytest
from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt, Twips

from doc2docxplus import (
    ConversionError,
    ConversionOptions,
    DecodeError,
    DocToDocxConverter,
    DocumentParseError,
    InvalidInputError,
    convert_base64,
    convert_doc_to_docx,
)
from doc2docxplus.model import Section, SourceDocument, SourceParagraph, SourceRun


def _reload(content: bytes):
    return Document(BytesIO(content))


@patch("doc2docxplus.converter.read_document")
def test_single_hello_paragraph(mock_read: MagicMock):
    mock_read.return_value = SourceDocument(
        sections=[
            Section(
                paragraphs=[
                    SourceParagraph(
                        justification=2,
                        runs=[SourceRun(text="Hello", bold=True, font_size=24)],
                    )
                ]
            )
        ]
    )

    result = DocToDocxConverter().convert(b"legacy bytes")

    mock_read.assert_called_once_with(b"legacy bytes")
    assert result.section_count == 1
    assert result.paragraph_count == 1
    assert result.run_count == 1

    document = _reload(result.content)
    assert len(document.paragraphs) == 1
    paragraph = document.paragraphs[0]
    assert paragraph.text == "Hello"
    assert paragraph.paragraph_format.alignment == WD_ALIGN_PARAGRAPH.CENTER
    run = paragraph.runs[0]
    assert run.bold is True
    assert run.font.size == Pt(12)
    assert run.font.name == "Times New Roman"
    assert run.font.color.rgb is None
    assert document.sections[0].right_margin == Twips(100)


@patch("doc2docxplus.converter.read_document")
def test_paragraph_order_preserved_across_sections(mock_read: MagicMock, make_paragraph):
    mock_read.return_value = SourceDocument(
        sections=[
            Section(paragraphs=[make_paragraph("one"), make_paragraph("   ")]),
            Section(paragraphs=[make_paragraph("► three"), make_paragraph("four", list_level=1)]),
        ]
    )

    result = DocToDocxConverter().convert(b"x")

    document = _reload(result.content)
    assert [p.text for p in document.paragraphs] == ["one", "", "► three", "four"]
    assert result.section_count == 2
    assert result.paragraph_count == 4
    assert result.run_count == 4


@patch("doc2docxplus.converter.read_document")
def test_empty_document_produces_empty_package(mock_read: MagicMock):
    mock_read.return_value = SourceDocument()
    content = convert_doc_to_docx(b"x")
    assert len(_reload(content).paragraphs) == 0


@patch("doc2docxplus.converter.read_document")
def test_options_are_honoured(mock_read: MagicMock, make_paragraph):
    mock_read.return_value = SourceDocument(sections=[Section(paragraphs=[make_paragraph("m")])])
    content = convert_doc_to_docx(b"x", ConversionOptions(margin_default=10))
    assert _reload(content).sections[0].gutter == Twips(10)


@patch("doc2docxplus.converter.read_document")
def test_convert_base64_round_trip(mock_read: MagicMock, make_paragraph):
    mock_read.return_value = SourceDocument(sections=[Section(paragraphs=[make_paragraph("Hi")])])
    payload = base64.b64encode(b"legacy").decode("ascii")

    encoded = convert_base64(payload)

    mock_read.assert_called_once_with(b"legacy")
    content = base64.b64decode(encoded)
    assert content.startswith(b"PK")
    assert _reload(content).paragraphs[0].text == "Hi"


def test_empty_bytes_rejected():
    with pytest.raises(InvalidInputError):
        convert_doc_to_docx(b"")


@pytest.mark.parametrize("payload", [None, "", "   "])
def test_empty_base64_rejected(payload):
    with pytest.raises(InvalidInputError):
        convert_base64(payload)


def test_base64_outside_alphabet_rejected():
    with pytest.raises(InvalidInputError):
        convert_base64("abc$def=")


def test_malformed_base64_is_decode_failure():
    with pytest.raises(DecodeError):
        convert_base64("abcde")


def test_non_doc_bytes_are_parse_failure():
    payload = base64.b64encode(b"this is plainly not a Word document").decode("ascii")
    with pytest.raises(DocumentParseError):
        convert_base64(payload)


@patch("doc2docxplus.converter.read_document", side_effect=ValueError("bad offset"))
def test_unexpected_reader_errors_become_parse_failures(mock_read: MagicMock):
    with pytest.raises(DocumentParseError, match="bad offset"):
        convert_doc_to_docx(b"x")


@patch("doc2docxplus.converter.map_paragraph", side_effect=RuntimeError("boom"))
@patch("doc2docxplus.converter.read_document")
def test_mapping_faults_become_conversion_errors(mock_read: MagicMock, mock_map: MagicMock, make_paragraph):
    mock_read.return_value = SourceDocument(sections=[Section(paragraphs=[make_paragraph("x")])])
    with pytest.raises(ConversionError, match="boom") as excinfo:
        convert_doc_to_docx(b"x")
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert not excinfo.value.client_error
