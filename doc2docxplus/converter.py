"""Conversion engine for doc2docxplus."""
from __future__ import annotations

import base64
import logging
from io import BytesIO
from typing import Sequence

from .exceptions import ConversionError, Doc2DocxPlusError, DocumentParseError
from .mapping import (
    NumberingRegistry,
    classify_paragraph,
    create_document,
    format_runs,
    map_paragraph,
)
from .mapping.classifiers import DEFAULT_CLASSIFIERS, Classifier
from .model import SourceDocument
from .reader import read_document
from .types import ConversionOptions, ConversionResult
from .utils import time_block
from .validators import decode_payload, validate_conversion, validate_input_bytes

LOGGER = logging.getLogger(__name__)

__all__ = ["DocToDocxConverter", "convert_base64", "convert_doc_to_docx"]


class DocToDocxConverter:
    """Convert legacy Word 97-2003 bytes into a DOCX package.

    Instances hold only immutable configuration, so one converter can serve
    any number of concurrent conversions.
    """

    def __init__(
        self,
        options: ConversionOptions | None = None,
        classifiers: Sequence[Classifier] = DEFAULT_CLASSIFIERS,
    ) -> None:
        self.options = options or ConversionOptions()
        self.classifiers = tuple(classifiers)

    def convert(self, data: bytes) -> ConversionResult:
        content = validate_input_bytes(data)
        LOGGER.info("Starting conversion of %d byte document", len(content))
        with time_block(LOGGER, "DOC to DOCX conversion"):
            source = self._parse(content)
            try:
                result = self._build(source)
            except Doc2DocxPlusError:
                raise
            except Exception as exc:
                raise ConversionError(f"Failed to build DOCX document: {exc}") from exc
            validate_conversion(result.content, result.paragraph_count)
        LOGGER.info(
            "Conversion completed: %d section(s), %d paragraph(s), %d run(s), %d bytes",
            result.section_count,
            result.paragraph_count,
            result.run_count,
            len(result.content),
        )
        return result

    @staticmethod
    def _parse(content: bytes) -> SourceDocument:
        try:
            return read_document(content)
        except DocumentParseError:
            raise
        except Exception as exc:
            raise DocumentParseError(f"Failed to parse DOC document: {exc}") from exc

    def _build(self, source: SourceDocument) -> ConversionResult:
        options = self.options
        document = create_document(options)
        numbering = NumberingRegistry(document)
        paragraph_count = 0
        run_count = 0
        for source_paragraph in source.iter_paragraphs():
            target = document.add_paragraph()
            map_paragraph(source_paragraph, target, options)
            list_kind = classify_paragraph(source_paragraph, target, numbering, options)
            run_count += format_runs(source_paragraph, target, list_kind, options, self.classifiers)
            paragraph_count += 1

        buffer = BytesIO()
        document.save(buffer)
        return ConversionResult(
            content=buffer.getvalue(),
            section_count=len(source.sections),
            paragraph_count=paragraph_count,
            run_count=run_count,
        )


def convert_doc_to_docx(data: bytes, options: ConversionOptions | None = None) -> bytes:
    """Convert raw ``.doc`` bytes and return the DOCX package bytes."""
    return DocToDocxConverter(options).convert(data).content


def convert_base64(payload: str, options: ConversionOptions | None = None) -> str:
    """Convert a base64-encoded ``.doc`` and return the base64-encoded DOCX."""
    data = decode_payload(payload)
    content = convert_doc_to_docx(data, options)
    return base64.b64encode(content).decode("ascii")
