"""Output document shell."""

from __future__ import annotations

import logging

from docx import Document
from docx.document import Document as DocxDocument
from docx.shared import Twips

from ..types import ConversionOptions

LOGGER = logging.getLogger(__name__)


def create_document(options: ConversionOptions) -> DocxDocument:
    """Create an empty DOCX document with the page margin defaults applied."""

    document = Document()
    section = document.sections[0]
    section.right_margin = Twips(options.margin_default)
    section.gutter = Twips(options.margin_default)
    LOGGER.debug("Created document shell with right margin and gutter of %d twips", options.margin_default)
    return document
