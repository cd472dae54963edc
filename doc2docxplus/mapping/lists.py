"""List and bullet classification of paragraphs."""

from __future__ import annotations

import logging
from enum import Enum

from docx.document import Document as DocxDocument
from docx.enum.style import WD_STYLE_TYPE
from docx.oxml import parse_xml
from docx.oxml.ns import nsdecls
from docx.shared import Twips
from docx.text.paragraph import Paragraph

from ..model import SourceParagraph
from ..types import ConversionOptions
from .classifiers import is_bullet_text

__all__ = ["BULLET_INDENT", "LEVEL_INDENT", "ListKind", "NumberingRegistry", "classify_paragraph"]

LOGGER = logging.getLogger(__name__)

BULLET_INDENT = 360
LEVEL_INDENT = 720
MAX_LEVEL = 8

_LEVEL_GLYPHS = ("•", "◦", "▪")


class ListKind(Enum):
    NONE = "none"
    BULLET_LINE = "bullet-line"
    LIST_ITEM = "list-item"


def _abstract_num_xml(abstract_id: int) -> str:
    levels = "".join(
        f'<w:lvl w:ilvl="{level}">'
        '<w:start w:val="1"/>'
        '<w:numFmt w:val="bullet"/>'
        f'<w:lvlText w:val="{_LEVEL_GLYPHS[level % len(_LEVEL_GLYPHS)]}"/>'
        '<w:lvlJc w:val="left"/>'
        f'<w:pPr><w:ind w:left="{LEVEL_INDENT * (level + 1)}" w:hanging="360"/></w:pPr>'
        "</w:lvl>"
        for level in range(MAX_LEVEL + 1)
    )
    return (
        f'<w:abstractNum {nsdecls("w")} w:abstractNumId="{abstract_id}">'
        '<w:multiLevelType w:val="hybridMultilevel"/>'
        f"{levels}"
        "</w:abstractNum>"
    )


class NumberingRegistry:
    """Creates the one numbering definition shared by every list item of a document."""

    def __init__(self, document: DocxDocument) -> None:
        self.document = document
        self._num_id: int | None = None

    def shared_num_id(self) -> int:
        if self._num_id is None:
            numbering = self.document.part.numbering_part.element
            existing = [int(value) for value in numbering.xpath("./w:abstractNum/@w:abstractNumId")]
            abstract_id = max(existing, default=-1) + 1
            abstract = parse_xml(_abstract_num_xml(abstract_id))
            numbering.insert_element_before(abstract, "w:num", "w:numIdMacAtCleanup")
            self._num_id = numbering.add_num(abstract_id).numId
            LOGGER.debug("Registered list numbering numId=%d (abstractNumId=%d)", self._num_id, abstract_id)
        return self._num_id


def _apply_style(document: DocxDocument, target: Paragraph, name: str) -> None:
    styles = document.styles
    if name not in styles:
        LOGGER.debug("Adding missing paragraph style %r", name)
        styles.add_style(name, WD_STYLE_TYPE.PARAGRAPH)
    target.style = styles[name]


def classify_paragraph(
    source: SourceParagraph,
    target: Paragraph,
    numbering: NumberingRegistry,
    options: ConversionOptions,
) -> ListKind:
    """Apply bullet-line or list-item treatment to *target* and report which applied."""

    fmt = target.paragraph_format
    if is_bullet_text(source.text):
        fmt.left_indent = Twips(BULLET_INDENT)
        return ListKind.BULLET_LINE

    level = source.list_level
    if level < 0:
        return ListKind.NONE

    num_pr = target._p.get_or_add_pPr().get_or_add_numPr()
    num_pr.get_or_add_ilvl().val = min(level, MAX_LEVEL)
    num_pr.get_or_add_numId().val = numbering.shared_num_id()
    if level > 0:
        fmt.left_indent = Twips(LEVEL_INDENT * (level + 1))
    _apply_style(numbering.document, target, options.list_style_binding.style_for_level(level))
    return ListKind.LIST_ITEM
