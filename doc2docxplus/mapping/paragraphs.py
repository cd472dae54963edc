"""Paragraph-level property mapping."""

from __future__ import annotations

from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Twips
from docx.text.paragraph import Paragraph

from ..model import SourceParagraph
from ..types import ConversionOptions, IndentationPolicy
from .codes import Justification, has_border

__all__ = ["LINE_SPACING_MULTIPLE", "map_paragraph", "set_borders"]

LINE_SPACING_MULTIPLE = 1.15

# Elements that follow w:pBdr inside w:pPr.
_PBDR_SUCCESSORS = (
    "w:shd",
    "w:tabs",
    "w:suppressAutoHyphens",
    "w:kinsoku",
    "w:wordWrap",
    "w:overflowPunct",
    "w:topLinePunct",
    "w:autoSpaceDE",
    "w:autoSpaceDN",
    "w:bidi",
    "w:adjustRightInd",
    "w:snapToGrid",
    "w:spacing",
    "w:ind",
    "w:contextualSpacing",
    "w:mirrorIndents",
    "w:suppressOverlap",
    "w:jc",
    "w:textDirection",
    "w:textAlignment",
    "w:textboxTightWrap",
    "w:outlineLvl",
    "w:divId",
    "w:cnfStyle",
    "w:rPr",
    "w:sectPr",
    "w:pPrChange",
)


def map_paragraph(source: SourceParagraph, target: Paragraph, options: ConversionOptions) -> None:
    """Copy alignment, spacing, indentation and borders from *source* onto *target*."""

    fmt = target.paragraph_format
    fmt.alignment = Justification.from_code(source.justification).alignment

    fmt.space_before = Twips(source.spacing_before)
    fmt.space_after = Twips(source.spacing_after)
    if source.line_spacing is not None:
        fmt.line_spacing = LINE_SPACING_MULTIPLE

    _map_indentation(source, target, options.indentation_policy)
    set_borders(target, [edge for edge, code in source.borders.edges() if has_border(code)])


def _map_indentation(source: SourceParagraph, target: Paragraph, policy: IndentationPolicy) -> None:
    fmt = target.paragraph_format
    if policy is IndentationPolicy.PRESERVE_ALL:
        fmt.left_indent = Twips(source.left_indent)
        fmt.right_indent = Twips(source.right_indent)
        fmt.first_line_indent = Twips(source.first_line_indent)
        return

    fmt.left_indent = Twips(source.left_indent if source.left_indent > 0 else 0)
    fmt.right_indent = Twips(source.right_indent if source.right_indent > 0 else 0)
    # Negative first-line values are hanging indents and are kept.
    fmt.first_line_indent = Twips(source.first_line_indent)


def set_borders(target: Paragraph, edges: list[str]) -> None:
    """Give *target* a single-line border on each named edge."""

    if not edges:
        return
    p_pr = target._p.get_or_add_pPr()
    p_bdr = OxmlElement("w:pBdr")
    for edge in ("top", "left", "bottom", "right"):
        if edge not in edges:
            continue
        border = OxmlElement(f"w:{edge}")
        border.set(qn("w:val"), "single")
        border.set(qn("w:sz"), "4")
        border.set(qn("w:space"), "1")
        border.set(qn("w:color"), "auto")
        p_bdr.append(border)
    p_pr.insert_element_before(p_bdr, *_PBDR_SUCCESSORS)
