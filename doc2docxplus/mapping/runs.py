"""Character formatting of source runs onto target runs."""

from __future__ import annotations

import logging
from typing import Sequence

from docx.enum.text import WD_UNDERLINE
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, RGBColor
from docx.text.paragraph import Paragraph
from docx.text.run import Run

from ..model import SourceParagraph, SourceRun
from ..types import ConversionOptions
from .classifiers import (
    DEFAULT_CLASSIFIERS,
    Classifier,
    ContentKind,
    RunContext,
    classify_run,
    strip_bullet_marker,
)
from .codes import UnderlineCode, VerticalPosition
from .lists import ListKind

__all__ = ["BULLET_GLYPH", "EMAIL_COLOR", "apply_run_format", "format_runs", "set_kerning"]

LOGGER = logging.getLogger(__name__)

BULLET_GLYPH = "► "
EMAIL_COLOR = "0000FF"

_KERN_SUCCESSORS = (
    "w:position",
    "w:sz",
    "w:szCs",
    "w:highlight",
    "w:u",
    "w:effect",
    "w:bdr",
    "w:shd",
    "w:fitText",
    "w:vertAlign",
    "w:rtl",
    "w:cs",
    "w:em",
    "w:lang",
    "w:eastAsianLayout",
    "w:specVanish",
    "w:oMath",
)


def set_kerning(run: Run, half_points: int) -> None:
    r_pr = run._r.get_or_add_rPr()
    for existing in r_pr.findall(qn("w:kern")):
        r_pr.remove(existing)
    kern = OxmlElement("w:kern")
    kern.set(qn("w:val"), str(half_points))
    r_pr.insert_element_before(kern, *_KERN_SUCCESSORS)


def apply_run_format(target: Run, source: SourceRun, options: ConversionOptions) -> None:
    font = target.font
    font.bold = source.bold
    font.italic = source.italic
    font.strike = source.strike

    underline = UnderlineCode.from_code(source.underline).underline
    if underline is not None:
        font.underline = underline

    font.size = Pt(options.font_size_policy.to_points(source.font_size))
    font.name = source.font_name or options.fallback_font

    if source.color != -1:
        font.color.rgb = RGBColor.from_string(f"{source.color & 0xFFFFFF:06X}")

    position = VerticalPosition.from_code(source.vertical_position)
    if position is VerticalPosition.SUBSCRIPT:
        font.subscript = True
    elif position is VerticalPosition.SUPERSCRIPT:
        font.superscript = True

    if options.surface_effects:
        font.emboss = source.emboss
        font.imprint = source.imprint
        font.shadow = source.shadow

    if source.kerning:
        set_kerning(target, source.kerning)


def _add_bullet_glyph(target: Paragraph, options: ConversionOptions) -> Run:
    run = target.add_run(BULLET_GLYPH)
    run.font.name = options.bullet_font
    run.font.size = Pt(options.bullet_size)
    return run


def _add_email(target: Paragraph, text: str, options: ConversionOptions) -> Run:
    run = target.add_run(text)
    run.font.underline = WD_UNDERLINE.SINGLE
    run.font.color.rgb = RGBColor.from_string(EMAIL_COLOR)
    run.font.name = options.email_font
    run.font.size = Pt(options.email_size)
    return run


def format_runs(
    source: SourceParagraph,
    target: Paragraph,
    list_kind: ListKind,
    options: ConversionOptions,
    classifiers: Sequence[Classifier] = DEFAULT_CLASSIFIERS,
) -> int:
    """Append the runs of *source* to *target* and return how many were emitted.

    Whitespace-only runs are dropped. The first run with content in a bullet
    line is split into a glyph run and the remaining text; email-like text
    gets a fixed hyperlink look regardless of its source formatting.
    """

    emitted = 0
    first_content_run = True
    bullet_paragraph = list_kind is ListKind.BULLET_LINE
    for source_run in source.runs:
        if not source_run.text.strip():
            continue
        context = RunContext(source_run, bullet_paragraph, first_content_run)
        first_content_run = False

        kind = classify_run(context, classifiers)
        if kind is ContentKind.BULLET_GLYPH:
            _add_bullet_glyph(target, options)
            emitted += 1
            remainder = strip_bullet_marker(source_run.text)
            if remainder:
                apply_run_format(target.add_run(remainder), source_run, options)
                emitted += 1
        elif kind is ContentKind.EMAIL_LIKE:
            _add_email(target, source_run.text, options)
            emitted += 1
        else:
            apply_run_format(target.add_run(source_run.text), source_run, options)
            emitted += 1

    LOGGER.debug("Emitted %d run(s) from %d source run(s)", emitted, len(source.runs))
    return emitted
