from __future__ import annotations

import pytest
from docx.enum.text import WD_UNDERLINE
from docx.oxml.ns import qn
from docx.shared import Pt

from doc2docxplus.mapping.classifiers import (
    ContentKind,
    RunContext,
    classify_run,
    strip_bullet_marker,
)
from doc2docxplus.mapping.lists import ListKind
from doc2docxplus.mapping.runs import format_runs
from doc2docxplus.model import SourceParagraph, SourceRun
from doc2docxplus.types import ConversionOptions, FontSizePolicy


def _format(target, *runs: SourceRun, kind: ListKind = ListKind.NONE, options=None, **kwargs) -> int:
    return format_runs(SourceParagraph(runs=list(runs)), target, kind, options or ConversionOptions(), **kwargs)


@pytest.mark.parametrize(
    "code, expected",
    [
        (0, None),
        (1, True),
        (2, WD_UNDERLINE.DOUBLE),
        (3, WD_UNDERLINE.DOTTED),
        (4, WD_UNDERLINE.DASH),
        (5, WD_UNDERLINE.WORDS),
        (6, WD_UNDERLINE.THICK),
        (7, WD_UNDERLINE.WAVY),
        (99, False),
    ],
)
def test_underline_codes(code, expected, target):
    _format(target, SourceRun(text="word", underline=code))
    assert target.runs[0].font.underline == expected


def test_no_explicit_color_writes_no_color(target):
    _format(target, SourceRun(text="plain", color=-1))
    run = target.runs[0]
    assert run.font.color.rgb is None
    assert run._r.rPr.find(qn("w:color")) is None


def test_explicit_color_written_as_hex(target):
    _format(target, SourceRun(text="green", color=0x00FF00))
    assert str(target.runs[0].font.color.rgb) == "00FF00"


@pytest.mark.parametrize("half_points", [24, 25])
def test_half_point_sizes_are_halved(half_points, target):
    _format(target, SourceRun(text="sized", font_size=half_points))
    assert target.runs[0].font.size == Pt(12)


def test_raw_size_policy_copies_value(target):
    options = ConversionOptions(font_size_policy=FontSizePolicy.RAW)
    _format(target, SourceRun(text="sized", font_size=24), options=options)
    assert target.runs[0].font.size == Pt(24)


def test_font_name_and_fallback(document):
    named = document.add_paragraph()
    unnamed = document.add_paragraph()
    _format(named, SourceRun(text="a", font_name="Arial"))
    _format(unnamed, SourceRun(text="b"))
    assert named.runs[0].font.name == "Arial"
    assert unnamed.runs[0].font.name == "Times New Roman"


def test_basic_toggles_copied(target):
    _format(target, SourceRun(text="styled", bold=True, italic=True, strike=True))
    font = target.runs[0].font
    assert font.bold is True
    assert font.italic is True
    assert font.strike is True


@pytest.mark.parametrize(
    "position, subscript, superscript",
    [(0, None, None), (1, True, False), (2, False, True)],
)
def test_vertical_position(position, subscript, superscript, target):
    _format(target, SourceRun(text="x", vertical_position=position))
    font = target.runs[0].font
    assert font.subscript == subscript
    assert font.superscript == superscript


def test_kerning_written_before_size(target):
    _format(target, SourceRun(text="kerned", kerning=28))
    r_pr = target.runs[0]._r.rPr
    kern = r_pr.find(qn("w:kern"))
    assert kern is not None
    assert kern.get(qn("w:val")) == "28"
    tags = [child.tag for child in r_pr]
    assert tags.index(qn("w:kern")) < tags.index(qn("w:sz"))


def test_no_kerning_when_zero(target):
    _format(target, SourceRun(text="plain"))
    assert target.runs[0]._r.rPr.find(qn("w:kern")) is None


def test_surface_effects_follow_option(document):
    source = SourceRun(text="raised", emboss=True, imprint=False, shadow=True)
    with_effects = document.add_paragraph()
    without_effects = document.add_paragraph()
    _format(with_effects, source)
    _format(without_effects, source, options=ConversionOptions(surface_effects=False))

    font = with_effects.runs[0].font
    assert font.emboss is True
    assert font.shadow is True
    assert without_effects.runs[0].font.emboss is None
    assert without_effects.runs[0].font.shadow is None


def test_whitespace_runs_are_skipped(target):
    emitted = _format(target, SourceRun(text="  "), SourceRun(text="text"), SourceRun(text="\t"))
    assert emitted == 1
    assert [run.text for run in target.runs] == ["text"]


def test_bullet_line_splits_first_run(target):
    emitted = _format(target, SourceRun(text="► Contact us", bold=True), kind=ListKind.BULLET_LINE)
    assert emitted == 2
    glyph, remainder = target.runs
    assert glyph.text == "► "
    assert glyph.font.name == "Segoe UI Symbol"
    assert glyph.font.size == Pt(8)
    assert remainder.text == "Contact us"
    assert remainder.font.bold is True
    assert remainder.font.name == "Times New Roman"


def test_bullet_glyph_only_run_emits_single_glyph(target):
    emitted = _format(
        target,
        SourceRun(text=" "),
        SourceRun(text="►"),
        SourceRun(text=" Next steps"),
        kind=ListKind.BULLET_LINE,
    )
    assert emitted == 2
    assert [run.text for run in target.runs] == ["► ", " Next steps"]


def test_bullet_split_only_for_bullet_lines(target):
    _format(target, SourceRun(text="► not a bullet line"), kind=ListKind.NONE)
    assert [run.text for run in target.runs] == ["► not a bullet line"]


def test_email_like_text_overrides_formatting(target):
    source = SourceRun(text="jane@example.com", bold=True, color=0xFF0000, font_name="Arial", font_size=40)
    emitted = _format(target, source)
    assert emitted == 1
    run = target.runs[0]
    assert run.text == "jane@example.com"
    assert run.font.underline is True
    assert str(run.font.color.rgb) == "0000FF"
    assert run.font.name == "Calibri"
    assert run.font.size == Pt(11)
    assert run.font.bold is None


def test_classifier_chain_is_pluggable(target):
    _format(target, SourceRun(text="jane@example.com", font_size=24), classifiers=())
    run = target.runs[0]
    assert run.font.size == Pt(12)
    assert run.font.color.rgb is None


def test_classify_run_defaults_to_plain():
    assert classify_run(RunContext(SourceRun(text="hello"))) is ContentKind.PLAIN
    assert classify_run(RunContext(SourceRun(text="a@b"))) is ContentKind.PLAIN
    assert classify_run(RunContext(SourceRun(text="a@b.c"))) is ContentKind.EMAIL_LIKE


@pytest.mark.parametrize(
    "text, expected",
    [("► Contact us", "Contact us"), ("  >  item", "item"), ("►", ""), ("no marker", "no marker")],
)
def test_strip_bullet_marker(text, expected):
    assert strip_bullet_marker(text) == expected
