from __future__ import annotations

import pytest
from docx.oxml.ns import qn
from docx.shared import Twips

from doc2docxplus.mapping.lists import ListKind, NumberingRegistry, classify_paragraph
from doc2docxplus.types import ConversionOptions, ListStyleBinding


def _num_pr(paragraph):
    p_pr = paragraph._p.pPr
    return None if p_pr is None else p_pr.numPr


@pytest.mark.parametrize("text", ["► Contact us", ">next", "   ►  indented"])
def test_bullet_lines_get_quarter_inch_indent(text, document, target, make_paragraph, options):
    kind = classify_paragraph(make_paragraph(text), target, NumberingRegistry(document), options)
    assert kind is ListKind.BULLET_LINE
    assert target.paragraph_format.left_indent == Twips(360)
    assert _num_pr(target) is None


def test_bullet_line_wins_over_list_level(document, target, make_paragraph, options):
    source = make_paragraph("► item", list_level=2)
    kind = classify_paragraph(source, target, NumberingRegistry(document), options)
    assert kind is ListKind.BULLET_LINE
    assert _num_pr(target) is None


def test_plain_paragraph_untouched(document, target, make_paragraph, options):
    kind = classify_paragraph(make_paragraph("Body text"), target, NumberingRegistry(document), options)
    assert kind is ListKind.NONE
    assert target.paragraph_format.left_indent is None
    assert target.style.name == "Normal"


def test_top_level_list_item(document, target, make_paragraph, options):
    numbering = NumberingRegistry(document)
    kind = classify_paragraph(make_paragraph("First", list_level=0), target, numbering, options)
    assert kind is ListKind.LIST_ITEM
    num_pr = _num_pr(target)
    assert num_pr.ilvl.val == 0
    assert num_pr.numId.val == numbering.shared_num_id()
    assert target.paragraph_format.left_indent is None
    assert target.style.name == "List Paragraph"


def test_nested_list_item_indent_and_style(document, target, make_paragraph, options):
    classify_paragraph(make_paragraph("Nested", list_level=2), target, NumberingRegistry(document), options)
    assert _num_pr(target).ilvl.val == 2
    assert target.paragraph_format.left_indent == Twips(720 * 3)
    assert target.style.name == "List Bullet"


def test_bullet_first_binding_swaps_styles(document, make_paragraph):
    options = ConversionOptions(list_style_binding=ListStyleBinding.BULLET_FIRST)
    numbering = NumberingRegistry(document)
    top = document.add_paragraph()
    nested = document.add_paragraph()
    classify_paragraph(make_paragraph("a", list_level=0), top, numbering, options)
    classify_paragraph(make_paragraph("b", list_level=1), nested, numbering, options)
    assert top.style.name == "List Bullet"
    assert nested.style.name == "List Paragraph"


def test_all_list_items_share_one_numbering_definition(document, make_paragraph, options):
    numbering = NumberingRegistry(document)
    targets = [document.add_paragraph() for _ in range(3)]
    for level, paragraph in enumerate(targets):
        classify_paragraph(make_paragraph("item", list_level=level), paragraph, numbering, options)

    num_ids = {_num_pr(paragraph).numId.val for paragraph in targets}
    assert len(num_ids) == 1
    element = document.part.numbering_part.element
    nums = [num for num in element.num_lst if num.numId in num_ids]
    assert len(nums) == 1
    abstract_id = nums[0].abstractNumId.val
    abstract = element.xpath(f"./w:abstractNum[@w:abstractNumId='{abstract_id}']")
    assert len(abstract) == 1
    assert len(abstract[0].findall(qn("w:lvl"))) == 9


def test_missing_list_style_is_added(document, target, make_paragraph, options):
    styles = document.styles
    if "List Paragraph" in styles:
        element = styles["List Paragraph"].element
        element.getparent().remove(element)
    assert "List Paragraph" not in styles

    classify_paragraph(make_paragraph("x", list_level=0), target, NumberingRegistry(document), options)
    assert "List Paragraph" in styles
    assert target.style.name == "List Paragraph"
