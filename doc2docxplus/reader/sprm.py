"""Single property modifier (sprm) decoding.

Formatting in a Word 97 file is stored as lists of sprms: a two-byte opcode
whose top three bits (``spra``) give the operand size, followed by the
operand. Only the character and paragraph sprms the mapping engine consumes
are interpreted here; every other sprm is skipped by size.
"""

from __future__ import annotations

import logging
import struct
from typing import Iterator, Sequence

from ..model import LineSpacing, SourceParagraph, SourceRun

__all__ = [
    "ICO_PALETTE",
    "UNKNOWN_UNDERLINE",
    "apply_character_sprms",
    "apply_paragraph_sprms",
    "iter_sprms",
]

LOGGER = logging.getLogger(__name__)

_FIXED_OPERAND_SIZES = {0: 1, 1: 1, 2: 2, 3: 4, 4: 2, 5: 2, 7: 3}

SPRM_T_DEF_TABLE = 0xD608
SPRM_P_CHG_TABS = 0xC615

# Character sprms
SPRM_C_F_BOLD = 0x0835
SPRM_C_F_ITALIC = 0x0836
SPRM_C_F_STRIKE = 0x0837
SPRM_C_F_SHADOW = 0x0839
SPRM_C_F_IMPRINT = 0x0854
SPRM_C_F_EMBOSS = 0x0858
SPRM_C_KUL = 0x2A3E
SPRM_C_ICO = 0x2A42
SPRM_C_HPS = 0x4A43
SPRM_C_ISS = 0x2A48
SPRM_C_HPS_KERN = 0x484B
SPRM_C_RG_FTC0 = 0x4A4F
SPRM_C_CV = 0x6870

# Paragraph sprms
SPRM_P_JC80 = 0x2403
SPRM_P_JC = 0x2461
SPRM_P_DXA_RIGHT80 = 0x840E
SPRM_P_DXA_LEFT80 = 0x840F
SPRM_P_DXA_LEFT1_80 = 0x8411
SPRM_P_DXA_RIGHT = 0x845D
SPRM_P_DXA_LEFT = 0x845E
SPRM_P_DXA_LEFT1 = 0x8460
SPRM_P_DYA_LINE = 0x6412
SPRM_P_DYA_BEFORE = 0xA413
SPRM_P_DYA_AFTER = 0xA414
SPRM_P_ILVL = 0x260A
SPRM_P_ILFO = 0x460B

_BORDER_SPRMS_80 = {0x6424: "top", 0x6425: "left", 0x6426: "bottom", 0x6427: "right"}
_BORDER_SPRMS = {0xC64E: "top", 0xC64F: "left", 0xC650: "bottom", 0xC651: "right"}

ICO_PALETTE: Sequence[int | None] = (
    None,
    0x000000,
    0x0000FF,
    0x00FFFF,
    0x00FF00,
    0xFF00FF,
    0xFF0000,
    0xFFFF00,
    0xFFFFFF,
    0x000080,
    0x008080,
    0x008000,
    0x800080,
    0x800000,
    0x808000,
    0x808080,
    0xC0C0C0,
)

UNKNOWN_UNDERLINE = 0xFF

# kul values -> underline codes consumed by the run formatter
_KUL_TO_UNDERLINE = {
    0: 0,
    1: 1,   # single
    2: 5,   # words
    3: 2,   # double
    4: 3,   # dotted
    6: 6,   # thick
    7: 4,   # dash
    9: 4,   # dot dash
    10: 4,  # dot dot dash
    11: 7,  # wave
}

# iss: 1 superscript, 2 subscript -> vertical position: 1 subscript, 2 superscript
_ISS_TO_VERTICAL = {0: 0, 1: 2, 2: 1}


def _operand_size(sprm: int, grpprl: bytes, pos: int) -> tuple[int, int]:
    """Return ``(header, size)``: bytes to skip before the operand and operand length."""

    spra = sprm >> 13
    if spra != 6:
        return 0, _FIXED_OPERAND_SIZES[spra]
    if sprm == SPRM_T_DEF_TABLE:
        cb = struct.unpack_from("<H", grpprl, pos)[0]
        return 2, cb - 1
    cb = grpprl[pos]
    if sprm == SPRM_P_CHG_TABS and cb == 255:
        c_del = grpprl[pos + 1]
        add_pos = pos + 2 + c_del * 4
        c_add = grpprl[add_pos]
        return 1, 1 + c_del * 4 + 1 + c_add * 3
    return 1, cb


def iter_sprms(grpprl: bytes) -> Iterator[tuple[int, bytes]]:
    """Yield ``(sprm, operand)`` pairs from a property list."""

    pos = 0
    length = len(grpprl)
    while pos + 2 <= length:
        sprm = struct.unpack_from("<H", grpprl, pos)[0]
        pos += 2
        try:
            header, size = _operand_size(sprm, grpprl, pos)
        except (IndexError, struct.error):
            LOGGER.debug("Property list ends inside the size of sprm 0x%04X", sprm)
            return
        start = pos + header
        end = start + size
        if size < 0 or end > length:
            LOGGER.debug("Property list ends inside the operand of sprm 0x%04X", sprm)
            return
        yield sprm, grpprl[start:end]
        pos = end


def _toggle(current: bool, operand: bytes) -> bool:
    value = operand[0]
    if value == 0x80:
        return current
    if value == 0x81:
        return not current
    return bool(value)


def _u16(operand: bytes) -> int:
    return struct.unpack_from("<H", operand, 0)[0]


def _i16(operand: bytes) -> int:
    return struct.unpack_from("<h", operand, 0)[0]


def apply_character_sprms(run: SourceRun, grpprl: bytes, fonts: Sequence[str]) -> SourceRun:
    """Apply character sprms from *grpprl* onto *run* in place and return it."""

    for sprm, operand in iter_sprms(grpprl):
        if sprm == SPRM_C_F_BOLD:
            run.bold = _toggle(run.bold, operand)
        elif sprm == SPRM_C_F_ITALIC:
            run.italic = _toggle(run.italic, operand)
        elif sprm == SPRM_C_F_STRIKE:
            run.strike = _toggle(run.strike, operand)
        elif sprm == SPRM_C_F_SHADOW:
            run.shadow = _toggle(run.shadow, operand)
        elif sprm == SPRM_C_F_IMPRINT:
            run.imprint = _toggle(run.imprint, operand)
        elif sprm == SPRM_C_F_EMBOSS:
            run.emboss = _toggle(run.emboss, operand)
        elif sprm == SPRM_C_KUL:
            run.underline = _KUL_TO_UNDERLINE.get(operand[0], UNKNOWN_UNDERLINE)
        elif sprm == SPRM_C_ICO:
            ico = operand[0]
            color = ICO_PALETTE[ico] if ico < len(ICO_PALETTE) else None
            run.color = -1 if color is None else color
        elif sprm == SPRM_C_CV:
            red, green, blue, auto = operand[0], operand[1], operand[2], operand[3]
            run.color = -1 if auto == 0xFF else (red << 16) | (green << 8) | blue
        elif sprm == SPRM_C_HPS:
            run.font_size = _u16(operand)
        elif sprm == SPRM_C_ISS:
            run.vertical_position = _ISS_TO_VERTICAL.get(operand[0], 0)
        elif sprm == SPRM_C_HPS_KERN:
            run.kerning = _u16(operand)
        elif sprm == SPRM_C_RG_FTC0:
            ftc = _u16(operand)
            if ftc < len(fonts):
                run.font_name = fonts[ftc]
    return run


def _border_type(operand: bytes, *, legacy: bool) -> int:
    # Brc80: dptLineWidth, brcType, ico, flags. Brc: cv (4 bytes), dptLineWidth, brcType, flags.
    index = 1 if legacy else 5
    if len(operand) <= index:
        return 0
    if legacy and operand == b"\xff\xff\xff\xff":
        return 0
    return operand[index]


def apply_paragraph_sprms(paragraph: SourceParagraph, grpprl: bytes) -> SourceParagraph:
    """Apply paragraph sprms from *grpprl* onto *paragraph* in place and return it."""

    ilvl = max(paragraph.list_level, 0)
    in_list = paragraph.list_level >= 0
    for sprm, operand in iter_sprms(grpprl):
        if sprm in (SPRM_P_JC, SPRM_P_JC80):
            jc = operand[0]
            paragraph.justification = jc + 1 if jc <= 3 else 0
        elif sprm in (SPRM_P_DXA_LEFT, SPRM_P_DXA_LEFT80):
            paragraph.left_indent = _i16(operand)
        elif sprm in (SPRM_P_DXA_RIGHT, SPRM_P_DXA_RIGHT80):
            paragraph.right_indent = _i16(operand)
        elif sprm in (SPRM_P_DXA_LEFT1, SPRM_P_DXA_LEFT1_80):
            paragraph.first_line_indent = _i16(operand)
        elif sprm == SPRM_P_DYA_BEFORE:
            paragraph.spacing_before = _u16(operand)
        elif sprm == SPRM_P_DYA_AFTER:
            paragraph.spacing_after = _u16(operand)
        elif sprm == SPRM_P_DYA_LINE:
            line, multiple = struct.unpack_from("<hh", operand, 0)
            paragraph.line_spacing = LineSpacing(line=line, multiple=bool(multiple))
        elif sprm == SPRM_P_ILVL:
            ilvl = operand[0]
        elif sprm == SPRM_P_ILFO:
            in_list = _i16(operand) != 0
        elif sprm in _BORDER_SPRMS_80:
            setattr(paragraph.borders, _BORDER_SPRMS_80[sprm], _border_type(operand, legacy=True))
        elif sprm in _BORDER_SPRMS:
            setattr(paragraph.borders, _BORDER_SPRMS[sprm], _border_type(operand, legacy=False))
    paragraph.list_level = ilvl if in_list else -1
    return paragraph
