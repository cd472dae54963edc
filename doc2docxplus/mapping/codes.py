"""Legacy numeric formatting codes and their DOCX counterparts."""

from __future__ import annotations

from enum import Enum

from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_UNDERLINE

from ..model import BORDER_NIL

__all__ = ["Justification", "UnderlineCode", "VerticalPosition", "has_border"]


class Justification(Enum):
    UNKNOWN = 0
    LEFT = 1
    CENTER = 2
    RIGHT = 3
    JUSTIFIED = 4

    @classmethod
    def from_code(cls, code: int | None) -> "Justification":
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN

    @property
    def alignment(self) -> WD_ALIGN_PARAGRAPH:
        return _ALIGNMENTS[self]


_ALIGNMENTS = {
    Justification.UNKNOWN: WD_ALIGN_PARAGRAPH.LEFT,
    Justification.LEFT: WD_ALIGN_PARAGRAPH.LEFT,
    Justification.CENTER: WD_ALIGN_PARAGRAPH.CENTER,
    Justification.RIGHT: WD_ALIGN_PARAGRAPH.RIGHT,
    Justification.JUSTIFIED: WD_ALIGN_PARAGRAPH.JUSTIFY,
}


class UnderlineCode(Enum):
    NONE = 0
    SINGLE = 1
    DOUBLE = 2
    DOTTED = 3
    DASH = 4
    WORDS = 5
    THICK = 6
    WAVE = 7
    UNKNOWN = -1

    @classmethod
    def from_code(cls, code: int | None) -> "UnderlineCode":
        if code is None or code < 0:
            return cls.UNKNOWN
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN

    @property
    def underline(self) -> WD_UNDERLINE | None:
        """The DOCX underline style, or ``None`` when no attribute should be written."""

        return _UNDERLINES[self]


_UNDERLINES = {
    UnderlineCode.NONE: None,
    UnderlineCode.SINGLE: WD_UNDERLINE.SINGLE,
    UnderlineCode.DOUBLE: WD_UNDERLINE.DOUBLE,
    UnderlineCode.DOTTED: WD_UNDERLINE.DOTTED,
    UnderlineCode.DASH: WD_UNDERLINE.DASH,
    UnderlineCode.WORDS: WD_UNDERLINE.WORDS,
    UnderlineCode.THICK: WD_UNDERLINE.THICK,
    UnderlineCode.WAVE: WD_UNDERLINE.WAVY,
    UnderlineCode.UNKNOWN: WD_UNDERLINE.NONE,
}


class VerticalPosition(Enum):
    BASELINE = 0
    SUBSCRIPT = 1
    SUPERSCRIPT = 2

    @classmethod
    def from_code(cls, code: int | None) -> "VerticalPosition":
        try:
            return cls(code)
        except ValueError:
            return cls.BASELINE


def has_border(type_code: int | None) -> bool:
    """Whether a border type code declares a visible border."""

    return bool(type_code) and type_code != BORDER_NIL
