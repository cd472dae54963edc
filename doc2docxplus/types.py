"""Shared type definitions and conversion options."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "ConversionOptions",
    "ConversionResult",
    "FontSizePolicy",
    "IndentationPolicy",
    "ListStyleBinding",
]


class IndentationPolicy(str, Enum):
    """How paragraph indentation is carried over from the source."""

    PRESERVE_ALL = "preserve-all"
    RESET_THEN_OVERRIDE_POSITIVE = "reset-then-override-positive"


class ListStyleBinding(str, Enum):
    """Which paragraph style is bound to top-level vs nested list items."""

    PARAGRAPH_FIRST = "paragraph-first"
    BULLET_FIRST = "bullet-first"

    def style_for_level(self, level: int) -> str:
        top, nested = ("List Paragraph", "List Bullet")
        if self is ListStyleBinding.BULLET_FIRST:
            top, nested = nested, top
        return top if level == 0 else nested


class FontSizePolicy(str, Enum):
    """Whether half-point font sizes are halved (current) or copied raw (historical)."""

    HALVE = "halve"
    RAW = "raw"

    def to_points(self, half_points: int) -> int:
        if self is FontSizePolicy.RAW:
            return half_points
        return half_points // 2


@dataclass(frozen=True)
class ConversionOptions:
    """Options controlling DOC to DOCX conversion."""

    indentation_policy: IndentationPolicy = IndentationPolicy.PRESERVE_ALL
    list_style_binding: ListStyleBinding = ListStyleBinding.PARAGRAPH_FIRST
    font_size_policy: FontSizePolicy = FontSizePolicy.HALVE
    margin_default: int = 100
    surface_effects: bool = True
    fallback_font: str = "Times New Roman"
    bullet_font: str = "Segoe UI Symbol"
    bullet_size: int = 8
    email_font: str = "Calibri"
    email_size: int = 11

    def __post_init__(self) -> None:
        # Accept plain strings so options can come from CLI flags or mappings.
        object.__setattr__(self, "indentation_policy", IndentationPolicy(self.indentation_policy))
        object.__setattr__(self, "list_style_binding", ListStyleBinding(self.list_style_binding))
        object.__setattr__(self, "font_size_policy", FontSizePolicy(self.font_size_policy))
        if self.margin_default < 0:
            raise ValueError("margin_default must be a non-negative number of twips")


@dataclass(slots=True)
class ConversionResult:
    """Information about the produced DOCX package."""

    content: bytes
    section_count: int
    paragraph_count: int
    run_count: int
