"""Source document model produced by the legacy reader."""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = [
    "BORDER_NIL",
    "Borders",
    "LineSpacing",
    "Section",
    "SourceDocument",
    "SourceParagraph",
    "SourceRun",
]

# Border type code meaning "no border" in addition to 0.
BORDER_NIL = 0xFF


@dataclass(slots=True)
class SourceRun:
    """A run of uniformly formatted text inside a legacy paragraph."""

    text: str = ""
    bold: bool = False
    italic: bool = False
    strike: bool = False
    underline: int = 0
    color: int = -1
    font_name: str | None = None
    font_size: int = 20
    vertical_position: int = 0
    kerning: int = 0
    emboss: bool = False
    imprint: bool = False
    shadow: bool = False


@dataclass(slots=True)
class LineSpacing:
    """Line spacing descriptor (LSPD) declared on a paragraph."""

    line: int
    multiple: bool


@dataclass(slots=True)
class Borders:
    """Border type codes per paragraph edge (0 = no border)."""

    top: int = 0
    bottom: int = 0
    left: int = 0
    right: int = 0

    def edges(self) -> tuple[tuple[str, int], ...]:
        return (("top", self.top), ("left", self.left), ("bottom", self.bottom), ("right", self.right))


@dataclass(slots=True)
class SourceParagraph:
    """Paragraph properties and runs read from the legacy document."""

    justification: int = 0
    spacing_before: int = 0
    spacing_after: int = 0
    left_indent: int = 0
    right_indent: int = 0
    first_line_indent: int = 0
    list_level: int = -1
    borders: Borders = field(default_factory=Borders)
    line_spacing: LineSpacing | None = None
    runs: list[SourceRun] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


@dataclass(slots=True)
class Section:
    paragraphs: list[SourceParagraph] = field(default_factory=list)


@dataclass(slots=True)
class SourceDocument:
    """Parsed legacy document: sections own paragraphs, paragraphs own runs."""

    sections: list[Section] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.sections:
            self.sections.append(Section())

    def iter_paragraphs(self):
        for section in self.sections:
            yield from section.paragraphs

    @property
    def paragraph_count(self) -> int:
        return sum(len(section.paragraphs) for section in self.sections)
