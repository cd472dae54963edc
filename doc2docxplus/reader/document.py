"""Assemble a :class:`SourceDocument` from the streams of a Word 97-2003 file."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from io import BytesIO
from typing import Sequence

import olefile

from ..exceptions import DocumentParseError
from ..model import Borders, Section, SourceDocument, SourceParagraph, SourceRun
from .fib import CLX, PLCF_BTE_CHPX, PLCF_BTE_PAPX, PLCF_SED, STSHF, STTBF_FFN, Fib, parse_fib
from .sprm import apply_character_sprms, apply_paragraph_sprms
from .structures import (
    NormalStyle,
    Piece,
    PropertyIndex,
    PropertyRange,
    decode_piece_text,
    parse_bte_pages,
    parse_chpx_fkps,
    parse_clx,
    parse_font_names,
    parse_normal_style,
    parse_papx_fkps,
    parse_section_ends,
)

__all__ = ["read_document", "parse_streams"]

LOGGER = logging.getLogger(__name__)

WORD_DOCUMENT_STREAM = "WordDocument"
DEFAULT_FONT_SIZE = 20

PARAGRAPH_MARK = "\r"
CELL_MARK = "\x07"
SECTION_MARK = "\x0c"
LINE_BREAK = "\x0b"
FIELD_BEGIN = "\x13"
FIELD_SEPARATOR = "\x14"
FIELD_END = "\x15"
NON_BREAKING_HYPHEN = "\x1e"
_KEPT_CONTROL = {"\t", "\n"}
# Noncharacters that XML 1.0 cannot carry.
_XML_INVALID = {"\ufffe", "\uffff"}


def read_document(data: bytes) -> SourceDocument:
    """Parse raw ``.doc`` bytes into a :class:`SourceDocument`."""

    if len(data) < len(olefile.MAGIC) or data[: len(olefile.MAGIC)] != olefile.MAGIC:
        raise DocumentParseError("Input is not an OLE compound document (bad signature)")

    try:
        ole = olefile.OleFileIO(BytesIO(data))
    except Exception as exc:  # pragma: no cover - olefile exception types vary
        raise DocumentParseError(f"Unable to open OLE compound document: {exc}") from exc

    with ole:
        if not ole.exists(WORD_DOCUMENT_STREAM):
            raise DocumentParseError("OLE container has no WordDocument stream")
        word = ole.openstream(WORD_DOCUMENT_STREAM).read()
        fib = parse_fib(word)
        if not ole.exists(fib.table_stream_name):
            raise DocumentParseError(f"OLE container has no {fib.table_stream_name} stream")
        table = ole.openstream(fib.table_stream_name).read()

    return parse_streams(word, table, fib=fib)


def parse_streams(word: bytes, table: bytes, *, fib: Fib | None = None) -> SourceDocument:
    """Build the source model from the WordDocument and table stream contents."""

    fib = fib or parse_fib(word)
    if fib.encrypted:
        raise DocumentParseError("Encrypted or obfuscated Word documents are not supported")

    clx = fib.entry(CLX)
    if clx is None:
        raise DocumentParseError("Document has no piece table")
    pieces = parse_clx(table, clx.fc, clx.lcb)

    ffn = fib.entry(STTBF_FFN)
    fonts = parse_font_names(table, ffn.fc, ffn.lcb) if ffn else []
    stsh = fib.entry(STSHF)
    normal = parse_normal_style(table, stsh.fc, stsh.lcb) if stsh else NormalStyle()
    chpx = PropertyIndex(_fkp_ranges(word, table, fib, PLCF_BTE_CHPX))
    papx = PropertyIndex(_fkp_ranges(word, table, fib, PLCF_BTE_PAPX))
    sed = fib.entry(PLCF_SED)
    section_ends = parse_section_ends(table, sed.fc, sed.lcb) if sed else []

    LOGGER.debug(
        "Parsed FIB nFib=%d: %d characters, %d pieces, %d fonts, %d character ranges, %d paragraph ranges",
        fib.n_fib,
        fib.ccp_text,
        len(pieces),
        len(fonts),
        len(chpx),
        len(papx),
    )

    assembler = _DocumentAssembler(
        fonts=fonts,
        normal=normal,
        papx=papx,
        section_ends=section_ends,
    )
    for piece in pieces:
        cp_end = min(piece.cp_end, fib.ccp_text)
        if piece.cp_start >= cp_end:
            continue
        _feed_piece(assembler, word, piece, cp_end, chpx)
    return assembler.finish()


def _fkp_ranges(word: bytes, table: bytes, fib: Fib, index: int) -> list[PropertyRange]:
    entry = fib.entry(index)
    if entry is None:
        return []
    pages = parse_bte_pages(table, entry.fc, entry.lcb)
    if index == PLCF_BTE_CHPX:
        return parse_chpx_fkps(word, pages)
    return parse_papx_fkps(word, pages)


def _feed_piece(
    assembler: "_DocumentAssembler",
    word: bytes,
    piece: Piece,
    cp_end: int,
    chpx: PropertyIndex,
) -> None:
    cp = piece.cp_start
    while cp < cp_end:
        fc = piece.fc_at(cp)
        found, fc_stop = chpx.segment(fc)
        count = max(1, -(-(fc_stop - fc) // piece.byte_width))
        chunk_end = min(cp_end, cp + count)
        assembler.set_character_range(found)
        text = decode_piece_text(word, piece, cp, chunk_end)
        for offset, char in enumerate(text):
            assembler.feed(char, cp + offset, piece.fc_at(cp + offset))
        cp = chunk_end


@dataclass
class _DocumentAssembler:
    """Accumulates characters into runs, paragraphs and sections."""

    fonts: Sequence[str]
    normal: NormalStyle
    papx: PropertyIndex
    section_ends: list[int]
    sections: list[Section] = field(default_factory=list)
    _runs: list[SourceRun] = field(default_factory=list)
    _buffer: list[str] = field(default_factory=list)
    _current: SourceRun | None = None
    _fields: list[bool] = field(default_factory=list)
    _section_index: int = 0
    _run_cache: dict[bytes, SourceRun] = field(default_factory=dict)
    _paragraph_cache: dict[bytes, SourceParagraph] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.sections = [Section() for _ in self.section_ends] or [Section()]
        default_font = None
        if self.normal.default_ftc is not None and self.normal.default_ftc < len(self.fonts):
            default_font = self.fonts[self.normal.default_ftc]
        elif self.fonts:
            default_font = self.fonts[0]
        base_run = SourceRun(font_name=default_font, font_size=DEFAULT_FONT_SIZE)
        self._base_run = apply_character_sprms(base_run, self.normal.chpx, self.fonts)
        self._base_paragraph = apply_paragraph_sprms(SourceParagraph(), self.normal.papx)
        self._current = self._base_run

    # -- character level --------------------------------------------------
    def set_character_range(self, found: PropertyRange | None) -> None:
        grpprl = found.grpprl if found is not None else b""
        props = self._run_cache.get(grpprl)
        if props is None:
            props = apply_character_sprms(replace(self._base_run), grpprl, self.fonts)
            self._run_cache[grpprl] = props
        if props is not self._current:
            self._flush_run()
            self._current = props

    def feed(self, char: str, cp: int, fc: int) -> None:
        if char in (PARAGRAPH_MARK, CELL_MARK):
            self._end_paragraph(cp, fc)
            return
        if char == SECTION_MARK:
            if cp + 1 in self.section_ends:
                self._end_paragraph(cp, fc)
            return
        if char == FIELD_BEGIN:
            self._fields.append(False)
            return
        if char == FIELD_SEPARATOR:
            if self._fields:
                self._fields[-1] = True
            return
        if char == FIELD_END:
            if self._fields:
                self._fields.pop()
            return
        if not all(self._fields):
            return
        if char == LINE_BREAK:
            char = "\n"
        elif char == NON_BREAKING_HYPHEN:
            char = "‑"
        elif (char < " " and char not in _KEPT_CONTROL) or char in _XML_INVALID:
            return
        self._buffer.append(char)

    def _flush_run(self) -> None:
        if not self._buffer:
            return
        assert self._current is not None
        self._runs.append(replace(self._current, text="".join(self._buffer)))
        self._buffer.clear()

    # -- paragraph level --------------------------------------------------
    def _paragraph_template(self, fc: int) -> SourceParagraph:
        found = self.papx.find(fc)
        grpprl = found.grpprl if found is not None else b""
        template = self._paragraph_cache.get(grpprl)
        if template is None:
            base = replace(self._base_paragraph, borders=replace(self._base_paragraph.borders), runs=[])
            template = apply_paragraph_sprms(base, grpprl)
            self._paragraph_cache[grpprl] = template
        return template

    def _end_paragraph(self, cp: int, fc: int) -> None:
        self._flush_run()
        template = self._paragraph_template(fc)
        paragraph = replace(template, borders=replace(template.borders), runs=self._runs)
        self._runs = []
        while self._section_index < len(self.sections) - 1 and cp >= self.section_ends[self._section_index]:
            self._section_index += 1
        self.sections[self._section_index].paragraphs.append(paragraph)

    def finish(self) -> SourceDocument:
        self._flush_run()
        if self._runs:
            paragraph = replace(self._base_paragraph, borders=Borders(), runs=self._runs)
            self._runs = []
            self.sections[self._section_index].paragraphs.append(paragraph)
        return SourceDocument(sections=self.sections)
