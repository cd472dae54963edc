"""Table-stream structures: piece table, FKPs, fonts, stylesheet and sections."""

from __future__ import annotations

import bisect
import struct
import sys
from dataclasses import dataclass

from ..exceptions import DocumentParseError

__all__ = [
    "FKP_SIZE",
    "NormalStyle",
    "Piece",
    "PropertyIndex",
    "PropertyRange",
    "decode_piece_text",
    "parse_bte_pages",
    "parse_chpx_fkps",
    "parse_clx",
    "parse_font_names",
    "parse_normal_style",
    "parse_papx_fkps",
    "parse_section_ends",
]

FKP_SIZE = 512
_FFN_NAME_OFFSET = 40


def _require(data: bytes, end: int, what: str) -> None:
    if end > len(data):
        raise DocumentParseError(f"Truncated {what}: needs {end} bytes, stream has {len(data)}")


# -- Piece table -------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Piece:
    """A contiguous run of characters stored at one place in the WordDocument stream."""

    cp_start: int
    cp_end: int
    fc: int
    compressed: bool

    @property
    def byte_width(self) -> int:
        return 1 if self.compressed else 2

    def fc_at(self, cp: int) -> int:
        return self.fc + (cp - self.cp_start) * self.byte_width


def parse_clx(table: bytes, fc: int, lcb: int) -> list[Piece]:
    """Parse the CLX and return the piece table in CP order."""

    end = fc + lcb
    _require(table, end, "CLX")
    pos = fc
    while pos < end:
        clxt = table[pos]
        if clxt == 0x01:
            _require(table, pos + 3, "CLX property list")
            cb_grpprl = struct.unpack_from("<H", table, pos + 1)[0]
            pos += 3 + cb_grpprl
        elif clxt == 0x02:
            _require(table, pos + 5, "piece table header")
            lcb_pcd = struct.unpack_from("<I", table, pos + 1)[0]
            start = pos + 5
            _require(table, start + lcb_pcd, "piece table")
            return _parse_plc_pcd(table[start : start + lcb_pcd])
        else:
            raise DocumentParseError(f"Unexpected CLX entry type 0x{clxt:02X}")
    raise DocumentParseError("CLX does not contain a piece table")


def _parse_plc_pcd(data: bytes) -> list[Piece]:
    if len(data) < 4 or (len(data) - 4) % 12:
        raise DocumentParseError(f"Malformed piece table of {len(data)} bytes")
    count = (len(data) - 4) // 12
    cps = struct.unpack_from(f"<{count + 1}I", data, 0)
    base = (count + 1) * 4
    pieces: list[Piece] = []
    for index in range(count):
        _, fc_compressed, _ = struct.unpack_from("<HIH", data, base + index * 8)
        compressed = bool(fc_compressed & 0x40000000)
        fc = fc_compressed & 0x3FFFFFFF
        if compressed:
            fc //= 2
        pieces.append(Piece(cp_start=cps[index], cp_end=cps[index + 1], fc=fc, compressed=compressed))
    return pieces


def decode_piece_text(word: bytes, piece: Piece, cp_start: int, cp_end: int) -> str:
    """Decode the characters ``[cp_start, cp_end)`` of *piece*."""

    start = piece.fc_at(cp_start)
    end = piece.fc_at(cp_end)
    _require(word, end, "document text")
    raw = word[start:end]
    if piece.compressed:
        return raw.decode("cp1252", errors="replace")
    return raw.decode("utf-16-le", errors="replace")


# -- Formatted disk pages ----------------------------------------------------


@dataclass(frozen=True, slots=True)
class PropertyRange:
    """Properties covering the stream bytes ``[fc_start, fc_end)``."""

    fc_start: int
    fc_end: int
    grpprl: bytes
    istd: int = 0


class PropertyIndex:
    """Sorted lookup of :class:`PropertyRange` objects by stream offset."""

    def __init__(self, ranges: list[PropertyRange]) -> None:
        self._ranges = sorted(ranges, key=lambda item: item.fc_start)
        self._starts = [item.fc_start for item in self._ranges]

    def __len__(self) -> int:
        return len(self._ranges)

    def find(self, fc: int) -> PropertyRange | None:
        index = bisect.bisect_right(self._starts, fc) - 1
        if index >= 0 and fc < self._ranges[index].fc_end:
            return self._ranges[index]
        return None

    def segment(self, fc: int) -> tuple[PropertyRange | None, int]:
        """Return the range containing *fc* and the offset where it stops applying."""

        found = self.find(fc)
        if found is not None:
            return found, found.fc_end
        index = bisect.bisect_right(self._starts, fc)
        if index < len(self._starts):
            return None, self._starts[index]
        return None, sys.maxsize


def parse_bte_pages(table: bytes, fc: int, lcb: int) -> list[int]:
    """Return FKP page numbers from a PlcBteChpx or PlcBtePapx."""

    if lcb < 4 or (lcb - 4) % 8:
        raise DocumentParseError(f"Malformed bin table of {lcb} bytes")
    _require(table, fc + lcb, "bin table")
    count = (lcb - 4) // 8
    base = fc + (count + 1) * 4
    return [struct.unpack_from("<I", table, base + index * 4)[0] & 0x3FFFFF for index in range(count)]


def _fkp_page(word: bytes, pn: int) -> bytes:
    offset = pn * FKP_SIZE
    _require(word, offset + FKP_SIZE, f"formatted disk page {pn}")
    return word[offset : offset + FKP_SIZE]


def parse_chpx_fkps(word: bytes, pages: list[int]) -> list[PropertyRange]:
    ranges: list[PropertyRange] = []
    for pn in pages:
        page = _fkp_page(word, pn)
        crun = page[FKP_SIZE - 1]
        fcs = struct.unpack_from(f"<{crun + 1}I", page, 0)
        rgb = (crun + 1) * 4
        for index in range(crun):
            word_offset = page[rgb + index]
            grpprl = b""
            if word_offset:
                start = word_offset * 2
                cb = page[start]
                grpprl = page[start + 1 : start + 1 + cb]
            ranges.append(PropertyRange(fcs[index], fcs[index + 1], grpprl))
    return ranges


def parse_papx_fkps(word: bytes, pages: list[int]) -> list[PropertyRange]:
    ranges: list[PropertyRange] = []
    for pn in pages:
        page = _fkp_page(word, pn)
        cpara = page[FKP_SIZE - 1]
        fcs = struct.unpack_from(f"<{cpara + 1}I", page, 0)
        rgbx = (cpara + 1) * 4
        for index in range(cpara):
            b_offset = page[rgbx + index * 13]
            istd = 0
            grpprl = b""
            if b_offset:
                start = b_offset * 2
                cb = page[start]
                if cb == 0:
                    body = page[start + 2 : start + 2 + page[start + 1] * 2]
                else:
                    body = page[start + 1 : start + cb * 2]
                if len(body) >= 2:
                    istd = struct.unpack_from("<H", body, 0)[0]
                    grpprl = body[2:]
            ranges.append(PropertyRange(fcs[index], fcs[index + 1], grpprl, istd))
    return ranges


# -- Fonts, styles and sections ----------------------------------------------


def parse_font_names(table: bytes, fc: int, lcb: int) -> list[str]:
    """Return font names from the SttbfFfn, indexed by ``ftc``."""

    end = fc + lcb
    _require(table, end, "font table")
    count = struct.unpack_from("<H", table, fc)[0]
    pos = fc + 4
    names: list[str] = []
    for _ in range(count):
        if pos >= end:
            break
        size = table[pos] + 1
        raw = table[pos + _FFN_NAME_OFFSET : min(pos + size, end)]
        names.append(raw.decode("utf-16-le", errors="replace").split("\x00", 1)[0])
        pos += size
    return names


@dataclass(frozen=True, slots=True)
class NormalStyle:
    """Document defaults: the stylesheet's default font and the Normal style's formatting."""

    default_ftc: int | None = None
    papx: bytes = b""
    chpx: bytes = b""


def parse_normal_style(table: bytes, fc: int, lcb: int) -> NormalStyle:
    """Read the default font and the Normal (istd 0) style from the STSH."""

    end = fc + lcb
    _require(table, end, "stylesheet")
    if lcb < 2:
        return NormalStyle()
    cb_stshi = struct.unpack_from("<H", table, fc)[0]
    stshi = fc + 2
    if cb_stshi < 4 or stshi + cb_stshi > end:
        raise DocumentParseError("Malformed stylesheet header")
    cstd, cb_std_base = struct.unpack_from("<HH", table, stshi)
    default_ftc = struct.unpack_from("<H", table, stshi + 12)[0] if cb_stshi >= 14 else None

    pos = stshi + cb_stshi
    if cstd == 0 or pos + 2 > end:
        return NormalStyle(default_ftc=default_ftc)
    cb_std = struct.unpack_from("<H", table, pos)[0]
    if cb_std == 0:
        return NormalStyle(default_ftc=default_ftc)
    _require(table, pos + 2 + cb_std, "Normal style")
    std = table[pos + 2 : pos + 2 + cb_std]
    if len(std) < cb_std_base + 2:
        return NormalStyle(default_ftc=default_ftc)

    stk = struct.unpack_from("<H", std, 2)[0] & 0x000F
    cupx = struct.unpack_from("<H", std, 4)[0] & 0x000F
    name_length = struct.unpack_from("<H", std, cb_std_base)[0]
    upx = cb_std_base + 2 + (name_length + 1) * 2

    papx = b""
    chpx = b""
    for index in range(cupx):
        if upx + 2 > len(std):
            break
        cb_upx = struct.unpack_from("<H", std, upx)[0]
        body = std[upx + 2 : upx + 2 + cb_upx]
        if stk == 1 and index == 0:
            papx = body[2:]
        elif (stk == 1 and index == 1) or (stk == 2 and index == 0):
            chpx = body
        upx += 2 + cb_upx + (cb_upx & 1)
    return NormalStyle(default_ftc=default_ftc, papx=papx, chpx=chpx)


def parse_section_ends(table: bytes, fc: int, lcb: int) -> list[int]:
    """Return the exclusive end CP of every section from the PlcfSed."""

    if lcb < 4 or (lcb - 4) % 16:
        raise DocumentParseError(f"Malformed section table of {lcb} bytes")
    _require(table, fc + lcb, "section table")
    count = (lcb - 4) // 16
    cps = struct.unpack_from(f"<{count + 1}I", table, fc)
    return list(cps[1:])
