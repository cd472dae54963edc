"""File Information Block (FIB) parsing for Word 97-2003 documents."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from ..exceptions import DocumentParseError

__all__ = [
    "CLX",
    "FIB_IDENT",
    "Fib",
    "FibEntry",
    "PLCF_BTE_CHPX",
    "PLCF_BTE_PAPX",
    "PLCF_SED",
    "STSHF",
    "STTBF_FFN",
    "parse_fib",
]

FIB_IDENT = 0xA5EC
MIN_NFIB = 0x00C0

# Indices into FibRgFcLcb97.
STSHF = 1
PLCF_SED = 6
PLCF_BTE_CHPX = 12
PLCF_BTE_PAPX = 13
STTBF_FFN = 15
CLX = 33

_F_ENCRYPTED = 0x0100
_F_WHICH_TBL_STM = 0x0200
_F_OBFUSCATED = 0x8000


@dataclass(frozen=True, slots=True)
class FibEntry:
    fc: int
    lcb: int


@dataclass(frozen=True, slots=True)
class Fib:
    """The parts of the FIB the reader needs."""

    n_fib: int
    encrypted: bool
    table_stream_name: str
    ccp_text: int
    entries: tuple[FibEntry, ...]

    def entry(self, index: int) -> FibEntry | None:
        """Return the ``(fc, lcb)`` pair at *index*, or ``None`` when absent or empty."""

        if index >= len(self.entries):
            return None
        entry = self.entries[index]
        if entry.lcb == 0:
            return None
        return entry


def _u16(data: bytes, offset: int) -> int:
    return struct.unpack_from("<H", data, offset)[0]


def parse_fib(stream: bytes) -> Fib:
    """Parse the FIB at the start of the ``WordDocument`` stream."""

    if len(stream) < 0x22:
        raise DocumentParseError("WordDocument stream is too short to contain a FIB")

    ident, n_fib = struct.unpack_from("<HH", stream, 0)
    if ident != FIB_IDENT:
        raise DocumentParseError(f"Invalid Word document signature 0x{ident:04X}")
    if n_fib < MIN_NFIB:
        raise DocumentParseError(
            f"Unsupported Word format version (nFib={n_fib}); Word 97 or later is required"
        )

    flags = _u16(stream, 0x0A)
    table_stream_name = "1Table" if flags & _F_WHICH_TBL_STM else "0Table"

    try:
        offset = 0x20
        csw = _u16(stream, offset)
        offset += 2 + csw * 2
        cslw = _u16(stream, offset)
        rglw_offset = offset + 2
        if cslw < 4:
            raise DocumentParseError(f"FIB declares too few long values ({cslw})")
        ccp_text = struct.unpack_from("<i", stream, rglw_offset + 12)[0]
        offset = rglw_offset + cslw * 4
        cb_rg_fc_lcb = _u16(stream, offset)
        offset += 2
        if offset + cb_rg_fc_lcb * 8 > len(stream):
            raise DocumentParseError("FIB FcLcb array extends beyond the WordDocument stream")
        entries = tuple(
            FibEntry(*struct.unpack_from("<II", stream, offset + index * 8))
            for index in range(cb_rg_fc_lcb)
        )
    except struct.error as exc:
        raise DocumentParseError("Truncated FIB in WordDocument stream") from exc

    if ccp_text < 0:
        raise DocumentParseError(f"FIB declares a negative main text length ({ccp_text})")

    return Fib(
        n_fib=n_fib,
        encrypted=bool(flags & (_F_ENCRYPTED | _F_OBFUSCATED)),
        table_stream_name=table_stream_name,
        ccp_text=ccp_text,
        entries=entries,
    )
