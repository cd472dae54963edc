"""Reader for legacy Word 97-2003 binary documents."""

from __future__ import annotations

from .document import parse_streams, read_document
from .fib import Fib, parse_fib

__all__ = ["Fib", "parse_fib", "parse_streams", "read_document"]
