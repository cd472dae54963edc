"""Mapping of the legacy paragraph/run model onto python-docx documents."""

from .classifiers import ContentKind, RunContext, classify_run
from .lists import ListKind, NumberingRegistry, classify_paragraph
from .paragraphs import map_paragraph
from .runs import format_runs
from .shell import create_document

__all__ = [
    "ContentKind",
    "ListKind",
    "NumberingRegistry",
    "RunContext",
    "classify_paragraph",
    "classify_run",
    "create_document",
    "format_runs",
    "map_paragraph",
]
