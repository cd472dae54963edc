from __future__ import annotations

from pathlib import Path
import sys

import pytest
from docx import Document

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from doc2docxplus.model import SourceParagraph, SourceRun  # noqa: E402
from doc2docxplus.types import ConversionOptions  # noqa: E402


@pytest.fixture()
def options() -> ConversionOptions:
    return ConversionOptions()


@pytest.fixture()
def document():
    return Document()


@pytest.fixture()
def target(document):
    return document.add_paragraph()


@pytest.fixture()
def make_paragraph():
    """Build a source paragraph with one plain run per text."""

    def _create(*texts: str, **properties) -> SourceParagraph:
        return SourceParagraph(runs=[SourceRun(text=text) for text in texts], **properties)

    return _create
