"""Heuristic content classification for source runs.

Classifiers are plain callables tried in order; the first one returning a
:class:`ContentKind` wins; runs no classifier matches are treated as plain text.
New heuristics are added by passing a different chain to the run formatter.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

from ..model import SourceRun

__all__ = [
    "BULLET_MARKERS",
    "DEFAULT_CLASSIFIERS",
    "Classifier",
    "ContentKind",
    "RunContext",
    "bullet_glyph",
    "classify_run",
    "email_like",
    "is_bullet_text",
    "strip_bullet_marker",
]

BULLET_MARKERS = ("►", ">")


class ContentKind(Enum):
    PLAIN = "plain"
    BULLET_GLYPH = "bullet-glyph"
    EMAIL_LIKE = "email-like"


@dataclass(frozen=True, slots=True)
class RunContext:
    run: SourceRun
    bullet_paragraph: bool = False
    first_content_run: bool = False


Classifier = Callable[[RunContext], "ContentKind | None"]


def is_bullet_text(text: str) -> bool:
    return text.strip().startswith(BULLET_MARKERS)


def strip_bullet_marker(text: str) -> str:
    """Remove one leading bullet marker and the whitespace around it."""

    stripped = text.lstrip()
    if stripped.startswith(BULLET_MARKERS):
        stripped = stripped[1:]
    return stripped.lstrip()


def bullet_glyph(context: RunContext) -> ContentKind | None:
    if context.bullet_paragraph and context.first_content_run:
        return ContentKind.BULLET_GLYPH
    return None


def email_like(context: RunContext) -> ContentKind | None:
    # Any text holding both "@" and "." counts as an address.
    text = context.run.text
    if "@" in text and "." in text:
        return ContentKind.EMAIL_LIKE
    return None


DEFAULT_CLASSIFIERS: tuple[Classifier, ...] = (bullet_glyph, email_like)


def classify_run(context: RunContext, classifiers: Sequence[Classifier] = DEFAULT_CLASSIFIERS) -> ContentKind:
    for classifier in classifiers:
        kind = classifier(context)
        if kind is not None:
            return kind
    return ContentKind.PLAIN
