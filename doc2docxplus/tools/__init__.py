"""Namespace for pluggable doc2docxplus tools."""

from __future__ import annotations

from .common.pipeline import registry


def load_builtin_plugins() -> None:
    from .converter import native  # noqa: F401  # register convert_docx
    from .converter import office  # noqa: F401  # register convert_office


__all__ = ["registry", "load_builtin_plugins"]
