"""Command line interface for the doc2docxplus converter."""

from __future__ import annotations

import argparse
from typing import Sequence

from ..exceptions import Doc2DocxPlusError
from ..tools import load_builtin_plugins
from ..tools.common.interfaces import ConversionContext
from ..tools.common.pipeline import registry
from ..utils import configure_logging
from .commands import convert, office

COMMAND_MODULES = [convert, office]


def _create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="doc2docx", description="Convert Word 97-2003 documents to DOCX")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = True
    for module in COMMAND_MODULES:
        module.configure_parser(subparsers)
    return parser


def _resolve_tool_name(args, context: ConversionContext) -> str:
    tool_name = getattr(args, "tool_name", None)
    if tool_name:
        return tool_name
    if "tool_name" in context.resources:
        return context.resources["tool_name"]
    resolver = getattr(args, "tool_name_resolver", None)
    if resolver is not None:
        key = getattr(args, "engine", None)
        if key is not None:
            return resolver(key)
    raise SystemExit("Unable to determine tool name from arguments")


def main(argv: Sequence[str] | None = None) -> object:
    load_builtin_plugins()
    parser = _create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    context: ConversionContext = args.build_context(args)
    tool_name = _resolve_tool_name(args, context)
    tool = registry.create(tool_name, context)
    try:
        result = tool.run()
    except Doc2DocxPlusError as exc:
        raise SystemExit(f"doc2docx: error: {exc}") from exc
    print(context.output_path)
    return result


if __name__ == "__main__":  # pragma: no cover
    main()
