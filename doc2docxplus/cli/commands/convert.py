"""CLI helpers for the ``convert`` command."""

from __future__ import annotations

from argparse import ArgumentParser, _SubParsersAction

from ...tools.common.interfaces import ConversionContext
from ...types import FontSizePolicy, IndentationPolicy, ListStyleBinding

SUPPORTED_ENGINES = {
    "native": "convert_docx",
    "office": "convert_office",
}


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("convert", help="Convert a .doc file to .docx")
    parser.add_argument("input", help="Input .doc path")
    parser.add_argument("output", nargs="?", help="Destination .docx path (defaults to the input name)")
    parser.add_argument(
        "--engine",
        choices=sorted(SUPPORTED_ENGINES.keys()),
        default="native",
        help="Conversion engine",
    )
    parser.add_argument(
        "--base64",
        action="store_true",
        help="Treat the input file as base64 text and write base64 output",
    )
    parser.add_argument(
        "--indentation-policy",
        choices=[policy.value for policy in IndentationPolicy],
        help="Default: preserve-all",
    )
    parser.add_argument(
        "--list-style-binding",
        choices=[binding.value for binding in ListStyleBinding],
        help="Default: paragraph-first",
    )
    parser.add_argument(
        "--font-size-policy",
        choices=[policy.value for policy in FontSizePolicy],
        help="Default: halve",
    )
    parser.add_argument("--margin", type=int, help="Right margin and gutter in twips (default 100)")
    parser.add_argument(
        "--no-surface-effects",
        dest="surface_effects",
        action="store_false",
        default=None,
        help="Do not copy emboss, imprint and shadow",
    )
    parser.set_defaults(build_context=_build_context, tool_name_resolver=_select_tool)


def _select_tool(engine: str) -> str:
    return SUPPORTED_ENGINES[engine]


def _build_context(args) -> ConversionContext:
    tool_name = _select_tool(args.engine)
    options = {
        key: value
        for key, value in (
            ("indentation_policy", args.indentation_policy),
            ("list_style_binding", args.list_style_binding),
            ("font_size_policy", args.font_size_policy),
            ("margin_default", args.margin),
            ("surface_effects", args.surface_effects),
        )
        if value is not None
    }
    if tool_name != "convert_docx" and (args.base64 or options):
        raise SystemExit("doc2docx: error: --base64 and formatting options require the native engine")
    context = ConversionContext(
        input_path=args.input,
        output_path=args.output,
        config={"options": options, "base64": args.base64},
    )
    context.resources["tool_name"] = tool_name
    return context
