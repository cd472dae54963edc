"""CLI helpers for the ``office`` command."""

from __future__ import annotations

from argparse import ArgumentParser, _SubParsersAction

from ...office import DEFAULT_HOST, DEFAULT_PORT
from ...tools.common.interfaces import ConversionContext


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("office", help="Convert a .doc file through a running office server")
    parser.add_argument("input", help="Input .doc path")
    parser.add_argument("output", nargs="?", help="Destination .docx path")
    parser.add_argument("--host", default=DEFAULT_HOST, help="Office server host")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="Office server port")
    parser.add_argument("--timeout", type=float, default=60.0, help="Conversion timeout in seconds")
    parser.set_defaults(build_context=_build_context, tool_name="convert_office")


def _build_context(args) -> ConversionContext:
    return ConversionContext(
        input_path=args.input,
        output_path=args.output,
        config={"host": args.host, "port": args.port, "timeout": args.timeout},
    )
