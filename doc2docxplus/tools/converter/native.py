"""DOC → DOCX tool backed by the built-in mapping engine."""

from __future__ import annotations

import base64
import logging
from typing import Any

from ...converter import DocToDocxConverter
from ...types import ConversionOptions, ConversionResult
from ...utils import ensure_output_directory
from ...validators import decode_payload
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = logging.getLogger(__name__)


@register_tool("convert_docx")
class DocToDocxTool(BaseTool):
    name = "convert_docx"

    def run(self) -> ConversionResult:
        context = self.context
        options = self._ensure_options(context.config.get("options"))
        as_base64 = bool(context.config.get("base64"))

        data = context.config.get("data")
        if data is None:
            if context.input_path is None:
                raise ValueError("Conversion requires either an input path or document bytes")
            data = context.input_path.read_bytes()
        if as_base64:
            payload = data.decode("ascii", errors="replace") if isinstance(data, bytes) else data
            data = decode_payload(payload)

        result = DocToDocxConverter(options).convert(data)
        context.resources["result"] = result

        if context.input_path is not None or context.output_path is not None:
            output = context.default_output_path()
            ensure_output_directory(output)
            content = base64.b64encode(result.content) if as_base64 else result.content
            output.write_bytes(content)
            context.output_path = output
            LOGGER.info("Wrote DOCX to %s", output)
        return result

    @staticmethod
    def _ensure_options(value: Any) -> ConversionOptions | None:
        if value is None or isinstance(value, ConversionOptions):
            return value
        if isinstance(value, dict):
            return ConversionOptions(**value)
        raise TypeError("options must be a ConversionOptions instance or mapping")
