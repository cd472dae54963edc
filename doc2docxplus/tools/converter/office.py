"""DOC → DOCX tool delegating to an external office server."""

from __future__ import annotations

import logging
from pathlib import Path

from ...office import DEFAULT_HOST, DEFAULT_PORT, OfficeConnection
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool

LOGGER = logging.getLogger(__name__)


@register_tool("convert_office")
class OfficeServerTool(BaseTool):
    name = "convert_office"

    def run(self) -> Path:
        context = self.context
        if context.input_path is None:
            raise ValueError("Office conversion requires an input path")
        output = context.default_output_path()
        host = context.config.get("host") or DEFAULT_HOST
        port = int(context.config.get("port") or DEFAULT_PORT)
        timeout = float(context.config.get("timeout") or 60.0)

        LOGGER.debug("Converting %s to DOCX at %s via %s:%d", context.input_path, output, host, port)
        with OfficeConnection(host, port, timeout=timeout) as connection:
            result = connection.convert(context.input_path, output)
        context.output_path = result
        context.resources["result"] = result
        return result
