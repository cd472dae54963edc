"""Core interfaces and context objects shared by doc2docxplus tools."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from ...utils import to_path


@dataclass
class ConversionContext:
    """Holds shared execution state for a tool invocation."""

    input_path: Path | None = None
    output_path: Path | None = None
    resources: dict[str, Any] = field(default_factory=dict)
    config: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.input_path, (str, Path)):
            self.input_path = to_path(self.input_path)
        if isinstance(self.output_path, (str, Path)):
            self.output_path = to_path(self.output_path)

    def default_output_path(self) -> Path:
        if self.output_path is not None:
            return self.output_path
        if self.input_path is None:
            raise ValueError("ConversionContext requires an input_path or output_path")
        return self.input_path.with_suffix(".docx")


class BaseTool:
    """Base class for all pluggable doc2docxplus tools."""

    name: str

    def __init__(self, context: ConversionContext) -> None:
        self.context = context

    def run(self) -> Any:  # pragma: no cover - to be implemented by subclasses
        raise NotImplementedError


ToolFactory = Callable[[ConversionContext], BaseTool]
