from __future__ import annotations

import io
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, List, Sequence, Union

from domain.models import Annotation, AnnotationPlacement
from domain.ports.layout import LayoutEngine
from domain.ports.sink import TextSink
from domain.services.normalize_annotations import coerce_annotations

logger = logging.getLogger(__name__)

ARROW = "↑"
PIPE = "│"
CONNECTOR = "└─ "
RANGE_START = "└"
RANGE_NARROW_START = "├"
RANGE_ANCHOR = "┬"
RANGE_FILL = "─"
RANGE_END = "┘"

AnnotationInput = Union[Annotation, Mapping[str, Any]]


@dataclass(frozen=True)
class RenderConfig:
    line_terminator: str = "\n"


class AnnotationRenderer:
    def __init__(self, layout: LayoutEngine, config: RenderConfig | None = None) -> None:
        self.layout = layout
        self.config = config or RenderConfig()

    def render(self, annotations: Iterable[AnnotationInput]) -> str:
        buffer = io.StringIO()
        self.render_to(buffer, annotations)
        return buffer.getvalue()

    def render_to(self, sink: TextSink, annotations: Iterable[AnnotationInput]) -> None:
        """Write the header line and every body row to ``sink``.

        Validation and row placement finish before the first write, so an
        invalid annotation set leaves the sink untouched. Errors raised by
        ``sink.write`` propagate and stop any further writes.
        """
        plan = self.layout.build_plan(coerce_annotations(annotations))
        if not plan.placements:
            return

        terminator = self.config.line_terminator
        sink.write(header_line(plan.placements) + terminator)
        for row in range(plan.row_count):
            sink.write(body_line(plan.placements, row) + terminator)
        logger.debug("Rendered %d body rows", plan.row_count)


def header_line(placements: Sequence[AnnotationPlacement]) -> str:
    parts: List[str] = []
    written = 0
    for placement in placements:
        annotation = placement.annotation
        if annotation.column_end is None:
            parts.append(" " * (placement.anchor_column - written))
            parts.append(ARROW)
            written = placement.anchor_column + 1
            continue

        parts.append(" " * (annotation.column - written))
        if annotation.column == placement.anchor_column:
            parts.append(RANGE_NARROW_START)
        else:
            parts.append(RANGE_START)
            parts.append(RANGE_FILL * (placement.anchor_column - annotation.column - 1))
            parts.append(RANGE_ANCHOR)
        parts.append(RANGE_FILL * (annotation.column_end - placement.anchor_column - 1))
        parts.append(RANGE_END)
        written = annotation.column_end + 1
    return "".join(parts)


def body_line(placements: Sequence[AnnotationPlacement], row: int) -> str:
    parts: List[str] = []
    for placement in placements:
        label_lines = placement.annotation.label_lines
        if row < placement.row:
            parts.append(" " * placement.pipe_leading_spaces[row])
            parts.append(PIPE)
        elif row == placement.row:
            parts.append(" " * placement.lines[0].leading_spaces)
            parts.append(CONNECTOR)
            if label_lines:
                parts.append(label_lines[0])
        elif row < placement.end_row:
            line_idx = row - placement.row
            parts.append(" " * placement.lines[line_idx].leading_spaces)
            parts.append(label_lines[line_idx])
    return "".join(parts)

