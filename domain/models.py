from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

# "└─ " before a first label line, three blanks before every later one.
CONNECTOR_WIDTH = 3


class Annotation(BaseModel):
    """A pointer at one column (or a column range) of a line plus its label."""

    column: int = Field(default=0, ge=0)
    column_end: Optional[int] = Field(default=None, ge=0)
    label_lines: List[str] = Field(default_factory=list)

    @property
    def is_range(self) -> bool:
        return self.column_end is not None

    @property
    def anchor_column(self) -> int:
        if self.column_end is None:
            return self.column
        return (self.column + self.column_end) // 2

    def append_label_lines(self, *lines: str) -> None:
        self.label_lines.extend(lines)


@dataclass
class LabelLine:
    width: int
    leading_spaces: int


@dataclass
class AnnotationPlacement:
    """Per-render state of one annotation.

    ``leading_spaces`` of a line and the entries of ``pipe_leading_spaces``
    start out as absolute columns and are rewritten relative to the content
    of the nearest annotation on the left once one shares the row.
    """

    annotation: Annotation
    anchor_column: int
    lines: List[LabelLine]
    row: int = 0
    pipe_leading_spaces: List[int] = field(default_factory=list)

    @property
    def end_row(self) -> int:
        return self.row + len(self.lines)


@dataclass(frozen=True)
class LayoutPlan:
    """Result of row placement.

    Only the tuple is frozen; the placements inside stay mutable and are
    not modified by the layout engine once the plan is returned.
    """

    placements: Tuple[AnnotationPlacement, ...]

    @property
    def row_count(self) -> int:
        return max((placement.end_row for placement in self.placements), default=0)
