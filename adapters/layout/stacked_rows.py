from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from domain.models import CONNECTOR_WIDTH, Annotation, AnnotationPlacement, LayoutPlan
from domain.ports.layout import LayoutEngine
from domain.services.normalize_annotations import build_placements, normalize_annotations

logger = logging.getLogger(__name__)


class Section(Enum):
    """Where a body row falls relative to the rows a neighbor occupies.

    Rows of a neighbor with three label lines, starting on row 2::

        row  section              needed space (█)
        0    ABOVE                ██│
        1    ABOVE                ██│
        2    LINE_ONE             ██└─ line1
        3    LINE_TWO              ████line2
        4    LINES_AFTER_SECOND      ██line3
        5    TRAILING_SPACE_LINE      █
        6    NO_ANNOTATION
    """

    ABOVE = "above"
    LINE_ONE = "line_one"
    LINE_TWO = "line_two"
    LINES_AFTER_SECOND = "lines_after_second"
    TRAILING_SPACE_LINE = "trailing_space_line"
    NO_ANNOTATION = "no_annotation"

    # NO_ANNOTATION has no gap or shift; asking for one raises KeyError.
    @property
    def min_gap(self) -> int:
        return _MIN_GAP[self]

    @property
    def anchor_shift(self) -> int:
        return _ANCHOR_SHIFT[self]


_MIN_GAP = {
    Section.ABOVE: 2,
    Section.LINE_ONE: 2,
    Section.LINE_TWO: 4,
    Section.LINES_AFTER_SECOND: 2,
    Section.TRAILING_SPACE_LINE: 1,
}

_ANCHOR_SHIFT = {
    Section.ABOVE: 0,
    Section.LINE_ONE: 0,
    Section.LINE_TWO: 3,
    Section.LINES_AFTER_SECOND: 3,
    Section.TRAILING_SPACE_LINE: 3,
}

_OCCUPIED = {Section.ABOVE, Section.LINE_ONE, Section.LINE_TWO, Section.LINES_AFTER_SECOND}

Neighbor = Tuple[Optional[AnnotationPlacement], Section]


def closest_neighbor(
    row: int, right: Sequence[AnnotationPlacement], trailing_rows: int = 0
) -> Neighbor:
    """Nearest annotation on the right that is still drawing something on ``row``."""
    for neighbor in right:
        if row < neighbor.row:
            return neighbor, Section.ABOVE
        if row == neighbor.row:
            return neighbor, Section.LINE_ONE
        if row == neighbor.row + 1 and row < neighbor.end_row:
            return neighbor, Section.LINE_TWO
        if neighbor.row + 2 <= row < neighbor.end_row:
            return neighbor, Section.LINES_AFTER_SECOND
        if neighbor.end_row <= row < neighbor.end_row + trailing_rows:
            return neighbor, Section.TRAILING_SPACE_LINE
    return None, Section.NO_ANNOTATION


class StackedRowLayoutEngine(LayoutEngine):
    """Assigns label rows right to left, pushing an annotation down until its
    label lines clear everything already placed to its right."""

    def build_plan(self, annotations: Iterable[Annotation]) -> LayoutPlan:
        placements = build_placements(normalize_annotations(annotations))

        # The rightmost annotation always starts on row 0.
        for idx in range(len(placements) - 2, -1, -1):
            self._assign_row(placements[idx], placements[idx + 1 :])

        plan = LayoutPlan(placements=tuple(placements))
        logger.debug(
            "Placed %d annotations on %d body rows", len(placements), plan.row_count
        )
        return plan

    def _assign_row(
        self, placement: AnnotationPlacement, right: Sequence[AnnotationPlacement]
    ) -> None:
        row = 0
        while True:
            if row > 0:
                self._reserve_pipe_gap(row - 1, placement, right)
            if self._fits_at(row, placement, right):
                placement.row = row
                logger.debug(
                    "Annotation at column %d starts on row %d",
                    placement.annotation.column,
                    row,
                )
                return
            # The pipe continues down through the rejected row.
            placement.pipe_leading_spaces.append(placement.anchor_column)
            row += 1

    def _reserve_pipe_gap(
        self, row: int, placement: AnnotationPlacement, right: Sequence[AnnotationPlacement]
    ) -> None:
        neighbor, section = closest_neighbor(row, right)
        if neighbor is None or section not in _OCCUPIED:
            return
        # One column for the pipe itself.
        _set_leading_spaces(neighbor, section, row, _distance(placement, neighbor, section) - 1)

    def _fits_at(
        self, row: int, placement: AnnotationPlacement, right: Sequence[AnnotationPlacement]
    ) -> bool:
        return all(
            self._line_fits(row + line_idx, line_idx, placement, right)
            for line_idx in range(len(placement.lines))
        )

    def _line_fits(
        self,
        row: int,
        line_idx: int,
        placement: AnnotationPlacement,
        right: Sequence[AnnotationPlacement],
    ) -> bool:
        neighbor, section = closest_neighbor(row, right, trailing_rows=1)
        if neighbor is None:
            return True

        line_length = CONNECTOR_WIDTH + placement.lines[line_idx].width
        remaining = _distance(placement, neighbor, section) - line_length
        if remaining < section.min_gap:
            return False

        if section is Section.TRAILING_SPACE_LINE:
            # The blank row below a finished label is free; measure against
            # whatever is drawn further right instead.
            neighbor, section = closest_neighbor(row, right)
            if neighbor is None:
                return True
            remaining = _distance(placement, neighbor, section) - line_length

        _set_leading_spaces(neighbor, section, row, remaining)
        return True


def _distance(
    placement: AnnotationPlacement, neighbor: AnnotationPlacement, section: Section
) -> int:
    return neighbor.anchor_column + section.anchor_shift - placement.anchor_column


def _set_leading_spaces(
    neighbor: AnnotationPlacement, section: Section, row: int, spaces: int
) -> None:
    if section is Section.ABOVE:
        neighbor.pipe_leading_spaces[row] = spaces
    else:
        neighbor.lines[row - neighbor.row].leading_spaces = spaces
