from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, List, Set

from domain.errors import ColumnRangeInvalidError, RangeOverlapError
from domain.models import CONNECTOR_WIDTH, Annotation, AnnotationPlacement, LabelLine
from domain.services.text_width import display_width

logger = logging.getLogger(__name__)


def coerce_annotations(items: Iterable[Annotation | Mapping[str, Any]]) -> List[Annotation]:
    return [
        item if isinstance(item, Annotation) else Annotation.model_validate(item)
        for item in items
    ]


def normalize_annotations(annotations: Iterable[Annotation]) -> List[Annotation]:
    """Drop repeated columns (first supplied wins), sort by column and validate ranges."""
    seen: Set[int] = set()
    unique: List[Annotation] = []
    for annotation in annotations:
        if annotation.column in seen:
            logger.debug("Discarding annotation with duplicate column %d", annotation.column)
            continue
        seen.add(annotation.column)
        unique.append(annotation)

    ordered = sorted(unique, key=lambda annotation: annotation.column)
    for idx, annotation in enumerate(ordered):
        if annotation.column_end is not None and annotation.column >= annotation.column_end:
            raise ColumnRangeInvalidError(idx + 1, annotation.column, annotation.column_end)
        if idx > 0:
            previous = ordered[idx - 1]
            if previous.column_end is not None and previous.column_end >= annotation.column:
                raise RangeOverlapError(previous.column_end, idx, annotation.column)
    return ordered


def build_placements(annotations: Iterable[Annotation]) -> List[AnnotationPlacement]:
    return [_initial_placement(annotation) for annotation in annotations]


def _initial_placement(annotation: Annotation) -> AnnotationPlacement:
    anchor = annotation.anchor_column
    if not annotation.label_lines:
        # The connector row still occupies a line even without text.
        return AnnotationPlacement(
            annotation=annotation,
            anchor_column=anchor,
            lines=[LabelLine(width=0, leading_spaces=anchor)],
        )

    lines: List[LabelLine] = []
    for idx, text in enumerate(annotation.label_lines):
        leading_spaces = anchor if idx == 0 else anchor + CONNECTOR_WIDTH
        lines.append(LabelLine(width=display_width(text), leading_spaces=leading_spaces))
    return AnnotationPlacement(annotation=annotation, anchor_column=anchor, lines=lines)
