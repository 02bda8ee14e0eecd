from __future__ import annotations


class AnnotationError(ValueError):
    """Base class for annotation sets that cannot be rendered."""


class ColumnRangeInvalidError(AnnotationError):
    def __init__(self, position: int, column: int, column_end: int) -> None:
        self.position = position
        self.column = column
        self.column_end = column_end
        super().__init__(
            f"in annotation {position} column {column} needs to be lower than "
            f"column_end {column_end}"
        )


class RangeOverlapError(AnnotationError):
    def __init__(self, column_end: int, position: int, next_column: int) -> None:
        self.column_end = column_end
        self.position = position
        self.next_column = next_column
        super().__init__(
            f"column_end {column_end} of annotation {position} overlaps with "
            f"column {next_column} of annotation {position + 1}"
        )
