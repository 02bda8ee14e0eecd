from __future__ import annotations

from wcwidth import wcswidth, wcwidth


def display_width(text: str) -> int:
    """Number of terminal cells ``text`` occupies."""
    width = wcswidth(text)
    if width >= 0:
        return width
    # Control characters make wcswidth give up; count them as zero width.
    return sum(max(wcwidth(char), 0) for char in text)
