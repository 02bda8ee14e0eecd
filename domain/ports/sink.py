from __future__ import annotations

from typing import Protocol


class TextSink(Protocol):
    def write(self, text: str, /) -> object: ...
