from __future__ import annotations

from typing import Iterable, Protocol

from domain.models import Annotation, LayoutPlan


class LayoutEngine(Protocol):
    def build_plan(self, annotations: Iterable[Annotation]) -> LayoutPlan:
        ...
