from __future__ import annotations

import os
from collections.abc import Callable, Generator

import pytest

from adapters.layout.stacked_rows import StackedRowLayoutEngine
from app.config import AppSettings, LoggingSettings, RenderSettings
from domain.services.render_annotations import AnnotationRenderer


def _clear_annot_env() -> None:
    for key in list(os.environ):
        if key.startswith("ANNOT_"):
            os.environ.pop(key, None)


_clear_annot_env()


@pytest.fixture(autouse=True)
def clear_annot_env() -> Generator[None, None, None]:
    _clear_annot_env()
    yield
    _clear_annot_env()


@pytest.fixture
def layout_engine() -> StackedRowLayoutEngine:
    return StackedRowLayoutEngine()


@pytest.fixture
def renderer(layout_engine: StackedRowLayoutEngine) -> AnnotationRenderer:
    return AnnotationRenderer(layout_engine)


@pytest.fixture
def app_settings_factory() -> Callable[..., AppSettings]:
    def _factory(line_terminator: str = "\n", level: str = "WARNING") -> AppSettings:
        return AppSettings(
            render=RenderSettings(line_terminator=line_terminator),
            logging=LoggingSettings(level=level),
        )

    return _factory
