from __future__ import annotations

import logging

from adapters.layout.stacked_rows import StackedRowLayoutEngine
from app.config import AppSettings
from domain.services.render_annotations import AnnotationRenderer, RenderConfig

LIBRARY_LOGGERS = ("domain", "adapters")


def build_renderer(settings: AppSettings) -> AnnotationRenderer:
    config = RenderConfig(line_terminator=settings.render.line_terminator)
    return AnnotationRenderer(StackedRowLayoutEngine(), config)


def configure_logging(settings: AppSettings) -> None:
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(settings.logging.level)
