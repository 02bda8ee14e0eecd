from __future__ import annotations

from collections.abc import Iterable

from app.config import AppSettings, load_settings
from app.wiring import build_renderer, configure_logging
from domain.ports.sink import TextSink
from domain.services.render_annotations import AnnotationInput, AnnotationRenderer


def render(annotations: Iterable[AnnotationInput], settings: AppSettings | None = None) -> str:
    """Render ``annotations`` into the diagram text, header line first.

    Without ``settings`` the configuration comes from ``load_settings``.
    """
    return _configured_renderer(settings).render(annotations)


def render_to(
    sink: TextSink,
    annotations: Iterable[AnnotationInput],
    settings: AppSettings | None = None,
) -> None:
    _configured_renderer(settings).render_to(sink, annotations)


def _configured_renderer(settings: AppSettings | None) -> AnnotationRenderer:
    resolved = settings or load_settings()
    configure_logging(resolved)
    return build_renderer(resolved)
