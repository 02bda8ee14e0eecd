from __future__ import annotations

import io
import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from app.annotate import render, render_to
from app.config import AppSettings
from app.wiring import LIBRARY_LOGGERS, build_renderer, configure_logging
from domain.errors import RangeOverlapError
from tests.helpers.diagrams import annot, annot_payload, diagram


def test_render_with_default_settings() -> None:
    annotations = [annot(0, "range", column_end=2), annot(4, "arrow")]
    assert render(annotations) == diagram("└┬┘ ↑", " │  └─ arrow", " │", " └─ range")


def test_render_to_sink() -> None:
    sink = io.StringIO()
    render_to(sink, [annot_payload(1, "line1")])
    assert sink.getvalue() == diagram(" ↑", " └─ line1")


def test_render_uses_configured_line_terminator(
    app_settings_factory: Callable[..., AppSettings],
) -> None:
    settings = app_settings_factory(line_terminator="\r\n")
    assert render([annot(0)], settings) == "↑\r\n└─ \r\n"
    assert build_renderer(settings).config.line_terminator == "\r\n"


def test_render_propagates_validation_errors() -> None:
    with pytest.raises(RangeOverlapError):
        render([annot(0, column_end=3), annot(3)])


def test_configure_logging_sets_library_levels(
    app_settings_factory: Callable[..., AppSettings],
) -> None:
    previous = {name: logging.getLogger(name).level for name in LIBRARY_LOGGERS}
    try:
        configure_logging(app_settings_factory(level="DEBUG"))
        assert all(
            logging.getLogger(name).level == logging.DEBUG for name in LIBRARY_LOGGERS
        )
    finally:
        for name, level in previous.items():
            logging.getLogger(name).setLevel(level)


def test_placement_is_logged(
    caplog: pytest.LogCaptureFixture, app_settings_factory: Callable[..., AppSettings]
) -> None:
    with caplog.at_level(logging.DEBUG, logger="adapters"):
        render([annot(0, "a"), annot(1, "b")], app_settings_factory(level="DEBUG"))

    assert "Annotation at column 0 starts on row 2" in caplog.text


def _write_config(directory: Path, body: str) -> Path:
    config_path = directory / "config" / "annot.yaml"
    config_path.parent.mkdir(parents=True)
    config_path.write_text(body, encoding="utf-8")
    return config_path


def test_render_reads_default_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write_config(tmp_path, 'render:\n  line_terminator: "|\\n"\n')
    monkeypatch.chdir(tmp_path)

    assert render([{"column": 0}]) == "↑|\n└─ |\n"

    sink = io.StringIO()
    render_to(sink, [annot(0, "line1")])
    assert sink.getvalue() == "↑|\n└─ line1|\n"


def test_render_reads_config_path_from_env(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    config_path = _write_config(tmp_path, 'render:\n  line_terminator: "\\r\\n"\n')
    monkeypatch.setenv("ANNOT_CONFIG_PATH", str(config_path))

    assert render([annot(0)]) == "↑\r\n└─ \r\n"


def test_render_applies_configured_log_level(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _write_config(tmp_path, "logging:\n  level: debug\n")
    monkeypatch.chdir(tmp_path)
    previous = {name: logging.getLogger(name).level for name in LIBRARY_LOGGERS}
    try:
        render([annot(0)])
        assert all(
            logging.getLogger(name).level == logging.DEBUG for name in LIBRARY_LOGGERS
        )
    finally:
        for name, level in previous.items():
            logging.getLogger(name).setLevel(level)
