from __future__ import annotations

import json
import logging

from indutrans.infra.logging import (
    JSONFormatter,
    MDCFilter,
    build_logging_config,
    get_unified_logger,
    mdc_context,
)


def _record(msg: str = "hello %s", args: tuple = ("world",)) -> logging.LogRecord:
    record = logging.LogRecord("indutrans.engine.run", logging.INFO, __file__, 1, msg, args, None)
    assert MDCFilter().filter(record)
    return record


def test_logger_names_are_hierarchical() -> None:
    assert get_unified_logger("tencent", "batch").name == "indutrans.tencent.batch"


def test_env_controls_level_and_layout(monkeypatch) -> None:
    monkeypatch.setenv("INDUTRANS_LOG_LEVEL", "warn")
    monkeypatch.setenv("INDUTRANS_LOG_JSON", "1")
    cfg = build_logging_config()
    assert cfg["root"]["level"] == logging.WARNING
    assert cfg["handlers"]["console"]["formatter"] == "json"


def test_unknown_level_falls_back_to_info(monkeypatch) -> None:
    monkeypatch.setenv("INDUTRANS_LOG_LEVEL", "chatty")
    assert build_logging_config()["root"]["level"] == logging.INFO


def test_run_context_reaches_json_output() -> None:
    with mdc_context(run="abc123", provider="gemini"):
        record = _record()
        assert record.mdc_suffix == " | run=abc123 provider=gemini"
        payload = json.loads(JSONFormatter().format(record))
        assert payload["message"] == "hello world"
        assert payload["run"] == "abc123"
        assert payload["provider"] == "gemini"

    after = _record()
    assert after.mdc == {}
    assert after.mdc_suffix == ""


def test_nested_context_restores_outer_values() -> None:
    with mdc_context(run="outer"):
        with mdc_context(provider="tencent"):
            assert _record().mdc == {"run": "outer", "provider": "tencent"}
        assert _record().mdc == {"run": "outer"}
