"""Logging for InduTrans runs.

Loggers are named ``indutrans.<program>.<task_type>`` (``indutrans.tencent.batch``,
``indutrans.engine.run``). A single console appender writes either a pattern
line or one JSON object per record. While a translation run is active the
engine binds ``run`` and ``provider`` into the diagnostic context and every
record carries them.

Environment:
- ``INDUTRANS_LOG_LEVEL``: DEBUG, INFO, WARN, ERROR (default: INFO)
- ``INDUTRANS_LOG_JSON``: 1 to enable JSON layout (default: 0)

Callers pass request metadata to ``log_api_call``, never headers or keys.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import logging.config
import os
from typing import Any, Dict, Iterator, Optional

# ---------------- Run context ----------------

_RUN_CONTEXT: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar(
    "indutrans_run_context", default={}
)


@contextlib.contextmanager
def mdc_context(**values: Any) -> Iterator[Dict[str, Any]]:
    """Bind key/value pairs onto every record logged inside the block."""
    token = _RUN_CONTEXT.set({**_RUN_CONTEXT.get(), **values})
    try:
        yield _RUN_CONTEXT.get()
    finally:
        _RUN_CONTEXT.reset(token)


class MDCFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        ctx = _RUN_CONTEXT.get()
        record.mdc = ctx
        record.mdc_suffix = (" | " + " ".join(f"{k}={v}" for k, v in ctx.items())) if ctx else ""
        return True


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        ctx = getattr(record, "mdc", None)
        if ctx:
            payload.update(ctx)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


# ---------------- Configuration ----------------

_CONFIGURED = False


def _level_from_env(default: str = "INFO") -> int:
    s = str(os.getenv("INDUTRANS_LOG_LEVEL", default)).strip().upper()
    if s == "WARN":
        s = "WARNING"
    level = logging.getLevelName(s)
    return level if isinstance(level, int) else logging.INFO


def build_logging_config() -> Dict[str, Any]:
    json_layout = str(os.getenv("INDUTRANS_LOG_JSON", "0")).strip().lower() in {"1", "true", "yes", "on"}
    level = _level_from_env()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"run_context": {"()": MDCFilter}},
        "formatters": {
            "pattern": {
                "format": "[%(asctime)s][%(levelname)s][%(name)s] %(message)s%(mdc_suffix)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "json": {"()": JSONFormatter},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "json" if json_layout else "pattern",
                "filters": ["run_context"],
                "stream": "ext://sys.stderr",
            }
        },
        "root": {"level": level, "handlers": ["console"]},
    }


def init_logging(force: bool = False) -> None:
    """Apply ``build_logging_config``; repeated calls are no-ops unless ``force``."""
    global _CONFIGURED
    if _CONFIGURED and not force:
        return
    logging.config.dictConfig(build_logging_config())
    _CONFIGURED = True


def get_unified_logger(program: str, task_type: str) -> logging.Logger:
    if not _CONFIGURED and not logging.getLogger("").handlers:
        init_logging()
    return logging.getLogger(f"indutrans.{program}.{task_type}")


# ---------------- Helpers ----------------


def _dumps(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False)


def unified_print(message: str, program: str, task_type: str, level: str = "info") -> None:
    """Echo to stdout and write the same line to the logger."""
    print(f"[{program}][{task_type}] {message}")
    logger = get_unified_logger(program, task_type)
    getattr(logger, str(level or "info").strip().lower(), logger.info)(message)


def log_task_start(program: str, task_type: str, details: Optional[Dict[str, Any]] = None) -> None:
    get_unified_logger(program, task_type).info("[TASK START] %s", _dumps(details or {}))


def log_task_end(
    program: str, task_type: str, success: bool, details: Optional[Dict[str, Any]] = None
) -> None:
    get_unified_logger(program, task_type).info(
        "[TASK END] %s", _dumps({"success": success, **(details or {})})
    )


def log_processing_step(
    program: str, task_type: str, message: str, details: Optional[Dict[str, Any]] = None
) -> None:
    logger = get_unified_logger(program, task_type)
    if details:
        logger.info("%s | %s", message, _dumps(details))
    else:
        logger.info("%s", message)


def log_error(program: str, task_type: str, error: Exception, context: str = "") -> None:
    logger = get_unified_logger(program, task_type)
    if context:
        logger.error("%s | %s", context, error, exc_info=error)
    else:
        logger.error("%s", error, exc_info=error)


def log_api_call(
    program: str,
    task_type: str,
    api_name: str,
    url: str,
    request_data: Any,
    response_time: float,
    status_code: int,
) -> None:
    get_unified_logger(program, task_type).debug(
        "[API] %s",
        _dumps(
            {
                "api": api_name,
                "url": url,
                "request": request_data,
                "response_time": round(response_time, 3),
                "status_code": status_code,
            }
        ),
    )


def log_batch_processing(
    program: str,
    task_type: str,
    operation: str,
    total_items: int,
    success_count: int,
    failure_count: int,
    duration: float,
    status: str,
    extra: Optional[Dict[str, Any]] = None,
) -> None:
    payload: Dict[str, Any] = {
        "operation": operation,
        "total": total_items,
        "success": success_count,
        "failed": failure_count,
        "duration": round(duration, 3),
        "status": status,
        **(extra or {}),
    }
    get_unified_logger(program, task_type).info("[BATCH] %s", _dumps(payload))


__all__ = [
    "init_logging",
    "build_logging_config",
    "mdc_context",
    "get_unified_logger",
    "unified_print",
    "log_task_start",
    "log_task_end",
    "log_processing_step",
    "log_error",
    "log_api_call",
    "log_batch_processing",
]
