from __future__ import annotations

import time
import uuid
from typing import Any, Dict, List, Mapping, Optional, Sequence

from indutrans.ai.gemini import GeminiTranslator
from indutrans.core.errors import ParseError, PreconditionError
from indutrans.core.languages import normalize_languages
from indutrans.core.models import Provider, SplitMode, TencentCredentials, TranslationRecord
from indutrans.infra.logging import (
    log_error,
    log_processing_step,
    log_task_end,
    log_task_start,
    mdc_context,
)
from indutrans.mt.tencent import MISSING_CREDENTIALS, TencentTranslator
from indutrans.providers.base import TranslationProvider
from indutrans.segment.clipboard import adapt_clipboard
from indutrans.segment.splitter import segment


def build_provider(provider: "Provider | str", conf: Optional[Mapping[str, Any]] = None) -> TranslationProvider:
    p = _parse_provider(provider)
    if p is Provider.TENCENT:
        return TencentTranslator.from_config(conf)
    return GeminiTranslator.from_config(conf)


def _parse_provider(provider: "Provider | str") -> Provider:
    try:
        return Provider.parse(provider)
    except ValueError as e:
        raise PreconditionError(str(e))


def prepare_units(raw_text: str, split_mode: "SplitMode | str" = SplitMode.AUTO, html: Optional[str] = None) -> List[str]:
    """Clipboard adaptation followed by segmentation."""
    try:
        mode = SplitMode.parse(split_mode)
    except ValueError as e:
        raise PreconditionError(str(e))
    return segment(adapt_clipboard(raw_text, html), mode)


def _normalize_records(
    records: List[TranslationRecord], units: Sequence[str], languages: Sequence[str]
) -> List[TranslationRecord]:
    if len(records) != len(units):
        raise ParseError(f"provider returned {len(records)} records for {len(units)} units")
    out: List[TranslationRecord] = []
    for rec, unit in zip(records, units):
        translations: Dict[str, str] = {code: str(rec.translations.get(code) or "") for code in languages}
        out.append(TranslationRecord(id=rec.id, original=rec.original or unit, translations=translations))
    return out


def translate_units(
    units: Sequence[str],
    provider: "Provider | str",
    target_languages: Sequence[str],
    credentials: Optional[TencentCredentials] = None,
    *,
    conf: Optional[Mapping[str, Any]] = None,
    translator: Optional[TranslationProvider] = None,
) -> List[TranslationRecord]:
    """Translate already-segmented units. All-or-nothing: any error propagates, no partial records."""
    p = _parse_provider(provider)
    languages = normalize_languages(target_languages)
    if not languages:
        raise PreconditionError("请至少选择一种目标语言。")
    units = list(units)
    if not units:
        raise PreconditionError("没有可翻译的内容。")
    if p is Provider.TENCENT and (credentials is None or not credentials.is_complete()):
        raise PreconditionError(MISSING_CREDENTIALS)

    tr = translator or build_provider(p, conf)
    t0 = time.time()
    with mdc_context(run=uuid.uuid4().hex[:12], provider=p.value):
        log_task_start("engine", "run", {"units": len(units), "languages": languages, "provider": p.value})
        try:
            records = tr.translate_batch(units, languages, credentials)
            records = _normalize_records(records, units, languages)
        except Exception as e:
            log_error("engine", "run", e, context=f"{p.value} translation failed")
            log_task_end("engine", "run", False, {"elapsed": round(time.time() - t0, 3)})
            raise
        log_task_end("engine", "run", True, {"records": len(records), "elapsed": round(time.time() - t0, 3)})
    return records


def run_translation(
    raw_text: str,
    split_mode: "SplitMode | str",
    provider: "Provider | str",
    target_languages: Sequence[str],
    credentials: Optional[TencentCredentials] = None,
    *,
    html: Optional[str] = None,
    conf: Optional[Mapping[str, Any]] = None,
    translator: Optional[TranslationProvider] = None,
) -> List[TranslationRecord]:
    """Segment pasted text and translate every unit with the selected provider."""
    units = prepare_units(raw_text, split_mode, html)
    log_processing_step("engine", "segment", "segmented input", {"units": len(units)})
    return translate_units(
        units, provider, target_languages, credentials, conf=conf, translator=translator
    )


__all__ = ["build_provider", "prepare_units", "translate_units", "run_translation"]
