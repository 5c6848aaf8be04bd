from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from indutrans.core.languages import DEFAULT_LANGUAGES
from indutrans.core.models import Provider, SplitMode, TranslationRecord
from indutrans.infra.secure_config import load_tencent_credentials
from indutrans.process.engine import run_translation


def resolve_languages(conf: Dict[str, Any], override: Optional[Sequence[str]] = None) -> List[str]:
    """CLI override, then config ``target_languages`` (list or comma string), then the defaults."""
    if override:
        return list(override)
    v = conf.get("target_languages")
    if isinstance(v, str):
        v = [x.strip() for x in v.split(",") if x.strip()]
    if isinstance(v, list) and v:
        return [str(x) for x in v]
    return list(DEFAULT_LANGUAGES)


def translate_text(
    raw_text: str,
    conf: Dict[str, Any],
    *,
    html: Optional[str] = None,
    provider: Optional[str] = None,
    split_mode: Optional[str] = None,
    languages: Optional[Sequence[str]] = None,
) -> List[TranslationRecord]:
    """执行一次完整翻译：参数优先级为显式参数 > 配置。"""
    p = Provider.parse(provider or conf.get("provider") or Provider.GEMINI.value)
    mode = SplitMode.parse(split_mode or conf.get("split_mode") or SplitMode.AUTO.value)
    creds = load_tencent_credentials(conf) if p is Provider.TENCENT else None
    return run_translation(
        raw_text,
        mode,
        p,
        resolve_languages(conf, languages),
        creds,
        html=html,
        conf=conf,
    )
