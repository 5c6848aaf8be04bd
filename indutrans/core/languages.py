from __future__ import annotations

from typing import Dict, Iterable, List

from indutrans.core.errors import PreconditionError

LITERAL = "literal"

# Ordered as shown in the language picker
SUPPORTED_LANGUAGES: Dict[str, str] = {
    "en": "英语 (English)",
    "vi": "越南语 (Vietnamese)",
    "zh-TW": "繁体中文 (Traditional Chinese)",
    LITERAL: "直译繁体 (Literal)",
    "ja": "日语 (Japanese)",
    "ko": "韩语 (Korean)",
    "ru": "俄语 (Russian)",
    "th": "泰语 (Thai)",
    "de": "德语 (German)",
    "fr": "法语 (French)",
    "es": "西班牙语 (Spanish)",
}

DEFAULT_LANGUAGES: List[str] = ["en", "vi", "zh-TW"]


def display_name(code: str) -> str:
    return SUPPORTED_LANGUAGES.get(code, code)


def normalize_languages(codes: Iterable[str]) -> List[str]:
    """Return the requested codes as an ordered set, rejecting unsupported ones.

    Duplicates keep their first position. Surrounding whitespace is ignored.
    """
    out: List[str] = []
    for raw in codes or []:
        code = str(raw or "").strip()
        if not code:
            continue
        if code not in SUPPORTED_LANGUAGES:
            raise PreconditionError(f"不支持的目标语言: {code}")
        if code not in out:
            out.append(code)
    return out


__all__ = [
    "LITERAL",
    "SUPPORTED_LANGUAGES",
    "DEFAULT_LANGUAGES",
    "display_name",
    "normalize_languages",
]
