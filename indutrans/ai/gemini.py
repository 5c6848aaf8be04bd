from __future__ import annotations

import json
import os
import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import requests

from indutrans.ai.prompts import SYSTEM_INSTRUCTION, build_response_schema, build_user_prompt
from indutrans.core.errors import BackendError, ConfigurationError, NetworkError, ParseError
from indutrans.core.models import TencentCredentials, TranslationRecord
from indutrans.core.utils import now_ms, strip_trailing_period
from indutrans.infra.logging import log_api_call, log_processing_step
from indutrans.providers.base import TranslationProvider

GEMINI_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_TIMEOUT = 120

KeySource = Callable[[], Optional[str]]


def env_key(name: str) -> KeySource:
    def _source() -> Optional[str]:
        return os.getenv(name)

    _source.__name__ = f"env:{name}"
    return _source


def config_key(conf: Optional[Mapping[str, Any]], key: str = "gemini_api_key") -> KeySource:
    def _source() -> Optional[str]:
        v = (conf or {}).get(key)
        return str(v) if v else None

    _source.__name__ = f"config:{key}"
    return _source


def default_key_sources(conf: Optional[Mapping[str, Any]] = None) -> List[KeySource]:
    """GEMINI_API_KEY env, then config ``gemini_api_key``, then legacy ``API_KEY`` env."""
    return [env_key("GEMINI_API_KEY"), config_key(conf), env_key("API_KEY")]


def resolve_api_key(sources: Sequence[KeySource]) -> str:
    for src in sources:
        key = (src() or "").strip()
        if key:
            return key
    raise ConfigurationError("未配置 Gemini API 密钥。请在设置中配置或检查环境变量。")


def _strip_code_fence(text: str) -> str:
    t = text.strip()
    if t.startswith("```"):
        t = t.replace("```json", "").replace("```", "").strip()
    return t


def _response_text(data: Dict[str, Any]) -> str:
    try:
        parts = data["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError):
        raise ParseError("No response text received from Gemini.")
    text = "".join(str(p.get("text") or "") for p in parts if isinstance(p, dict))
    if not text.strip():
        raise ParseError("No response text received from Gemini.")
    return text


class GeminiTranslator(TranslationProvider):
    """Schema-constrained Gemini completion: one request for all units and languages."""

    name = "gemini"

    def __init__(
        self,
        key_sources: Optional[Sequence[KeySource]] = None,
        *,
        model: str = DEFAULT_MODEL,
        timeout: int = DEFAULT_TIMEOUT,
        base_url: str = GEMINI_BASE,
    ):
        self.key_sources: List[KeySource] = list(key_sources) if key_sources is not None else default_key_sources()
        self.model = model or DEFAULT_MODEL
        self.timeout = int(timeout or DEFAULT_TIMEOUT)
        self.base_url = base_url.rstrip("/")

    @classmethod
    def from_config(cls, conf: Optional[Mapping[str, Any]]) -> "GeminiTranslator":
        conf = conf or {}
        return cls(
            default_key_sources(conf),
            model=str(conf.get("gemini_model") or DEFAULT_MODEL),
            timeout=int(conf.get("gemini_timeout") or DEFAULT_TIMEOUT),
        )

    def build_request(self, units: Sequence[str], target_languages: Sequence[str]) -> Dict[str, Any]:
        return {
            "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
            "contents": [
                {"role": "user", "parts": [{"text": build_user_prompt(units, target_languages)}]}
            ],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": build_response_schema(target_languages),
                "temperature": 0.1,
            },
        }

    def _call(self, api_key: str, body: Dict[str, Any]) -> List[Any]:
        url = f"{self.base_url}/models/{self.model}:generateContent"
        headers = {"x-goog-api-key": api_key, "Content-Type": "application/json"}
        t0 = time.time()
        try:
            r = requests.post(url, headers=headers, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            raise NetworkError(f"network error: {e}")
        log_api_call("gemini", "request", "generateContent", url, {"model": self.model}, time.time() - t0, r.status_code)

        try:
            data = r.json()
        except ValueError:
            if r.status_code != 200:
                raise NetworkError(f"HTTP Error: {r.status_code}")
            raise ParseError("Gemini response is not valid JSON")

        err = data.get("error") if isinstance(data, dict) else None
        if isinstance(err, dict):
            raise BackendError(str(err.get("message") or ""), code=str(err.get("code") or r.status_code))
        if r.status_code != 200:
            raise NetworkError(f"HTTP Error: {r.status_code}")

        text = _response_text(data if isinstance(data, dict) else {})
        try:
            parsed = json.loads(_strip_code_fence(text))
        except ValueError as e:
            raise ParseError(f"Gemini returned malformed structured output: {e}")
        if not isinstance(parsed, list):
            raise ParseError("Gemini structured output is not an array")
        return parsed

    def translate_batch(
        self,
        units: Sequence[str],
        target_languages: Sequence[str],
        credentials: Optional[TencentCredentials] = None,
    ) -> List[TranslationRecord]:
        if not units:
            return []
        api_key = resolve_api_key(self.key_sources)
        body = self.build_request(units, target_languages)
        log_processing_step(
            "gemini", "request", "translating", {"units": len(units), "languages": list(target_languages)}
        )
        parsed = self._call(api_key, body)
        if len(parsed) != len(units):
            log_processing_step(
                "gemini", "response", "item count mismatch", {"expected": len(units), "got": len(parsed)}
            )

        stamp = now_ms()
        records: List[TranslationRecord] = []
        for i, unit in enumerate(units):
            item = parsed[i] if i < len(parsed) and isinstance(parsed[i], dict) else {}
            rec = TranslationRecord.blank(f"gemini-{stamp}-{i}", str(item.get("original") or unit), target_languages)
            for code in target_languages:
                rec.translations[code] = strip_trailing_period(str(item.get(code) or ""))
            records.append(rec)
        return records


__all__ = [
    "GEMINI_BASE",
    "DEFAULT_MODEL",
    "GeminiTranslator",
    "KeySource",
    "env_key",
    "config_key",
    "default_key_sources",
    "resolve_api_key",
]
