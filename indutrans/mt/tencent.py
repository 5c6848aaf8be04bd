"""Tencent Cloud machine translation (TMT) provider.

Requests go out one at a time: languages in caller order, then batches of
``BATCH_SIZE`` units, each followed by a ``PACING_SECONDS`` sleep to stay under
the per-account QPS ceiling. Any failed batch aborts the whole run.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import requests

from indutrans.core.errors import BackendError, NetworkError, ParseError, PreconditionError
from indutrans.core.languages import LITERAL
from indutrans.core.models import Batch, TencentCredentials, TranslationRecord
from indutrans.core.utils import now_ms, strip_trailing_period
from indutrans.infra.logging import log_api_call, log_batch_processing, log_processing_step
from indutrans.mt.signing import CONTENT_TYPE, dump_payload, sign_request
from indutrans.providers.base import TranslationProvider

TMT_HOST = "tmt.tencentcloudapi.com"
SERVICE = "tmt"
ACTION = "TextTranslateBatch"
VERSION = "2018-03-21"
# Browser-era relay; set tmt_relay_prefix to "" to call the endpoint directly
CORS_PROXY = "https://corsproxy.io/?"

BATCH_SIZE = 5
PACING_SECONDS = 0.3
DEFAULT_TIMEOUT = 30

LITERAL_PLACEHOLDER = "不支持 (仅 Gemini 可用)"
MISSING_CREDENTIALS = "缺少腾讯云凭证，请在设置中配置 SecretId 和 SecretKey。"


def make_batches(units: Sequence[str], size: int = BATCH_SIZE) -> List[Batch]:
    size = max(1, int(size))
    return [
        Batch(start=i, end=min(i + size, len(units)), texts=list(units[i : i + size]))
        for i in range(0, len(units), size)
    ]


class TencentTranslator(TranslationProvider):
    name = "tencent"

    def __init__(
        self,
        *,
        relay_prefix: str = CORS_PROXY,
        timeout: int = DEFAULT_TIMEOUT,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time,
    ):
        self.relay_prefix = relay_prefix or ""
        self.timeout = int(timeout or DEFAULT_TIMEOUT)
        self._sleep = sleep
        self._clock = clock

    @classmethod
    def from_config(cls, conf: Optional[Mapping[str, Any]]) -> "TencentTranslator":
        conf = conf or {}
        relay = conf.get("tmt_relay_prefix")
        return cls(
            relay_prefix=CORS_PROXY if relay is None else str(relay),
            timeout=int(conf.get("tmt_timeout") or DEFAULT_TIMEOUT),
        )

    @property
    def endpoint(self) -> str:
        return f"{self.relay_prefix}https://{TMT_HOST}"

    def _call(self, texts: List[str], target: str, creds: TencentCredentials) -> List[str]:
        timestamp = int(self._clock())
        payload = dump_payload(
            {"Source": "auto", "Target": target, "ProjectId": 0, "SourceTextList": texts}
        )
        signed = sign_request(
            secret_id=creds.secret_id,
            secret_key=creds.secret_key,
            service=SERVICE,
            host=TMT_HOST,
            payload=payload,
            timestamp=timestamp,
        )
        headers = {
            "Content-Type": CONTENT_TYPE,
            "Authorization": signed.authorization,
            "X-TC-Action": ACTION,
            "X-TC-Version": VERSION,
            "X-TC-Timestamp": str(timestamp),
            "X-TC-Region": creds.region,
        }
        t0 = time.time()
        try:
            r = requests.post(
                self.endpoint, data=payload.encode("utf-8"), headers=headers, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise NetworkError(f"Network Error (CORS Proxy/Connection): {e}")
        log_api_call(
            "tencent",
            "request",
            ACTION,
            self.endpoint,
            {"target": target, "count": len(texts)},
            time.time() - t0,
            r.status_code,
        )

        try:
            data = r.json()
        except ValueError:
            if r.status_code != 200:
                raise NetworkError(f"HTTP Error: {r.status_code}")
            raise ParseError("TMT response is not valid JSON")

        resp = data.get("Response") if isinstance(data, dict) else None
        err = resp.get("Error") if isinstance(resp, dict) else None
        if isinstance(err, dict):
            raise BackendError(str(err.get("Message") or ""), code=str(err.get("Code") or ""))
        if r.status_code != 200:
            raise NetworkError(f"HTTP Error: {r.status_code}")
        out = resp.get("TargetTextList") if isinstance(resp, dict) else None
        if not isinstance(out, list):
            raise ParseError("TMT response has no TargetTextList")
        return [str(t or "") for t in out]

    def translate_language(
        self, units: Sequence[str], target: str, creds: TencentCredentials
    ) -> List[str]:
        """Translate all units into one language, keeping absolute positions."""
        if target == LITERAL:
            return [LITERAL_PLACEHOLDER] * len(units)

        results = [""] * len(units)
        batches = make_batches(units)
        t0 = time.time()
        for batch in batches:
            texts = self._call(batch.texts, target, creds)
            for pos, text in zip(batch.indices, texts):
                results[pos] = strip_trailing_period(text)
            self._sleep(PACING_SECONDS)
        log_batch_processing(
            "tencent",
            "batch",
            f"translate:{target}",
            len(units),
            len(units),
            0,
            time.time() - t0,
            "ok",
            {"batches": len(batches)},
        )
        return results

    def translate_batch(
        self,
        units: Sequence[str],
        target_languages: Sequence[str],
        credentials: Optional[TencentCredentials] = None,
    ) -> List[TranslationRecord]:
        if credentials is None or not credentials.is_complete():
            raise PreconditionError(MISSING_CREDENTIALS)
        if not units:
            return []

        log_processing_step(
            "tencent", "request", "translating", {"units": len(units), "languages": list(target_languages)}
        )
        per_language: Dict[str, List[str]] = {}
        for lang in target_languages:
            per_language[lang] = self.translate_language(units, lang, credentials)

        stamp = now_ms()
        records: List[TranslationRecord] = []
        for i, unit in enumerate(units):
            rec = TranslationRecord.blank(f"tencent-{stamp}-{i}", unit, target_languages)
            for lang in target_languages:
                rec.translations[lang] = per_language[lang][i]
            records.append(rec)
        return records


__all__ = [
    "TMT_HOST",
    "SERVICE",
    "ACTION",
    "VERSION",
    "CORS_PROXY",
    "BATCH_SIZE",
    "PACING_SECONDS",
    "LITERAL_PLACEHOLDER",
    "TencentTranslator",
    "make_batches",
]
