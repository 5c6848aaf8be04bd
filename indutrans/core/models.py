from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class SplitMode(str, Enum):
    AUTO = "auto"
    LINE = "line"
    PARAGRAPH = "paragraph"

    @classmethod
    def parse(cls, value: "str | SplitMode | None") -> "SplitMode":
        if isinstance(value, cls):
            return value
        s = str(value or "auto").strip().lower()
        for m in cls:
            if m.value == s or m.name.lower() == s:
                return m
        raise ValueError(f"unknown split mode: {value}")


class Provider(str, Enum):
    GEMINI = "gemini"
    TENCENT = "tencent"

    @classmethod
    def parse(cls, value: "str | Provider | None") -> "Provider":
        if isinstance(value, cls):
            return value
        s = str(value or "gemini").strip().lower()
        for p in cls:
            if p.value == s or p.name.lower() == s:
                return p
        raise ValueError(f"unknown provider: {value}")


TENCENT_REGIONS: Dict[str, str] = {
    "ap-guangzhou": "Guangzhou",
    "ap-shanghai": "Shanghai",
    "ap-beijing": "Beijing",
    "ap-hongkong": "Hong Kong",
    "ap-singapore": "Singapore",
    "na-siliconvalley": "Silicon Valley",
}

DEFAULT_REGION = "ap-guangzhou"


@dataclass
class TencentCredentials:
    secret_id: str
    secret_key: str
    region: str = DEFAULT_REGION

    def is_complete(self) -> bool:
        return bool((self.secret_id or "").strip() and (self.secret_key or "").strip())

    def to_dict(self) -> Dict[str, Any]:
        # never serialize the secret
        return {"secret_id": self.secret_id, "region": self.region}


@dataclass
class TranslationRecord:
    id: str
    original: str
    translations: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def blank(cls, record_id: str, original: str, languages: Iterable[str]) -> "TranslationRecord":
        """Record with every requested language present and empty."""
        return cls(id=record_id, original=original, translations={c: "" for c in languages})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Batch:
    """Contiguous slice ``units[start:end]`` sent in one Cloud-MT request."""

    start: int
    end: int
    texts: List[str]

    @property
    def indices(self) -> range:
        return range(self.start, self.end)


def records_to_dicts(records: Optional[List[TranslationRecord]]) -> List[Dict[str, Any]]:
    return [r.to_dict() for r in (records or [])]
