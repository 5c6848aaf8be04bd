"""Interface shared by the translation providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from indutrans.core.models import TencentCredentials, TranslationRecord


class TranslationProvider(ABC):
    """Translate an ordered list of units into every requested language.

    Implementations return one record per unit in input order, each carrying
    exactly one (possibly empty) entry per requested language. Missing or
    malformed credentials raise before any network call. An empty unit list
    returns ``[]`` without contacting the backend.
    """

    name: str = ""

    @abstractmethod
    def translate_batch(
        self,
        units: Sequence[str],
        target_languages: Sequence[str],
        credentials: Optional[TencentCredentials] = None,
    ) -> List[TranslationRecord]:
        ...


__all__ = ["TranslationProvider"]
