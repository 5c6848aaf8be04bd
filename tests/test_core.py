from __future__ import annotations

import pytest

from indutrans.core.errors import (
    DEFAULT_FAILURE_MESSAGE,
    BackendError,
    ConfigurationError,
    NetworkError,
    PreconditionError,
    TranslationError,
)
from indutrans.core.languages import DEFAULT_LANGUAGES, SUPPORTED_LANGUAGES, display_name, normalize_languages
from indutrans.core.models import Provider, SplitMode, TencentCredentials, TranslationRecord
from indutrans.core.utils import safe_filename, strip_trailing_period


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Motor.", "Motor"),
        ("wait...", "wait.."),
        ("  Stop. ", "Stop"),
        ("No period", "No period"),
        ("", ""),
        (None, ""),
    ],
)
def test_strip_trailing_period(text, expected) -> None:
    assert strip_trailing_period(text) == expected


def test_error_hierarchy_and_fallback_message() -> None:
    assert issubclass(ConfigurationError, PreconditionError)
    assert issubclass(NetworkError, TranslationError)
    assert str(NetworkError()) == DEFAULT_FAILURE_MESSAGE
    err = BackendError("LimitExceeded", code="LimitExceeded")
    assert err.message == "LimitExceeded" and err.code == "LimitExceeded"


def test_languages() -> None:
    assert list(SUPPORTED_LANGUAGES)[:4] == ["en", "vi", "zh-TW", "literal"]
    assert DEFAULT_LANGUAGES == ["en", "vi", "zh-TW"]
    assert display_name("en") == "英语 (English)"
    assert display_name("xx") == "xx"
    assert normalize_languages([" en", "ja", "en", ""]) == ["en", "ja"]
    with pytest.raises(PreconditionError):
        normalize_languages(["en", "pt"])


def test_enums_parse() -> None:
    assert SplitMode.parse("Paragraph") is SplitMode.PARAGRAPH
    assert SplitMode.parse(None) is SplitMode.AUTO
    assert Provider.parse("TENCENT") is Provider.TENCENT
    with pytest.raises(ValueError):
        Provider.parse("deepl")


def test_blank_record_has_every_language() -> None:
    rec = TranslationRecord.blank("id-1", "电机", ["en", "literal"])
    assert rec.translations == {"en": "", "literal": ""}
    assert rec.to_dict() == {"id": "id-1", "original": "电机", "translations": {"en": "", "literal": ""}}


def test_credentials() -> None:
    creds = TencentCredentials("AKID", "KEY")
    assert creds.region == "ap-guangzhou"
    assert creds.is_complete()
    assert not TencentCredentials("AKID", "  ").is_complete()
    assert creds.to_dict() == {"secret_id": "AKID", "region": "ap-guangzhou"}


def test_safe_filename() -> None:
    assert safe_filename('a/b:c?.xlsx') == "a_b_c_.xlsx"
    assert safe_filename("").startswith("untitled_")
