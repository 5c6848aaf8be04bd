# -*- coding: utf-8 -*-
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, List

import pytest


def pytest_sessionstart(session) -> None:
    # Ensure project root is importable for tests
    root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(root))


class FakeResponse:
    def __init__(self, payload: Any = None, status_code: int = 200, text: str | None = None):
        self._payload = payload
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload)

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class RecordingPost:
    """Stand-in for ``requests.post`` returning queued responses in order."""

    def __init__(self, responses: List[Any]):
        self.responses = list(responses)
        self.calls: List[dict] = []

    def __call__(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def recording_post():
    return RecordingPost


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    for name in (
        "GEMINI_API_KEY",
        "API_KEY",
        "GEMINI_MODEL",
        "INDUTRANS_PROVIDER",
        "INDUTRANS_SPLIT_MODE",
        "INDUTRANS_TARGET_LANGUAGES",
        "INDUTRANS_EXPORT_DIR",
        "TENCENTCLOUD_SECRET_ID",
        "TENCENTCLOUD_SECRET_KEY",
        "TENCENTCLOUD_REGION",
        "TMT_RELAY_PREFIX",
    ):
        monkeypatch.delenv(name, raising=False)
