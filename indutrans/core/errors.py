"""Error taxonomy for translation runs.

Every error aborts the whole run. The CLI maps precondition/configuration
errors to exit code 2 and the rest to exit code 1.
"""

from __future__ import annotations

DEFAULT_FAILURE_MESSAGE = "翻译失败，请检查网络或 API 限制。"


class TranslationError(RuntimeError):
    """Base error for a failed translation run."""

    def __init__(self, message: str = ""):
        super().__init__(message or DEFAULT_FAILURE_MESSAGE)
        self.message = message or DEFAULT_FAILURE_MESSAGE


class PreconditionError(TranslationError):
    """Missing credentials, empty input or an unsupported option; raised before any network call."""


class ConfigurationError(PreconditionError):
    """No API key could be resolved from any configured source."""


class NetworkError(TranslationError):
    """Connection, timeout or relay failure; the backend was never reached."""


class BackendError(TranslationError):
    """Structured error returned by a reachable backend (message kept verbatim)."""

    def __init__(self, message: str, code: str = ""):
        super().__init__(message)
        self.code = code


class ParseError(TranslationError):
    """Response body is missing or not the expected structure."""


__all__ = [
    "DEFAULT_FAILURE_MESSAGE",
    "TranslationError",
    "PreconditionError",
    "ConfigurationError",
    "NetworkError",
    "BackendError",
    "ParseError",
]
