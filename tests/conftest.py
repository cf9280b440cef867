"""Shared pytest fixtures for the translation telephone test suite.

Provides:
  - MockTranslationProvider: in-memory provider that appends "_<LANG>" on
    forward hops and strips those suffixes when translating back to the
    start language
  - FakeDeepLServer: httpx.MockTransport handler speaking the DeepL v2 API
    with the same suffix behaviour, for exercising the real DeepL adapter
  - seeded_rng: deterministic random.Random for chain generation
All external calls are faked. No test touches the network.
"""

from __future__ import annotations

import json
import random
import re
from typing import Any, Callable

import httpx
import pytest

from telephone.core.exceptions import ProviderError, ProviderErrorKind
from telephone.services.translation.base import ProviderLanguage, TranslationProvider

_SUFFIX_RE = re.compile(r"(_[A-Z]{2}(?:-[A-Z]+)?)+$")


def strip_suffixes(text: str) -> str:
    """Undo every "_<LANG>" suffix appended by a forward hop."""
    return _SUFFIX_RE.sub("", text)


# ---------------------------------------------------------------------------
# Mock Translation Provider
# ---------------------------------------------------------------------------


class MockTranslationProvider(TranslationProvider):
    """Fake provider with call tracking and scripted failures.

    translate() calls are numbered from 1 across the run. With
    fail_on_translate_call=3 the third call raises *error*: for a chain
    run with an explicit start language that is hop 2's forward call.
    """

    def __init__(
        self,
        start_language: str = "EN-US",
        detected_language: str = "EN-US",
        fail_on_translate_call: int | None = None,
        error: Exception | None = None,
        detect_error: Exception | None = None,
    ) -> None:
        self._start_language = start_language
        self._detected_language = detected_language
        self._fail_on_translate_call = fail_on_translate_call
        self._error = error or ProviderError(
            "DeepL rate limit exceeded. Retry later.", ProviderErrorKind.RATE_LIMIT
        )
        self._detect_error = detect_error
        self.detect_calls: list[str] = []
        self.translate_calls: list[tuple[str, str]] = []
        self.batch_calls: list[tuple[list[str], str]] = []

    @property
    def total_calls(self) -> int:
        return len(self.detect_calls) + len(self.translate_calls) + len(self.batch_calls)

    async def detect_language(self, text: str) -> str:
        self.detect_calls.append(text)
        if self._detect_error is not None:
            raise self._detect_error
        return self._detected_language

    async def translate(self, text: str, target_language: str) -> str:
        self.translate_calls.append((text, target_language))
        if len(self.translate_calls) == self._fail_on_translate_call:
            raise self._error
        if target_language == self._start_language:
            return strip_suffixes(text)
        return f"{text}_{target_language}"

    async def translate_batch(
        self, texts: list[str], target_language: str
    ) -> list[str]:
        self.batch_calls.append((list(texts), target_language))
        return [f"{text}_{target_language}" for text in texts]

    async def list_target_languages(self) -> list[ProviderLanguage]:
        return [
            ProviderLanguage(code="DE", name="German"),
            ProviderLanguage(code="EN-US", name="English (American)"),
        ]


# ---------------------------------------------------------------------------
# Fake DeepL HTTP API
# ---------------------------------------------------------------------------


class FakeDeepLServer:
    """Request handler for httpx.MockTransport mimicking DeepL v2.

    Translating to *start_language* strips suffixes, any other target
    appends "_<target>". Every request is recorded in ``requests``.
    Setting ``status_code`` makes every request fail with that status.
    """

    def __init__(self, start_language: str = "EN-US", detected_source: str = "EN") -> None:
        self.start_language = start_language
        self.detected_source = detected_source
        self.status_code: int | None = None
        self.error_message = "Error"
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code is not None:
            return httpx.Response(self.status_code, json={"message": self.error_message})

        if request.url.path == "/v2/languages":
            return httpx.Response(
                200,
                json=[
                    {"language": "DE", "name": "German"},
                    {"language": "EN-GB", "name": "English (British)"},
                    {"language": "EN-US", "name": "English (American)"},
                    {"language": "XX", "name": "Klingon"},
                ],
            )

        body: dict[str, Any] = json.loads(request.content)
        target = body["target_lang"]
        translations = []
        for text in body["text"]:
            if target == self.start_language:
                translated = strip_suffixes(text)
            else:
                translated = f"{text}_{target}"
            translations.append(
                {"detected_source_language": self.detected_source, "text": translated}
            )
        return httpx.Response(200, json={"translations": translations})

    def translate_bodies(self) -> list[dict[str, Any]]:
        return [
            json.loads(r.content) for r in self.requests if r.url.path == "/v2/translate"
        ]


def make_async_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_provider() -> MockTranslationProvider:
    """Suffix-appending provider with EN-US as start language."""
    return MockTranslationProvider()


@pytest.fixture
def fake_deepl() -> FakeDeepLServer:
    return FakeDeepLServer()


@pytest.fixture
def seeded_rng() -> random.Random:
    """Deterministic RNG so generated chains are reproducible."""
    return random.Random(1234)
