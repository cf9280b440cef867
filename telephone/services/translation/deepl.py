"""DeepL translation provider over the v2 REST API.

Uses one shared httpx.AsyncClient (created in the FastAPI lifespan) and a
per-request API key, so concurrent runs share connections but no state.
Free-plan keys (suffix ":fx") are routed to the free API host.
Every call is bounded by a timeout and failures are mapped onto
ProviderError kinds. Nothing is retried here.
"""

import asyncio
from typing import Any

import httpx
import structlog

from telephone.core.config import Settings, settings as default_settings
from telephone.core.exceptions import ProviderError, ProviderErrorKind, ValidationError
from telephone.services.language.catalog import CATALOG, LanguageCatalog
from telephone.services.translation.base import ProviderLanguage, TranslationProvider

logger = structlog.get_logger(__name__)

_FREE_KEY_SUFFIX = ":fx"
# DeepL wants a regional English variant as a target; detection only needs any target.
_DETECTION_TARGET = "EN-US"
# DeepL-specific: quota for the billing period is used up.
_HTTP_QUOTA_EXCEEDED = 456


def server_url_for_key(api_key: str, config: Settings = default_settings) -> str:
    """Free-plan keys end in ':fx' and must use the free API host."""
    if api_key.strip().endswith(_FREE_KEY_SUFFIX):
        return config.deepl_free_api_url
    return config.deepl_pro_api_url


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text[:200]


def _error_from_response(response: httpx.Response) -> ProviderError:
    status = response.status_code
    detail = _error_message(response)

    if status in (401, 403):
        return ProviderError(
            "DeepL rejected the API key", ProviderErrorKind.AUTHENTICATION
        )
    if status == 429:
        return ProviderError(
            "DeepL rate limit exceeded. Retry later.", ProviderErrorKind.RATE_LIMIT
        )
    if status == _HTTP_QUOTA_EXCEEDED:
        return ProviderError(
            "DeepL character quota exceeded", ProviderErrorKind.QUOTA_EXCEEDED
        )
    if status == 400 and "target_lang" in detail.lower():
        return ProviderError(
            f"DeepL does not support the requested language: {detail}",
            ProviderErrorKind.UNSUPPORTED_LANGUAGE,
        )
    return ProviderError(
        f"DeepL request failed with status {status}: {detail}",
        ProviderErrorKind.BAD_RESPONSE,
    )


class DeepLProvider(TranslationProvider):
    """DeepL implementation of TranslationProvider for one API key."""

    def __init__(
        self,
        api_key: str,
        client: httpx.AsyncClient,
        timeout_seconds: float = 10.0,
        server_url: str | None = None,
        catalog: LanguageCatalog = CATALOG,
    ) -> None:
        if not api_key or not api_key.strip():
            raise ValidationError("DeepL API key is required")
        self._api_key = api_key.strip()
        self._client = client
        self._timeout = timeout_seconds
        self._server_url = (server_url or server_url_for_key(self._api_key)).rstrip("/")
        self._catalog = catalog

    @property
    def server_url(self) -> str:
        return self._server_url

    async def _request(
        self, method: str, path: str, operation: str, **kwargs: Any
    ) -> Any:
        """Send one request and return the decoded JSON body."""
        url = f"{self._server_url}{path}"
        headers = {"Authorization": f"DeepL-Auth-Key {self._api_key}"}
        try:
            response = await asyncio.wait_for(
                self._client.request(method, url, headers=headers, **kwargs),
                timeout=self._timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.error(
                "deepl_request_timeout",
                operation=operation,
                timeout_seconds=self._timeout,
            )
            raise ProviderError(
                f"DeepL {operation} timed out after {self._timeout}s",
                ProviderErrorKind.TIMEOUT,
            ) from e
        except httpx.HTTPError as e:
            logger.error("deepl_request_failed", operation=operation, error=str(e))
            raise ProviderError(
                f"DeepL {operation} failed: {e}", ProviderErrorKind.NETWORK
            ) from e

        if response.status_code >= 400:
            error = _error_from_response(response)
            logger.error(
                "deepl_request_rejected",
                operation=operation,
                status_code=response.status_code,
                kind=error.kind.value,
            )
            raise error

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(
                f"DeepL {operation} returned a non-JSON body",
                ProviderErrorKind.BAD_RESPONSE,
            ) from e

    async def _translate_texts(
        self, texts: list[str], target_language: str
    ) -> list[dict[str, Any]]:
        body = await self._request(
            "POST",
            "/v2/translate",
            "translate",
            json={"text": texts, "target_lang": target_language},
        )
        translations = body.get("translations") if isinstance(body, dict) else None
        if (
            not isinstance(translations, list)
            or len(translations) != len(texts)
            or not all(
                isinstance(entry, dict) and isinstance(entry.get("text"), str)
                for entry in translations
            )
        ):
            logger.error(
                "deepl_translate_bad_payload",
                target_language=target_language,
                texts=len(texts),
            )
            raise ProviderError(
                "DeepL translate returned an unexpected payload",
                ProviderErrorKind.BAD_RESPONSE,
            )
        logger.debug(
            "deepl_translate_ok",
            target_language=target_language,
            texts=len(texts),
            chars=sum(len(t) for t in texts),
        )
        return translations

    async def detect_language(self, text: str) -> str:
        """Detect via a translation to EN-US and read the reported source."""
        translations = await self._translate_texts([text], _DETECTION_TARGET)
        raw = translations[0].get("detected_source_language")
        if not raw:
            raise ProviderError(
                "DeepL did not report a detected source language",
                ProviderErrorKind.BAD_RESPONSE,
            )
        code = self._catalog.normalize_provider_code(str(raw))
        if code is None:
            logger.warning("deepl_detected_unsupported_language", detected=str(raw))
            raise ProviderError(
                f"Detected language {raw} is not supported",
                ProviderErrorKind.UNSUPPORTED_LANGUAGE,
            )
        logger.debug("deepl_detect_ok", detected=str(raw), code=code)
        return code

    async def translate(self, text: str, target_language: str) -> str:
        translations = await self._translate_texts([text], target_language)
        return translations[0]["text"]

    async def translate_batch(
        self, texts: list[str], target_language: str
    ) -> list[str]:
        translations = await self._translate_texts(list(texts), target_language)
        return [entry["text"] for entry in translations]

    async def list_target_languages(self) -> list[ProviderLanguage]:
        body = await self._request(
            "GET", "/v2/languages", "list_languages", params={"type": "target"}
        )
        if not isinstance(body, list):
            raise ProviderError(
                "DeepL languages returned an unexpected payload",
                ProviderErrorKind.BAD_RESPONSE,
            )
        return [
            ProviderLanguage(code=str(item["language"]), name=str(item.get("name", "")))
            for item in body
            if isinstance(item, dict) and item.get("language")
        ]


class DeepLProviderFactory:
    """Builds a DeepLProvider per request on top of one pooled HTTP client."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        config: Settings = default_settings,
    ) -> None:
        self._config = config
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(config.provider_timeout_seconds),
            limits=httpx.Limits(max_connections=config.http_max_connections),
        )
        logger.info(
            "deepl_provider_factory_initialized",
            timeout_seconds=config.provider_timeout_seconds,
        )

    def create(self, api_key: str | None) -> DeepLProvider:
        """Raises ValidationError if *api_key* is missing or blank."""
        if not api_key or not api_key.strip():
            raise ValidationError("API key is required")
        return DeepLProvider(
            api_key=api_key,
            client=self._client,
            timeout_seconds=self._config.provider_timeout_seconds,
            server_url=server_url_for_key(api_key.strip(), self._config),
        )

    async def aclose(self) -> None:
        logger.info("deepl_provider_factory_shutdown")
        await self._client.aclose()
