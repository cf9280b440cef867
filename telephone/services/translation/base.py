"""Abstract translation provider interface.

The chain orchestrator and API routes only ever see this interface.
A concrete provider is built per request from the caller's credential
and injected via Depends(); tests substitute an in-memory fake.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ProviderLanguage:
    """A target language as reported by the provider itself."""

    code: str
    name: str


class TranslationProvider(ABC):
    """Abstract base class for machine-translation providers."""

    @abstractmethod
    async def detect_language(self, text: str) -> str:
        """Detect the language of *text*.

        Returns:
            A Language Catalog code. Provider-native codes are normalized
            through LanguageCatalog.normalize_provider_code().

        Raises:
            ProviderError: On network, authentication or quota failure, on
                timeout, or if the detected language is not in the catalog.
        """
        ...

    @abstractmethod
    async def translate(self, text: str, target_language: str) -> str:
        """Translate *text* into *target_language*, source auto-detected.

        Raises:
            ProviderError: On any provider failure. Never retried here.
        """
        ...

    @abstractmethod
    async def translate_batch(
        self, texts: list[str], target_language: str
    ) -> list[str]:
        """Translate several texts in one provider call, preserving order.

        Raises:
            ProviderError: On any provider failure.
        """
        ...

    @abstractmethod
    async def list_target_languages(self) -> list[ProviderLanguage]:
        """Languages the provider can translate into.

        Raises:
            ProviderError: On any provider failure.
        """
        ...
