"""Closed catalog of languages a chain may route through.

The catalog is built once at import and never mutated, so concurrent
chain runs can share it freely. It also owns the one table that maps
provider-native detection codes onto catalog codes.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LanguageCatalogEntry:
    """A supported target language and its English display name."""

    code: str
    name: str


_ENTRIES: tuple[LanguageCatalogEntry, ...] = (
    LanguageCatalogEntry("EN-US", "English (US)"),
    LanguageCatalogEntry("EN-GB", "English (UK)"),
    LanguageCatalogEntry("DE", "German"),
    LanguageCatalogEntry("FR", "French"),
    LanguageCatalogEntry("ES", "Spanish"),
    LanguageCatalogEntry("IT", "Italian"),
    LanguageCatalogEntry("PT-PT", "Portuguese (European)"),
    LanguageCatalogEntry("PT-BR", "Portuguese (Brazilian)"),
    LanguageCatalogEntry("NL", "Dutch"),
    LanguageCatalogEntry("PL", "Polish"),
    LanguageCatalogEntry("RU", "Russian"),
    LanguageCatalogEntry("JA", "Japanese"),
    LanguageCatalogEntry("ZH-HANS", "Chinese (Simplified)"),
    LanguageCatalogEntry("KO", "Korean"),
    LanguageCatalogEntry("SV", "Swedish"),
    LanguageCatalogEntry("DA", "Danish"),
    LanguageCatalogEntry("FI", "Finnish"),
    LanguageCatalogEntry("NB", "Norwegian (Bokmål)"),
    LanguageCatalogEntry("CS", "Czech"),
    LanguageCatalogEntry("EL", "Greek"),
    LanguageCatalogEntry("HU", "Hungarian"),
    LanguageCatalogEntry("RO", "Romanian"),
    LanguageCatalogEntry("TR", "Turkish"),
    LanguageCatalogEntry("ID", "Indonesian"),
    LanguageCatalogEntry("BG", "Bulgarian"),
    LanguageCatalogEntry("SK", "Slovak"),
    LanguageCatalogEntry("LT", "Lithuanian"),
    LanguageCatalogEntry("LV", "Latvian"),
    LanguageCatalogEntry("ET", "Estonian"),
    LanguageCatalogEntry("SL", "Slovenian"),
    LanguageCatalogEntry("UK", "Ukrainian"),
    LanguageCatalogEntry("AR", "Arabic"),
)

# Detection returns source codes without region; chains need a concrete variant.
PROVIDER_CODE_ALIASES: dict[str, str] = {
    "EN": "EN-US",
    "PT": "PT-BR",
    "ZH": "ZH-HANS",
}


class LanguageCatalog:
    """Read-only lookup over a fixed sequence of catalog entries."""

    def __init__(self, entries: tuple[LanguageCatalogEntry, ...]) -> None:
        self._entries = entries
        self._names = {entry.code: entry.name for entry in entries}
        self._codes = tuple(entry.code for entry in entries)

    def lookup_name(self, code: str) -> str:
        """Display name for *code*, or the code itself when unregistered."""
        return self._names.get(code, code)

    def all_codes(self) -> tuple[str, ...]:
        return self._codes

    def entries(self) -> tuple[LanguageCatalogEntry, ...]:
        return self._entries

    def contains(self, code: str) -> bool:
        return code in self._names

    def normalize_provider_code(self, raw: str) -> str | None:
        """Map a provider-native language code onto a catalog code.

        Codes are upper-cased and regional aliases applied from
        PROVIDER_CODE_ALIASES. Returns None when the result is not a
        catalog code.
        """
        code = raw.strip().upper()
        code = PROVIDER_CODE_ALIASES.get(code, code)
        return code if code in self._names else None

    def __len__(self) -> int:
        return len(self._codes)


CATALOG = LanguageCatalog(_ENTRIES)
