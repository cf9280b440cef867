"""Provider target languages reshaped for an interface-language picker.

Regional variants collapse onto their base language (the first variant
reported wins), labels pair the native name with the English one, and
the list is sorted by label. The provider code is kept for translation.
"""

from __future__ import annotations

from dataclasses import dataclass

from telephone.services.translation.base import ProviderLanguage

NATIVE_NAMES: dict[str, str] = {
    "ar": "العربية",
    "bg": "Български",
    "zh": "中文",
    "cs": "Čeština",
    "da": "Dansk",
    "nl": "Nederlands",
    "en": "English",
    "et": "Eesti",
    "fi": "Suomi",
    "fr": "Français",
    "de": "Deutsch",
    "el": "Ελληνικά",
    "he": "עברית",
    "hu": "Magyar",
    "id": "Bahasa Indonesia",
    "it": "Italiano",
    "ja": "日本語",
    "ko": "한국어",
    "lv": "Latviešu",
    "lt": "Lietuvių",
    "nb": "Norsk",
    "pl": "Polski",
    "pt": "Português",
    "ro": "Română",
    "ru": "Русский",
    "sk": "Slovenčina",
    "sl": "Slovenščina",
    "es": "Español",
    "sv": "Svenska",
    "th": "ไทย",
    "tr": "Türkçe",
    "uk": "Українська",
    "vi": "Tiếng Việt",
}

_COLLAPSED_PREFIXES = ("en-", "pt-", "zh-")


@dataclass(frozen=True)
class UILanguage:
    code: str
    name: str
    deepl_code: str


def simplify_code(provider_code: str) -> str:
    """Lower-case a provider code and drop the region of en/pt/zh variants."""
    code = provider_code.lower()
    for prefix in _COLLAPSED_PREFIXES:
        if code.startswith(prefix):
            return prefix[:-1]
    return code


def build_ui_languages(languages: list[ProviderLanguage]) -> list[UILanguage]:
    seen: set[str] = set()
    result: list[UILanguage] = []
    for language in languages:
        code = simplify_code(language.code)
        if code in seen:
            continue
        seen.add(code)
        native = NATIVE_NAMES.get(code)
        name = f"{native} ({language.name})" if native else language.name
        result.append(UILanguage(code=code, name=name, deepl_code=language.code))
    result.sort(key=lambda lang: lang.name)
    return result
