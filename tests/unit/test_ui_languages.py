"""Unit tests for the interface-language picker list.

Tests:
  - en/pt/zh regional variants collapse, first variant wins
  - native names are prefixed when known, English name kept otherwise
  - output sorted by display name, provider code preserved
"""

from __future__ import annotations

from telephone.services.language.ui_languages import build_ui_languages, simplify_code
from telephone.services.translation.base import ProviderLanguage


class TestSimplifyCode:
    def test_collapses_variants(self) -> None:
        assert simplify_code("EN-GB") == "en"
        assert simplify_code("PT-BR") == "pt"
        assert simplify_code("ZH-HANS") == "zh"

    def test_other_codes_lowercased(self) -> None:
        assert simplify_code("DE") == "de"
        assert simplify_code("NB") == "nb"


class TestBuildUILanguages:
    def test_dedup_label_and_sort(self) -> None:
        languages = [
            ProviderLanguage(code="EN-GB", name="English (British)"),
            ProviderLanguage(code="EN-US", name="English (American)"),
            ProviderLanguage(code="DE", name="German"),
            ProviderLanguage(code="XX", name="Klingon"),
        ]

        result = build_ui_languages(languages)

        assert [(lang.code, lang.deepl_code) for lang in result] == [
            ("de", "DE"),
            ("en", "EN-GB"),
            ("xx", "XX"),
        ]
        assert result[0].name == "Deutsch (German)"
        assert result[1].name == "English (English (British))"
        assert result[2].name == "Klingon"

    def test_empty(self) -> None:
        assert build_ui_languages([]) == []
