"""Language listing and batch string translation schemas."""

from pydantic import Field

from telephone.schemas.chain import CamelModel


class CatalogLanguage(CamelModel):
    code: str
    name: str


class CatalogResponse(CamelModel):
    """GET /v1/languages response body."""

    languages: list[CatalogLanguage]
    divergence_policy_version: str


class SupportedLanguage(CamelModel):
    code: str
    name: str
    deepl_code: str


class SupportedLanguagesResponse(CamelModel):
    """GET /v1/languages/supported response body."""

    languages: list[SupportedLanguage]


class BatchTranslateRequest(CamelModel):
    """POST /v1/translate-strings/batch request body."""

    texts: list[str] = Field(default_factory=list)
    target_lang: str = ""
    deepl_code: str | None = None
    api_key: str | None = None


class BatchTranslateResponse(CamelModel):
    translations: list[str]
