"""Language listing endpoints."""

from fastapi import APIRouter, Depends

from telephone.api.deps import get_catalog, get_header_api_key, get_provider_factory
from telephone.schemas.languages import (
    CatalogLanguage,
    CatalogResponse,
    SupportedLanguage,
    SupportedLanguagesResponse,
)
from telephone.services.chain.divergence import DIVERGENCE_POLICY_VERSION
from telephone.services.language.catalog import LanguageCatalog
from telephone.services.language.ui_languages import build_ui_languages
from telephone.services.translation.deepl import DeepLProviderFactory

router = APIRouter(prefix="/languages", tags=["languages"])


@router.get("", response_model=CatalogResponse)
async def list_catalog(
    catalog: LanguageCatalog = Depends(get_catalog),
) -> CatalogResponse:
    """Languages a chain may route through, in catalog order."""
    return CatalogResponse(
        languages=[
            CatalogLanguage(code=entry.code, name=entry.name)
            for entry in catalog.entries()
        ],
        divergence_policy_version=DIVERGENCE_POLICY_VERSION,
    )


@router.get("/supported", response_model=SupportedLanguagesResponse)
async def list_supported(
    api_key: str = Depends(get_header_api_key),
    factory: DeepLProviderFactory = Depends(get_provider_factory),
) -> SupportedLanguagesResponse:
    """Provider target languages, simplified for an interface-language picker."""
    provider = factory.create(api_key)
    languages = await provider.list_target_languages()
    return SupportedLanguagesResponse(
        languages=[
            SupportedLanguage(code=lang.code, name=lang.name, deepl_code=lang.deepl_code)
            for lang in build_ui_languages(languages)
        ]
    )
