"""Batch string translation, used to localize interface strings."""

import structlog
from fastapi import APIRouter, Depends

from telephone.api.deps import get_provider_factory
from telephone.core.exceptions import ValidationError
from telephone.schemas.languages import BatchTranslateRequest, BatchTranslateResponse
from telephone.services.translation.deepl import DeepLProviderFactory

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/translate-strings", tags=["strings"])


@router.post("/batch", response_model=BatchTranslateResponse)
async def translate_strings_batch(
    body: BatchTranslateRequest,
    factory: DeepLProviderFactory = Depends(get_provider_factory),
) -> BatchTranslateResponse:
    """Translate all texts in one provider call, preserving order."""
    if not body.texts or not body.target_lang or not body.api_key:
        raise ValidationError(
            "Missing required fields: texts (array), targetLang, apiKey"
        )

    provider = factory.create(body.api_key)
    target = body.deepl_code or body.target_lang.upper()
    translations = await provider.translate_batch(body.texts, target)
    logger.info("strings_batch_translated", target=target, count=len(translations))
    return BatchTranslateResponse(translations=translations)
