"""Translation chain streaming endpoint."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from telephone.api.deps import get_catalog, get_provider_factory
from telephone.schemas.chain import TranslateChainRequest
from telephone.services.chain.events import ChainRequest
from telephone.services.chain.orchestrator import ChainOrchestrator, validate_request
from telephone.services.chain.stream import SSE_HEADERS, stream_progress
from telephone.services.language.catalog import LanguageCatalog
from telephone.services.translation.deepl import DeepLProviderFactory

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/translate-chain", tags=["chain"])


def _to_chain_request(body: TranslateChainRequest) -> ChainRequest:
    """An empty languageChain or startLanguage counts as not provided."""
    return ChainRequest(
        text=body.text,
        chain=tuple(body.language_chain) if body.language_chain else None,
        random_length=body.random_chain_length,
        start_language=body.start_language or None,
    )


@router.post("/stream")
async def translate_chain_stream(
    body: TranslateChainRequest,
    request: Request,
    factory: DeepLProviderFactory = Depends(get_provider_factory),
    catalog: LanguageCatalog = Depends(get_catalog),
) -> StreamingResponse:
    """Run a translation telephone chain and stream its progress.

    Processing order:
    1. Build the provider from the caller's API key (400 if missing)
    2. Validate text, chain options and language codes (400 on failure)
    3. Stream one SSE frame per hop, then one complete or error frame

    Nothing reaches the provider before steps 1-2 pass.
    """
    provider = factory.create(body.api_key)
    chain_request = _to_chain_request(body)
    validate_request(chain_request, catalog)

    orchestrator = ChainOrchestrator(
        provider=provider,
        request=chain_request,
        catalog=catalog,
    )
    logger.info(
        "chain_stream_accepted",
        explicit_chain=chain_request.chain is not None,
        random_length=chain_request.random_length,
        start_language=chain_request.start_language,
    )
    return StreamingResponse(
        stream_progress(orchestrator, request.is_disconnected),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
