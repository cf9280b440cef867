"""Server-sent events encoding for chain runs.

This is the only module that knows about the wire transport. Each event
becomes one `data: <json>\\n\\n` frame, sent in arrival order with no
buffering or replay. The stream ends right after the terminal frame.
"""

from __future__ import annotations

from typing import AsyncIterator, Awaitable, Callable

import structlog

from telephone.schemas.chain import (
    CompleteFrame,
    ErrorFrame,
    ProgressFrame,
    TranslationChainResult,
    TranslationStep,
)
from telephone.services.chain.events import (
    TERMINAL_EVENTS,
    ChainComplete,
    ChainFailed,
    ChainResult,
    HopResult,
    ProgressEvent,
    ProgressUpdate,
)
from telephone.services.chain.orchestrator import ChainOrchestrator

logger = structlog.get_logger(__name__)

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def _step_schema(hop: HopResult) -> TranslationStep:
    return TranslationStep(
        text=hop.text,
        language=hop.language,
        language_name=hop.language_name,
        step=hop.step,
        back_translation=hop.back_translation,
        divergence=hop.divergence,
    )


def _result_schema(result: ChainResult) -> TranslationChainResult:
    return TranslationChainResult(
        original=result.original,
        original_language=result.original_language,
        original_language_name=result.original_language_name,
        steps=[_step_schema(hop) for hop in result.steps],
        final_text=result.final_text,
        total_steps=result.total_steps,
    )


def to_frame(event: ProgressEvent) -> ProgressFrame | CompleteFrame | ErrorFrame:
    """Map a domain event onto its wire model."""
    if isinstance(event, ProgressUpdate):
        return ProgressFrame(
            current_step=event.current_step,
            total_steps=event.total_steps,
            step=_step_schema(event.step),
        )
    if isinstance(event, ChainComplete):
        return CompleteFrame(result=_result_schema(event.result))
    if isinstance(event, ChainFailed):
        return ErrorFrame(error=event.message, code=event.code, kind=event.kind)
    raise TypeError(f"Unknown progress event: {type(event).__name__}")


def encode_event(event: ProgressEvent) -> str:
    """Serialize one event as a single SSE frame."""
    payload = to_frame(event).model_dump_json(by_alias=True)
    return f"data: {payload}\n\n"


async def stream_progress(
    orchestrator: ChainOrchestrator,
    is_disconnected: Callable[[], Awaitable[bool]] | None = None,
) -> AsyncIterator[str]:
    """Yield SSE frames for one orchestrator run.

    *is_disconnected* is polled before the next hop is requested and again
    before each frame is sent. Once it reports the consumer gone, the
    orchestrator is cancelled, no further hop starts and nothing more is
    sent.
    """
    events = orchestrator.events()
    sent = 0

    async def consumer_gone() -> bool:
        if is_disconnected is None or not await is_disconnected():
            return False
        orchestrator.cancel()
        logger.info("chain_stream_client_disconnected", frames_sent=sent)
        return True

    try:
        while True:
            if await consumer_gone():
                return
            try:
                event = await events.__anext__()
            except StopAsyncIteration:
                return
            if await consumer_gone():
                return
            yield encode_event(event)
            sent += 1
            if isinstance(event, TERMINAL_EVENTS):
                logger.debug("chain_stream_closed", frames_sent=sent)
                return
    finally:
        orchestrator.cancel()
        await events.aclose()
