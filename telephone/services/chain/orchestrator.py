"""Chain orchestration: the hop-by-hop translate / back-translate loop.

One ChainOrchestrator drives exactly one run:

    IDLE → RESOLVING → CHAIN_READY → HOPPING → COMPLETED | FAILED | CANCELLED

events() is a single-use async generator. For a chain of N languages it
yields N ProgressUpdate events followed by one ChainComplete, or stops
early with one ChainFailed. Nothing is yielded after the terminal event.

Per hop i (strictly sequential, the running text is carried forward):
  1. current = translate(current, chain[i])
  2. back = translate(current, start_language)
  3. divergence = score(original_text, back)   # always against the original

ChainResult.final_text is the back-translation of the last hop, never the
text in the last chain language.
"""

from __future__ import annotations

import random
from enum import Enum
from typing import AsyncGenerator, Callable

import structlog

from telephone.core.exceptions import (
    InternalError,
    ProviderError,
    TelephoneError,
    ValidationError,
)
from telephone.services.chain.divergence import compute_divergence
from telephone.services.chain.events import (
    ChainComplete,
    ChainFailed,
    ChainRequest,
    ChainResult,
    HopResult,
    ProgressEvent,
    ProgressUpdate,
)
from telephone.services.chain.generator import (
    check_chain_length,
    generate_random_chain,
    validate_chain,
)
from telephone.services.language.catalog import CATALOG, LanguageCatalog
from telephone.services.translation.base import TranslationProvider

logger = structlog.get_logger(__name__)


class OrchestratorState(str, Enum):
    IDLE = "idle"
    RESOLVING = "resolving"
    CHAIN_READY = "chain_ready"
    HOPPING = "hopping"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


_TERMINAL_STATES = frozenset(
    {OrchestratorState.COMPLETED, OrchestratorState.FAILED, OrchestratorState.CANCELLED}
)


def validate_request(
    request: ChainRequest, catalog: LanguageCatalog = CATALOG
) -> None:
    """Check everything about a request that needs no provider call.

    Raises:
        ValidationError: On blank text, neither or both chain options, a
            chain length outside 3..15, or an unknown language code.
    """
    if not request.text or not request.text.strip():
        raise ValidationError("Text is required")

    has_chain = bool(request.chain)
    has_random = request.random_length is not None
    if has_chain and has_random:
        raise ValidationError(
            "Provide either languageChain or randomChainLength, not both"
        )
    if not has_chain and not has_random:
        raise ValidationError(
            "Either languageChain or randomChainLength must be provided"
        )

    if has_chain:
        validate_chain(request.chain, catalog)
    else:
        check_chain_length(request.random_length, "Random chain length")

    if request.start_language is not None and not catalog.contains(
        request.start_language
    ):
        raise ValidationError(
            f"Unsupported start language: {request.start_language}"
        )


class ChainOrchestrator:
    """Runs one translation telephone chain against a provider."""

    def __init__(
        self,
        provider: TranslationProvider,
        request: ChainRequest,
        catalog: LanguageCatalog = CATALOG,
        scorer: Callable[[str, str], int] = compute_divergence,
        rng: random.Random | None = None,
    ) -> None:
        self._provider = provider
        self._request = request
        self._catalog = catalog
        self._scorer = scorer
        self._rng = rng
        self._state = OrchestratorState.IDLE
        self._started = False
        self._cancelled = False

    @property
    def state(self) -> OrchestratorState:
        return self._state

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Stop the run: no new hop starts and no further events are yielded."""
        if self._state in _TERMINAL_STATES:
            return
        logger.info("chain_run_cancel_requested", state=self._state.value)
        self._cancelled = True
        self._state = OrchestratorState.CANCELLED

    def _stop_if_cancelled(self) -> bool:
        if self._cancelled:
            logger.info("chain_run_cancelled")
        return self._cancelled

    async def _resolve_start_language(self) -> str:
        if self._request.start_language:
            return self._request.start_language
        return await self._provider.detect_language(self._request.text)

    def _resolve_chain(self, start_language: str) -> tuple[str, ...]:
        if self._request.chain:
            return validate_chain(self._request.chain, self._catalog)
        if self._request.random_length is None:
            raise ValidationError(
                "Either languageChain or randomChainLength must be provided"
            )
        return generate_random_chain(
            self._request.random_length,
            exclude_start=start_language,
            rng=self._rng,
            catalog=self._catalog,
        )

    async def events(self) -> AsyncGenerator[ProgressEvent, None]:
        """Run the chain, yielding progress and exactly one terminal event."""
        if self._started:
            raise RuntimeError("ChainOrchestrator.events() can only be consumed once")
        self._started = True
        if self._stop_if_cancelled():
            return

        text = self._request.text
        steps: list[HopResult] = []
        failure: TelephoneError | None = None
        start_language = ""
        total = 0
        final_back_translation = text

        self._state = OrchestratorState.RESOLVING
        try:
            validate_request(self._request, self._catalog)
            start_language = await self._resolve_start_language()
            if self._stop_if_cancelled():
                return

            chain = self._resolve_chain(start_language)
            total = len(chain)
            self._state = OrchestratorState.CHAIN_READY
            logger.info(
                "chain_run_started",
                start_language=start_language,
                detected=self._request.start_language is None,
                chain=list(chain),
                text_len=len(text),
            )

            self._state = OrchestratorState.HOPPING
            current_text = text
            for index, language in enumerate(chain, start=1):
                if self._stop_if_cancelled():
                    return

                current_text = await self._provider.translate(current_text, language)
                back_translated = await self._provider.translate(
                    current_text, start_language
                )
                divergence = self._scorer(text, back_translated)

                hop = HopResult(
                    text=current_text,
                    language=language,
                    language_name=self._catalog.lookup_name(language),
                    step=index,
                    back_translation=back_translated,
                    divergence=divergence,
                )
                steps.append(hop)
                final_back_translation = back_translated
                logger.debug(
                    "chain_hop_completed",
                    step=index,
                    total_steps=total,
                    language=language,
                    divergence=divergence,
                )

                if self._stop_if_cancelled():
                    return
                yield ProgressUpdate(current_step=index, total_steps=total, step=hop)
        except TelephoneError as e:
            failure = e
        except Exception as e:
            logger.error("chain_run_internal_error", error=str(e), step=len(steps) + 1)
            failure = InternalError(f"Chain run failed unexpectedly: {e}")

        if self._stop_if_cancelled():
            return

        if failure is not None:
            self._state = OrchestratorState.FAILED
            kind = failure.kind.value if isinstance(failure, ProviderError) else None
            logger.warning(
                "chain_run_failed",
                code=failure.code,
                kind=kind,
                completed_steps=len(steps),
                error=failure.message,
            )
            yield ChainFailed(message=failure.message, code=failure.code, kind=kind)
            return

        if len(steps) != total or steps[-1].back_translation != final_back_translation:
            self._state = OrchestratorState.FAILED
            error = InternalError("Chain run finished in an inconsistent state")
            logger.error("chain_run_inconsistent", steps=len(steps), total_steps=total)
            yield ChainFailed(message=error.message, code=error.code)
            return

        self._state = OrchestratorState.COMPLETED
        result = ChainResult(
            original=text,
            original_language=start_language,
            original_language_name=self._catalog.lookup_name(start_language),
            steps=tuple(steps),
            final_text=final_back_translation,
            total_steps=total,
        )
        logger.info(
            "chain_run_completed",
            total_steps=total,
            final_divergence=steps[-1].divergence,
        )
        yield ChainComplete(result=result)
