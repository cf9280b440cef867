"""Values produced by one chain run.

All of them are frozen: once the orchestrator hands a value out it is
never changed. Wire formats live in telephone/schemas/chain.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class ChainRequest:
    """Caller input for one run. Exactly one of chain / random_length is set."""

    text: str
    chain: tuple[str, ...] | None = None
    random_length: int | None = None
    start_language: str | None = None


@dataclass(frozen=True)
class HopResult:
    """One hop: forward translation plus its back-translation."""

    text: str
    language: str
    language_name: str
    step: int
    back_translation: str
    divergence: int


@dataclass(frozen=True)
class ChainResult:
    original: str
    original_language: str
    original_language_name: str
    steps: tuple[HopResult, ...]
    final_text: str
    total_steps: int


@dataclass(frozen=True)
class ProgressUpdate:
    current_step: int
    total_steps: int
    step: HopResult


@dataclass(frozen=True)
class ChainComplete:
    result: ChainResult


@dataclass(frozen=True)
class ChainFailed:
    message: str
    code: str
    kind: str | None = None


ProgressEvent = Union[ProgressUpdate, ChainComplete, ChainFailed]
TERMINAL_EVENTS = (ChainComplete, ChainFailed)
