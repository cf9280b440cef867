"""Translation chain request and stream event schemas.

Field names are snake_case in Python and camelCase on the wire.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for wire models: camelCase aliases, snake_case also accepted."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TranslateChainRequest(CamelModel):
    """POST /v1/translate-chain/stream request body."""

    text: str = ""
    language_chain: list[str] | None = None
    random_chain_length: int | None = None
    start_language: str | None = None
    api_key: str | None = None


class TranslationStep(CamelModel):
    text: str
    language: str
    language_name: str
    step: int = Field(ge=1)
    back_translation: str
    divergence: int = Field(ge=0, le=100)


class TranslationChainResult(CamelModel):
    original: str
    original_language: str
    original_language_name: str
    steps: list[TranslationStep]
    final_text: str
    total_steps: int


class ProgressFrame(CamelModel):
    """SSE frame sent after each completed hop."""

    type: Literal["progress"] = "progress"
    current_step: int
    total_steps: int
    step: TranslationStep


class CompleteFrame(CamelModel):
    """Terminal SSE frame of a successful run."""

    type: Literal["complete"] = "complete"
    result: TranslationChainResult


class ErrorFrame(CamelModel):
    """Terminal SSE frame of a failed run."""

    type: Literal["error"] = "error"
    error: str
    code: str
    kind: str | None = None
