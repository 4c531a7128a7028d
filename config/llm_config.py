"""Reusable LLM generation parameters.

Priority chain (low → high):
    .env global defaults  →  agent-level LLMConfig  →  per-call overrides

The Indy dispatcher, the block-operation agent and the conversational
reply agent each declare their own ``LLMConfig`` on top of the defaults.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class LLMConfig(BaseModel):
    """Generation parameters shared by every model call.

    ``None`` on any field means "inherit from the layer below".
    """

    model: str | None = Field(default=None, description="LiteLLM model identifier")
    max_tokens: int | None = Field(default=None, description="Max tokens to generate")
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    top_p: float | None = Field(default=None, ge=0.0, le=1.0)
    seed: int | None = Field(default=None, description="Random seed for reproducibility")
    response_format: str | None = Field(
        default=None, description="'json_object' for structured output"
    )
    stop: list[str] | None = Field(default=None, description="Stop sequences")

    def merge(self, overrides: LLMConfig) -> LLMConfig:
        """Return a new config with *overrides* winning on every non-None field."""
        merged = self.model_dump(exclude_none=True)
        merged.update(overrides.model_dump(exclude_none=True))
        return LLMConfig(**merged)

    def to_litellm_kwargs(self) -> dict:
        """Keyword arguments for ``litellm.acompletion()`` (model excluded)."""
        kw = self.model_dump(
            exclude_none=True, exclude={"model", "response_format"}
        )
        if self.response_format:
            kw["response_format"] = {"type": self.response_format}
        return kw
