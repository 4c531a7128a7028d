"""Agent provider — creates PydanticAI model instances from ``provider/model`` names."""

from __future__ import annotations

import logging

from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.openai import OpenAIProvider

from config.settings import get_settings

logger = logging.getLogger(__name__)


def create_model(model_name: str | None = None):
    """Build a PydanticAI model instance.

    Parses the ``"provider/model"`` format (e.g. ``"openai/gpt-4o"``,
    ``"anthropic/claude-sonnet-4-20250514"``) and creates the appropriate model.

    - ``anthropic/*`` → native :class:`AnthropicModel`
    - ``openai/*`` or bare name → :class:`OpenAIChatModel` with OpenAI API

    Args:
        model_name: Model identifier in ``"provider/model"`` format.
                    Defaults to ``settings.default_model``.

    Returns:
        A PydanticAI model instance ready for ``Agent(model=...)``.
    """
    settings = get_settings()
    name = model_name or settings.default_model

    if "/" in name:
        prefix, model_id = name.split("/", 1)

        # ── Anthropic native ──
        if prefix == "anthropic":
            from pydantic_ai.models.anthropic import AnthropicModel
            from pydantic_ai.providers.anthropic import AnthropicProvider

            provider = AnthropicProvider(api_key=settings.anthropic_api_key)
            return AnthropicModel(model_id, provider=provider)

    # Fallback: assume OpenAI-compatible with OPENAI_API_KEY
    # Strip "openai/" prefix if present (LiteLLM convention)
    model_id = name.split("/", 1)[1] if "/" in name else name
    provider = OpenAIProvider(
        api_key=settings.openai_api_key or None,
        base_url=settings.openai_base_url or None,
    )
    return OpenAIChatModel(model_id, provider=provider)


def get_model_for_tier(tier: str) -> str:
    """Map a model tier to the configured model name.

    Tier → Settings field mapping:
    - fast    → fast_model     (block create/update)
    - complex → complex_model  (page-level generation)
    - indy    → indy_model     (function-calling dispatcher)
    """
    settings = get_settings()
    return {
        "fast": settings.fast_model,
        "complex": settings.complex_model,
        "indy": settings.indy_model,
    }.get(tier, settings.default_model)
