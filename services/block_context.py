"""Context builders — assemble the block and page payloads sent to the LLM.

Single-block and page-create builders are strict: an unregistered block type
raises :class:`BlockNotFoundError`.  :func:`prepare_page_update_context` is
the tolerant batch entry point: unknown block types are skipped and a block
whose context cannot be built is logged and omitted, so one bad block never
aborts a page-level update.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Literal

from blocks.registry import get_block_entry, resolve_block
from models.blocks import DesignTokens, tokens_to_dict
from models.context import (
    BlockAIContext,
    BlockUpdateContext,
    EnrichedBlockContext,
    PageAIContext,
    PageBlockInput,
    PageMeta,
    PageUpdateBlock,
    PageUpdateBlockContext,
    PageUpdateContext,
)
from services.schema_summary import normalize_schema
from services.target_path import compress_block_update_context_for_target

logger = logging.getLogger(__name__)

TokensLike = DesignTokens | dict[str, Any] | None


def prepare_block_ai_context(
    block_type: str,
    tokens: TokensLike,
    intent: Literal["create", "update"] = "create",
) -> BlockAIContext:
    entry = resolve_block(block_type)
    return BlockAIContext(
        block_type=entry.type.value,
        intent=intent,
        block_schema=normalize_schema(entry.schema),
        tokens=tokens_to_dict(tokens),
        defaults=entry.defaults(),
        ai_hints=entry.hints(),
    )


def prepare_block_update_context(
    block_type: str,
    current_data: Any,
    tokens: TokensLike,
) -> BlockUpdateContext:
    entry = resolve_block(block_type)
    return BlockUpdateContext(
        block_type=entry.type.value,
        current=current_data,
        block_schema=normalize_schema(entry.schema),
        tokens=tokens_to_dict(tokens),
        ai_hints=entry.hints(),
    )


def _as_model(value: Any, model: type) -> Any:
    return value if isinstance(value, model) else model.model_validate(value)


def prepare_page_ai_context(
    blocks: Iterable[PageBlockInput | dict[str, Any]],
    tokens: TokensLike,
    page_meta: PageMeta | dict[str, Any] | None = None,
) -> PageAIContext:
    """Enrich every requested block; any unknown type aborts the whole call."""
    meta = _as_model(page_meta or {}, PageMeta)
    token_dict = tokens_to_dict(tokens)

    enriched: list[EnrichedBlockContext] = []
    for raw in blocks:
        block = _as_model(raw, PageBlockInput)
        entry = resolve_block(block.block_type)
        enriched.append(
            EnrichedBlockContext(
                block_type=entry.type.value,
                intent="update" if block.current_data else "create",
                current=block.current_data,
                block_schema=normalize_schema(entry.schema),
                defaults=entry.defaults(),
                tokens=token_dict,
                ai_hints=entry.hints(),
            )
        )

    return PageAIContext(
        page_intent=meta.intent or "create",
        route=meta.route,
        layout_style=meta.layout_style,
        blocks=enriched,
    )


def prepare_page_update_context(
    blocks: Iterable[PageUpdateBlock | dict[str, Any]],
    tokens: Any,
    page_meta: PageMeta | dict[str, Any] | None = None,
) -> PageUpdateContext:
    """Build update contexts for a batch of blocks, skipping any that fail."""
    meta = _as_model(page_meta or {}, PageMeta)
    token_dict = tokens_to_dict(tokens)

    processed: list[PageUpdateBlockContext] = []
    for raw in blocks:
        try:
            block = _as_model(raw, PageUpdateBlock)
            if get_block_entry(block.block_type) is None:
                logger.info("Skipping unregistered block type %r in page update", block.block_type)
                continue

            full = prepare_block_update_context(block.block_type, block.current_data, token_dict)
            if block.target:
                compressed = compress_block_update_context_for_target(full, block.target)
                processed.append(
                    PageUpdateBlockContext(
                        block_type=full.block_type,
                        target=block.target,
                        current=compressed.current,
                        block_schema=compressed.block_schema,
                        tokens=compressed.tokens,
                        ai_hints=full.ai_hints,
                    )
                )
            else:
                processed.append(
                    PageUpdateBlockContext(
                        block_type=full.block_type,
                        current=full.current,
                        block_schema=full.block_schema,
                        tokens=full.tokens,
                        ai_hints=full.ai_hints,
                    )
                )
        except Exception:
            logger.exception("Failed to build update context for block %r, omitting it", raw)

    return PageUpdateContext(
        page_intent=meta.intent or "update",
        route=meta.route,
        title=meta.title,
        tokens=token_dict,
        blocks=processed,
    )
