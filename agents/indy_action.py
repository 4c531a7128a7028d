"""run_indy_action / apply_indy_action — the generate-then-apply path.

:func:`run_indy_action` turns a message into an :class:`IndyAction`:

1. Property fast path: when the text is a plain property tweak and a block
   id is targeted, :func:`agents.property_agent.run_property_agent` computes
   the new data locally.
2. Otherwise the text is POSTed to ``/api/indy/generate`` and the reply is
   mapped to ``UPDATE_BLOCK`` (current data was sent) or ``ADD_BLOCK``.

:func:`apply_indy_action` applies the action to a :class:`BlockStore`
exactly once.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from agents.property_agent import run_property_agent
from config.settings import get_settings
from errors.exceptions import IndyAPIError, IndyError
from models.indy import (
    IndyAction,
    IndyActionResult,
    IndyActionType,
    IndyBlockRef,
    IndyPageContext,
)
from services.block_store import BlockStore, generate_block_id
from services.property_intent import is_property_intent

logger = logging.getLogger(__name__)

GENERATE_PATH = "/api/indy/generate"
BLOCK_TYPE_REQUIRED_MESSAGE = "Block type is required for Indy actions"


def _elapsed_ms(t0: float) -> float:
    return round((time.monotonic() - t0) * 1000, 1)


def _find_block(
    context: IndyPageContext, block_type: str | None, block_id: str | None
) -> IndyBlockRef | None:
    if block_id:
        by_id = next((b for b in context.blocks if b.id == block_id), None)
        if by_id is not None:
            return by_id
    return next((b for b in context.blocks if b.block_type == block_type), None)


async def _post_generate(http: httpx.AsyncClient, payload: dict[str, Any]) -> dict[str, Any]:
    response = await http.post(GENERATE_PATH, json=payload)
    if response.is_error:
        try:
            body = response.json()
        except ValueError:
            body = {}
        body = body if isinstance(body, dict) else {}
        detail = (
            body.get("error")
            or body.get("details")
            or f"Request failed: {response.status_code}"
        )
        raise IndyAPIError(detail, status_code=response.status_code)

    data = response.json()
    if not isinstance(data, dict) or not data.get("success"):
        error = data.get("error") if isinstance(data, dict) else None
        raise IndyAPIError(error or "Failed to generate content")
    return data


async def run_indy_action(
    message: str,
    block_type: str | None = None,
    context: IndyPageContext | dict[str, Any] | None = None,
    *,
    block_id: str | None = None,
    http: httpx.AsyncClient | None = None,
) -> IndyActionResult:
    """Produce the :class:`IndyAction` for *message*; failures are returned, not raised.

    *block_type* is inferred when the page holds exactly one block.
    *http* overrides the client used for ``/api/indy/generate``.
    """
    t0 = time.monotonic()
    if context is None:
        context = IndyPageContext()
    elif not isinstance(context, IndyPageContext):
        context = IndyPageContext.model_validate(context)

    if not block_type and len(context.blocks) == 1:
        block_type = context.blocks[0].block_type
    if not block_type:
        return IndyActionResult(success=False, error=BLOCK_TYPE_REQUIRED_MESSAGE)

    current = _find_block(context, block_type, block_id)

    # Property fast path (no model call)
    target_id = block_id or (current.id if current else None)
    if target_id and current is not None and is_property_intent(message):
        result = run_property_agent(message, target_id, current.props)
        if result.success:
            logger.info("Property fast path handled %r for block %s", message[:60], target_id)
            action = IndyAction(
                type=IndyActionType.PROPERTY_UPDATE,
                data=result.updated_block_data,
                block_type=block_type,
                block_id=target_id,
            )
            return IndyActionResult(
                success=True,
                action=action,
                block_data=result.updated_block_data,
                agent_used="propertyAgent",
                user_input=message,
                message=result.message,
                execution_time=_elapsed_ms(t0),
            )
        logger.info("Property fast path declined: %s", result.message)

    current_data = current.props if current else None
    payload = {
        "userInput": message,
        "blockType": block_type,
        "currentData": current_data,
        "tokens": context.tokens,
    }

    try:
        if http is None:
            settings = get_settings()
            async with httpx.AsyncClient(
                base_url=settings.indy_api_base_url,
                timeout=httpx.Timeout(settings.llm_request_timeout * 2),
            ) as client:
                data = await _post_generate(client, payload)
        else:
            data = await _post_generate(http, payload)
    except (IndyAPIError, httpx.HTTPError, ValueError) as exc:
        logger.warning("run_indy_action failed: %s", exc)
        detail = exc.detail if isinstance(exc, IndyAPIError) else str(exc)
        return IndyActionResult(
            success=False, error=detail or "Unknown error", execution_time=_elapsed_ms(t0)
        )

    if current_data is not None and current is not None:
        action = IndyAction(
            type=IndyActionType.UPDATE_BLOCK,
            data=data.get("blockData"),
            block_type=block_type,
            block_id=current.id,
            target=data.get("target"),
        )
    else:
        action = IndyAction(
            type=IndyActionType.ADD_BLOCK,
            data=data.get("blockData"),
            block_type=block_type,
            block_id=f"block-{generate_block_id()}",
            target=data.get("target"),
        )

    logger.info(
        "run_indy_action → %s via %s (%.0fms)",
        action.type.value, data.get("agentUsed"), _elapsed_ms(t0),
    )
    return IndyActionResult(
        success=True,
        action=action,
        block_data=data.get("blockData"),
        agent_used=data.get("agentUsed"),
        user_input=data.get("userInput"),
        error=data.get("error"),
        execution_time=_elapsed_ms(t0),
    )


def apply_indy_action(action: IndyAction, store: BlockStore) -> bool:
    """Apply *action* to *store*; ``False`` when it is incomplete, stale or already applied."""
    if action.consumed:
        logger.warning("Indy action %s already applied", action.type.value)
        return False

    try:
        if action.type is IndyActionType.ADD_BLOCK:
            if not action.block_type or action.data is None:
                logger.error("ADD_BLOCK requires blockType and data")
                return False
            store.add_block(action.block_type, action.data, action.block_id or generate_block_id())
            applied = True

        elif action.type in (
            IndyActionType.UPDATE_BLOCK,
            IndyActionType.REPLACE_BLOCK,
            IndyActionType.PROPERTY_UPDATE,
        ):
            if not action.block_id or action.data is None:
                logger.error("%s requires blockId and data", action.type.value)
                return False
            applied = store.update_block_by_id(action.block_id, action.data)

        elif action.type is IndyActionType.REMOVE_BLOCK:
            if not action.block_id:
                logger.error("REMOVE_BLOCK requires blockId")
                return False
            applied = store.remove_block_by_id(action.block_id)

        else:
            logger.error("Unknown action type: %s", action.type)
            return False
    except IndyError:
        logger.exception("Error applying Indy action %s", action.type.value)
        return False

    if applied:
        action.mark_consumed()
    else:
        logger.warning("Block %s not found for %s", action.block_id, action.type.value)
    return applied
