"""Indy dispatcher — one chat turn with OpenAI-style function calling.

The model sees the current block list, the selected block's schema summary
and data, and the fixed function catalogue from :mod:`tools.indy_functions`.
Whatever function it calls is validated into a typed
:data:`models.indy.IndyFunctionCall` and executed against the caller's
:class:`BlockStore`.

This module is the error boundary: :func:`handle_indy_request` always
returns a chat message, never raises (cancellation excepted).
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from blocks.registry import get_block_entry, get_block_types, validate_block_type
from config.llm_config import LLMConfig
from config.prompts.indy import (
    build_context_message,
    build_indy_system_prompt,
    build_selected_block_prompt,
)
from config.settings import get_settings
from errors.exceptions import FunctionCallParseError, UpstreamError
from models.errors import (
    NO_REPLY_MESSAGE,
    ErrorCode,
    format_error,
    friendly_error_message,
)
from models.indy import (
    AddBlockCall,
    DeleteBlockCall,
    IndyFunctionCall,
    IndyFunctionName,
    IndyPhase,
    SavePageCall,
    UpdateBlockCall,
)
from services.block_store import BlockStore
from services.cms_client import CMSClient, get_cms_client
from services.llm_service import LLMService
from services.schema_summary import normalize_schema, summarise_block_schema_for_ai
from tools.indy_functions import to_tool_definitions

logger = logging.getLogger(__name__)

# Agent-level LLM tuning for the dispatcher
INDY_LLM_CONFIG = LLMConfig(temperature=0.7, max_tokens=1000)

SAVE_SUCCESS_MESSAGE = "💾 Page saved successfully to database."
SAVE_CONTEXT_MESSAGE = "⚠️ Unable to determine page context for saving."

_FUNCTION_CALL_ADAPTER: TypeAdapter[Any] = TypeAdapter(IndyFunctionCall)
_KNOWN_FUNCTIONS = {f.value for f in IndyFunctionName}


def _enter(phase: IndyPhase, **info: Any) -> IndyPhase:
    if info:
        logger.info("Indy phase → %s %s", phase.value, info)
    else:
        logger.info("Indy phase → %s", phase.value)
    return phase


# ── Message assembly ─────────────────────────────────────────


def build_indy_messages(
    user_input: str, store: BlockStore, selected_index: int | None
) -> list[dict[str, str]]:
    """System context, optional selected-block context (first), then the user turn."""
    blocks = store.blocks
    messages = [
        {"role": "system", "content": build_indy_system_prompt(
            build_context_message(blocks, selected_index)
        )},
        {"role": "user", "content": user_input},
    ]

    if selected_index is None or not 0 <= selected_index < len(blocks):
        return messages

    block = blocks[selected_index]
    entry = get_block_entry(block.block_type)
    if entry is None:
        return messages

    schema = normalize_schema(entry.schema)
    if isinstance(schema, dict):
        hints = entry.hints()
        schema = {
            **schema,
            "layoutGuidance": hints.get("layoutGuidance"),
            "contentHints": hints.get("contentHints"),
        }
    summary = summarise_block_schema_for_ai(
        schema, include_hints=True, include_defaults=True, include_enums=True
    )
    messages.insert(0, {
        "role": "system",
        "content": build_selected_block_prompt(block.block_type, summary, block.block_data),
    })
    return messages


# ── Function-call parsing ────────────────────────────────────


def extract_function_call(response: dict[str, Any]) -> tuple[str, str] | None:
    """``(name, arguments)`` of the model's call, from ``tool_calls`` or ``function_call``."""
    tool_calls = response.get("tool_calls") or []
    if tool_calls:
        if len(tool_calls) > 1:
            logger.warning("Model returned %d tool calls, executing the first", len(tool_calls))
        fn = tool_calls[0]["function"]
        return fn["name"], fn.get("arguments") or "{}"

    legacy = response.get("function_call")
    if legacy:
        return legacy["name"], legacy.get("arguments") or "{}"
    return None


def parse_function_call(name: str, arguments: str) -> Any:
    """Validate a known function's JSON arguments into its typed call model."""
    try:
        args = json.loads(arguments or "{}")
    except json.JSONDecodeError as exc:
        raise FunctionCallParseError(name, str(exc)) from exc
    if not isinstance(args, dict):
        raise FunctionCallParseError(name, "arguments must be a JSON object")

    try:
        return _FUNCTION_CALL_ADAPTER.validate_python({**args, "name": name})
    except ValidationError as exc:
        raise FunctionCallParseError(name, str(exc)) from exc


# ── Execution ────────────────────────────────────────────────


def _invalid_index(index: int, length: int) -> str:
    logger.warning(
        "%s", format_error(ErrorCode.INVALID_BLOCK_INDEX, f"index {index} of {length} blocks")
    )
    return f"❌ Invalid block index {index}. Available blocks: 0-{length - 1}"


def unknown_block_type_message(block_type: str) -> str:
    return (
        f"❌ Unknown block type '{block_type}'. "
        f"Available types: {', '.join(get_block_types())}"
    )


def parse_page_path(page_path: str | None) -> tuple[str, str] | None:
    """``(site, entry)`` from an ``/edit/<site>/<entry>`` path."""
    parts = (page_path or "").split("/")
    if len(parts) < 4 or parts[1] != "edit":
        return None
    return parts[2], parts[3]


async def save_page(store: BlockStore, page_path: str | None, cms: CMSClient) -> str:
    target = parse_page_path(page_path)
    if target is None:
        return SAVE_CONTEXT_MESSAGE

    site_slug, entry_slug = target
    try:
        await cms.put_entry_blocks(site_slug, entry_slug, store.to_payload())
    except (UpstreamError, httpx.HTTPError) as exc:
        logger.exception(
            "%s", format_error(ErrorCode.PERSISTENCE_ERROR, f"saving {site_slug}/{entry_slug}")
        )
        reason = getattr(exc, "detail", None) or str(exc) or "Unknown error"
        return f"❌ Failed to save page: {reason}"
    return SAVE_SUCCESS_MESSAGE


async def execute_function(
    call: Any,
    store: BlockStore,
    *,
    page_path: str | None,
    cms: CMSClient,
) -> str:
    """Apply a validated call to *store* and describe the outcome."""
    length = len(store)

    if isinstance(call, UpdateBlockCall):
        if not 0 <= call.index < length:
            return _invalid_index(call.index, length)
        block_type = store.blocks[call.index].block_type
        store.update_block(call.index, call.updates)
        return f"✅ Updated block {call.index} ({block_type})."

    if isinstance(call, AddBlockCall):
        kind = validate_block_type(call.type)
        if kind is None:
            logger.warning(
                "%s", format_error(ErrorCode.BLOCK_NOT_FOUND, f"addBlock type {call.type!r}")
            )
            return unknown_block_type_message(call.type)
        if call.position is not None:
            logger.info("addBlock position %d ignored, appending", call.position)
        store.add_block(kind.value, call.props)
        return f"✅ Added new {kind.value} block at position {length}."

    if isinstance(call, DeleteBlockCall):
        if not 0 <= call.index < length:
            return _invalid_index(call.index, length)
        removed = store.delete_block(call.index)
        return f"🗑️ Deleted {removed.block_type} block at index {call.index}."

    if isinstance(call, SavePageCall):
        return await save_page(store, page_path, cms)

    return f"⚠️ Unknown function: {getattr(call, 'name', call)}"


# ── Entry point ──────────────────────────────────────────────


async def handle_indy_request(
    user_input: str,
    store: BlockStore,
    *,
    selected_index: int | None = None,
    page_path: str | None = None,
    llm: LLMService | None = None,
    cms: CMSClient | None = None,
) -> str:
    """Run one Indy turn against *store* and return the reply message.

    *selected_index* defaults to the store's own selection.  *page_path* is
    the editor URL path (``/edit/<site>/<entry>``) used by ``savePage``.
    """
    settings = get_settings()
    phase = _enter(IndyPhase.IDLE)
    t0 = time.monotonic()

    try:
        phase = _enter(IndyPhase.PREPARING, blocks=len(store))
        if selected_index is None:
            selected_index = store.selected_index

        messages = build_indy_messages(user_input, store, selected_index)
        phase = _enter(IndyPhase.CONTEXT_ASSEMBLED, messages=len(messages))

        llm = llm or LLMService(config=INDY_LLM_CONFIG, model=settings.indy_model)
        phase = _enter(IndyPhase.AWAITING_MODEL, model=llm.model)
        response = await asyncio.wait_for(
            llm.chat(messages, tools=to_tool_definitions(), tool_choice="auto"),
            timeout=settings.llm_request_timeout,
        )

        fn_call = extract_function_call(response)
        if fn_call is None:
            phase = _enter(IndyPhase.NO_FUNCTION_CALLED)
            return response.get("content") or NO_REPLY_MESSAGE

        name, arguments = fn_call
        phase = _enter(IndyPhase.FUNCTION_CALLED, function=name)
        if name not in _KNOWN_FUNCTIONS:
            logger.warning("Model called unknown function %r", name)
            return f"⚠️ Unknown function: {name}"

        call = parse_function_call(name, arguments)
        phase = _enter(IndyPhase.EXECUTING, function=name)
        reply = await execute_function(
            call, store, page_path=page_path, cms=cms or get_cms_client()
        )
        phase = _enter(IndyPhase.DONE, elapsed_ms=round((time.monotonic() - t0) * 1000))
        return reply

    except Exception as exc:
        logger.exception("Indy request failed during %s", phase.value)
        _enter(IndyPhase.FAILED, error=type(exc).__name__)
        return friendly_error_message(exc)
