"""BlockAgent — generates block data from a user request.

Routes the request to one of five handlers with keyword rules
(:func:`classify_intent_to_agent`), then runs a single model call:

- ``contextAgent``: deterministic markdown explanation, no model call
- ``createAgent``: fast-path creation (fixed hero template)
- ``updateAgent``: rewrite existing data with the full update context
- ``blockAgent``: schema-aware generation for open-ended content changes
- ``pageAgent``: page-level prompt returning ``blockUpdates``

Model output is plain text; :func:`parse_block_json` strips code fences and
extracts the JSON object.
"""

from __future__ import annotations

import json
import logging
import re
import time
from enum import Enum
from functools import lru_cache
from typing import Any

from pydantic_ai import Agent

from agents.provider import create_model, get_model_for_tier
from blocks.registry import get_block_entry
from config.llm_config import LLMConfig
from config.prompts.indy import (
    BLOCK_SYSTEM_MESSAGE,
    build_block_prompt,
    build_create_prompt,
    build_page_prompt,
)
from models.context import CanvasContext
from models.indy import BlockOperationResult
from services.block_context import (
    prepare_block_ai_context,
    prepare_block_update_context,
    prepare_page_ai_context,
)

logger = logging.getLogger(__name__)


class AgentName(str, Enum):
    CONTEXT = "contextAgent"
    CREATE = "createAgent"
    UPDATE = "updateAgent"
    BLOCK = "blockAgent"
    PAGE = "pageAgent"


# Agent-level LLM tuning
CREATE_LLM_CONFIG = LLMConfig(temperature=0.3, max_tokens=400)
UPDATE_LLM_CONFIG = LLMConfig(temperature=0.3, max_tokens=400)
BLOCK_LLM_CONFIG = LLMConfig(temperature=0.7, max_tokens=500)
PAGE_LLM_CONFIG = LLMConfig(temperature=0.7, max_tokens=2000)

DEFAULT_UPDATE_TOKENS = {
    "colors": ["blue", "gray", "green", "red", "purple"],
    "spacing": ["sm", "md", "lg", "xl", "2xl"],
}


# ── Routing ──────────────────────────────────────────────────

_TARGET_WORDS = ("background", "button", "title", "subtitle")
_TOPIC_WORDS = ("about", "topic", "content", "theme")


def classify_intent_to_agent(user_input: str) -> AgentName:
    """Pick the handler for *user_input*; the first matching rule wins."""
    lower = user_input.lower()

    if any(w in lower for w in ("explain", "describe", "what is", "tell me about")):
        agent = AgentName.CONTEXT
    elif "create" in lower or "new" in lower:
        agent = AgentName.CREATE
    elif "page" in lower:
        agent = AgentName.PAGE
    elif (
        "flow" in lower
        or "execute" in lower
        or " and " in lower
        or any(p in lower for p in ("make it about", "change it to", "transform", "convert"))
        or ("update" in lower and ("also" in lower or "plus" in lower))
        or (
            not any(w in lower for w in _TARGET_WORDS)
            and any(w in lower for w in _TOPIC_WORDS)
        )
    ):
        agent = AgentName.BLOCK
    elif "update" in lower or "change" in lower:
        agent = AgentName.UPDATE
    elif "block" in lower:
        agent = AgentName.BLOCK
    else:
        agent = AgentName.UPDATE

    logger.info("Intent classified as %s for %r", agent.value, user_input[:80])
    return agent


# ── Response parsing ─────────────────────────────────────────

_FENCE_RE = re.compile(r"```(?:json)?\n?")
_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def parse_block_json(text: str) -> Any:
    """Parse model output as JSON.

    Code fences are stripped first; a quoted string is accepted for leaf
    targets; otherwise the outermost ``{...}`` span is tried.  Raises
    ``ValueError`` when nothing parses.
    """
    cleaned = _FENCE_RE.sub("", text or "").strip()
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        pass

    match = _OBJECT_RE.search(cleaned)
    if match:
        try:
            return json.loads(match.group(0))
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in AI response: {exc}") from exc
    raise ValueError("No valid JSON found in AI response")


# ── Context explanation (no model call) ──────────────────────


def _overview(block_type: str, props: Any) -> str:
    name = block_type.lower()
    if block_type == "hero":
        elements = props.get("elements") if isinstance(props, dict) else None
        elements = elements if isinstance(elements, dict) else {}
        parts = [
            label
            for label, key, field in (
                ("title", "title", "content"),
                ("subtitle", "subtitle", "content"),
                ("button", "button", "text"),
            )
            if isinstance(elements.get(key), dict) and elements[key].get(field)
        ]
        with_text = f" with {', '.join(parts)}" if parts else ""
        return (
            f"This is a {name} block{with_text}. Hero blocks are designed to capture "
            "attention and communicate your main message prominently on the page."
        )
    return (
        f"This is a {name} block. It contains structured content that can be "
        "customized for your needs."
    )


def _current_values(props: Any) -> str:
    if not isinstance(props, dict):
        return "- No content configured yet"

    lines: list[str] = []
    elements = props.get("elements")
    if isinstance(elements, dict):
        title = elements.get("title")
        subtitle = elements.get("subtitle")
        subtitle = subtitle if isinstance(subtitle, dict) else {}
        button = elements.get("button")
        button = button if isinstance(button, dict) else {}
        title_text = title if isinstance(title, str) else (
            title.get("content") if isinstance(title, dict) else None
        )

        lines.append("**📝 Content Properties:**")
        if title_text:
            lines.append(f'- **Title**: "{title_text}" *(say: "change title to...")*')
        else:
            lines.append('- **Title**: *Not set* *(say: "set title to...")*')
        if subtitle.get("content"):
            lines.append(f'- **Subtitle**: "{subtitle["content"]}" *(say: "change subtitle to...")*')
        else:
            lines.append('- **Subtitle**: *Not set* *(say: "add subtitle...")*')
        if button.get("text"):
            href = f" → {button['href']}" if button.get("href") else ""
            lines.append(f'- **Button**: "{button["text"]}"{href} *(say: "change button to...")*')
        else:
            lines.append('- **Button**: *Not set* *(say: "add button...")*')

    layout = props.get("layout")
    if isinstance(layout, dict):
        block_settings = layout.get("blockSettings") or {}
        content_settings = layout.get("contentSettings") or {}
        lines.append("\n**🎨 Layout Properties:**")
        if block_settings.get("height"):
            lines.append(
                f"- **Height**: {block_settings['height']} "
                '*(say: "make this full height" or "make this auto height")*'
            )
        if content_settings.get("textAlignment"):
            lines.append(
                f"- **Text Alignment**: {content_settings['textAlignment']} "
                '*(say: "center align" or "left align")*'
            )
        alignment = content_settings.get("contentAlignment")
        if isinstance(alignment, dict):
            h = alignment.get("horizontal") or "center"
            v = alignment.get("vertical") or "center"
            lines.append(
                f"- **Content Position**: {h} {v} "
                '*(say: "align content left" or "align content top")*'
            )

    background = props.get("background")
    if isinstance(background, dict):
        kind = background.get("type")
        color = background.get("color")
        lines.append("\n**🎨 Background Properties:**")
        if kind == "color" and color:
            intensity = f" ({background['colorIntensity']})" if background.get("colorIntensity") else ""
            lines.append(
                f"- **Background**: {color}{intensity} "
                '*(say: "change background to red" or "make background darker")*'
            )
        elif kind:
            lines.append(f'- **Background**: {kind} *(say: "change background to...")*')

    return "\n".join(lines) if lines else "- No values configured"


def _canvas_overview(canvas: CanvasContext) -> str:
    sections = [
        "### Canvas Overview",
        f"**Page**: {canvas.page_title}" if canvas.page_title else "",
        f"*{canvas.page_description}*" if canvas.page_description else "",
        f"**Total Blocks**: {canvas.total_blocks or 0}",
    ]
    if canvas.block_types:
        sections.append("**Block Types on Canvas**:")
        counts: dict[str, int] = {}
        for block_type in canvas.block_types:
            counts[block_type] = counts.get(block_type, 0) + 1
        for block_type, count in counts.items():
            sections.append(f"- {count}x {block_type} block{'s' if count > 1 else ''}")
    else:
        sections.append(
            '*No blocks on canvas yet. Try saying "create a hero block" to get started!*'
        )
    return "\n".join(s for s in sections if s)


def _canvas_position(canvas: CanvasContext, block_type: str) -> str:
    if canvas.total_blocks == 0:
        return ""
    position = (
        f"{canvas.current_block_index + 1} of {canvas.total_blocks}"
        if canvas.current_block_index is not None
        else f"one of {canvas.total_blocks}"
    )
    sections = [
        "### Canvas Context",
        f"This {block_type} block is {position} blocks on the canvas.",
        "",
    ]
    others = list(dict.fromkeys(t for t in canvas.block_types if t != block_type))
    if others:
        sections.append(f"**Other blocks on canvas**: {', '.join(others)}")
        sections.append('*Tip: You can say "tell me about the canvas" to see all blocks*')
    sections.extend(["", "---", ""])
    return "\n".join(sections)


def explain_block(
    block_type: str | None,
    props: Any = None,
    ai_hints: dict[str, Any] | None = None,
    canvas: CanvasContext | None = None,
) -> str:
    """Markdown summary of a block: what it is, its values and design intent."""
    if not block_type and canvas is None:
        return (
            "### No Block Selected\n\n"
            "Please select a block first, then I can tell you about its context, "
            "current values, and design intent.\n\n"
            "To select a block, click on any block in the canvas on the left side of the screen."
        )
    if not block_type:
        return _canvas_overview(canvas)

    sections = [_canvas_position(canvas, block_type)] if canvas else []
    sections += [
        "### Block Overview",
        _overview(block_type, props),
        "",
        "### Current Values",
        _current_values(props),
    ]
    description = (ai_hints or {}).get("description")
    if description:
        sections.extend(["", "### Design Intent", description])
    return "\n".join(sections)


# ── Model calls ──────────────────────────────────────────────


@lru_cache(maxsize=1)
def _get_agent() -> Agent:
    return Agent(
        model=create_model(),
        system_prompt=BLOCK_SYSTEM_MESSAGE,
        retries=1,
        defer_model_check=True,
    )


async def _complete(prompt: str, *, tier: str, config: LLMConfig) -> str:
    """Single text completion on the model configured for *tier*."""
    model_name = get_model_for_tier(tier)
    t0 = time.monotonic()
    result = await _get_agent().run(
        prompt,
        model=create_model(model_name),
        model_settings=config.to_litellm_kwargs(),
    )
    logger.info(
        "Block model call on %s finished in %.0fms",
        model_name, (time.monotonic() - t0) * 1000,
    )
    return result.output


# ── Handlers ─────────────────────────────────────────────────


async def create_block(block_type: str, user_input: str) -> BlockOperationResult:
    """Fresh block data; registry defaults when the reply does not parse."""
    entry = get_block_entry(block_type)
    if entry is None:
        return BlockOperationResult(
            success=False, error=f"Block type '{block_type}' not found in registry"
        )

    response = await _complete(
        build_create_prompt(block_type, user_input), tier="fast", config=CREATE_LLM_CONFIG
    )
    try:
        block_data = parse_block_json(response)
    except ValueError:
        logger.warning("Create reply for %s did not parse, using defaults", block_type)
        block_data = entry.defaults()
    return BlockOperationResult(success=True, block_data=block_data)


async def update_block(
    block_type: str,
    current_data: Any,
    user_input: str,
    tokens: dict[str, Any] | None = None,
) -> BlockOperationResult:
    if get_block_entry(block_type) is None:
        return BlockOperationResult(
            success=False, error=f"Block type '{block_type}' not found in registry"
        )

    context = prepare_block_update_context(
        block_type, current_data, {**DEFAULT_UPDATE_TOKENS, **(tokens or {})}
    )
    prompt = build_block_prompt(block_type, context, "update", instructions=user_input)
    response = await _complete(prompt, tier="fast", config=UPDATE_LLM_CONFIG)
    try:
        block_data = parse_block_json(response)
    except ValueError:
        return BlockOperationResult(success=False, error="AI response was not valid JSON")
    return BlockOperationResult(success=True, block_data=block_data)


async def run_block_agent(
    block_type: str,
    user_input: str,
    current_data: Any = None,
    tokens: dict[str, Any] | None = None,
    target: str | None = None,
) -> BlockOperationResult:
    """Schema-aware generation; the mode follows whether *current_data* is set."""
    if get_block_entry(block_type) is None:
        return BlockOperationResult(
            success=False, error=f"Block type '{block_type}' not found in registry"
        )

    mode = "update" if current_data else "create"
    context = prepare_block_ai_context(block_type, tokens or {"colors": [], "spacing": []}, mode)
    context_dict = {**context.model_dump(by_alias=True), "current": current_data}
    prompt = build_block_prompt(
        block_type, context_dict, mode, target=target, instructions=user_input
    )
    response = await _complete(prompt, tier="fast", config=BLOCK_LLM_CONFIG)
    try:
        block_data = parse_block_json(response)
    except ValueError as exc:
        return BlockOperationResult(success=False, block_data=context.defaults or {}, error=str(exc))
    if not isinstance(block_data, dict):
        return BlockOperationResult(
            success=False,
            block_data=context.defaults or {},
            error="Block response must be a valid object",
        )
    return BlockOperationResult(success=True, block_data=block_data)


async def run_page_agent(
    block_type: str,
    user_input: str,
    current_data: Any = None,
    tokens: dict[str, Any] | None = None,
) -> BlockOperationResult:
    """Page-level generation; the reply must carry a ``blockUpdates`` list."""
    if get_block_entry(block_type) is None:
        return BlockOperationResult(
            success=False, error=f"Block type '{block_type}' not found in registry"
        )

    context = prepare_page_ai_context(
        [{"blockType": block_type, "currentData": current_data}], tokens
    )
    prompt = build_page_prompt(context, goal=user_input, focus_block_type=block_type)
    response = await _complete(prompt, tier="complex", config=PAGE_LLM_CONFIG)
    try:
        parsed = parse_block_json(response)
        if not isinstance(parsed, dict) or not isinstance(parsed.get("blockUpdates"), list):
            raise ValueError("Page response must contain blockUpdates array")
    except ValueError as exc:
        return BlockOperationResult(success=False, block_data={"blockUpdates": []}, error=str(exc))
    return BlockOperationResult(success=True, block_data=parsed)


async def run_block_operation(
    user_input: str,
    block_type: str,
    current_data: Any = None,
    tokens: dict[str, Any] | None = None,
) -> tuple[AgentName, BlockOperationResult]:
    """Route *user_input* to a handler and run it.

    Returns the handler used and its result.  The context handler's
    markdown is returned as ``{"explanation": ...}`` block data.
    """
    agent = classify_intent_to_agent(user_input)

    if agent is AgentName.CONTEXT:
        entry = get_block_entry(block_type)
        text = explain_block(block_type, current_data, entry.hints() if entry else None)
        return agent, BlockOperationResult(success=True, block_data={"explanation": text})
    if agent is AgentName.CREATE:
        return agent, await create_block(block_type, user_input)
    if agent is AgentName.PAGE:
        return agent, await run_page_agent(block_type, user_input, current_data, tokens)
    if agent is AgentName.BLOCK:
        return agent, await run_block_agent(block_type, user_input, current_data, tokens)
    return agent, await update_block(block_type, current_data, user_input, tokens)
