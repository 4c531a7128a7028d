"""Indy prompts — function-calling dispatcher, block generation and page generation.

Every builder returns a plain string; callers decide whether it goes in a
system or user message.
"""

from __future__ import annotations

import json
from typing import Any, Literal, Sequence

from blocks.hero import HERO_PROMPT_TEMPLATE
from blocks.registry import get_registry_description
from blocks.schema_builders import GRADIENT_PRESETS
from models.blocks import BlockInstance
from models.context import PageAIContext
from services.block_intent import classify_block_intent
from services.schema_summary import summarise_block_schema_for_ai
from services.target_path import compress_block_update_context_for_target

# ── Function-calling dispatcher ──────────────────────────────

INDY_SYSTEM_PROMPT = """\
You're Indy, an AI assistant helping users build CMS pages using blocks.

Context: {context_message}

You can manipulate blocks using the provided functions. When users ask to modify \
content, use updateBlock. When they want to add new sections, use addBlock. When \
they want to remove content, use deleteBlock. When they want to save changes, use \
savePage.

Block types available to addBlock:
{block_types}

Be helpful and execute the user's requests directly using the appropriate functions.
"""

SELECTED_BLOCK_PROMPT = """\
Current block is of type "{block_type}".

Schema: {schema_summary}

Current Data: {current_data}"""


def build_context_message(blocks: Sequence[BlockInstance], selected_index: int | None) -> str:
    """One-line description of the current selection for the system prompt."""
    if selected_index is not None and 0 <= selected_index < len(blocks):
        return (
            f"Currently selected block: {blocks[selected_index].block_type} "
            f"at index {selected_index}"
        )
    available = ", ".join(f"{i}: {b.block_type}" for i, b in enumerate(blocks))
    return f"No block selected. Available blocks: {available}"


def build_indy_system_prompt(context_message: str) -> str:
    return INDY_SYSTEM_PROMPT.format(
        context_message=context_message, block_types=get_registry_description()
    )


def build_selected_block_prompt(block_type: str, schema_summary: str, current_data: Any) -> str:
    return SELECTED_BLOCK_PROMPT.format(
        block_type=block_type,
        schema_summary=schema_summary,
        current_data=json.dumps(current_data, indent=2, ensure_ascii=False),
    )


# ── Block generation ─────────────────────────────────────────

BLOCK_SYSTEM_MESSAGE = (
    "You are an expert web developer creating structured block configurations "
    "for a website builder."
)

_GRADIENT_NAMES = ", ".join(f'"{p}"' for p in GRADIENT_PRESETS)

BACKGROUND_RULES = f"""\
BACKGROUND RULES:
- For solid colors: {{ "type": "color", "color": "blue", "colorIntensity": "medium" }}
- For gradients: {{ "type": "gradient", "gradient": "preset_name", "colorIntensity": "medium" }}
- Available gradient presets: {_GRADIENT_NAMES}
- If user mentions specific gradient colors, use the closest preset name
- Examples: "sunset gradient" → "gradient": "sunset", "mint background" → "gradient": "mint\""""


def build_create_prompt(block_type: str, user_message: str) -> str:
    """Fast-path create prompt; hero blocks get the fixed output template."""
    if block_type == "hero":
        return (
            f'You are an expert UI content creator. Generate a hero block JSON for: "{user_message}"\n\n'
            f"Return ONLY valid JSON in this EXACT format:\n{HERO_PROMPT_TEMPLATE}\n\n"
            f"{BACKGROUND_RULES}\n\n"
            f'Make the content engaging and relevant to: "{user_message}". No explanations, just JSON.'
        )
    return (
        f'Generate a {block_type} block for: "{user_message}". '
        "Return valid JSON matching the schema structure."
    )


def build_block_prompt(
    block_type: str,
    context: Any,
    mode: Literal["create", "update"],
    target: str | None = None,
    instructions: str | None = None,
) -> str:
    """Smallest prompt that still lets the model produce valid block data.

    ``context`` is a block AI/update context model (or its dict form) with
    ``schema`` and, for updates, ``current``.
    """
    ctx = context.model_dump(by_alias=True) if hasattr(context, "model_dump") else dict(context)
    verb = "Create" if mode == "create" else "Update"
    base = f'You are an expert UI content assistant. {verb} a "{block_type}" block.'
    goal = f'\n\nUser Intent: "{instructions}"' if instructions else ""

    if target:
        compressed = compress_block_update_context_for_target(ctx, target)
        current = json.dumps(compressed.current, indent=2, ensure_ascii=False)
        return (
            f"{base}{goal}\n\nTarget: {target}\nCurrent: {current}\n\n"
            "Return only valid JSON matching the existing structure."
        )

    if block_type == "hero":
        return (
            f"{base}{goal}\n\nReturn ONLY valid JSON in this EXACT format:\n{HERO_PROMPT_TEMPLATE}\n\n"
            "Make the content engaging and relevant to the user's intent. No explanations, just JSON."
        )

    if mode == "create":
        minimal_schema = summarise_block_schema_for_ai(
            ctx.get("schema"),
            include_enums=False,
            include_defaults=False,
            max_depth=1,
            include_hints=False,
        )
        return (
            f"{base}{goal}\n\nSchema: {minimal_schema}\n\n"
            "Return only valid JSON matching the schema structure. No explanations."
        )

    current = ctx.get("current")
    current_data = json.dumps(current, indent=2, ensure_ascii=False) if current else ""
    return (
        f"{base}{goal}\n\nCurrent Data:\n{current_data}\n\n"
        "Return only valid JSON with your updates. Keep the same structure."
    )


# ── Page generation ──────────────────────────────────────────

PAGE_GUIDANCE = """\
🎯 Guidance:
- Maintain consistent tone and style across all blocks
- Ensure logical flow and hierarchy between blocks
- Respect existing structure while improving clarity and engagement
- Consider how blocks work together to achieve the page goal
- Use design tokens consistently for visual coherence"""

PAGE_OUTPUT_FORMAT = """\
📝 Output Format:
Return a JSON object with updated data for each block that needs changes. Use the format:
{
  "blockUpdates": [
    {
      "blockIndex": 0,
      "blockType": "hero",
      "updatedData": { /* new block data */ }
    }
  ]
}"""


def build_page_prompt(
    context: PageAIContext,
    goal: str | None = None,
    focus_block_type: str | None = None,
) -> str:
    """Page-level prompt: every block's intent, current data and hints."""
    parts = ["You are an expert in designing high-converting, accessible webpages using modular blocks."]
    if goal:
        parts.append(f'🧠 The user\'s goal:\n"{goal}"')
    parts.append(f"📄 The current page is composed of {len(context.blocks)} blocks:")

    summaries = []
    for i, block in enumerate(context.blocks):
        summary = summarise_block_schema_for_ai(
            block.block_schema, include_enums=True, include_defaults=False, max_depth=2
        )
        intent = classify_block_intent(block.current, block.defaults, summary)
        lines = [
            f"🧱 Block {i + 1}: {block.block_type}",
            f"🔧 Intent: {intent.intent} — {intent.reason}",
            f"📍 Current Data:\n{json.dumps(block.current, indent=2, ensure_ascii=False)}",
        ]
        if block.ai_hints:
            lines.append(f"💡 Hints:\n{json.dumps(block.ai_hints, indent=2, ensure_ascii=False)}")
        summaries.append("\n".join(lines))
    parts.append("\n\n---\n\n".join(summaries))

    if context.blocks and context.blocks[0].tokens:
        parts.append(f"🎨 Design Tokens:\n{json.dumps(context.blocks[0].tokens, indent=2)}")

    if context.route or context.layout_style:
        info = ["📋 Page Info:"]
        if context.route:
            info.append(f"Route: {context.route}")
        if context.layout_style:
            info.append(f"Layout Style: {context.layout_style}")
        parts.append("\n".join(info))

    parts.append(PAGE_GUIDANCE)
    if focus_block_type:
        parts.append(
            f'🔍 Focus: Pay special attention to the "{focus_block_type}" block(s) '
            "while ensuring changes complement the overall page."
        )
    parts.append(PAGE_OUTPUT_FORMAT)
    return "\n\n".join(parts)
