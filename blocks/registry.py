"""Block & Element Registry — the block and element kinds the AI may work with.

Every context builder, the Indy dispatcher and the registry API resolve a
type name through this module.  Adding a new block requires:
  1. Frontend: implement + register the renderer component
  2. Backend: add a module under ``blocks/`` and an entry in BLOCK_REGISTRY
  3. The Indy prompts and /api/blocks pick it up automatically
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from blocks.elements import ELEMENT_DEFINITIONS, default_props_from_schema
from blocks.grid import GRID_AI_HINTS, GRID_DEFAULT_DATA, GRID_METADATA, GRID_SCHEMA
from blocks.hero import HERO_AI_HINTS, HERO_DEFAULT_DATA, HERO_METADATA, HERO_SCHEMA
from blocks.schema_builders import BlockSchema
from errors.exceptions import BlockNotFoundError


class BlockKind(str, Enum):
    HERO = "hero"
    GRID = "grid"


class ElementKind(str, Enum):
    BUTTON = "button"
    TEXT = "text"
    TITLE = "title"
    IMAGE = "image"
    LINK = "link"
    AVATAR = "avatar"
    BADGE = "badge"
    ICON = "icon"
    TEXTAREA = "textarea"
    CARD = "card"
    VIDEO = "video"


@dataclass(frozen=True)
class BlockRegistryEntry:
    type: BlockKind
    name: str
    description: str
    component: str
    schema: BlockSchema
    default_data: Mapping[str, Any]
    metadata: Mapping[str, Any] = field(default_factory=dict)
    ai_hints: Mapping[str, Any] = field(default_factory=dict)

    def defaults(self) -> dict[str, Any]:
        """A fresh, mutable copy of the default block data."""
        return copy.deepcopy(dict(self.default_data))

    def hints(self) -> dict[str, Any]:
        return copy.deepcopy(dict(self.ai_hints))


@dataclass(frozen=True)
class ElementRegistryEntry:
    type: ElementKind
    name: str
    description: str
    component: str
    schema: BlockSchema
    default_props: Mapping[str, Any]
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def defaults(self) -> dict[str, Any]:
        return copy.deepcopy(dict(self.default_props))


def _block(
    kind: BlockKind,
    component: str,
    schema: BlockSchema,
    default_data: dict,
    metadata: dict,
    ai_hints: dict,
) -> BlockRegistryEntry:
    return BlockRegistryEntry(
        type=kind,
        name=metadata["name"],
        description=metadata["description"],
        component=component,
        schema=schema,
        default_data=MappingProxyType(default_data),
        metadata=MappingProxyType(metadata),
        ai_hints=MappingProxyType(ai_hints),
    )


BLOCK_REGISTRY: Mapping[BlockKind, BlockRegistryEntry] = MappingProxyType(
    {
        BlockKind.HERO: _block(
            BlockKind.HERO, "HeroBlock", HERO_SCHEMA, HERO_DEFAULT_DATA, HERO_METADATA, HERO_AI_HINTS
        ),
        BlockKind.GRID: _block(
            BlockKind.GRID, "GridBlock", GRID_SCHEMA, GRID_DEFAULT_DATA, GRID_METADATA, GRID_AI_HINTS
        ),
    }
)

ELEMENT_REGISTRY: Mapping[ElementKind, ElementRegistryEntry] = MappingProxyType(
    {
        ElementKind(type_): ElementRegistryEntry(
            type=ElementKind(type_),
            name=metadata["name"],
            description=metadata["description"],
            component=metadata["name"],
            schema=schema,
            default_props=MappingProxyType(default_props_from_schema(schema)),
            metadata=MappingProxyType(metadata),
        )
        for type_, (schema, metadata) in ELEMENT_DEFINITIONS.items()
    }
)


# ── Lookups ──────────────────────────────────────────────────


def validate_block_type(block_type: Any) -> BlockKind | None:
    """Map a raw type name from the wire to a ``BlockKind``, or None."""
    if isinstance(block_type, BlockKind):
        return block_type
    if not isinstance(block_type, str):
        return None
    try:
        return BlockKind(block_type)
    except ValueError:
        return None


def get_block_entry(block_type: Any) -> BlockRegistryEntry | None:
    kind = validate_block_type(block_type)
    return BLOCK_REGISTRY.get(kind) if kind is not None else None


def resolve_block(block_type: Any) -> BlockRegistryEntry:
    """Return the registry entry for *block_type* or raise ``BlockNotFoundError``."""
    entry = get_block_entry(block_type)
    if entry is None:
        raise BlockNotFoundError(str(block_type))
    return entry


def get_element_entry(element_type: Any) -> ElementRegistryEntry | None:
    if isinstance(element_type, ElementKind):
        return ELEMENT_REGISTRY[element_type]
    try:
        return ELEMENT_REGISTRY.get(ElementKind(element_type))
    except ValueError:
        return None


def resolve_element(element_type: Any) -> ElementRegistryEntry:
    entry = get_element_entry(element_type)
    if entry is None:
        raise BlockNotFoundError(str(element_type), kind="Element")
    return entry


def get_block_types() -> list[str]:
    return [kind.value for kind in BLOCK_REGISTRY]


def get_element_types() -> list[str]:
    return [kind.value for kind in ELEMENT_REGISTRY]


def get_registry_description() -> str:
    """One line per block type, embedded in the Indy system prompt."""
    return "\n".join(
        f"- {entry.type.value}: {entry.name} — {entry.description}"
        for entry in BLOCK_REGISTRY.values()
    )
