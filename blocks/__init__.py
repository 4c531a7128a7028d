"""Block and element registries for the Indy block service."""

from blocks.registry import (
    BLOCK_REGISTRY,
    ELEMENT_REGISTRY,
    BlockKind,
    BlockRegistryEntry,
    ElementKind,
    ElementRegistryEntry,
    get_block_entry,
    get_block_types,
    get_element_entry,
    get_element_types,
    resolve_block,
    resolve_element,
    validate_block_type,
)

__all__ = [
    "BLOCK_REGISTRY",
    "ELEMENT_REGISTRY",
    "BlockKind",
    "BlockRegistryEntry",
    "ElementKind",
    "ElementRegistryEntry",
    "get_block_entry",
    "get_block_types",
    "get_element_entry",
    "get_element_types",
    "resolve_block",
    "resolve_element",
    "validate_block_type",
]
