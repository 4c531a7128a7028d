"""Block store — the ordered block list of the page being edited.

:class:`BlockStore` is owned by one editing session and passed explicitly to
whoever mutates it (the Indy dispatcher, ``apply_indy_action``, the canvas
API).  :class:`BlockStoreRegistry` keeps one store per session id with TTL
expiry and hands out a per-session ``asyncio.Lock`` so the
read → diff → apply sequence of an AI action is serialized per document.
"""

from __future__ import annotations

import asyncio
import copy
import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Iterable

from errors.exceptions import InvalidBlockIndexError
from models.blocks import BlockInstance

logger = logging.getLogger(__name__)


def generate_block_id() -> str:
    return uuid.uuid4().hex[:21]


class BlockStore:
    """Flat, 1-based positioned list of blocks plus the current selection."""

    def __init__(self, blocks: Iterable[BlockInstance | dict[str, Any]] | None = None):
        self.blocks: list[BlockInstance] = []
        self.selected_block_id: str | None = None
        self.selected_index: int | None = None
        if blocks is not None:
            self.set_blocks(blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self.blocks):
            raise InvalidBlockIndexError(index, len(self.blocks))

    # ── CRUD ──

    def add_block(self, block_type: str, block_data: Any, block_id: str | None = None) -> str:
        """Append a block and return its id."""
        block_id = block_id or generate_block_id()
        self.blocks.append(
            BlockInstance(
                id=block_id,
                block_type=block_type,
                block_data=copy.deepcopy(block_data) if block_data is not None else {},
                position=len(self.blocks) + 1,
            )
        )
        logger.debug("Added %s block %s at position %d", block_type, block_id, len(self.blocks))
        return block_id

    def update_block(self, index: int, block_data: Any) -> None:
        """Replace the data of the block at *index* with a deep copy of *block_data*."""
        self._check_index(index)
        block = self.blocks[index]
        self.blocks[index] = block.model_copy(update={"block_data": copy.deepcopy(block_data)})

    def delete_block(self, index: int) -> BlockInstance:
        """Remove the block at *index*, renumber positions and fix the selection."""
        self._check_index(index)
        removed = self.blocks.pop(index)
        self._reposition()

        if self.selected_block_id == removed.id:
            self.selected_block_id = None
        if self.selected_index == index:
            self.selected_index = None
        elif self.selected_index is not None and self.selected_index > index:
            self.selected_index -= 1
        return removed

    def reorder_blocks(self, from_index: int, to_index: int) -> None:
        self._check_index(from_index)
        self._check_index(to_index)
        if from_index == to_index:
            return

        moved = self.blocks.pop(from_index)
        self.blocks.insert(to_index, moved)
        self._reposition()

        selected = self.selected_index
        if selected == from_index:
            self.selected_index = to_index
        elif selected is not None:
            if from_index < to_index and from_index < selected <= to_index:
                self.selected_index = selected - 1
            elif to_index < from_index and to_index <= selected < from_index:
                self.selected_index = selected + 1

    def _reposition(self) -> None:
        for position, block in enumerate(self.blocks, start=1):
            block.position = position

    # ── Selection and bulk state ──

    def set_selected_block(self, block_id: str | None) -> None:
        index = self.get_block_index(block_id) if block_id else -1
        self.selected_block_id = block_id
        self.selected_index = index if index != -1 else None

    def set_selected_index(self, index: int | None) -> None:
        in_range = index is not None and 0 <= index < len(self.blocks)
        self.selected_index = index
        self.selected_block_id = self.blocks[index].id if in_range else None

    def set_blocks(self, blocks: Iterable[BlockInstance | dict[str, Any]]) -> None:
        """Replace every block, e.g. when rehydrating a saved page."""
        self.blocks = [
            b.model_copy(deep=True) if isinstance(b, BlockInstance) else BlockInstance.model_validate(b)
            for b in blocks
        ]
        self.selected_block_id = None
        self.selected_index = None

    def clear_blocks(self) -> None:
        self.blocks = []
        self.selected_block_id = None
        self.selected_index = None

    # ── Lookups by id ──

    def get_block_by_id(self, block_id: str) -> BlockInstance | None:
        return next((b for b in self.blocks if b.id == block_id), None)

    def get_block_index(self, block_id: str) -> int:
        return next((i for i, b in enumerate(self.blocks) if b.id == block_id), -1)

    def update_block_by_id(self, block_id: str, block_data: Any) -> bool:
        index = self.get_block_index(block_id)
        if index == -1:
            return False
        self.update_block(index, block_data)
        return True

    def remove_block_by_id(self, block_id: str) -> bool:
        index = self.get_block_index(block_id)
        if index == -1:
            return False
        self.delete_block(index)
        return True

    def snapshot(self) -> list[BlockInstance]:
        """Deep copy of the current block list."""
        return [b.model_copy(deep=True) for b in self.blocks]

    def to_payload(self) -> list[dict[str, Any]]:
        """Blocks in the ``{id, blockType, blockData, position}`` wire shape."""
        return [b.to_wire() for b in self.blocks]


# ── Per-session registry ─────────────────────────────────────


@dataclass
class BlockSession:
    session_id: str
    store: BlockStore = field(default_factory=BlockStore)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    updated_at: float = field(default_factory=time.time)

    def touch(self) -> None:
        self.updated_at = time.time()


class BlockStoreRegistry:
    """In-memory map of session id → :class:`BlockSession` with TTL expiration."""

    def __init__(self, ttl_seconds: int = 3600):
        self._sessions: dict[str, BlockSession] = {}
        self._ttl = ttl_seconds

    def _is_expired(self, session: BlockSession) -> bool:
        return (time.time() - session.updated_at) > self._ttl

    def get(self, session_id: str) -> BlockSession | None:
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if self._is_expired(session) and not session.lock.locked():
            del self._sessions[session_id]
            logger.debug("Block session expired: %s", session_id)
            return None
        return session

    def get_or_create(self, session_id: str) -> BlockSession:
        session = self.get(session_id)
        if session is None:
            session = BlockSession(session_id=session_id)
            self._sessions[session_id] = session
            logger.info("Created block session %s", session_id)
        session.touch()
        return session

    def delete(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def cleanup_expired(self) -> int:
        expired = [
            sid for sid, s in self._sessions.items()
            if self._is_expired(s) and not s.lock.locked()
        ]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("Cleaned up %d expired block sessions", len(expired))
        return len(expired)

    @property
    def size(self) -> int:
        return len(self._sessions)


# ── Module-level Singleton ───────────────────────────────────

_registry: BlockStoreRegistry | None = None


def get_block_store_registry() -> BlockStoreRegistry:
    global _registry
    if _registry is None:
        from config.settings import get_settings

        ttl = get_settings().block_store_ttl
        _registry = BlockStoreRegistry(ttl_seconds=ttl)
        logger.info("Initialized BlockStoreRegistry (TTL=%ds)", ttl)
    return _registry


async def periodic_cleanup(interval_seconds: int = 300) -> None:
    """Background task evicting expired block sessions.

    Started as an ``asyncio.Task`` in the FastAPI lifespan.
    """
    registry = get_block_store_registry()
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            registry.cleanup_expired()
        except Exception:
            logger.exception("Block store cleanup failed")
