"""Indy models — function calls returned by the model and store actions.

Two closed sets live here:

- :data:`IndyFunctionCall` — the callable catalogue (``updateBlock``,
  ``addBlock``, ``deleteBlock``, ``savePage``) as a tagged union keyed on
  ``name``.  The dispatcher validates the model's arguments into one of these
  before touching the block store.
- :class:`IndyAction` — a store mutation produced by ``run_indy_action`` and
  consumed exactly once by ``apply_indy_action``.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import Field, PrivateAttr

from models.base import CamelModel


class IndyFunctionName(str, Enum):
    UPDATE_BLOCK = "updateBlock"
    ADD_BLOCK = "addBlock"
    DELETE_BLOCK = "deleteBlock"
    SAVE_PAGE = "savePage"


class UpdateBlockCall(CamelModel):
    name: Literal["updateBlock"] = "updateBlock"
    index: int
    updates: dict[str, Any]


class AddBlockCall(CamelModel):
    name: Literal["addBlock"] = "addBlock"
    type: str
    props: dict[str, Any] = Field(default_factory=dict)
    position: int | None = None


class DeleteBlockCall(CamelModel):
    name: Literal["deleteBlock"] = "deleteBlock"
    index: int


class SavePageCall(CamelModel):
    name: Literal["savePage"] = "savePage"


IndyFunctionCall = Annotated[
    Union[UpdateBlockCall, AddBlockCall, DeleteBlockCall, SavePageCall],
    Field(discriminator="name"),
]


class IndyPhase(str, Enum):
    """Lifecycle of a single Indy request."""

    IDLE = "idle"
    PREPARING = "preparing"
    CONTEXT_ASSEMBLED = "context_assembled"
    AWAITING_MODEL = "awaiting_model"
    NO_FUNCTION_CALLED = "no_function_called"
    FUNCTION_CALLED = "function_called"
    EXECUTING = "executing"
    DONE = "done"
    FAILED = "failed"


# ── Store actions ────────────────────────────────────────────


class IndyActionType(str, Enum):
    ADD_BLOCK = "ADD_BLOCK"
    UPDATE_BLOCK = "UPDATE_BLOCK"
    REPLACE_BLOCK = "REPLACE_BLOCK"
    REMOVE_BLOCK = "REMOVE_BLOCK"
    PROPERTY_UPDATE = "PROPERTY_UPDATE"


class IndyAction(CamelModel):
    """A single mutation of the block store.

    Applied at most once; ``apply_indy_action`` marks it consumed.
    """

    type: IndyActionType
    data: Any = None
    block_type: str | None = None
    block_id: str | None = None
    target: str | None = None

    _consumed: bool = PrivateAttr(default=False)

    @property
    def consumed(self) -> bool:
        return self._consumed

    def mark_consumed(self) -> None:
        self._consumed = True


class IndyActionResult(CamelModel):
    success: bool
    action: IndyAction | None = None
    error: str | None = None
    message: str | None = None
    block_data: Any = None
    agent_used: str | None = None
    user_input: str | None = None
    execution_time: float | None = None  # milliseconds


class BlockOperationResult(CamelModel):
    """Outcome of one block-generation agent run."""

    success: bool
    block_data: Any = None
    error: str | None = None


# ── run_indy_action page context ─────────────────────────────


class IndyBlockRef(CamelModel):
    """A block as seen by the editor: its type, current props and id."""

    block_type: str
    props: Any = None
    id: str | None = None


class IndyPageContext(CamelModel):
    blocks: list[IndyBlockRef] = Field(default_factory=list)
    tokens: dict[str, Any] = Field(default_factory=dict)
    route: str | None = None
