"""Define a blocks world domain with object-parameterized stacking actions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from action_grounding.actions import ActionSpace, ObjectParameterizedActionSchema
from action_grounding.states import ObjectInstance, OOState

if TYPE_CHECKING:
    from action_grounding.actions import GroundedAction

BLOCK_CLASS = "block"
TABLE = "table"


def blocks_world_state(towers: Sequence[Sequence[str]]) -> OOState:
    """Construct a blocks world state from towers of block names, each listed bottom to top."""
    blocks: list[ObjectInstance] = []
    for tower in towers:
        for idx, name in enumerate(tower):
            support = TABLE if idx == 0 else tower[idx - 1]
            clear = idx == len(tower) - 1
            blocks.append(ObjectInstance(name, BLOCK_CLASS, {"support": support, "clear": clear}))

    return OOState(blocks)


def _lift(state: OOState, block: ObjectInstance) -> OOState:
    """Remove the block from its support, clearing the block below (if any)."""
    support = block.value("support")
    if support != TABLE:
        state = state.with_values(support, clear=True)
    return state


class StackSchema(ObjectParameterizedActionSchema):
    """Place a clear block onto another clear block."""

    def __init__(self) -> None:
        """Initialize the schema with parameters (block to move, destination block)."""
        super().__init__("stack", (BLOCK_CLASS, BLOCK_CLASS))

    def applicable_in(self, state: OOState, action: GroundedAction) -> bool:
        """Evaluate whether both blocks are clear and distinct."""
        if not self.binding_fits(state, action):
            return False

        block, destination = self.bound_objects(state, action)
        return (
            block.name != destination.name
            and block.value("clear")
            and destination.value("clear")
        )

    def _perform(self, state: OOState, action: GroundedAction) -> OOState:
        block, destination = self.bound_objects(state, action)
        state = _lift(state, block)
        state = state.with_values(block.name, support=destination.name)
        return state.with_values(destination.name, clear=False)


class UnstackSchema(ObjectParameterizedActionSchema):
    """Move a clear block from atop another block onto the table."""

    def __init__(self) -> None:
        """Initialize the schema with its single block parameter."""
        super().__init__("unstack", (BLOCK_CLASS,))

    def applicable_in(self, state: OOState, action: GroundedAction) -> bool:
        """Evaluate whether the block is clear and resting on another block."""
        if not self.binding_fits(state, action):
            return False

        (block,) = self.bound_objects(state, action)
        return block.value("clear") and block.value("support") != TABLE

    def _perform(self, state: OOState, action: GroundedAction) -> OOState:
        (block,) = self.bound_objects(state, action)
        return _lift(state, block).with_values(block.name, support=TABLE)


def blocks_world_action_space() -> ActionSpace:
    """Construct the action space of the blocks world."""
    return ActionSpace("blocks_world", [StackSchema(), UnstackSchema()])
