"""Define a grid world domain in which an agent moves between cells, avoiding walls."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Iterable

from action_grounding.actions import (
    ActionSchema,
    ActionSpace,
    FullActionModel,
    SimpleActionSchema,
    TransitionProbability,
    deterministic_transition,
)
from action_grounding.states import ObjectInstance, OOState

if TYPE_CHECKING:
    from action_grounding.actions import GroundedAction

AGENT_CLASS = "agent"
WALL_CLASS = "wall"

DIRECTIONS: dict[str, tuple[int, int]] = {
    "north": (0, 1),
    "south": (0, -1),
    "east": (1, 0),
    "west": (-1, 0),
}
"""Map from direction names to (dx, dy) cell offsets."""


def grid_world_state(agent_xy: tuple[int, int], walls: Iterable[tuple[int, int]] = ()) -> OOState:
    """Construct a grid world state with a single agent and the given wall cells."""
    agent = ObjectInstance("agent0", AGENT_CLASS, {"x": agent_xy[0], "y": agent_xy[1]})
    wall_objects = [
        ObjectInstance(f"wall{i}", WALL_CLASS, {"x": x, "y": y}) for i, (x, y) in enumerate(walls)
    ]
    return OOState([agent, *wall_objects])


def _agent(state: OOState) -> ObjectInstance:
    """Retrieve the (single) agent object in a grid world state."""
    agents = state.objects_of_class(AGENT_CLASS)
    if len(agents) != 1:
        raise ValueError(f"Expected one agent in the grid world state, found {len(agents)}.")
    return agents[0]


def _destination(state: OOState, direction: str) -> tuple[int, int]:
    """Compute the cell the agent would enter by moving in the given direction."""
    agent = _agent(state)
    dx, dy = DIRECTIONS[direction]
    return (agent.value("x") + dx, agent.value("y") + dy)


def can_move(state: OOState, direction: str, width: int, height: int) -> bool:
    """Evaluate whether the agent can move in the given direction without leaving the grid."""
    x, y = _destination(state, direction)
    if not (0 <= x < width and 0 <= y < height):
        return False

    return not any(
        wall.value("x") == x and wall.value("y") == y for wall in state.objects_of_class(WALL_CLASS)
    )


def move(state: OOState, direction: str) -> OOState:
    """Move the agent one cell in the given direction."""
    x, y = _destination(state, direction)
    return state.with_values(_agent(state).name, x=x, y=y)


class SlipperyMoveSchema(FullActionModel, ActionSchema):
    """A move that fails with some probability, leaving the agent where it was."""

    def __init__(self, direction: str, width: int, height: int, slip_probability: float) -> None:
        """Initialize the slippery move in the given direction."""
        if not 0.0 <= slip_probability <= 1.0:
            raise ValueError(f"Slip probability must lie in [0, 1], not {slip_probability}.")

        super().__init__(f"move-{direction}")
        self.direction = direction
        self.width = width
        self.height = height
        self.slip_probability = slip_probability

    def applicable_in(self, state: OOState, action: GroundedAction) -> bool:
        """Evaluate whether the destination cell is free."""
        return can_move(state, self.direction, self.width, self.height)

    def transitions(self, state: OOState, action: GroundedAction) -> list[TransitionProbability]:
        """Enumerate the intended move and the slip that leaves the state unchanged.

        A blocked move leaves the agent in place with certainty.
        """
        if not can_move(state, self.direction, self.width, self.height):
            return deterministic_transition(state)

        return [
            TransitionProbability(move(state, self.direction), 1.0 - self.slip_probability),
            TransitionProbability(state, self.slip_probability),
        ]

    def _perform(self, state: OOState, action: GroundedAction) -> OOState:
        return self.sample(state, action)


def grid_world_action_space(
    width: int = 5,
    height: int = 5,
    slip_probability: float | None = None,
) -> ActionSpace:
    """Construct the four move actions of a grid world.

    :param width: Number of columns in the grid
    :param height: Number of rows in the grid
    :param slip_probability: If given, moves are stochastic and expose a full transition model
    :return: Action space containing "move-north", "move-south", "move-east", and "move-west"
    """
    schemas: list[ActionSchema] = []
    for direction in DIRECTIONS:
        if slip_probability is None:
            schema: ActionSchema = SimpleActionSchema(
                f"move-{direction}",
                effect=partial(move, direction=direction),
                precondition=partial(can_move, direction=direction, width=width, height=height),
            )
        else:
            schema = SlipperyMoveSchema(direction, width, height, slip_probability)
        schemas.append(schema)

    return ActionSpace("grid_world", schemas)


def at_cell(state: OOState, goal_xy: tuple[int, int]) -> bool:
    """Evaluate whether the agent occupies the given cell."""
    agent = _agent(state)
    return (agent.value("x"), agent.value("y")) == goal_xy
