"""Import example planning domains and a registry of their action spaces."""

from typing import Callable

from action_grounding.actions import ActionSpace

from .blocks_world import blocks_world_action_space as blocks_world_action_space
from .blocks_world import blocks_world_state as blocks_world_state
from .grid_world import grid_world_action_space as grid_world_action_space
from .grid_world import grid_world_state as grid_world_state

DOMAINS: dict[str, Callable[[], ActionSpace]] = {
    "blocks_world": blocks_world_action_space,
    "grid_world": grid_world_action_space,
    "slippery_grid_world": lambda: grid_world_action_space(slip_probability=0.2),
}
"""Map from domain names to functions constructing each domain's action space."""
