"""Define pytest fixtures shared by the unit tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from action_grounding.actions import ActionSpace
from action_grounding.domains import (
    blocks_world_action_space,
    blocks_world_state,
    grid_world_action_space,
    grid_world_state,
)
from action_grounding.states import OOState


@pytest.fixture
def yaml_data_path() -> Path:
    """Retrieve the path to the folder of YAML test data."""
    path = Path(__file__).parent / "test_data/yaml"
    assert path.exists(), f"Expected to find folder: {path}"
    return path


@pytest.fixture
def grid_actions() -> ActionSpace:
    """Construct the deterministic actions of a 5x5 grid world."""
    return grid_world_action_space(width=5, height=5)


@pytest.fixture
def grid_origin() -> OOState:
    """Construct a grid world state with the agent in the bottom-left corner."""
    return grid_world_state(agent_xy=(0, 0))


@pytest.fixture
def blocks_actions() -> ActionSpace:
    """Construct the actions of the blocks world."""
    return blocks_world_action_space()


@pytest.fixture
def blocks_state() -> OOState:
    """Construct a blocks world state where b1 is on b0 and b2 is on the table."""
    return blocks_world_state([["b0", "b1"], ["b2"]])
