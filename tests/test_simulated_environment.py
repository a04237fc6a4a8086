"""Unit tests for executing grounded actions in environments."""

from __future__ import annotations

from functools import partial

import numpy as np

from action_grounding.actions import ActionSpace, GroundedAction
from action_grounding.domains import grid_world_action_space, grid_world_state
from action_grounding.domains.grid_world import at_cell
from action_grounding.environments import EnvironmentOutcome, SimulatedEnvironment
from action_grounding.states import OOState


class RecordingEnvironment:
    """An environment that records the actions it is asked to execute."""

    def __init__(self, state: OOState) -> None:
        """Initialize the environment in the given state."""
        self.state = state
        self.executed: list[GroundedAction] = []

    def current_observation(self) -> OOState:
        """Retrieve the (unchanging) state."""
        return self.state

    def execute_action(self, action: GroundedAction) -> EnvironmentOutcome:
        """Record the action and report an outcome that doesn't change the state."""
        self.executed.append(action)
        return EnvironmentOutcome(self.state, action, self.state, 1.5, terminated=False)

    def last_reward(self) -> float:
        """Retrieve the constant reward."""
        return 1.5

    def is_in_terminal_state(self) -> bool:
        """Report that the environment never terminates."""
        return False

    def reset_environment(self) -> None:
        """Forget the recorded actions."""
        self.executed.clear()


def test_execute_in_environment_delegates(grid_actions: ActionSpace, grid_origin: OOState) -> None:
    """Verify that executing in an environment passes the grounded action itself along."""
    env = RecordingEnvironment(grid_origin)
    action = GroundedAction(grid_actions.get_schema("move-east"))

    outcome = action.execute_in_environment(env)

    assert env.executed == [action]
    assert env.executed[0] is action
    assert outcome.reward == 1.5
    observation, executed, next_observation, reward, terminated = outcome
    assert executed is action
    assert observation == next_observation == grid_origin
    assert (reward, terminated) == (1.5, False)


def test_simulated_rewards_and_termination(grid_actions: ActionSpace, grid_origin: OOState) -> None:
    """Verify that the simulated environment reports rewards and terminates at its goal."""
    # Arrange - An environment rewarding -1 per step that terminates at cell (0, 1)
    env = SimulatedEnvironment(
        grid_origin,
        reward_fn=lambda s, a, s_next: -1.0,
        terminal_fn=partial(at_cell, goal_xy=(0, 1)),
    )
    north = GroundedAction(grid_actions.get_schema("move-north"))

    # Act - Move into the goal cell, then try to move again
    first = north.execute_in_environment(env)
    second = north.execute_in_environment(env)

    # Assert - Expect the first step to terminate and the second to be ignored
    assert first.reward == -1.0
    assert first.terminated
    assert at_cell(first.next_observation, (0, 1))

    assert second.reward == 0.0
    assert second.next_observation == first.next_observation
    assert env.is_in_terminal_state()
    assert env.last_reward() == 0.0

    # Act/Assert - Expect a reset to restore the initial state
    env.reset_environment()
    assert env.current_observation() == grid_origin
    assert not env.is_in_terminal_state()


def test_inapplicable_action_leaves_state(grid_actions: ActionSpace, grid_origin: OOState) -> None:
    """Verify that inapplicable actions don't change the simulated state or earn reward."""
    env = SimulatedEnvironment(grid_origin, reward_fn=lambda s, a, s_next: 10.0)
    south = GroundedAction(grid_actions.get_schema("move-south"))

    outcome = south.execute_in_environment(env)

    assert outcome.next_observation == grid_origin
    assert outcome.reward == 0.0
    assert not outcome.terminated


def test_certain_slip_never_moves(grid_origin: OOState) -> None:
    """Verify that stochastic actions are sampled from their full transition model."""
    always_slips = grid_world_action_space(slip_probability=1.0)
    never_slips = grid_world_action_space(slip_probability=0.0)

    slip_env = SimulatedEnvironment(grid_origin, rng=np.random.default_rng(0))
    move_env = SimulatedEnvironment(grid_origin, rng=np.random.default_rng(0))

    for _ in range(5):
        always_slips.parse_grounded_action("move-north").execute_in_environment(slip_env)
        never_slips.parse_grounded_action("move-north").execute_in_environment(move_env)

    assert slip_env.current_observation() == grid_origin
    assert at_cell(move_env.current_observation(), (0, 4))


def test_seeded_environments_agree() -> None:
    """Verify that simulated environments with equal seeds produce identical trajectories."""
    actions = grid_world_action_space(width=3, height=3, slip_probability=0.5)
    plan = ["move-north", "move-east", "move-north", "move-east", "move-south"] * 2
    start = grid_world_state(agent_xy=(0, 0))

    trajectories = []
    for _ in range(2):
        env = SimulatedEnvironment(start, rng=np.random.default_rng(42))
        outcomes = [actions.parse_grounded_action(a).execute_in_environment(env) for a in plan]
        trajectories.append([o.next_observation for o in outcomes])

    assert trajectories[0] == trajectories[1]
