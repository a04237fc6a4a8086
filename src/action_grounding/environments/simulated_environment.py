"""Define an environment that simulates grounded actions using their schemas."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

import numpy as np

from action_grounding.actions.transitions import sample_transition
from action_grounding.environments.environment import EnvironmentOutcome

if TYPE_CHECKING:
    from action_grounding.actions import GroundedAction
    from action_grounding.states import OOState

logger = logging.getLogger(__name__)

RewardFunction = Callable[["OOState", "GroundedAction", "OOState"], float]
"""Maps a (state, action, next state) transition to a scalar reward."""

TerminalFunction = Callable[["OOState"], bool]
"""Evaluates whether a state is terminal."""


class SimulatedEnvironment:
    """An environment that applies grounded actions to an internally stored state.

    Actions whose schemas provide a full transition model are sampled from their
    transition distributions; all other actions are applied deterministically.
    Inapplicable actions leave the state unchanged and receive zero reward.

    Not thread-safe: the current state is replaced by every executed action.
    """

    def __init__(
        self,
        initial_state: OOState,
        reward_fn: RewardFunction | None = None,
        terminal_fn: TerminalFunction | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        """Initialize the simulated environment.

        :param initial_state: State the environment starts (and resets) in
        :param reward_fn: Optional reward function (defaults to zero reward)
        :param terminal_fn: Optional terminal state test (defaults to never terminal)
        :param rng: Optional random number generator used to sample stochastic outcomes
        """
        self.initial_state = initial_state
        self.reward_fn = reward_fn
        self.terminal_fn = terminal_fn
        self.rng = np.random.default_rng() if rng is None else rng

        self._state = initial_state
        self._last_reward = 0.0

    def current_observation(self) -> OOState:
        """Retrieve the current state of the environment."""
        return self._state

    def last_reward(self) -> float:
        """Retrieve the reward received from the most recently executed action."""
        return self._last_reward

    def is_in_terminal_state(self) -> bool:
        """Evaluate whether the current state is terminal."""
        return self.terminal_fn is not None and self.terminal_fn(self._state)

    def reset_environment(self) -> None:
        """Reset the environment to its initial state."""
        self._state = self.initial_state
        self._last_reward = 0.0

    def execute_action(self, action: GroundedAction) -> EnvironmentOutcome:
        """Simulate the grounded action from the current state.

        :param action: Grounded action to be executed
        :return: Outcome describing the simulated transition
        """
        before = self._state

        if self.is_in_terminal_state():
            logger.debug("Ignoring %s in a terminal state.", action.signature)
            after, reward = before, 0.0
        elif not action.applicable_in(before):
            logger.debug("Action %s is not applicable; state unchanged.", action.signature)
            after, reward = before, 0.0
        else:
            after = self._simulate(before, action)
            reward = 0.0 if self.reward_fn is None else float(self.reward_fn(before, action, after))

        self._state = after
        self._last_reward = reward
        return EnvironmentOutcome(before, action, after, reward, self.is_in_terminal_state())

    def _simulate(self, state: OOState, action: GroundedAction) -> OOState:
        """Compute the next state, sampling stochastic outcomes where a full model exists."""
        if action.schema.transition_model is not None:
            return sample_transition(action.transitions(state), self.rng)

        return action.execute_in(state)
