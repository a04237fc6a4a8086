"""Define an interface for environments in which grounded actions are executed."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from action_grounding.actions import GroundedAction
    from action_grounding.states import OOState


@dataclass(frozen=True)
class EnvironmentOutcome(Iterable):
    """The observed outcome of executing a grounded action in an environment."""

    observation: OOState
    """Observation of the environment before the action was executed."""

    action: GroundedAction
    next_observation: OOState
    """Observation of the environment after the action was executed."""

    reward: float
    terminated: bool
    """True if the environment reached a terminal state, else False."""

    def __iter__(self) -> Iterator:
        """Return an iterator over the values of the outcome."""
        return iter(
            (self.observation, self.action, self.next_observation, self.reward, self.terminated),
        )


class Environment(Protocol):
    """An interface to a (possibly stochastic or physical) environment that executes actions."""

    def current_observation(self) -> OOState:
        """Retrieve an observation of the environment's current state."""
        ...

    def execute_action(self, action: GroundedAction) -> EnvironmentOutcome:
        """Execute the grounded action and report its outcome.

        :param action: Grounded action to be executed
        :return: Outcome observed after executing the action
        """
        ...

    def last_reward(self) -> float:
        """Retrieve the reward received from the most recently executed action."""
        ...

    def is_in_terminal_state(self) -> bool:
        """Evaluate whether the environment is in a terminal state."""
        ...

    def reset_environment(self) -> None:
        """Reset the environment to its initial state."""
        ...
