"""Define classes and helpers for enumerating probabilistic state transitions."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from action_grounding.states import OOState


@dataclass(frozen=True)
class TransitionProbability(Iterable):
    """A possible next state paired with the probability of transitioning to it."""

    state: OOState
    probability: float

    def __post_init__(self) -> None:
        """Verify that the probability is valid."""
        if not 0.0 <= self.probability <= 1.0:
            raise ValueError(f"Transition probability must lie in [0, 1], not {self.probability}.")

    def __iter__(self) -> Iterator:
        """Return an iterator over the (state, probability) pair."""
        return iter((self.state, self.probability))


def deterministic_transition(state: OOState) -> list[TransitionProbability]:
    """Create the distribution of an outcome that occurs with certainty."""
    return [TransitionProbability(state, 1.0)]


def nonzero(transitions: Iterable[TransitionProbability]) -> list[TransitionProbability]:
    """Filter out transitions that occur with zero probability."""
    return [tp for tp in transitions if tp.probability > 0.0]


def is_distribution(transitions: Iterable[TransitionProbability], atol: float = 1e-8) -> bool:
    """Evaluate whether the transition probabilities sum to one (within the given tolerance)."""
    total = sum(tp.probability for tp in transitions)
    return bool(np.isclose(total, 1.0, rtol=0.0, atol=atol))


def sample_transition(
    transitions: list[TransitionProbability],
    rng: np.random.Generator | None = None,
) -> OOState:
    """Sample a next state from the given transition distribution.

    :param transitions: Possible next states and their probabilities
    :param rng: Optional random number generator, defaults to None
    :return: Sampled next state
    :raises ValueError: If the transitions don't form a probability distribution
    """
    if not transitions or not is_distribution(transitions, atol=1e-6):
        raise ValueError("Cannot sample from transitions that don't sum to one.")

    if rng is None:
        rng = np.random.default_rng()

    probabilities = np.array([tp.probability for tp in transitions], dtype=float)
    selected_idx = rng.choice(len(transitions), p=probabilities / probabilities.sum())
    return transitions[int(selected_idx)].state
