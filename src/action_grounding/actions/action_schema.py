"""Define action schemas: lifted action definitions that are grounded into actions.

An action schema defines an action's name, its parameter shape, when it is applicable,
and what it does. Grounded actions hold a shared reference to their schema and pass
themselves back to it as the parameter context for each of these queries.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from itertools import product
from typing import TYPE_CHECKING, Callable, Protocol, Sequence

import numpy as np

from action_grounding.actions.bindings import Binding, ObjectParameters, Unparameterized
from action_grounding.actions.grounded_action import GroundedAction
from action_grounding.actions.transitions import sample_transition
from action_grounding.errors import MalformedParameterEncodingError

if TYPE_CHECKING:
    from action_grounding.actions.transitions import TransitionProbability
    from action_grounding.environments import Environment, EnvironmentOutcome
    from action_grounding.states import ObjectInstance, OOState

logger = logging.getLogger(__name__)


class TransitionModel(Protocol):
    """A capability to enumerate every outcome of an action with its probability."""

    def transitions(self, state: OOState, action: GroundedAction) -> list[TransitionProbability]:
        """Compute all possible next states and their probabilities.

        :param state: State in which the action is applied
        :param action: Grounded action providing the parameter binding
        :return: List of possible next states, each paired with its probability
        """
        ...


class ActionSchema(ABC):
    """A lifted action definition that can be grounded into concrete actions."""

    def __init__(self, name: str, object_identifier_independent: bool = True) -> None:
        """Initialize the action schema.

        :param name: Unique name of the schema (e.g., "move-north")
        :param object_identifier_independent: Whether the schema's semantics are unchanged
            when objects are renamed (if so, groundings can be translated between states)
        """
        self.name = name
        self.object_identifier_independent = object_identifier_independent

    def __str__(self) -> str:
        """Return the name of the action schema."""
        return self.name

    def __repr__(self) -> str:
        """Return a readable string representation of the action schema."""
        return f"{type(self).__name__}({self.name!r})"

    def is_parameterized(self) -> bool:
        """Evaluate whether the schema declares any parameters."""
        return False

    @property
    def transition_model(self) -> TransitionModel | None:
        """Retrieve the schema's full transition model, or None if it doesn't provide one."""
        return None

    @abstractmethod
    def applicable_in(self, state: OOState, action: GroundedAction) -> bool:
        """Evaluate whether the grounded action can be applied in the given state."""

    @abstractmethod
    def _perform(self, state: OOState, action: GroundedAction) -> OOState:
        """Compute the state resulting from an applicable grounded action."""

    def perform(self, state: OOState, action: GroundedAction) -> OOState:
        """Apply the grounded action to the given state.

        :param state: State in which the action is applied (not modified)
        :param action: Grounded action providing the parameter binding
        :return: Resulting state
        :raises ValueError: If the action isn't applicable in the state
        """
        if not self.applicable_in(state, action):
            raise ValueError(f"Cannot apply {action.signature} in the state: {state}")

        return self._perform(state, action)

    def perform_in_environment(
        self,
        env: Environment,
        action: GroundedAction,
    ) -> EnvironmentOutcome:
        """Execute the grounded action in the given environment and return its outcome."""
        return env.execute_action(action)

    def binding_from_strings(self, values: Sequence[str]) -> Binding:
        """Parse a parameter binding from its string encoding (ignored if parameter-less)."""
        return Unparameterized()

    def associated_grounded_action(self) -> GroundedAction:
        """Create a grounding of this schema without any bound parameters."""
        return GroundedAction(self)

    def all_applicable_grounded_actions(self, state: OOState) -> list[GroundedAction]:
        """Compute all groundings of this schema that are applicable in the given state."""
        action = GroundedAction(self)
        return [action] if action.applicable_in(state) else []


class FullActionModel(ABC):
    """A mixin for action schemas that can enumerate their full transition distributions.

    Mix in before the schema base class: `class Slip(FullActionModel, SimpleActionSchema)`.
    """

    @property
    def transition_model(self) -> TransitionModel:
        """Provide the schema itself as its transition model."""
        return self

    @abstractmethod
    def transitions(self, state: OOState, action: GroundedAction) -> list[TransitionProbability]:
        """Compute all possible next states and their probabilities."""

    def sample(
        self,
        state: OOState,
        action: GroundedAction,
        rng: np.random.Generator | None = None,
    ) -> OOState:
        """Sample a next state from the full transition distribution."""
        return sample_transition(self.transitions(state, action), rng)


class SimpleActionSchema(ActionSchema):
    """A parameter-less action schema defined by an effect function and optional precondition."""

    def __init__(
        self,
        name: str,
        effect: Callable[[OOState], OOState],
        precondition: Callable[[OOState], bool] | None = None,
    ) -> None:
        """Initialize the schema using its name, effect, and precondition.

        :param name: Unique name of the schema
        :param effect: Maps a state to the state resulting from the action
        :param precondition: Optional predicate over states (if None, always applicable)
        """
        super().__init__(name)
        self.effect = effect
        self.precondition = precondition

    def applicable_in(self, state: OOState, action: GroundedAction) -> bool:
        """Evaluate the schema's precondition in the given state."""
        return self.precondition is None or self.precondition(state)

    def _perform(self, state: OOState, action: GroundedAction) -> OOState:
        """Apply the schema's effect function to the state."""
        return self.effect(state)


class ObjectParameterizedActionSchema(ActionSchema):
    """An action schema whose parameters are objects of specified classes."""

    def __init__(
        self,
        name: str,
        parameter_classes: Sequence[str],
        distinct_objects: bool = True,
        object_identifier_independent: bool = True,
    ) -> None:
        """Initialize the schema using its name and parameter classes.

        :param name: Unique name of the schema
        :param parameter_classes: Object class expected by each parameter, in order
        :param distinct_objects: Whether groundings must bind a different object to each parameter
        :param object_identifier_independent: Whether the semantics are unchanged by renaming
        """
        super().__init__(name, object_identifier_independent)
        self.parameter_classes = tuple(parameter_classes)
        self.distinct_objects = distinct_objects

    def is_parameterized(self) -> bool:
        """Evaluate whether the schema declares any object parameters."""
        return bool(self.parameter_classes)

    def binding_from_strings(self, values: Sequence[str]) -> ObjectParameters:
        """Parse object parameters from a sequence of object names.

        :raises MalformedParameterEncodingError: If the arity or value types don't match
        """
        if isinstance(values, str):
            raise MalformedParameterEncodingError(
                f"Schema '{self.name}' expects a sequence of object names, not {values!r}.",
            )

        if len(values) != len(self.parameter_classes):
            raise MalformedParameterEncodingError(
                f"Schema '{self.name}' expects {len(self.parameter_classes)} parameters, "
                f"not {len(values)}: {list(values)}.",
            )

        for value in values:
            if not isinstance(value, str) or not value:
                raise MalformedParameterEncodingError(
                    f"Schema '{self.name}' expects non-empty object names, not {value!r}.",
                )

        return ObjectParameters.from_sequence(values)

    def bound_objects(self, state: OOState, action: GroundedAction) -> list[ObjectInstance]:
        """Retrieve the state's objects bound to the grounded action's parameters.

        :raises ValueError: If the action's binding doesn't fit this schema
        :raises KeyError: If a bound object is missing from the state
        """
        binding = action.binding
        if not isinstance(binding, ObjectParameters) or len(binding) != len(self.parameter_classes):
            raise ValueError(f"Action {action.signature} has no valid binding for '{self.name}'.")

        return [state.get_object(name) for name in binding.object_names]

    def binding_fits(self, state: OOState, action: GroundedAction) -> bool:
        """Evaluate whether the bound objects exist in the state with the expected classes."""
        binding = action.binding
        if not isinstance(binding, ObjectParameters) or len(binding) != len(self.parameter_classes):
            return False

        return all(
            name in state and state.get_object(name).object_class == obj_class
            for name, obj_class in zip(binding.object_names, self.parameter_classes)
        )

    def all_applicable_grounded_actions(self, state: OOState) -> list[GroundedAction]:
        """Compute all applicable groundings using objects of each parameter's class."""
        names_per_param = [
            [obj.name for obj in state.objects_of_class(c)] for c in self.parameter_classes
        ]

        groundings: list[GroundedAction] = []
        for names in product(*names_per_param):  # Cartesian product of candidate objects
            if self.distinct_objects and len(set(names)) < len(names):
                continue

            action = GroundedAction(self, ObjectParameters(names))
            if action.applicable_in(state):
                groundings.append(action)

        logger.debug("Found %d applicable groundings of '%s'.", len(groundings), self.name)
        return groundings
