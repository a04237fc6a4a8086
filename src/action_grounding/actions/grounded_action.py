"""Define a class to represent action schemas bound to concrete parameter values.

A grounded action pairs a (shared) action schema with a parameter binding. It provides
shortcuts that evaluate the schema using itself as the parameter context:

    applicable_in(state)            -> schema.applicable_in(state, action)
    execute_in(state)               -> schema.perform(state, action)
    execute_in_environment(env)     -> schema.perform_in_environment(env, action)
    transitions(state)              -> schema.transition_model.transitions(state, action)

Grounded actions compare equal (and hash equally) whenever their schemas share a name,
regardless of their bound parameters. Code that needs to distinguish groundings of one
schema should compare their `signature` strings instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Sequence

from action_grounding.actions.bindings import Binding, ObjectParameters, Unparameterized
from action_grounding.actions.transitions import nonzero
from action_grounding.errors import UnsupportedCapabilityError
from action_grounding.translation import ObjectMatchingTranslator

if TYPE_CHECKING:
    from action_grounding.actions.action_schema import ActionSchema
    from action_grounding.actions.transitions import TransitionProbability
    from action_grounding.environments import Environment, EnvironmentOutcome
    from action_grounding.states import OOState
    from action_grounding.translation import ParameterTranslator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class GroundedAction:
    """An action schema grounded using a particular parameter binding."""

    schema: ActionSchema
    """Shared reference to the action schema that defines this action's semantics."""

    binding: Binding = field(default_factory=Unparameterized)
    """Parameter values bound to the schema (empty for parameter-less schemas)."""

    def __eq__(self, other: object) -> bool:
        """Evaluate whether another grounded action refers to a schema of the same name."""
        if self is other:
            return True

        if not isinstance(other, GroundedAction):
            return False

        return self.name == other.name

    def __hash__(self) -> int:
        """Compute a hash value from the schema name (consistent with equality)."""
        return hash(self.schema.name)

    def __str__(self) -> str:
        """Return the name of the grounded action."""
        return self.name

    @property
    def name(self) -> str:
        """Retrieve the name of the action schema."""
        return self.schema.name

    @property
    def signature(self) -> str:
        """Retrieve a readable string including the bound parameters (e.g., "stack(b0, b1)")."""
        return f"{self.name}({', '.join(self.parameters_as_strings())})"

    def is_parameterized(self) -> bool:
        """Evaluate whether the action's schema declares any parameters."""
        return self.schema.is_parameterized()

    def parameters_as_strings(self) -> tuple[str, ...]:
        """Encode the bound parameters as a tuple of strings."""
        return self.binding.as_strings()

    def with_string_parameters(self, values: Sequence[str]) -> GroundedAction:
        """Create a grounding of the same schema with parameters parsed from strings.

        :param values: Flat string encoding of the parameters (see `parameters_as_strings`)
        :return: New grounded action with the parsed binding
        :raises MalformedParameterEncodingError: If the values don't fit the schema's parameters
        """
        return self.with_binding(self.schema.binding_from_strings(values))

    def with_binding(self, binding: Binding) -> GroundedAction:
        """Create a grounding of the same schema using the given binding."""
        return replace(self, binding=binding)

    def copy(self) -> GroundedAction:
        """Create a copy of the grounded action that shares its schema."""
        return replace(self)

    def applicable_in(self, state: OOState) -> bool:
        """Evaluate whether the grounded action can be applied in the given state."""
        return self.schema.applicable_in(state, self)

    def execute_in(self, state: OOState) -> OOState:
        """Apply the grounded action to the given state.

        :param state: State in which the action is executed (not modified)
        :return: Resulting state after the action is executed
        """
        return self.schema.perform(state, self)

    def execute_in_environment(self, env: Environment) -> EnvironmentOutcome:
        """Execute the grounded action in the given environment.

        :param env: Environment in which the action is executed
        :return: Outcome of the action, as reported by the environment
        """
        return self.schema.perform_in_environment(env, self)

    def transitions(self, state: OOState) -> list[TransitionProbability]:
        """Enumerate all outcomes of applying the grounded action in the given state.

        :param state: Source state from which the transitions are computed
        :return: All next states reachable with non-zero probability, with their probabilities
        :raises UnsupportedCapabilityError: If the schema has no full transition model
        """
        model = self.schema.transition_model
        if model is None:
            raise UnsupportedCapabilityError(self.name, "full transition enumeration")

        return nonzero(model.transitions(state, self))

    def translate(
        self,
        source: OOState,
        target: OOState,
        translator: ParameterTranslator | None = None,
    ) -> GroundedAction:
        """Map the action's object parameters from the source state to the target state.

        Parameters are only remapped if they are object identifiers and the schema's
        semantics don't depend on object names; otherwise an unchanged copy is returned.

        :param source: State in which the action's parameters are currently bound
        :param target: State in which the returned action's parameters will be bound
        :param translator: Finds object correspondences (defaults to class-and-value matching)
        :return: Grounded action with parameters bound to objects in the target state
        :raises TranslationFailureError: If no consistent object correspondence exists
        """
        if not isinstance(self.binding, ObjectParameters):
            return self.copy()

        if not self.schema.object_identifier_independent:
            return self.copy()

        if translator is None:
            translator = ObjectMatchingTranslator()

        matching = translator.match_objects(source, target)
        translated = self.with_binding(self.binding.remapped(matching))
        logger.debug("Translated %s to %s.", self.signature, translated.signature)
        return translated
