"""Unit tests for the GroundedAction class."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest
from hypothesis import given

from action_grounding.actions import (
    ActionSpace,
    GroundedAction,
    ObjectParameters,
    Unparameterized,
    is_distribution,
)
from action_grounding.domains import grid_world_action_space, grid_world_state
from action_grounding.domains.blocks_world import StackSchema
from action_grounding.errors import MalformedParameterEncodingError, UnsupportedCapabilityError
from action_grounding.states import OOState

from .strategies.grounding_strategies import object_parameters


@given(object_parameters(), object_parameters())
def test_equality_ignores_parameters(b1: ObjectParameters, b2: ObjectParameters) -> None:
    """Verify that groundings of same-named schemas are equal regardless of their bindings."""
    # Arrange - Two separate schema instances that share the name "stack"
    action_1 = GroundedAction(StackSchema(), b1)
    action_2 = GroundedAction(StackSchema(), b2)

    # Act/Assert - Expect equality and equal hashes
    assert action_1 == action_2
    assert hash(action_1) == hash(action_2)


def test_different_schema_names_are_unequal(grid_actions: ActionSpace) -> None:
    """Verify that groundings of differently named schemas are not equal."""
    north = GroundedAction(grid_actions.get_schema("move-north"))
    south = GroundedAction(grid_actions.get_schema("move-south"))

    assert north != south
    assert north != "move-north"


def test_move_north_scenario(grid_actions: ActionSpace, grid_origin: OOState) -> None:
    """Verify naming and applicability of a parameter-less "move-north" action."""
    # Arrange - Ground the "move-north" schema and construct a state where north is walled off
    schema = grid_actions.get_schema("move-north")
    action = schema.associated_grounded_action()
    walled_in = grid_world_state(agent_xy=(0, 0), walls=[(0, 1)])

    # Act/Assert - Expect the name to be used as the string form
    assert str(action) == "move-north"
    assert action.name == "move-north"
    assert not action.is_parameterized()

    # Assert - Expect applicability to mirror the schema's own predicate
    assert action.applicable_in(grid_origin) == schema.applicable_in(grid_origin, action)
    assert action.applicable_in(grid_origin)
    assert not action.applicable_in(walled_in)

    # Act/Assert - Expect execution to move the agent one cell north
    next_state = action.execute_in(grid_origin)
    agent = next_state.get_object("agent0")
    assert (agent.value("x"), agent.value("y")) == (0, 1)
    assert grid_origin.get_object("agent0").value("y") == 0  # Original state is unchanged


def test_execute_inapplicable_raises(grid_actions: ActionSpace, grid_origin: OOState) -> None:
    """Verify that executing an inapplicable action in a state raises a ValueError."""
    action = GroundedAction(grid_actions.get_schema("move-south"))

    with pytest.raises(ValueError, match="Cannot apply"):
        action.execute_in(grid_origin)


@pytest.mark.parametrize("values", [[], ["b0"], ["b0", "b1", "b2"]])
def test_parameterless_string_parameters_are_ignored(
    grid_actions: ActionSpace,
    values: list[str],
) -> None:
    """Verify that parameter-less groundings ignore any string-encoded parameters."""
    action = GroundedAction(grid_actions.get_schema("move-east"))

    result = action.with_string_parameters(values)

    assert action.parameters_as_strings() == ()
    assert result.parameters_as_strings() == ()
    assert result.binding == Unparameterized()


def test_object_string_parameters() -> None:
    """Verify that object parameters are parsed from and encoded as strings."""
    action = StackSchema().associated_grounded_action()
    assert action.is_parameterized()  # Reflects the schema, even though nothing is bound yet

    result = action.with_string_parameters(["b0", "b1"])

    assert result.parameters_as_strings() == ("b0", "b1")
    assert result.signature == "stack(b0, b1)"
    assert str(result) == "stack"


@pytest.mark.parametrize("values", [[], ["b0"], ["b0", "b1", "b2"], ["b0", ""], "b0"])
def test_malformed_string_parameters_raise(values: list[str]) -> None:
    """Verify that string parameters that don't fit the schema are rejected."""
    action = StackSchema().associated_grounded_action()

    with pytest.raises(MalformedParameterEncodingError):
        action.with_string_parameters(values)


def test_copy_is_independent() -> None:
    """Verify that copies are equal to the original yet rebinding them leaves it unchanged."""
    # Arrange
    original = GroundedAction(StackSchema(), ObjectParameters(("b0", "b1")))

    # Act - Copy the action and rebind the copy's parameters
    copied = original.copy()
    rebound = copied.with_string_parameters(["b2", "b0"])

    # Assert
    assert copied == original
    assert copied is not original
    assert copied.schema is original.schema
    assert rebound.parameters_as_strings() == ("b2", "b0")
    assert original.parameters_as_strings() == ("b0", "b1")

    with pytest.raises(FrozenInstanceError):
        copied.binding = Unparameterized()  # type: ignore[misc]


def test_transitions_unsupported(grid_actions: ActionSpace, grid_origin: OOState) -> None:
    """Verify that enumerating transitions without a full model raises an error naming it."""
    action = GroundedAction(grid_actions.get_schema("move-north"))

    with pytest.raises(UnsupportedCapabilityError, match="move-north") as exc_info:
        action.transitions(grid_origin)

    assert exc_info.value.schema_name == "move-north"


@pytest.mark.parametrize("slip_probability", [0.0, 0.2, 0.5, 1.0])
def test_transitions_form_distribution(slip_probability: float, grid_origin: OOState) -> None:
    """Verify that full transition models produce nonzero probabilities summing to one."""
    actions = grid_world_action_space(slip_probability=slip_probability)
    action = GroundedAction(actions.get_schema("move-north"))

    transitions = action.transitions(grid_origin)

    assert transitions
    assert all(tp.probability > 0.0 for tp in transitions)
    assert is_distribution(transitions)



@pytest.mark.parametrize("action_name", ["move-south", "move-west"])
def test_blocked_slippery_move_stays_put(action_name: str, grid_origin: OOState) -> None:
    """Verify that a blocked stochastic move leaves the agent in place with certainty."""
    actions = grid_world_action_space(slip_probability=0.2)
    action = GroundedAction(actions.get_schema(action_name))

    transitions = action.transitions(grid_origin)

    assert not action.applicable_in(grid_origin)
    assert [(s, p) for s, p in transitions] == [(grid_origin, 1.0)]

def test_translate_identity(blocks_state: OOState) -> None:
    """Verify that translating an action from a state to itself leaves it unchanged."""
    action = GroundedAction(StackSchema(), ObjectParameters(("b1", "b2")))

    translated = action.translate(blocks_state, blocks_state)
    twice = translated.translate(blocks_state, blocks_state)

    assert translated.signature == action.signature
    assert twice.signature == action.signature
    assert twice.execute_in(blocks_state) == action.execute_in(blocks_state)


def test_translate_renamed_objects(blocks_state: OOState) -> None:
    """Verify that object parameters are remapped onto renamed objects."""
    target = blocks_state.renamed_objects({"b0": "x", "b1": "y", "b2": "z"})
    action = GroundedAction(StackSchema(), ObjectParameters(("b1", "b2")))

    translated = action.translate(blocks_state, target)

    assert translated.signature == "stack(y, z)"
    assert translated.applicable_in(target)
    assert action.signature == "stack(b1, b2)"


def test_translate_parameterless_returns_copy(
    grid_actions: ActionSpace,
    grid_origin: OOState,
    blocks_state: OOState,
) -> None:
    """Verify that parameter-less actions are returned unchanged, even between unrelated states."""
    action = GroundedAction(grid_actions.get_schema("move-west"))

    translated = action.translate(grid_origin, blocks_state)

    assert translated == action
    assert translated.binding == Unparameterized()


def test_translate_identifier_dependent_schema(blocks_state: OOState) -> None:
    """Verify that schemas whose semantics depend on object names are never remapped."""
    schema = StackSchema()
    schema.object_identifier_independent = False
    action = GroundedAction(schema, ObjectParameters(("b1", "b2")))
    target = blocks_state.renamed_objects({"b1": "q"})

    translated = action.translate(blocks_state, target)

    assert translated.signature == "stack(b1, b2)"
