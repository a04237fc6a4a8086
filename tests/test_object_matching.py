"""Unit tests for the ObjectMatchingTranslator class."""

from __future__ import annotations

import pytest
from hypothesis import given

from action_grounding.actions import GroundedAction, ObjectParameters
from action_grounding.domains import blocks_world_state
from action_grounding.domains.blocks_world import StackSchema
from action_grounding.errors import TranslationFailureError
from action_grounding.states import ObjectInstance, OOState
from action_grounding.translation import ObjectMatchingTranslator

from .strategies.grounding_strategies import block_towers, renamed_blocks_states


@given(renamed_blocks_states())
def test_matching_recovers_renaming(states: tuple[OOState, OOState]) -> None:
    """Verify that matching a renamed state yields a mapping that reproduces it."""
    # Arrange - A state and a reordered copy of it using different object names
    source, target = states

    # Act - Find an object correspondence between the states
    matching = ObjectMatchingTranslator().match_objects(source, target)

    # Assert - Expect the correspondence to be a bijection that reproduces the target state
    assert set(matching) == set(source.object_names)
    assert set(matching.values()) == set(target.object_names)
    assert source.renamed_objects(matching) == target


@given(block_towers())
def test_matching_state_to_itself_is_identity(towers: list[list[str]]) -> None:
    """Verify that matching a state against itself yields the identity mapping."""
    state = blocks_world_state(towers)

    matching = ObjectMatchingTranslator().match_objects(state, state)

    assert matching == {name: name for name in state.object_names}


def test_structurally_different_states_fail() -> None:
    """Verify that states with different structures cannot be matched."""
    source = blocks_world_state([["b0", "b1"], ["b2"]])
    target = blocks_world_state([["b0"], ["b1"], ["b2"]])

    with pytest.raises(TranslationFailureError):
        ObjectMatchingTranslator().match_objects(source, target)


def test_references_must_correspond() -> None:
    """Verify that matched objects must preserve which objects they refer to."""
    # Arrange - Objects match individually by value, but not through their references
    source = OOState(
        [
            ObjectInstance("a", "node", {"next": "b", "label": 1}),
            ObjectInstance("b", "node", {"next": "a", "label": 2}),
        ],
    )
    target = OOState(
        [
            ObjectInstance("x", "node", {"next": "x", "label": 1}),
            ObjectInstance("y", "node", {"next": "y", "label": 2}),
        ],
    )

    # Act/Assert
    with pytest.raises(TranslationFailureError):
        ObjectMatchingTranslator().match_objects(source, target)


def test_subset_matching() -> None:
    """Verify that inexact matching allows the target to contain extra objects."""
    source = blocks_world_state([["a"], ["b"]])
    target = blocks_world_state([["c"], ["a"], ["b"]])

    with pytest.raises(TranslationFailureError):
        ObjectMatchingTranslator(require_exact=True).match_objects(source, target)

    matching = ObjectMatchingTranslator(require_exact=False).match_objects(source, target)
    assert matching == {"a": "a", "b": "b"}


def test_translation_failure_propagates() -> None:
    """Verify that a grounded action propagates translation failures unchanged."""
    source = blocks_world_state([["b0", "b1"], ["b2"]])
    target = blocks_world_state([["b0"], ["b1"], ["b2"]])
    action = GroundedAction(StackSchema(), ObjectParameters(("b1", "b2")))

    with pytest.raises(TranslationFailureError):
        action.translate(source, target)


def test_remapping_unmatched_object_fails() -> None:
    """Verify that remapping a binding fails if a bound object has no counterpart."""
    binding = ObjectParameters(("b0", "ghost"))

    with pytest.raises(TranslationFailureError, match="ghost"):
        binding.remapped({"b0": "x"})
