"""Define translators that find object correspondences between two object-oriented states.

Two objects correspond if they share a class and have identical attribute values, where
attribute values that name other objects (references) must themselves correspond. The
search backtracks over candidate targets, trying the most-constrained source objects first
and preferring targets with the same name, so matching a state against itself always
yields the identity mapping.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from action_grounding.errors import TranslationFailureError

if TYPE_CHECKING:
    from action_grounding.states import ObjectInstance, OOState

logger = logging.getLogger(__name__)

ObjectMatching = dict[str, str]
"""A map from object names in a source state to object names in a target state."""


class ParameterTranslator(Protocol):
    """A protocol for finding object correspondences used to translate action parameters."""

    def match_objects(self, source: OOState, target: OOState) -> ObjectMatching:
        """Find a correspondence from the objects of the source state to the target state.

        :param source: State whose object names are mapped from
        :param target: State whose object names are mapped to
        :return: Injective map from source object names to target object names
        :raises TranslationFailureError: If no consistent correspondence exists
        """
        ...


class ObjectMatchingTranslator:
    """Matches objects between states by class and attribute values."""

    def __init__(self, require_exact: bool = True) -> None:
        """Initialize the translator.

        :param require_exact: If True, the states must contain the same number of objects;
            otherwise the source state may be matched into a larger target state
        """
        self.require_exact = require_exact

    def match_objects(self, source: OOState, target: OOState) -> ObjectMatching:
        """Find a correspondence from the objects of the source state to the target state.

        :raises TranslationFailureError: If no consistent correspondence exists
        """
        if self.require_exact and len(source) != len(target):
            raise TranslationFailureError(
                f"Cannot exactly match a state of {len(source)} objects "
                f"to a state of {len(target)} objects.",
            )

        candidates: dict[str, list[str]] = {}
        for s_obj in source:
            matches = [
                t_obj.name
                for t_obj in target.objects_of_class(s_obj.object_class)
                if _locally_compatible(s_obj, source, t_obj, target)
            ]
            if not matches:
                raise TranslationFailureError(f"No object in the target matches '{s_obj.name}'.")

            matches.sort(key=lambda t_name, s_name=s_obj.name: t_name != s_name)
            candidates[s_obj.name] = matches

        order = sorted(candidates, key=lambda name: len(candidates[name]))
        matching = _search(order, candidates, {}, source, target)
        if matching is None:
            raise TranslationFailureError("No consistent object matching exists between states.")

        logger.debug("Matched objects between states: %s", matching)
        return matching


def _locally_compatible(
    s_obj: ObjectInstance,
    source: OOState,
    t_obj: ObjectInstance,
    target: OOState,
) -> bool:
    """Evaluate whether two objects match, ignoring which objects their references point to."""
    s_values = s_obj.attributes
    t_values = t_obj.attributes
    if s_values.keys() != t_values.keys():
        return False

    for attr, s_value in s_values.items():
        t_value = t_values[attr]
        s_ref = source.is_reference(s_value)
        if s_ref != target.is_reference(t_value):
            return False
        if not s_ref and s_value != t_value:
            return False

    return True


def _references_consistent(matching: ObjectMatching, source: OOState, target: OOState) -> bool:
    """Evaluate whether every reference between matched objects is preserved by the matching."""
    for s_name, t_name in matching.items():
        t_obj = target.get_object(t_name)
        for attr, s_value in source.get_object(s_name).attributes.items():
            if s_value not in matching or not source.is_reference(s_value):
                continue
            if matching[s_value] != t_obj.value(attr):
                return False

    return True


def _search(
    order: list[str],
    candidates: dict[str, list[str]],
    matching: ObjectMatching,
    source: OOState,
    target: OOState,
) -> ObjectMatching | None:
    """Extend a partial matching to all source objects using depth-first backtracking."""
    if len(matching) == len(order):
        return dict(matching)

    s_name = order[len(matching)]
    used = set(matching.values())

    for t_name in candidates[s_name]:
        if t_name in used:
            continue

        matching[s_name] = t_name
        if _references_consistent(matching, source, target):
            result = _search(order, candidates, matching, source, target)
            if result is not None:
                return result
        del matching[s_name]

    return None
