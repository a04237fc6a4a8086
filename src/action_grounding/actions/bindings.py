"""Define the possible shapes of parameter bindings held by grounded actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence, Union

from action_grounding.errors import TranslationFailureError


@dataclass(frozen=True)
class Unparameterized:
    """The binding of a grounded action whose schema takes no parameters."""

    def as_strings(self) -> tuple[str, ...]:
        """Encode the (empty) binding as a tuple of strings."""
        return ()


@dataclass(frozen=True)
class ObjectParameters:
    """Object identifiers bound to the parameters of an object-parameterized schema."""

    object_names: tuple[str, ...]
    """Names of the bound objects, ordered to match the schema's parameters."""

    @classmethod
    def from_sequence(cls, names: Sequence[str]) -> ObjectParameters:
        """Construct the binding from any sequence of object names."""
        return ObjectParameters(tuple(names))

    def __len__(self) -> int:
        """Return the number of bound objects."""
        return len(self.object_names)

    def as_strings(self) -> tuple[str, ...]:
        """Encode the binding as a tuple of object names."""
        return self.object_names

    def remapped(self, matching: Mapping[str, str]) -> ObjectParameters:
        """Replace each bound object name using the given object correspondence.

        :param matching: Map from source object names to target object names
        :return: New binding referencing the corresponding target objects
        :raises TranslationFailureError: If a bound object has no counterpart in the matching
        """
        missing = [name for name in self.object_names if name not in matching]
        if missing:
            raise TranslationFailureError(f"No corresponding target object for: {missing}.")

        return ObjectParameters(tuple(matching[name] for name in self.object_names))


Binding = Union[Unparameterized, ObjectParameters]
"""Any parameter binding a grounded action can carry."""
