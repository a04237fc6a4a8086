"""Define a class to represent the state of an object-oriented environment."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Iterator, KeysView, Mapping

from action_grounding.io.schemata import StateSchema
from action_grounding.states.object_instance import ObjectInstance

if TYPE_CHECKING:
    from pathlib import Path


class OOState:
    """An immutable collection of named object instances."""

    def __init__(self, objects: Iterable[ObjectInstance]) -> None:
        """Initialize the state from its object instances.

        :raises ValueError: If two objects share a name
        """
        self._objects: dict[str, ObjectInstance] = {}
        for obj in objects:
            if obj.name in self._objects:
                raise ValueError(f"Duplicate object name in state: '{obj.name}'.")
            self._objects[obj.name] = obj

    def __eq__(self, other: object) -> bool:
        """Evaluate whether this state and another contain identical objects."""
        if not isinstance(other, OOState):
            return NotImplemented

        return self._objects == other._objects

    def __hash__(self) -> int:
        """Compute a hash value for the state."""
        return hash(frozenset(self._objects.values()))

    def __iter__(self) -> Iterator[ObjectInstance]:
        """Iterate over the objects in the state in insertion order."""
        yield from self._objects.values()

    def __len__(self) -> int:
        """Return the number of objects in the state."""
        return len(self._objects)

    def __contains__(self, obj_name: object) -> bool:
        """Evaluate whether an object with the given name exists in the state."""
        return obj_name in self._objects

    def __repr__(self) -> str:
        """Return a readable string representation of the state."""
        objects = "\n\t".join(repr(obj) for obj in self._objects.values())
        return f"OOState(\n\t{objects}\n)"

    @classmethod
    def from_yaml_data(cls, data: Mapping[str, Any]) -> OOState:
        """Construct a state from YAML data of the form `{objects: {name: {class, values}}}`."""
        schema = StateSchema.model_validate(data)
        return OOState(
            ObjectInstance(obj_name, obj_schema.object_class, obj_schema.values)
            for obj_name, obj_schema in schema.objects.items()
        )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> OOState:
        """Construct a state using data loaded from the given YAML file."""
        schema = StateSchema.validate_yaml(yaml_path)
        return OOState(
            ObjectInstance(obj_name, obj_schema.object_class, obj_schema.values)
            for obj_name, obj_schema in schema.objects.items()
        )

    def to_yaml_data(self) -> dict[str, Any]:
        """Convert the state into YAML data accepted by `from_yaml_data`."""
        return {
            "objects": {
                obj.name: {"class": obj.object_class, "values": obj.attributes} for obj in self
            },
        }

    @property
    def object_names(self) -> KeysView[str]:
        """Retrieve the names of all objects in the state."""
        return self._objects.keys()

    @property
    def object_classes(self) -> set[str]:
        """Retrieve the set of object classes present in the state."""
        return {obj.object_class for obj in self._objects.values()}

    def get_object(self, obj_name: str) -> ObjectInstance:
        """Retrieve the named object.

        :raises KeyError: If no object in the state has the given name
        """
        if obj_name not in self._objects:
            raise KeyError(f"Unknown object in state: '{obj_name}'.")
        return self._objects[obj_name]

    def objects_of_class(self, object_class: str) -> list[ObjectInstance]:
        """Retrieve all objects of the given class, in insertion order."""
        return [obj for obj in self._objects.values() if obj.object_class == object_class]

    def with_object(self, obj: ObjectInstance) -> OOState:
        """Create a copy of the state in which the given object is added or replaced."""
        return OOState({**self._objects, obj.name: obj}.values())

    def with_values(self, obj_name: str, **updates: Any) -> OOState:
        """Create a copy of the state with some attribute values of the named object replaced."""
        return self.with_object(self.get_object(obj_name).with_values(**updates))

    def is_reference(self, value: Any) -> bool:
        """Evaluate whether an attribute value refers to an object in this state by name."""
        return isinstance(value, str) and value in self._objects

    def renamed_objects(self, mapping: Mapping[str, str]) -> OOState:
        """Create a copy of the state with objects renamed (unmapped names are kept).

        Attribute values that refer to renamed objects are updated to the new names.
        """
        renamed: list[ObjectInstance] = []
        for obj in self:
            values = {
                attr: (mapping.get(v, v) if self.is_reference(v) else v)
                for attr, v in obj.attributes.items()
            }
            renamed.append(obj.renamed(mapping.get(obj.name, obj.name)).with_values(**values))

        return OOState(renamed)
