"""Define a class to represent a named, classed object within an object-oriented state."""

from __future__ import annotations

from typing import Any, Hashable, Mapping


class ObjectInstance(Hashable):
    """A named object belonging to an object class, described by attribute values."""

    def __init__(
        self,
        name: str,
        object_class: str,
        attributes: Mapping[str, Any] | None = None,
    ) -> None:
        """Initialize the object instance.

        :param name: Identifier of the object, unique within a state
        :param object_class: Name of the object's class (e.g., "block")
        :param attributes: Map from attribute names to (hashable) values
        """
        self._name = name
        self._object_class = object_class
        self._attributes: dict[str, Any] = dict(attributes or {})

    def _key(self) -> tuple:
        """Define a hash key to uniquely identify the object instance."""
        return (self.name, self.object_class, self.value_key())

    def __eq__(self, other: object) -> bool:
        """Evaluate whether this object instance and another are equal."""
        if not isinstance(other, ObjectInstance):
            return NotImplemented

        return self._key() == other._key()

    def __hash__(self) -> int:
        """Compute a hash value for the object instance."""
        return hash(self._key())

    def __repr__(self) -> str:
        """Return a readable string representation of the object instance."""
        values = ", ".join(f"{k}={v!r}" for k, v in sorted(self._attributes.items()))
        return f"{self.object_class} {self.name}({values})"

    @property
    def name(self) -> str:
        """Retrieve the name identifying the object within its state."""
        return self._name

    @property
    def object_class(self) -> str:
        """Retrieve the name of the object's class."""
        return self._object_class

    @property
    def attributes(self) -> dict[str, Any]:
        """Retrieve a copy of the object's attribute values."""
        return dict(self._attributes)

    def value_key(self) -> tuple:
        """Retrieve the object's attribute values in a name-independent, hashable form."""
        return tuple(sorted(self._attributes.items()))

    def value(self, attribute: str) -> Any:
        """Retrieve the value of the named attribute.

        :raises KeyError: If the object has no such attribute
        """
        if attribute not in self._attributes:
            raise KeyError(f"Object '{self.name}' has no attribute '{attribute}'.")
        return self._attributes[attribute]

    def with_values(self, **updates: Any) -> ObjectInstance:
        """Create a copy of the object with some attribute values replaced."""
        return ObjectInstance(self.name, self.object_class, {**self._attributes, **updates})

    def renamed(self, name: str) -> ObjectInstance:
        """Create a copy of the object under a different name."""
        return ObjectInstance(name, self.object_class, self._attributes)
