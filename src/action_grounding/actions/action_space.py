"""Define a class representing the collection of action schemas available to an agent."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Iterable, Iterator

from action_grounding.errors import MalformedParameterEncodingError

if TYPE_CHECKING:
    from action_grounding.actions.action_schema import ActionSchema
    from action_grounding.actions.grounded_action import GroundedAction
    from action_grounding.states import OOState

GROUNDED_ACTION_REGEX = re.compile(r"^([\w-]+)(?:\(([^)]*)\))?$")
"""Matches grounded action strings such as "move-north", "move-north()", or "stack(b0, b1)"."""


class ActionSpace:
    """An inventory of action schemas, keyed by name."""

    def __init__(self, name: str, schemas: Iterable[ActionSchema]) -> None:
        """Initialize the action space using the given schemas.

        :raises ValueError: If two schemas share a name
        """
        self.name = name
        self.schemas: dict[str, ActionSchema] = {}
        """Map from schema names to ActionSchema instances."""

        for schema in schemas:
            if schema.name in self.schemas:
                raise ValueError(f"Duplicate action schema name: '{schema.name}'.")
            self.schemas[schema.name] = schema

    def __str__(self) -> str:
        """Create a readable string representation of the action space."""
        return f"{self.name}: {', '.join(sorted(self.schemas))}"

    def __iter__(self) -> Iterator[ActionSchema]:
        """Provide an iterator over the schemas in the action space."""
        yield from self.schemas.values()

    def __len__(self) -> int:
        """Return the number of schemas in the action space."""
        return len(self.schemas)

    def get_schema(self, schema_name: str) -> ActionSchema:
        """Retrieve the named schema from the action space."""
        if schema_name not in self.schemas:
            raise KeyError(f"Cannot retrieve action schema with unknown name: '{schema_name}'.")
        return self.schemas[schema_name]

    def all_applicable_grounded_actions(self, state: OOState) -> list[GroundedAction]:
        """Compute the applicable groundings of every schema in the given state."""
        return [
            action
            for schema in self.schemas.values()
            for action in schema.all_applicable_grounded_actions(state)
        ]

    def parse_grounded_action(self, string: str) -> GroundedAction:
        """Construct a grounded action from a string such as "stack(b0, b1)".

        :param string: String description of a grounded action
        :return: Grounded action of the named schema with the parsed parameters
        :raises MalformedParameterEncodingError: If the string or its parameters are malformed
        :raises KeyError: If the string names an unknown schema
        """
        match = GROUNDED_ACTION_REGEX.match(string.strip())
        if not match:
            raise MalformedParameterEncodingError(f"Could not parse grounded action: '{string}'.")

        schema = self.get_schema(match.group(1))

        args_string = (match.group(2) or "").strip()
        args = [arg.strip() for arg in args_string.split(",")] if args_string else []

        return schema.associated_grounded_action().with_string_parameters(args)
