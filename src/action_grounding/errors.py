"""Define the exceptions raised when grounding, executing, or translating actions."""

from __future__ import annotations


class GroundingError(Exception):
    """Base class for errors raised by grounded actions and their collaborators."""


class UnsupportedCapabilityError(GroundingError):
    """An error raised when an action schema lacks a requested capability."""

    def __init__(self, schema_name: str, capability: str) -> None:
        """Initialize the error using the offending schema's name and the missing capability."""
        super().__init__(
            f"Action schema '{schema_name}' does not support {capability}; "
            "choose a strategy that does not require it.",
        )
        self.schema_name = schema_name
        self.capability = capability


class MalformedParameterEncodingError(GroundingError, ValueError):
    """An error raised when string-encoded parameters don't match a schema's parameters."""


class TranslationFailureError(GroundingError):
    """An error raised when no consistent object mapping exists between two states."""
