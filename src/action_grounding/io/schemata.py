"""Define Pydantic models for validating state and run configuration YAML files."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from action_grounding.io.yaml_utils import load_yaml_data

AttributeValue = Union[bool, int, float, str, None]
"""A scalar attribute value that can be stored on an object instance."""

# =============================================================================
# State Schemata
# =============================================================================


class ObjectSchema(BaseModel):
    """Schema for a single object instance within a state."""

    object_class: str = Field(alias="class", min_length=1)
    values: Dict[str, AttributeValue] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class StateSchema(BaseModel):
    """Schema for an object-oriented state: a map from object names to objects."""

    objects: Dict[str, ObjectSchema]

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def validate_yaml(cls, yaml_path: Path) -> StateSchema:
        """Validate a state YAML file and return the resulting schema.

        :param yaml_path: Path to a YAML file to be validated by the schema
        :return: Validated StateSchema instance
        """
        yaml_data = load_yaml_data(yaml_path)

        try:
            return StateSchema.model_validate(yaml_data)
        except ValidationError as v_err:
            raise RuntimeError(f"Validation error in {yaml_path}: {v_err}") from v_err


# =============================================================================
# Run Configuration Schemata
# =============================================================================

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class RunConfigSchema(BaseModel):
    """Schema for a sequence of grounded actions run in a simulated environment."""

    domain: str
    state: Path
    """Path to the initial state (relative paths resolve against the config file)."""

    actions: List[str] = Field(default_factory=list)
    """Grounded actions to execute in order, e.g. "stack(b0, b1)"."""

    seed: Optional[int] = None
    log_level: LogLevel = "INFO"

    model_config = ConfigDict(extra="forbid")

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, value: object) -> object:
        """Accept log levels regardless of case."""
        return value.upper() if isinstance(value, str) else value

    @classmethod
    def validate_yaml(cls, yaml_path: Path) -> RunConfigSchema:
        """Validate a run config YAML file and resolve its state path.

        :param yaml_path: Path to a YAML file to be validated by the schema
        :return: Validated RunConfigSchema instance
        """
        yaml_data = load_yaml_data(yaml_path, required_keys={"domain", "state"})

        try:
            config = RunConfigSchema.model_validate(yaml_data)
        except ValidationError as v_err:
            raise RuntimeError(f"Validation error in {yaml_path}: {v_err}") from v_err

        if not config.state.is_absolute():
            config = config.model_copy(update={"state": yaml_path.parent / config.state})

        return config
