"""Define utility functions for importing and exporting states and configs as YAML."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def export_yaml_data(data: dict[str, Any] | list[Any], filepath: Path) -> None:
    """Write the given data to a YAML file, creating parent folders as needed."""
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with filepath.open("w") as file:
        yaml.safe_dump(data, file, sort_keys=False, default_flow_style=False)


def load_yaml_data(yaml_path: Path, required_keys: set[str] | None = None) -> Any:
    """Load data from a YAML file into Python data structures.

    :param yaml_path: Path to the YAML file to be imported
    :param required_keys: Top-level keys the loaded mapping must contain (if None, ignored)
    :return: Loaded data (typically a dictionary mapping strings to values)
    :raises FileNotFoundError: If the YAML file doesn't exist
    :raises RuntimeError: If the file isn't valid YAML
    :raises KeyError: If required keys are given and any are missing from the loaded data
    """
    if not yaml_path.exists():
        raise FileNotFoundError(f"Cannot load data from nonexistent YAML file: {yaml_path}")

    try:
        with yaml_path.open() as yaml_file:
            yaml_data = yaml.safe_load(yaml_file)
    except yaml.YAMLError as error:
        raise RuntimeError(f"Failed to load from YAML file: {yaml_path}") from error

    if required_keys:
        found_keys = set(yaml_data) if isinstance(yaml_data, dict) else set()
        missing = sorted(required_keys - found_keys)
        if missing:
            raise KeyError(f"Required keys {missing} were missing in data loaded from {yaml_path}")

    return yaml_data
