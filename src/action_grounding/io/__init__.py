"""Import utilities used for input/output: logging, YAML, and configuration schemata."""

from .logging import configure_logging as configure_logging
from .logging import console as console
from .yaml_utils import export_yaml_data as export_yaml_data
from .yaml_utils import load_yaml_data as load_yaml_data
