"""Import classes defining environments that execute grounded actions."""

from .environment import Environment as Environment
from .environment import EnvironmentOutcome as EnvironmentOutcome
from .simulated_environment import SimulatedEnvironment as SimulatedEnvironment
