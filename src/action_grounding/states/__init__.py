"""Import classes used to represent object-oriented environment states."""

from .object_instance import ObjectInstance as ObjectInstance
from .oo_state import OOState as OOState
