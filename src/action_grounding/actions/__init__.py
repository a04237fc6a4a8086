"""Import classes used to define action schemas and ground them into concrete actions."""

from .action_schema import ActionSchema as ActionSchema
from .action_schema import FullActionModel as FullActionModel
from .action_schema import ObjectParameterizedActionSchema as ObjectParameterizedActionSchema
from .action_schema import SimpleActionSchema as SimpleActionSchema
from .action_schema import TransitionModel as TransitionModel
from .action_space import ActionSpace as ActionSpace
from .bindings import Binding as Binding
from .bindings import ObjectParameters as ObjectParameters
from .bindings import Unparameterized as Unparameterized
from .grounded_action import GroundedAction as GroundedAction
from .transitions import TransitionProbability as TransitionProbability
from .transitions import deterministic_transition as deterministic_transition
from .transitions import is_distribution as is_distribution
from .transitions import nonzero as nonzero
from .transitions import sample_transition as sample_transition
