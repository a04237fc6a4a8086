"""Import classes used to translate action parameters between object-oriented states."""

from .object_matching import ObjectMatching as ObjectMatching
from .object_matching import ObjectMatchingTranslator as ObjectMatchingTranslator
from .object_matching import ParameterTranslator as ParameterTranslator
