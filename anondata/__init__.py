"""
Anonymous Data Package

Produces plausible, non-null test values for any Python type: scalars,
enumerations, collections and whole object graphs, with pluggable
factories, customizations and distribution shapes.
"""

__version__ = "1.0.0"
__author__ = "Anonymous Data Team"

from .distribution import Distribution
from .descriptors import Char
from .exceptions import AnonymousDataError, UnsupportedTypeError, PopulationFailureError
from .config import Config, ConfigLoader, ConfigValidator, get_default_config
from .generators import CharClass
from .base import AnonymousDataBase, PopulationOption
from .customization import Customization, AnonymousDataContext
from .engine import AnonymousData
from .registry import register_default, register_default_member, reset_defaults
from .validation import Classifier, assess_distribution

__all__ = [
    "__version__",

    # Engine
    "AnonymousData",
    "AnonymousDataBase",
    "AnonymousDataContext",
    "Customization",
    "PopulationOption",
    "Distribution",
    "CharClass",
    "Char",

    # Process-wide defaults
    "register_default",
    "register_default_member",
    "reset_defaults",

    # Errors
    "AnonymousDataError",
    "UnsupportedTypeError",
    "PopulationFailureError",

    # Configuration
    "Config",
    "ConfigLoader",
    "ConfigValidator",
    "get_default_config",

    # Validation
    "Classifier",
    "assess_distribution",
]
