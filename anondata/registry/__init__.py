"""
Registry Module

- Rules: built-in descriptor → synthesizer mapping and member overrides
- Registry: frozen values, type factories and process-wide defaults
- Resolver: finds the built-in synthesizer for a descriptor
"""

from .rules import SynthesisRule, ShapeRule, MemberRule
from .registry import (
    SYNTHESIS_RULES,
    SHAPE_RULES,
    DEFAULT_REGISTRY,
    FactoryRegistry,
    register_default,
    register_default_member,
    reset_defaults,
)
from .resolver import SynthesisResolver

__all__ = [
    "SynthesisRule",
    "ShapeRule",
    "MemberRule",
    "SYNTHESIS_RULES",
    "SHAPE_RULES",
    "DEFAULT_REGISTRY",
    "FactoryRegistry",
    "register_default",
    "register_default_member",
    "reset_defaults",
    "SynthesisResolver",
]
