"""
Data Synthesizers Module

Mixins that together form the synthesizer surface of the engine:
- Numeric: Booleans, integers, floating point and decimals
- Text: Characters by class, strings and bytes
- PII: Person names
- Temporal: Dates, times, intervals and timezones
- Categorical: Enumeration members and UUIDs
- Collections: Sequences, sets, mappings and custom enumerables
"""

from .base import GeneratorBase
from .numeric import NumericData
from .text import TextData, CharClass
from .pii import PersonData, NameComponents
from .temporal import TemporalData
from .categorical import CategoricalData
from .collections import CollectionData

__all__ = [
    "GeneratorBase",

    # Scalars
    "NumericData",
    "TextData",
    "CharClass",
    "PersonData",
    "NameComponents",
    "TemporalData",
    "CategoricalData",

    # Collections
    "CollectionData",
]
