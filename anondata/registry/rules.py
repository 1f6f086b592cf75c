from dataclasses import dataclass
from typing import Any, Callable


@dataclass
class SynthesisRule:
    target: Any
    func: Callable  # func(anon) -> value


@dataclass
class ShapeRule:
    name: str
    matches: Callable  # matches(descriptor) -> bool
    func: Callable  # func(anon, descriptor, option) -> value


@dataclass
class MemberRule:
    declaring_type: type
    member: str
    func: Callable  # func(anon) -> value
