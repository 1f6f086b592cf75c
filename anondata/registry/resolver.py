import logging
from typing import Any, Callable, List, Optional

from .rules import ShapeRule, SynthesisRule

logger = logging.getLogger(__name__)


class SynthesisResolver:

    def __init__(self, rules: List[SynthesisRule], shape_rules: List[ShapeRule]):
        self.table = {rule.target: rule.func for rule in rules}
        self.shape_rules = shape_rules

    def resolve(self, descriptor: Any) -> Optional[Callable]:
        """Built-in synthesizer for a descriptor as func(anon, descriptor, option), or None"""
        try:
            func = self.table.get(descriptor)
        except TypeError:
            func = None

        if func is not None:
            return lambda anon, _descriptor, _option: func(anon)

        for rule in self.shape_rules:
            if rule.matches(descriptor):
                logger.debug(f"{descriptor!r} matched {rule.name} rule")
                return rule.func

        return None
