"""
Customization Chain

Pluggable strategies consulted before the built-in synthesizers:
- A strategy is a Customization subclass or a plain callable(context)
- Each returns (handled, value) or defers via context.call_next_customization()
- The most recently added strategy runs first
- The end of the chain is the built-in fallback (synthesizer or populator)
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Tuple, Union

from .base import AnonymousDataBase
from .exceptions import AnonymousDataError

logger = logging.getLogger(__name__)

Outcome = Tuple[bool, Any]


class Customization(ABC):
    """Base class for strategies that can satisfy a request"""

    @abstractmethod
    def create(self, context: "AnonymousDataContext") -> Outcome:
        """
        Try to satisfy context.result_type

        Args:
            context: Request context; call context.call_next_customization()
                     to defer to the rest of the chain

        Returns:
            (True, value) when handled, otherwise (False, None)
        """


Strategy = Union[Customization, Callable[["AnonymousDataContext"], Outcome]]


class AnonymousDataContext(AnonymousDataBase):
    """
    View of the engine handed to a customization

    Exposes the requested type and population option, the full synthesizer
    surface (sharing the engine's random source), and the continuation into
    the remaining chain.
    """

    def __init__(self, engine, result_type: Any, population, next_outcome: Callable[[], Outcome]):
        self.engine = engine
        self.result_type = result_type
        self.population = population
        self._next_outcome = next_outcome

    @property
    def random(self):
        return self.engine.random

    @property
    def config(self):
        return self.engine.config

    @property
    def faker(self):
        return self.engine.faker

    def any(self, type_: Any, option=None) -> Any:
        return self.engine.any(type_, option)

    def call_next_customization(self) -> Outcome:
        """Outcome of the remaining chain, ending with the built-in fallback"""
        return self._next_outcome()


def _invoke(strategy: Strategy, context: AnonymousDataContext) -> Outcome:
    if isinstance(strategy, Customization):
        outcome = strategy.create(context)
    else:
        outcome = strategy(context)

    if not isinstance(outcome, tuple) or len(outcome) != 2:
        raise AnonymousDataError(
            f"Customization {strategy!r} must return a (handled, value) tuple, got {outcome!r}"
        )

    handled, value = outcome
    return bool(handled), value


class CustomizationChain:
    """Ordered strategies; last added is tried first"""

    def __init__(self):
        self._strategies: List[Strategy] = []

    def __len__(self) -> int:
        return len(self._strategies)

    def append(self, strategy: Strategy):
        if not isinstance(strategy, Customization) and not callable(strategy):
            raise ValueError(f"Customization must be a Customization or a callable, got {strategy!r}")
        self._strategies.append(strategy)
        logger.debug(f"Added customization {strategy!r}")

    def run(self, engine, result_type: Any, population, fallback: Callable[[], Outcome]) -> Outcome:
        """
        Walk the chain for one request

        Args:
            engine: Engine serving the request
            result_type: Requested type descriptor
            population: Population option of the request
            fallback: Built-in outcome once every strategy has deferred

        Returns:
            (handled, value)
        """
        strategies = list(self._strategies)

        def step(index: int) -> Outcome:
            if index < 0:
                return fallback()
            context = AnonymousDataContext(engine, result_type, population, lambda: step(index - 1))
            return _invoke(strategies[index], context)

        return step(len(strategies) - 1)
