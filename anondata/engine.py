"""
Anonymous Data Engine

Produces a plausible instance of any type descriptor:

1. The engine itself, for the engine type or AnonymousDataBase
2. A frozen value for the exact descriptor
3. An instance factory, then a process-wide default factory
4. The customization chain (last added first)
5. A built-in synthesizer (numbers, text, temporal, enums, collections)
6. Construction and population of any other concrete class
"""

import logging
from typing import Any, Callable, Optional

from faker import Faker

from .base import AnonymousDataBase, PopulationOption
from .config import Config, get_default_config
from .customization import CustomizationChain, Outcome, Strategy
from .descriptors import generic_origin, is_abstract, unwrap
from .exceptions import UnsupportedTypeError
from .populator import ObjectPopulator
from .registry import (
    DEFAULT_REGISTRY,
    SHAPE_RULES,
    SYNTHESIS_RULES,
    FactoryRegistry,
    SynthesisResolver,
    register_default,
    register_default_member,
    reset_defaults,
)
from .utils import SeedManager

logger = logging.getLogger(__name__)

_RESOLVER = SynthesisResolver(SYNTHESIS_RULES, SHAPE_RULES)


class AnonymousData(AnonymousDataBase):
    """
    Anonymous data engine

    Owns a seeded random source, a Faker instance, an instance registry
    (backed by the process-wide defaults) and a customization chain. Not
    thread-safe; use one engine per test.
    """

    def __init__(self, seed: Optional[int] = None, config: Optional[Config] = None):
        """
        Initialize the engine

        Args:
            seed: Random seed (config generation.seed when None)
            config: Engine configuration (defaults when None)
        """
        self.config = config or get_default_config()
        self.seed = seed if seed is not None else self.config.generation.seed

        self.random = SeedManager(self.seed).create_generator()
        self.faker = Faker(self.config.pii.locale)
        self.faker.seed_instance(SeedManager.derive_seed(self.random))

        self.registry = FactoryRegistry(parent=DEFAULT_REGISTRY)
        self.customizations = CustomizationChain()
        self.populator = ObjectPopulator(self)

        logger.debug(f"AnonymousData created with seed {self.seed}")

    # Dispatch

    def _option(self, option) -> PopulationOption:
        if option is None:
            option = self.config.generation.population
        return PopulationOption.parse(option)

    def any(self, type_: Any, option=None) -> Any:
        """
        Produce a value of the given type descriptor

        Args:
            type_: Runtime type or typing construct
            option: PopulationOption (config default, SHALLOW, when None)

        Returns:
            A value of the requested type

        Raises:
            UnsupportedTypeError: Nothing can produce the type
            PopulationFailureError: Constructing or populating an instance failed
        """
        option = self._option(option)

        if isinstance(type_, type) and issubclass(type_, AnonymousDataBase) and isinstance(self, type_):
            return self

        descriptor = unwrap(type_)

        for key in (type_, descriptor):
            found, value = self.registry.frozen(key)
            if found:
                return value

        factory = self.registry.factory_for(type_)
        if factory is None and descriptor is not type_:
            factory = self.registry.factory_for(descriptor)
        if factory is not None:
            return factory(self)

        if len(self.customizations):
            handled, value = self.customizations.run(
                self, type_, option, lambda: self._fallback(type_, descriptor, option)
            )
            if handled:
                return value
            raise UnsupportedTypeError(type_)

        return self._synthesize(type_, descriptor, option)

    def _synthesize(self, type_: Any, descriptor: Any, option: PopulationOption) -> Any:
        func = _RESOLVER.resolve(descriptor)
        if func is not None:
            return func(self, descriptor, option)

        cls = descriptor if isinstance(descriptor, type) else generic_origin(descriptor)
        if not isinstance(cls, type) or is_abstract(cls):
            raise UnsupportedTypeError(type_)

        return self.populator.create(cls, option)

    def _fallback(self, type_: Any, descriptor: Any, option: PopulationOption) -> Outcome:
        """Built-in outcome at the end of the customization chain"""
        try:
            return True, self._synthesize(type_, descriptor, option)
        except UnsupportedTypeError as e:
            if e.type_ is type_ or e.type_ is descriptor:
                return False, None
            raise

    def populate(self, instance: Any, option=None) -> Any:
        """
        Fill the unset members of an existing instance

        Args:
            instance: Object to populate
            option: PopulationOption (config default when None)

        Returns:
            The same instance
        """
        return self.populator.populate(instance, self._option(option))

    # Registration

    def freeze(self, value: Any, as_type: Any = None) -> Any:
        """
        Return value for every later request of its type

        Args:
            value: The value to hand out
            as_type: Descriptor to freeze (type(value) when None)

        Returns:
            value
        """
        type_ = type(value) if as_type is None else as_type
        self.registry.freeze(type_, value)
        return value

    def register(self, type_: Any, factory: Callable[[Any], Any]):
        """Use factory(anon) for every request of type_ on this engine"""
        self.registry.register(type_, factory)

    def register_member(self, declaring_type: type, member: str, factory: Callable[[Any], Any]):
        """Use factory(anon) for one member while populating declaring_type"""
        self.registry.register_member(declaring_type, member, factory)

    def customize(self, strategy: Strategy):
        self.customizations.append(strategy)

    # Process-wide defaults

    register_default = staticmethod(register_default)
    register_default_member = staticmethod(register_default_member)
    reset_defaults = staticmethod(reset_defaults)
