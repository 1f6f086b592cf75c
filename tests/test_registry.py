"""
Test Suite for the Registry

Tests:
- Process-wide default factories and member defaults
- Precedence of instance registrations over defaults
- FactoryRegistry lookups (exact, generic origin, parent)
- SynthesisResolver built-in rules
"""

from enum import Enum
from typing import Dict, List, Literal, Union

import pytest

from anondata import (
    AnonymousData,
    register_default,
    register_default_member,
    reset_defaults,
)
from anondata.registry import (
    DEFAULT_REGISTRY,
    SHAPE_RULES,
    SYNTHESIS_RULES,
    FactoryRegistry,
    SynthesisResolver,
)


class Widget:
    label: str
    size: int


class Level(Enum):
    LOW = "low"
    HIGH = "high"


@pytest.fixture(autouse=True)
def clean_defaults():
    reset_defaults()
    yield
    reset_defaults()


class TestDefaultFactories:
    """Test process-wide defaults"""

    def test_default_factory_reaches_new_engines(self):
        register_default(int, lambda a: 7)

        assert AnonymousData(seed=1).any(int) == 7
        assert AnonymousData(seed=2).any(int) == 7

    def test_engine_exposes_default_registration(self):
        AnonymousData.register_default(str, lambda a: "shared")

        assert AnonymousData().any(str) == "shared"

    def test_instance_factory_beats_default(self):
        register_default(int, lambda a: 7)
        anon = AnonymousData(seed=1)
        anon.register(int, lambda a: 8)

        assert anon.any(int) == 8

    def test_frozen_value_beats_default(self):
        register_default(int, lambda a: 7)
        anon = AnonymousData(seed=1)
        anon.freeze(9)

        assert anon.any(int) == 9

    def test_reset_defaults(self):
        register_default(int, lambda a: 7)
        reset_defaults()

        assert AnonymousData(seed=1).any(int) != 7

    def test_default_member(self):
        register_default_member(Widget, "label", lambda a: "default-label")

        widget = AnonymousData(seed=1).any(Widget)

        assert widget.label == "default-label"
        assert isinstance(widget.size, int)

    def test_instance_member_beats_default_member(self):
        register_default_member(Widget, "label", lambda a: "default-label")
        anon = AnonymousData(seed=1)
        anon.register_member(Widget, "label", lambda a: "instance-label")

        assert anon.any(Widget).label == "instance-label"

    def test_default_member_unknown(self):
        with pytest.raises(ValueError):
            register_default_member(Widget, "colour", lambda a: "red")

    def test_default_member_requires_class(self):
        with pytest.raises(ValueError):
            register_default_member("Widget", "label", lambda a: "x")


class TestFactoryRegistry:
    """Test registry lookups"""

    @pytest.fixture
    def parent(self):
        registry = FactoryRegistry()
        registry.register(int, lambda a: "parent-int")
        registry.register(dict, lambda a: "parent-dict")
        return registry

    @pytest.fixture
    def registry(self, parent):
        return FactoryRegistry(parent=parent)

    def test_exact_lookup(self, registry):
        registry.register(str, lambda a: "str")

        assert registry.factory_for(str)(None) == "str"

    def test_generic_origin_lookup(self, registry):
        registry.register(list, lambda a: "list")

        assert registry.factory_for(List[int])(None) == "list"

    def test_parent_fallthrough(self, registry):
        assert registry.factory_for(int)(None) == "parent-int"
        assert registry.factory_for(Dict[str, int])(None) == "parent-dict"
        assert registry.factory_for(float) is None

    def test_local_shadows_parent(self, registry):
        registry.register(int, lambda a: "local-int")

        assert registry.factory_for(int)(None) == "local-int"

    def test_frozen(self, registry):
        registry.freeze(str, "value")

        assert registry.frozen(str) == (True, "value")
        assert registry.frozen(int) == (False, None)

    def test_frozen_none_value(self, registry):
        registry.freeze(type(None), None)

        assert registry.frozen(type(None)) == (True, None)

    def test_unhashable_descriptor(self, registry):
        assert registry.frozen([int]) == (False, None)
        assert registry.factory_for([int]) is None

    def test_member_lookup(self, registry, parent):
        parent.register_member(Widget, "size", lambda a: 3)

        assert registry.member_factory_for(Widget, "size")(None) == 3
        assert registry.member_factory_for(Widget, "label") is None

    def test_clear(self, registry):
        registry.register(str, lambda a: "str")
        registry.freeze(int, 1)
        registry.clear()

        assert registry.frozen(int) == (False, None)
        assert registry.factory_for(str) is None

    def test_default_registry_is_shared(self):
        register_default(float, lambda a: 1.5)

        assert DEFAULT_REGISTRY.factory_for(float)(None) == 1.5


class TestSynthesisResolver:
    """Test built-in rules"""

    @pytest.fixture
    def resolver(self):
        return SynthesisResolver(SYNTHESIS_RULES, SHAPE_RULES)

    @pytest.mark.parametrize("descriptor", [
        int, str, bool, float, Level, Union[int, str], Literal["a"], List[int], Dict[str, int],
    ])
    def test_resolves_builtin_descriptors(self, resolver, descriptor):
        assert resolver.resolve(descriptor) is not None

    def test_plain_class_is_not_resolved(self, resolver):
        assert resolver.resolve(Widget) is None

    def test_resolved_function_produces_value(self, resolver):
        anon = AnonymousData(seed=4)
        func = resolver.resolve(Level)

        assert func(anon, Level, None) in set(Level)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
