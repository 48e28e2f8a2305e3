"""
Tests for per-type logging metadata.
"""

import pytest

from logtree.encoding.registry import (
    FieldOptions,
    TypeRegistry,
    embed,
    exclude,
    loggable,
    rename,
)


class TestTypeRegistry:
    """Test cases for TypeRegistry."""

    def test_unregistered(self, registry):
        assert registry.lookup(int) is None

    def test_string_option_renames(self, registry):
        class Thing:
            pass

        registry.register(Thing, fields={"host_name": "host"})
        assert registry.lookup(Thing).options_for("host_name") == rename("host")

    def test_invalid_option(self, registry):
        with pytest.raises(TypeError):
            registry.register(object, fields={"a": 1})

    def test_lookup_merges_bases(self, registry):
        """Test subclass options win over those of their bases."""

        class Base:
            pass

        class Child(Base):
            pass

        registry.register(Base, fields={"a": exclude(), "b": "bee"}, private=True)
        registry.register(Child, fields={"b": embed()})

        options = registry.lookup(Child)
        assert options.options_for("a").exclude
        assert options.options_for("b") == FieldOptions(embed=True)
        assert options.options_for("c") == FieldOptions()
        assert options.private

    def test_unregister(self, registry):
        class Thing:
            pass

        registry.register(Thing)
        registry.unregister(Thing)
        assert registry.lookup(Thing) is None


class TestLoggable:
    """Test cases for the loggable decorator."""

    def test_with_options(self):
        registry = TypeRegistry()

        @loggable(registry=registry)
        class WithArgs:
            pass

        assert registry.lookup(WithArgs) is not None

    def test_bare_uses_default_registry(self):
        from logtree.encoding.registry import default_registry

        @loggable
        class Bare:
            pass

        try:
            assert default_registry.lookup(Bare) is not None
        finally:
            default_registry.unregister(Bare)

    def test_attributes(self, registry):
        @loggable(attributes=["b", "a"], registry=registry)
        class Ordered:
            pass

        assert registry.lookup(Ordered).attributes == ("b", "a")
