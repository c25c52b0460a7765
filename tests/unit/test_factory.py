"""Tests for build_default_registry factory."""

import datetime

import pytest

from parse_register import (
    BUILTIN_CONVERTERS,
    Int8,
    ParseError,
    Ref,
    build_default_registry,
)
from tests.records import Endpoint, parse_endpoint


class TestBuildDefaultRegistry:
    """Test build_default_registry factory function."""

    def test_builds_working_registry(self):
        """Factory returns a registry with the primitive set."""
        registry = build_default_registry()
        timeout = Ref(datetime.timedelta)

        assert registry.set_value(timeout, "30s") is True
        assert timeout.value == datetime.timedelta(seconds=30)
        assert len(registry) == len(BUILTIN_CONVERTERS)

    def test_custom_converters_added(self):
        """Extra converters are registered alongside the primitives."""
        registry = build_default_registry(converters={Endpoint: parse_endpoint})
        endpoint = Endpoint()

        assert registry.set_value(endpoint, "example.org:443")
        assert endpoint.port == 443
        assert str in registry

    def test_custom_converters_override(self):
        """Caller converters win over primitives."""

        def upper(dst, src):
            dst.value = src.upper()

        registry = build_default_registry(converters={str: upper})
        dst = Ref(str)
        registry.set_value(dst, "abc")

        assert dst.value == "ABC"

    def test_without_primitives(self):
        """include_primitives=False starts from an empty registry."""
        registry = build_default_registry(include_primitives=False)

        assert len(registry) == 0
        assert registry.set_value(Ref(str), "x") is False

    def test_strict_option(self):
        """strict=True range-checks narrowing."""
        lenient = build_default_registry()
        strict = build_default_registry(strict=True)
        dst = Ref(Int8)

        lenient.set_value(dst, "200")
        assert dst.value == -56

        with pytest.raises(ParseError, match="value out of range"):
            strict.set_value(dst, "200")

    def test_calls_are_independent(self):
        first = build_default_registry()
        second = build_default_registry()
        first.register(Endpoint, parse_endpoint)

        assert Endpoint not in second
