"""pytest configuration and shared fixtures."""

import pytest

from parse_register import ConverterRegistry, primitives


@pytest.fixture
def registry():
    """Registry pre-populated with the primitive set."""
    return primitives()


@pytest.fixture
def empty_registry():
    """Registry with nothing registered."""
    return ConverterRegistry()
