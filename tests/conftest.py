"""Shared pytest fixtures for all tests."""

import pytest

from relay.host import (
    InMemoryBlockRegistry,
    InMemoryBroadcastChannel,
    SurfaceProviderBlock,
    TerminalBlock,
)
from relay.surfaces import SurfaceResolver


@pytest.fixture
def registry():
    """
    Create a block registry with a few surface providers.

    Returns:
        InMemoryBlockRegistry with Cockpit (3 surfaces), Screen1, Screen2
        and a Door block without surfaces
    """
    return InMemoryBlockRegistry([
        SurfaceProviderBlock.with_texts("Cockpit", "speed", "fuel", "oxygen"),
        SurfaceProviderBlock.with_texts("Screen1", ""),
        SurfaceProviderBlock.with_texts("Screen2", ""),
        TerminalBlock("Door"),
    ])


@pytest.fixture
def resolver(registry):
    """Surface resolver over the registry fixture."""
    return SurfaceResolver(registry)


@pytest.fixture
def channel():
    """Fresh in-memory broadcast channel."""
    return InMemoryBroadcastChannel()
