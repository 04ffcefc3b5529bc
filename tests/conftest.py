"""Pytest fixtures for token registry tests."""

from __future__ import annotations

from typing import Iterator

import pytest

from token_registry import config
from token_registry.world.events import EventLog, RegistryEvent
from token_registry.world.ownership import InMemoryOwnershipLedger
from token_registry.world.registry import TokenRegistry

DEPLOYER = "deployer"
ALICE = "alice"
BOB = "bob"


@pytest.fixture(autouse=True)
def fresh_config() -> Iterator[None]:
    """Each test starts with no cached config."""
    config.reset_config()
    yield
    config.reset_config()


@pytest.fixture
def ledger() -> InMemoryOwnershipLedger:
    """Create a fresh in-memory ownership ledger."""
    return InMemoryOwnershipLedger()


@pytest.fixture
def event_log() -> EventLog:
    return EventLog()


@pytest.fixture
def registry(ledger: InMemoryOwnershipLedger, event_log: EventLog) -> TokenRegistry:
    """Create an empty registry owned by DEPLOYER."""
    return TokenRegistry(
        "Test Collection", "TST", owner=DEPLOYER, ledger=ledger, event_log=event_log
    )


@pytest.fixture
def registry_with_tokens(registry: TokenRegistry) -> TokenRegistry:
    """Registry with token 1 (alice, 100) and token 2 (bob, 50)."""
    registry.mint(DEPLOYER, "ipfs://a", ALICE, 100)
    registry.mint(DEPLOYER, "ipfs://b", BOB, 50)
    return registry


@pytest.fixture
def captured(event_log: EventLog) -> list[RegistryEvent]:
    """Events delivered to a subscriber, in order."""
    received: list[RegistryEvent] = []
    event_log.subscribe(received.append)
    return received
