"""Pytest fixtures for world_oracle tests.

Common fixtures for building registries with deterministic time and
entropy.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from world_oracle import config as config_module
from world_oracle.registry import (
    EventLogger,
    ImageSourcePool,
    TokenURIResolver,
    WorldRegistry,
)
from tests.testing_utils import (
    DEPLOYER,
    GENERAL_SOURCE,
    PROVIDER_BASE,
    FixedEntropy,
    VirtualClock,
)


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "concurrency: mark test as exercising multi-threaded access"
    )


@pytest.fixture(autouse=True)
def _isolated_config() -> Iterator[None]:
    """Forget any globally loaded config between tests."""
    config_module.reset_config()
    yield
    config_module.reset_config()


@pytest.fixture
def clock() -> VirtualClock:
    """Virtual clock starting at a fixed, non-zero time."""
    return VirtualClock(_time=1_700_000_000.0)


@pytest.fixture
def entropy() -> FixedEntropy:
    """Entropy that never rolls special (default 1 with odds > 1)."""
    return FixedEntropy()


@pytest.fixture
def pool() -> ImageSourcePool:
    return ImageSourcePool(general_source=GENERAL_SOURCE, provider_base=PROVIDER_BASE)


@pytest.fixture
def registry(
    pool: ImageSourcePool, clock: VirtualClock, entropy: FixedEntropy
) -> WorldRegistry:
    """Empty registry administered by DEPLOYER."""
    return WorldRegistry(DEPLOYER, pool, clock=clock, entropy=entropy)


@pytest.fixture
def registry_with_world(registry: WorldRegistry) -> WorldRegistry:
    """Registry holding one world: ("myworld", "mainNode1", 1) owned by DEPLOYER."""
    registry.create(DEPLOYER, "myworld", "mainNode1", 1, contract_address=DEPLOYER)
    return registry


@pytest.fixture
def resolver(registry: WorldRegistry) -> TokenURIResolver:
    return TokenURIResolver(registry)


@pytest.fixture
def event_logger(tmp_path: Path) -> EventLogger:
    """Single-file event logger writing under tmp_path."""
    return EventLogger(output_file=str(tmp_path / "registry.jsonl"))
