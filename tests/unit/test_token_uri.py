"""Unit tests for TokenURIResolver."""

import pytest

from world_oracle.registry import (
    ImageSourcePool,
    NotFoundError,
    TokenURIResolver,
    WorldRegistry,
)
from tests.testing_utils import DEPLOYER, GENERAL_SOURCE, FixedEntropy, VirtualClock


class TestResolve:
    def test_general_image_uri(self, registry: WorldRegistry, resolver: TokenURIResolver) -> None:
        registry.create(DEPLOYER, "myworld", "mainNode1", 1)
        assert resolver.resolve(1) == "https://ipfs.io/" + GENERAL_SOURCE

    def test_uri_follows_image_override(
        self, registry: WorldRegistry, resolver: TokenURIResolver
    ) -> None:
        registry.create(DEPLOYER, "myworld", "mainNode1", 1)
        registry.change_world_image(DEPLOYER, 1, "QmCurated")
        assert resolver.resolve(1) == "https://ipfs.io/QmCurated"

    def test_special_image_uri(self, clock: VirtualClock) -> None:
        pool = ImageSourcePool(GENERAL_SOURCE, "ipfs://", special_sources=["QmSpecial"])
        registry = WorldRegistry(DEPLOYER, pool, clock=clock, entropy=FixedEntropy(values=[0]))
        registry.create(DEPLOYER, "lucky", "node", 1)

        assert TokenURIResolver(registry).resolve(1) == "ipfs://QmSpecial"

    def test_plain_concatenation(self, clock: VirtualClock, entropy: FixedEntropy) -> None:
        """No separator is inserted between base and reference."""
        pool = ImageSourcePool(GENERAL_SOURCE, "https://gateway.example/ipfs")
        registry = WorldRegistry(DEPLOYER, pool, clock=clock, entropy=entropy)
        registry.create(DEPLOYER, "myworld", "node", 1)

        uri = TokenURIResolver(registry).resolve(1)
        assert uri == "https://gateway.example/ipfs" + GENERAL_SOURCE

    def test_unknown_world(self, resolver: TokenURIResolver) -> None:
        with pytest.raises(NotFoundError):
            resolver.resolve(1)

    def test_unchanged_by_update_and_transfer(
        self, registry: WorldRegistry, resolver: TokenURIResolver
    ) -> None:
        registry.create(DEPLOYER, "myworld", "mainNode1", 1)
        before = resolver.resolve(1)
        registry.update(DEPLOYER, 1, chain_id=9, endpoint="moved")
        registry.transfer(DEPLOYER, 1, "0xOther")
        assert resolver.resolve(1) == before
