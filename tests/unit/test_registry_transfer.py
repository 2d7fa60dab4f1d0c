"""Unit tests for WorldRegistry.transfer."""

import pytest

from world_oracle.registry import (
    InvalidArgumentError,
    NotFoundError,
    NotOwnerError,
    WorldRegistry,
)
from tests.testing_utils import DEPLOYER, RECEIVER, SENDER


class TestTransferWorld:
    """Ownership handover."""

    def test_transfer_changes_owner(self, registry_with_world: WorldRegistry) -> None:
        registry_with_world.transfer(DEPLOYER, 1, RECEIVER)

        assert registry_with_world.get_by_name("myworld").owner == RECEIVER
        assert registry_with_world.owner_of(1) == RECEIVER

    def test_transfer_changes_only_owner(self, registry_with_world: WorldRegistry) -> None:
        before = registry_with_world.get_by_id(1)
        after = registry_with_world.transfer(DEPLOYER, 1, RECEIVER)

        assert after.evolve(owner=before.owner, updated_at=before.updated_at) == before

    def test_old_owner_loses_rights(self, registry_with_world: WorldRegistry) -> None:
        registry_with_world.transfer(DEPLOYER, 1, RECEIVER)

        with pytest.raises(NotOwnerError):
            registry_with_world.update(DEPLOYER, 1, chain_id=2, endpoint="x")
        with pytest.raises(NotOwnerError):
            registry_with_world.transfer(DEPLOYER, 1, SENDER)

    def test_new_owner_gains_rights(self, registry_with_world: WorldRegistry) -> None:
        """New owner may update even without being whitelisted."""
        registry_with_world.transfer(DEPLOYER, 1, RECEIVER)

        world = registry_with_world.update(RECEIVER, 1, chain_id=5, endpoint="receiver-node")
        assert world.chain_id == 5

        registry_with_world.transfer(RECEIVER, 1, SENDER)
        assert registry_with_world.owner_of(1) == SENDER

    def test_transfer_to_self(self, registry_with_world: WorldRegistry) -> None:
        world = registry_with_world.transfer(DEPLOYER, 1, DEPLOYER)
        assert world.owner == DEPLOYER

    def test_transfer_does_not_bump_version(self, registry_with_world: WorldRegistry) -> None:
        world = registry_with_world.transfer(DEPLOYER, 1, RECEIVER)
        assert world.version == 0


class TestTransferRejections:
    def test_non_owner_rejected(self, registry_with_world: WorldRegistry) -> None:
        with pytest.raises(NotOwnerError):
            registry_with_world.transfer(RECEIVER, 1, RECEIVER)
        assert registry_with_world.owner_of(1) == DEPLOYER

    def test_missing_world(self, registry: WorldRegistry) -> None:
        with pytest.raises(NotFoundError):
            registry.transfer(DEPLOYER, 7, RECEIVER)

    def test_empty_recipient(self, registry_with_world: WorldRegistry) -> None:
        with pytest.raises(InvalidArgumentError):
            registry_with_world.transfer(DEPLOYER, 1, "")
        assert registry_with_world.owner_of(1) == DEPLOYER
