"""Tests for scripts/view_log.py replay and summary output."""

from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "scripts"))

from view_log import load_events, replay_worlds, summarize

from world_oracle.registry import EventLogger, ImageSourcePool, NotOwnerError, WorldRegistry
from tests.testing_utils import (
    DEPLOYER,
    GENERAL_SOURCE,
    PROVIDER_BASE,
    RECEIVER,
    FixedEntropy,
    VirtualClock,
)


@pytest.fixture
def log_file(tmp_path: Path) -> Path:
    """A log produced by a short registry session."""
    path = tmp_path / "registry.jsonl"
    registry = WorldRegistry(
        DEPLOYER,
        ImageSourcePool(GENERAL_SOURCE, PROVIDER_BASE),
        clock=VirtualClock(),
        entropy=FixedEntropy(),
        event_logger=EventLogger(output_file=str(path)),
    )
    registry.create(DEPLOYER, "myworld", "mainNode1", 1)
    registry.create(DEPLOYER, "second", "node", 2)
    registry.update(DEPLOYER, 1, 100, "new-node.io/v1")
    registry.transfer(DEPLOYER, 1, RECEIVER)
    registry.change_world_image(DEPLOYER, 2, "QmCurated")
    with pytest.raises(NotOwnerError):
        registry.update(DEPLOYER, 1, 2, "change")
    return path


class TestViewLog:
    def test_replay_matches_registry(self, log_file: Path) -> None:
        worlds = replay_worlds(load_events(str(log_file)))

        assert worlds[1]["owner"] == RECEIVER
        assert worlds[1]["chain_id"] == 100
        assert worlds[1]["endpoint"] == "new-node.io/v1"
        assert worlds[1]["version"] == 1
        assert worlds[2]["image_ref"] == "QmCurated"

    def test_summary(self, log_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        summarize(load_events(str(log_file)))
        out = capsys.readouterr().out

        assert "REGISTRY SUMMARY" in out
        assert "not_owner: 1" in out
        assert "Worlds: 2 (0 special)" in out
