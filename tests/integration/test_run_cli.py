"""Tests for the run.py scenario runner."""

import json
from pathlib import Path

import pytest

import run


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(
        "registry:\n"
        "  admin: deployer\n"
        "logging:\n"
        f"  output_file: {tmp_path / 'events.jsonl'}\n"
        f"  logs_dir: {tmp_path / 'logs'}\n"
        "  level: WARNING\n"
    )
    return path


class TestRunCli:
    def test_example_scenario(
        self, config_path: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = run.main(["config/scenarios/example.yaml", "--config", str(config_path)])

        out = capsys.readouterr().out
        assert code == 0
        assert "=== Operations ===" in out
        assert "(FAIL)" in out

        state = json.loads(out.split("=== Final State ===", 1)[1])
        assert state["world_count"] == 2
        assert state["worlds"][0]["owner"] == "bob"
        assert state["worlds"][0]["chain_id"] == 100
        assert (tmp_path / "events.jsonl").read_text().strip() != ""

    def test_quiet(self, config_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        run.main(["config/scenarios/example.yaml", "--config", str(config_path), "--quiet"])
        out = capsys.readouterr().out
        assert "=== Operations ===" not in out
        assert "=== Final State ===" in out

    def test_run_id_logs_to_run_dir(self, config_path: Path, tmp_path: Path) -> None:
        code = run.main([
            "config/scenarios/example.yaml",
            "--config", str(config_path),
            "--run-id", "run_test",
            "--quiet",
        ])
        assert code == 0
        assert (tmp_path / "logs" / "run_test" / "events.jsonl").exists()

    def test_missing_scenario(
        self, config_path: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = run.main([str(tmp_path / "nope.yaml"), "--config", str(config_path)])
        assert code == 2
        assert "Scenario file not found" in capsys.readouterr().err

    def test_invalid_config(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        bad = tmp_path / "bad.yaml"
        bad.write_text("special_selection:\n  odds: 0\n")
        code = run.main(["config/scenarios/example.yaml", "--config", str(bad)])
        assert code == 2


class TestRunCliOverrides:
    """Command-line and environment overrides of the config file."""

    @pytest.fixture
    def special_scenario(self, tmp_path: Path) -> Path:
        path = tmp_path / "special.yaml"
        path.write_text(
            "operations:\n"
            "  - op: add_special_source\n"
            "    caller: deployer\n"
            "    ref: QmSpecial\n"
            "  - op: create\n"
            "    caller: deployer\n"
            "    name: first\n"
            "    endpoint: node\n"
            "    chain_id: 1\n"
            "  - op: create\n"
            "    caller: deployer\n"
            "    name: second\n"
            "    endpoint: node\n"
            "    chain_id: 1\n"
        )
        return path

    def test_odds_and_cooldown_flags(
        self,
        config_path: Path,
        special_scenario: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = run.main([
            str(special_scenario),
            "--config", str(config_path),
            "--odds", "1",
            "--cooldown-seconds", "0",
            "--quiet",
        ])

        assert code == 0
        state = json.loads(capsys.readouterr().out.split("=== Final State ===", 1)[1])
        assert state["special_worlds_count"] == 2
        assert [w["image_ref"] for w in state["worlds"]] == ["QmSpecial", "QmSpecial"]

    def test_invalid_override_rejected(
        self, config_path: Path, special_scenario: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = run.main([str(special_scenario), "--config", str(config_path), "--odds", "0"])
        assert code == 2
        assert "odds" in capsys.readouterr().err

    def test_config_path_from_environment(
        self,
        config_path: Path,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        env_config = tmp_path / "env_config.yaml"
        env_config.write_text(
            config_path.read_text().replace("admin: deployer", "admin: env-admin")
        )
        monkeypatch.setenv("WORLD_ORACLE_CONFIG", str(env_config))

        code = run.main(["config/scenarios/example.yaml", "--quiet"])

        assert code == 0
        state = json.loads(capsys.readouterr().out.split("=== Final State ===", 1)[1])
        assert state["admin"] == "env-admin"
