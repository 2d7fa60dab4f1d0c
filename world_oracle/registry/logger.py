"""JSONL event logger - append-only audit trail of registry mutations"""

from __future__ import annotations

import json
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .types import World


class EventLogger:
    """Append-only JSONL event log with per-run directory support.

    Supports two modes:
    1. Per-run mode (run_id + logs_dir): Creates timestamped directories
       - logs/{run_id}/events.jsonl
       - logs/latest -> {run_id} (symlink)
    2. Single-file mode (output_file only): One file, cleared on start

    Every event carries a monotonic 'sequence' and a UTC 'timestamp'.
    """

    output_path: Path
    _logs_dir: Path | None
    _run_id: str | None
    _sequence: int

    def __init__(
        self,
        output_file: str = "registry.jsonl",
        logs_dir: str | None = None,
        run_id: str | None = None,
        default_recent: int = 50,
    ) -> None:
        """Initialize the event logger.

        Args:
            output_file: Single-file mode - file path
            logs_dir: Per-run mode - base directory for run logs
            run_id: Per-run mode - unique run identifier (e.g., run_20260115_120000)
            default_recent: Number of events read_recent returns when n is omitted
        """
        self._logs_dir = Path(logs_dir) if logs_dir else None
        self._run_id = run_id
        self._sequence = 0
        self._default_recent = default_recent

        if logs_dir and run_id:
            self._setup_per_run_logging()
        else:
            self._setup_single_file_logging(output_file)

    def _setup_per_run_logging(self) -> None:
        """Set up per-run directory logging."""
        if self._logs_dir is None or self._run_id is None:
            raise ValueError("Both logs_dir and run_id required for per-run mode")

        run_dir = self._logs_dir / self._run_id
        run_dir.mkdir(parents=True, exist_ok=True)

        self.output_path = run_dir / "events.jsonl"
        self.output_path.write_text("")

        # Point 'latest' at this run
        latest_link = self._logs_dir / "latest"
        if latest_link.is_symlink():
            latest_link.unlink()
        elif latest_link.exists():
            if latest_link.is_dir():
                shutil.rmtree(latest_link)
            else:
                latest_link.unlink()

        # Relative target for portability
        latest_link.symlink_to(self._run_id)

    def _setup_single_file_logging(self, output_file: str) -> None:
        """Set up single-file logging."""
        self.output_path = Path(output_file)
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.output_path.write_text("")

    def log(self, event_type: str, data: dict[str, Any]) -> None:
        """Append one event to the JSONL file."""
        self._sequence += 1
        event: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "sequence": self._sequence,
            "event_type": event_type,
            **data,
        }
        with open(self.output_path, "a") as f:
            f.write(json.dumps(event) + "\n")

    # ========== Registry event helpers ==========

    def log_registry_init(
        self,
        admin: str,
        general_source: str,
        provider_base: str,
        versioning: bool,
    ) -> None:
        self.log("registry_init", {
            "admin": admin,
            "general_source": general_source,
            "provider_base": provider_base,
            "versioning": versioning,
        })

    def log_world_created(self, caller: str, world: World) -> None:
        """Log a committed creation.

        Args:
            caller: Principal that created the world
            world: The committed record
        """
        self.log("world_created", {"caller": caller, "world": world.to_dict()})

    def log_world_updated(self, caller: str, before: World, after: World) -> None:
        """Log a committed update with the changed fields."""
        old = before.to_dict()
        new = after.to_dict()
        changes = {
            key: {"from": old.get(key), "to": value}
            for key, value in new.items()
            if key != "updated_at" and old.get(key) != value
        }
        self.log("world_updated", {
            "caller": caller,
            "world_id": after.id,
            "changes": changes,
        })

    def log_world_transferred(self, world_id: int, from_owner: str, to_owner: str) -> None:
        self.log("world_transferred", {
            "world_id": world_id,
            "from_owner": from_owner,
            "to_owner": to_owner,
        })

    def log_world_image_changed(
        self,
        caller: str,
        world_id: int,
        old_ref: str,
        new_ref: str,
    ) -> None:
        self.log("world_image_changed", {
            "caller": caller,
            "world_id": world_id,
            "from": old_ref,
            "to": new_ref,
        })

    def log_whitelist_added(self, caller: str, principal: str) -> None:
        self.log("whitelist_added", {"caller": caller, "principal": principal})

    def log_special_source_added(self, caller: str, index: int, ref: str) -> None:
        self.log("special_source_added", {"caller": caller, "index": index, "ref": ref})

    def log_rejected(self, operation: str, caller: str, response: dict[str, object]) -> None:
        """Log a rejected operation.

        Args:
            operation: Operation name (e.g., "create", "transfer")
            caller: Principal that attempted it
            response: The standardized error response
        """
        self.log("operation_rejected", {
            "operation": operation,
            "caller": caller,
            "error": response,
        })

    def read_recent(self, n: int | None = None) -> list[dict[str, Any]]:
        """Read the last N events from the log.

        N defaults to the default_recent given at construction.
        """
        if n is None:
            n = self._default_recent
        if not self.output_path.exists():
            return []
        lines = self.output_path.read_text().strip().split("\n")
        lines = [line for line in lines if line]
        recent = lines[-n:] if len(lines) > n else lines
        return [json.loads(line) for line in recent]

    @property
    def sequence(self) -> int:
        """Number of events written so far."""
        return self._sequence

    @property
    def run_id(self) -> str | None:
        """Return the run ID if in per-run mode."""
        return self._run_id

    @property
    def logs_dir(self) -> Path | None:
        """Return the logs directory if in per-run mode."""
        return self._logs_dir
