#!/usr/bin/env python3
"""
World Oracle - scenario runner

Builds a registry from config/config.yaml, applies a scenario of scripted
operations to it, and prints each outcome plus the final registry state.

Usage:
    python run.py config/scenarios/example.yaml
    python run.py scenario.yaml --config other.yaml
    python run.py scenario.yaml --run-id run_20260115_120000   # per-run log dir
    python run.py scenario.yaml --quiet                        # state only
    python run.py scenario.yaml --odds 1 --cooldown-seconds 0  # override selection

WORLD_ORACLE_CONFIG (environment or .env) sets the default config path.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from datetime import datetime

from dotenv import load_dotenv
from pydantic import ValidationError

# Load environment variables
load_dotenv()

from world_oracle.config import get_validated_config, load_config, set_config_value
from world_oracle.registry import build_registry, create_event_logger
from world_oracle.scenario import load_scenario, run_scenario


def main(argv: list[str] | None = None) -> int:
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        description="Apply a scenario of operations to a World registry"
    )
    parser.add_argument("scenario", help="Path to scenario YAML file")
    parser.add_argument(
        "--config",
        default=os.environ.get("WORLD_ORACLE_CONFIG", "config/config.yaml"),
        help="Path to config file (default: $WORLD_ORACLE_CONFIG or config/config.yaml)",
    )
    parser.add_argument("--odds", type=int, help="Override special_selection.odds")
    parser.add_argument(
        "--cooldown-seconds", type=float, help="Override special_selection.cooldown_seconds"
    )
    parser.add_argument(
        "--run-id",
        nargs="?",
        const="",
        default=None,
        help="Log to logs_dir/<run-id>/events.jsonl (default id: timestamp)",
    )
    parser.add_argument("--quiet", action="store_true", help="Only print final state")
    args: argparse.Namespace = parser.parse_args(argv)

    try:
        load_config(args.config)
        if args.odds is not None:
            set_config_value("special_selection.odds", args.odds)
        if args.cooldown_seconds is not None:
            set_config_value("special_selection.cooldown_seconds", args.cooldown_seconds)
        scenario = load_scenario(args.scenario)
    except (FileNotFoundError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    config = get_validated_config()
    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    run_id: str | None = args.run_id
    if run_id == "":
        run_id = datetime.now().strftime("run_%Y%m%d_%H%M%S")

    registry = build_registry(config, event_logger=create_event_logger(config, run_id))
    outcomes = run_scenario(registry, scenario)

    if not args.quiet:
        print("=== Operations ===")
        for i, outcome in enumerate(outcomes, start=1):
            status = "OK" if outcome.get("success") else "FAIL"
            print(f"[{i}] {outcome['op']} ({status})")
            print(f"    {json.dumps({k: v for k, v in outcome.items() if k != 'op'})}")
        print()

    print("=== Final State ===")
    print(json.dumps(registry.snapshot(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
