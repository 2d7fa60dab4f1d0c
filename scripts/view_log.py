#!/usr/bin/env python3
"""
Log viewer - summarize registry event logs

Usage:
    python view_log.py                    # Summary of registry.jsonl
    python view_log.py --full             # Full event log
    python view_log.py --worlds           # Final state of every world
    python view_log.py logs/latest/events.jsonl
"""

import json
import argparse
from collections import defaultdict


def load_events(log_file: str) -> list:
    """Load all events from JSONL file"""
    events = []
    with open(log_file) as f:
        for line in f:
            if line.strip():
                events.append(json.loads(line))
    return events


def replay_worlds(events: list) -> dict:
    """Rebuild the latest known state of each world from the log"""
    worlds = {}
    for e in events:
        event_type = e.get("event_type")
        if event_type == "world_created":
            world = e["world"]
            worlds[world["id"]] = dict(world)
        elif event_type == "world_updated":
            world = worlds.get(e["world_id"])
            if world is not None:
                for key, change in e.get("changes", {}).items():
                    world[key] = change["to"]
        elif event_type == "world_transferred":
            world = worlds.get(e["world_id"])
            if world is not None:
                world["owner"] = e["to_owner"]
        elif event_type == "world_image_changed":
            world = worlds.get(e["world_id"])
            if world is not None:
                world["image_ref"] = e["to"]
                world.pop("special_index", None)
    return worlds


def summarize(events: list) -> None:
    """Print summary statistics"""
    init_event = next((e for e in events if e["event_type"] == "registry_init"), None)
    rejected = [e for e in events if e["event_type"] == "operation_rejected"]

    counts = defaultdict(int)
    for e in events:
        counts[e["event_type"]] += 1

    rejected_by_code = defaultdict(int)
    for e in rejected:
        rejected_by_code[e["error"].get("code", "?")] += 1

    worlds = replay_worlds(events)
    special = [w for w in worlds.values() if "special_index" in w]

    print("=" * 60)
    print("REGISTRY SUMMARY")
    print("=" * 60)

    if init_event:
        print(f"\nConfiguration:")
        print(f"  Admin: {init_event.get('admin', '?')}")
        print(f"  Provider base: {init_event.get('provider_base', '?')}")
        print(f"  General source: {init_event.get('general_source', '?')}")

    print(f"\nEvents:")
    for event_type, count in sorted(counts.items()):
        print(f"  {event_type}: {count}")

    print(f"\nRejections by code:")
    for code, count in sorted(rejected_by_code.items()):
        print(f"  {code}: {count}")

    print(f"\nWorlds: {len(worlds)} ({len(special)} special)")


def show_full_log(events: list) -> None:
    """Print full event log in readable format"""
    print("=" * 60)
    print("FULL EVENT LOG")
    print("=" * 60)

    for e in events:
        event_type = e.get("event_type", "?")
        ts = e.get("timestamp", "")[:19]
        seq = e.get("sequence", "?")

        if event_type == "world_created":
            world = e["world"]
            print(f"\n[{ts}] #{seq} CREATED world {world['id']} '{world['name']}'")
            print(f"  Owner: {world['owner']}, Image: {world['image_ref']}")
        elif event_type == "world_updated":
            print(f"\n[{ts}] #{seq} UPDATED world {e['world_id']} by {e['caller']}")
            for key, change in e.get("changes", {}).items():
                print(f"  {key}: {change['from']} -> {change['to']}")
        elif event_type == "world_transferred":
            print(f"\n[{ts}] #{seq} TRANSFERRED world {e['world_id']}")
            print(f"  {e['from_owner']} -> {e['to_owner']}")
        elif event_type == "operation_rejected":
            print(f"\n[{ts}] #{seq} REJECTED {e['operation']} by {e['caller']}")
            print(f"  {e['error'].get('code', '?')}: {e['error'].get('error', '?')}")
        else:
            data = {k: v for k, v in e.items() if k not in ("timestamp", "sequence", "event_type")}
            print(f"\n[{ts}] #{seq} {event_type.upper()}")
            print(f"  {data}")


def show_worlds(events: list) -> None:
    """Show the replayed state of every world"""
    print("=" * 60)
    print("WORLDS")
    print("=" * 60)

    for world_id, world in sorted(replay_worlds(events).items()):
        marker = " (special)" if "special_index" in world else ""
        print(f"\n--- {world_id}: {world['name']}{marker} ---")
        print(f"Owner: {world['owner']}, Chain: {world['chain_id']}, Endpoint: {world['endpoint']}")
        print(f"Image: {world['image_ref']}")


def main():
    parser = argparse.ArgumentParser(description="View registry event logs")
    parser.add_argument("log_file", nargs="?", default="registry.jsonl", help="Log file to view")
    parser.add_argument("--full", action="store_true", help="Show full event log")
    parser.add_argument("--worlds", action="store_true", help="Show world states")
    args = parser.parse_args()

    try:
        events = load_events(args.log_file)
    except FileNotFoundError:
        print(f"Log file not found: {args.log_file}")
        return

    if args.full:
        show_full_log(events)
    elif args.worlds:
        show_worlds(events)
    else:
        summarize(events)


if __name__ == "__main__":
    main()
