#!/usr/bin/env python3
"""
Token Registry - scenario runner

Usage:
    python run.py config/scenarios/example.yaml
    python run.py scenario.yaml --config my_config.yaml
    python run.py scenario.yaml --owner alice --no-event-file
"""

from __future__ import annotations

import argparse
import json
import os
from typing import Any

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from token_registry.config import configure_logging, load_config, get_validated_config, set_config_value
from token_registry.scenario import load_scenario, run_scenario
from token_registry.world.registry import TokenRegistry


def main() -> None:
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        description="Replay a token registry scenario"
    )
    parser.add_argument("scenario", help="Path to scenario YAML file")
    parser.add_argument(
        "--config",
        default=os.environ.get("TOKEN_REGISTRY_CONFIG", "config/config.yaml"),
        help="Path to config file (env: TOKEN_REGISTRY_CONFIG)",
    )
    parser.add_argument("--owner", help="Override registry.owner")
    parser.add_argument(
        "--no-event-file",
        action="store_true",
        help="Don't write notifications to logging.output_file",
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress output")
    args: argparse.Namespace = parser.parse_args()

    load_config(args.config)
    if args.owner:
        set_config_value("registry.owner", args.owner)
    if args.no_event_file:
        set_config_value("logging.enabled", False)

    config = get_validated_config()
    configure_logging()

    registry = TokenRegistry.from_config(config)
    results: list[dict[str, Any]] = run_scenario(registry, load_scenario(args.scenario))

    if not args.quiet:
        for result in results:
            print(json.dumps(result))
        print(f"=== {registry.name} ({registry.symbol}) ===")
        print(f"Tokens minted: {registry.total_minted}")
        print(f"Events: {len(registry.event_log)}")
        print(f"Rejected steps: {sum(1 for r in results if not r['success'])}")


if __name__ == "__main__":
    main()
