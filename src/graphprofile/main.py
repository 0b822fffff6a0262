#!/usr/bin/env python3

# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from graphprofile.app import enrich_user_profile
from graphprofile.common.logging import configure_logging
from graphprofile.config import ConfigurationError, get_graph_config, parse_tier
from graphprofile.domain.model import EnrichmentTier

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Enrich identity claims into a full user profile from Microsoft Graph"
    )
    parser.add_argument(
        "claims_file",
        type=Path,
        help="JSON file holding an object of claim names to string values",
    )
    parser.add_argument(
        "--tier",
        choices=[tier.value for tier in EnrichmentTier],
        help="Enrichment tier (default: GRAPH_ENRICHMENT_TIER or minimal)",
    )
    parser.add_argument(
        "--capture-unknown-claims",
        action="store_true",
        default=None,
        help="Copy unrecognised claims into the profile's additional data",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output",
    )
    return parser.parse_args(list(argv))


def _load_claims(path: Path) -> dict[str, str]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ValueError(f"Cannot read claims file {path}: {exc.strerror}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"Claims file {path} is not valid JSON: {exc.msg}") from exc
    if not isinstance(payload, dict):
        raise ValueError(f"Claims file {path} must contain a JSON object")
    return {str(name): str(value) for name, value in payload.items() if value is not None}


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    try:
        parsed_args = _parse_args(argv if argv is not None else sys.argv[1:])
        claims = _load_claims(parsed_args.claims_file)
        tier = parse_tier(parsed_args.tier) if parsed_args.tier else None
    except (ValueError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        config = get_graph_config(
            tier=tier,
            capture_unknown_claims=parsed_args.capture_unknown_claims,
        )
        profile = enrich_user_profile(claims, config=config)
    except Exception as e:  # noqa: BLE001
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(asdict(profile), indent=2, default=str))


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
