#!/usr/bin/env python3
"""
Snapshot analysis CLI.
Runs the three-layer dip analysis over a JSON snapshot file holding the
token, holders, prices and flow (or raw swaps) of one token.
"""

import argparse
import json
import sys
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from dip_radar.analysis import run_full_analysis
from dip_radar.config import get_thresholds
from dip_radar.logging_config import configure_logging
from dip_radar.models import AnalysisSnapshot, ensure_unique_addresses
from dip_radar.utils.error_handling import DipRadarError


def load_snapshot(path: str) -> AnalysisSnapshot:
    """Load and validate a snapshot file ("-" reads stdin)."""
    if path == "-":
        raw = sys.stdin.read()
    else:
        with open(path, "r", encoding="utf-8") as f:
            raw = f.read()

    snapshot = AnalysisSnapshot.model_validate_json(raw)
    ensure_unique_addresses(snapshot.holders)
    return snapshot


def print_report(snapshot: AnalysisSnapshot, result) -> None:
    outcome = result.outcome
    structural = result.structural
    zone = outcome.entry_zone

    print("\n" + "=" * 80)
    print(f"DIP ANALYSIS FOR {snapshot.token.display_name}")
    print("=" * 80)
    print(f"Token address: {snapshot.token.address}")
    print(f"Verdict: {outcome.verdict.value.upper()}")
    print(f"Confidence: {outcome.dip_confidence:.0f}")
    print(f"Risk level: {outcome.risk_level.value}")
    print(f"Combined score: {outcome.combined_score:.0f}")
    print(f"Micro score: {result.micro.micro_score:.0f}")
    print(f"Structural score: {structural.structural_score:.0f}")
    print(f"Expected dip depth: {outcome.expected_dip_depth_pct:.1f}%")
    print(f"Entry zone: {zone.min:.8g} - {zone.max:.8g} (optimal {zone.optimal:.8g})")

    flags = structural.danger_zone.active_flags()
    if flags:
        print("\nRED FLAGS:")
        for flag in flags:
            print(f"- {flag}")

    reasons = list(result.micro.reasons) + list(structural.reasons)
    if reasons:
        print("\nSIGNALS:")
        for reason in reasons:
            print(f"- {reason}")
    print("=" * 80)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Analyze a token dip from a JSON snapshot")
    parser.add_argument("snapshot", help='Path to the snapshot JSON file ("-" for stdin)')
    parser.add_argument("--json", action="store_true", help="Output results in JSON format")
    parser.add_argument("--log-level", default="WARNING",
                        help="Log level (default: WARNING)")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        snapshot = load_snapshot(args.snapshot)
        result = run_full_analysis(
            snapshot.prices,
            snapshot.resolve_flow(),
            snapshot.holders,
            snapshot.token,
            get_thresholds(),
        )
    except OSError as e:
        print(f"Error: could not read snapshot: {str(e)}", file=sys.stderr)
        return 1
    except PydanticValidationError as e:
        print(f"Error: invalid snapshot: {str(e)}", file=sys.stderr)
        return 1
    except DipRadarError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        if args.json:
            print(json.dumps(e.to_dict(), indent=2))
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print_report(snapshot, result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
