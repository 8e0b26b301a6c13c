#!/usr/bin/env python3
"""
EVI Index Runner

Computes the Earned Visibility Index and a 4-week forecast for one
provider snapshot and prints the result as JSON.

Usage:
    # From a provider payload file:
    python scripts/compute_index.py snapshot.json

    # From the built-in demo snapshot:
    python scripts/compute_index.py --demo org_123

    # With what-if scenarios (visibility,authority,momentum deltas):
    python scripts/compute_index.py --demo org_123 --scenario 10,0,0 --scenario 0,5,5
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from evi.models import EVIError, ForecastScenario, parse_composite_snapshot
from evi.providers import generate_demo_snapshot
from evi.scoring import compute_forecast, compute_index, find_focus_driver, get_band_definition
from evi.utils import get_settings

logger = logging.getLogger(__name__)


def parse_scenario(text: str) -> ForecastScenario:
    """Parse 'dv,da,dm' into a scenario. Blank positions are left unset."""
    parts = (text.split(",") + ["", "", ""])[:3]
    return ForecastScenario.from_dict({
        "delta_visibility": parts[0] or None,
        "delta_authority": parts[1] or None,
        "delta_momentum": parts[2] or None,
        "name": text,
    })


def build_report(snapshot, scenarios: List[ForecastScenario], formula) -> Dict[str, Any]:
    """Compute index, band details, focus driver and forecast."""
    index = compute_index(snapshot, formula)
    band = get_band_definition(index.status, formula)
    return {
        "index": index.to_dict(),
        "band": band.to_dict(),
        "focus_driver": find_focus_driver(index, formula).value,
        "forecast": compute_forecast(index, scenarios, formula).to_dict(),
    }


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Compute the EVI for a snapshot")
    parser.add_argument("payload", nargs="?", help="Path to a provider payload JSON file")
    parser.add_argument("--demo", metavar="ORG_ID", help="Use the demo snapshot for ORG_ID")
    parser.add_argument(
        "--scenario",
        action="append",
        default=[],
        help="What-if deltas as visibility,authority,momentum (repeatable)",
    )
    args = parser.parse_args(argv)

    load_dotenv()
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    if args.demo:
        snapshot = generate_demo_snapshot(args.demo)
    elif args.payload:
        with open(args.payload, encoding="utf-8") as f:
            payload = json.load(f)
        try:
            snapshot = parse_composite_snapshot(payload)
        except EVIError as e:
            logger.error(f"Cannot compute index: {e}")
            return 1
    else:
        parser.error("a payload file or --demo ORG_ID is required")

    scenarios = [parse_scenario(s) for s in args.scenario]
    report = build_report(snapshot, scenarios, settings.formula())
    print(json.dumps(report, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
