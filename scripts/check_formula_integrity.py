#!/usr/bin/env python3
"""
EVI Formula Integrity Check

Validates the driver weights and status bands of the EVI formula.
Exits non-zero when any invariant is broken, so it can gate CI and deploys.

Usage:
    python scripts/check_formula_integrity.py
    python scripts/check_formula_integrity.py --json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from evi.quality import validate_formula_integrity
from evi.utils import get_settings

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Validate the EVI formula constants")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    args = parser.parse_args(argv)

    load_dotenv()
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    result = validate_formula_integrity(settings.formula())

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(result.formula)
        for band in result.bands:
            print(f"  {band['label']:<12} {band['min']:>3}-{band['max']:<3}")
        if result.valid:
            print("OK: formula integrity check passed")
        else:
            print("FAILED:")
            for error in result.errors:
                print(f"  - {error}")

    return 0 if result.valid else 1


if __name__ == "__main__":
    sys.exit(main())
