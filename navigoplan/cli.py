# path: navigoplan-api/navigoplan/cli.py

"""
Dataset checks for the bundled port lists.

Usage:
  navigoplan-validate-ports navigoplan/data/ports.v1.json
  navigoplan-validate-ports --summary
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional
import argparse
import json
import sys

from navigoplan.core.config import init_logging, settings
from navigoplan.services.port_catalog import build_port_catalog, validate_canonical_rows


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(prog="navigoplan-validate-ports", description="Validate a canonical ports JSON file.")
    ap.add_argument("path", nargs="?", type=Path, default=settings.PORTS_CANONICAL_PATH, help="ports.v1.json to check")
    ap.add_argument(
        "--summary",
        action="store_true",
        help="Also build the merged catalog (with the sea guide) and print per-region counts",
    )
    ap.add_argument("--seaguide", type=Path, default=settings.PORTS_SEAGUIDE_PATH, help="Sea guide JSON for --summary")
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    init_logging("WARNING")

    try:
        with open(args.path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        print(f"Cannot read {args.path}: {e}", file=sys.stderr)
        return 1

    errors = validate_canonical_rows(data)
    if errors:
        print(f"{args.path}: {len(errors)} problem(s)", file=sys.stderr)
        for e in errors:
            print(f"  - {e}", file=sys.stderr)
        return 1
    print(f"{args.path}: {len(data)} ports OK")

    if args.summary:
        catalog = build_port_catalog(args.path, args.seaguide)
        counts = {}
        for p in catalog:
            counts[p.region] = counts.get(p.region, 0) + 1
        print(f"merged catalog: {len(catalog)} ports ({catalog.count_by_source('seaguide')} from the sea guide)")
        for region in sorted(counts):
            print(f"  {region:<12} {counts[region]}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
