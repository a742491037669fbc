#!/usr/bin/env python3
"""Batch BOM matching from the command line.

Loads a JSON supplier catalog and a BOM spreadsheet, then prints the top
matches for every BOM line (or writes them as JSON).

Usage:
    python scripts/match_bom.py --catalog suppliers.json --bom bom.csv
        [--region EU-27] [--top 5] [--min-score 0] [--json out.json]
"""

import argparse
import json
import os
import sys
from pathlib import Path

# Must set up path before package imports when run from a checkout
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from loguru import logger

from supplymatch.catalog import load_catalog
from supplymatch.config import get_settings
from supplymatch.logging_config import setup_logging
from supplymatch.schemas.matching import MatchOptions
from supplymatch.services.bom_import import match_bom, parse_bom


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Match every BOM line against a supplier catalog")
    p.add_argument("--catalog", required=True, help="JSON supplier catalog")
    p.add_argument("--bom", required=True, help="BOM file (.csv, .tsv, .xlsx)")
    p.add_argument("--region", default=get_settings().default_region_scope, help="DACH, EU-27 or Global")
    p.add_argument("--top", type=int, default=get_settings().bom_max_results, help="matches per line")
    p.add_argument("--min-score", type=float, default=0, help="drop matches below this score")
    p.add_argument("--json", dest="json_out", help="write results as JSON to this path")
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()

    suppliers = load_catalog(args.catalog)
    if not suppliers:
        logger.error("No suppliers loaded; nothing to match")
        return 1

    bom_path = Path(args.bom)
    lines = parse_bom(bom_path.read_bytes(), bom_path.name)
    if not lines:
        logger.error(f"No BOM lines parsed from {bom_path}")
        return 1

    options = MatchOptions(region_scope=args.region, max_results=args.top, min_score=args.min_score)
    items = match_bom(lines, suppliers, options)

    if args.json_out:
        payload = [item.model_dump(mode="json") for item in items]
        Path(args.json_out).write_text(json.dumps(payload, indent=2), encoding="utf-8")
        logger.info(f"Wrote {len(items)} BOM results to {args.json_out}")
        return 0

    for item in items:
        print(f"\n{item.line.part_number}  {item.line.description}  ({item.line.process} / {item.line.material})")
        if not item.matches:
            print("    no matching suppliers")
        for rank, m in enumerate(item.matches, start=1):
            print(
                f"  {rank}. {m.supplier.name:<32} score {m.switching_cost_score:>3}  "
                f"savings {m.estimated_savings_rate:>5.1%}  {m.audit_readiness}"
            )
            for reason in m.reasons:
                print(f"       - {reason}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
