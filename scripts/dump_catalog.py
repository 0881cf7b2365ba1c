#!/usr/bin/env python3
"""Dump the vehicle catalog the finder would load.

Runs the same schema-fallback load as the storefront widget and prints
either index statistics or every record as JSON, so you can check which
metaobject type answered and spot records with missing fields.

Usage
-----
::

    export FITMENT_STOREFRONT_TOKEN="..."
    export FITMENT_SHOP_URL="https://example.myshopify.com"
    python scripts/dump_catalog.py [--json] [--output FILE]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyfitment import FitmentClient, FitmentConfig, FitmentError, FitmentIndex, build_index  # noqa: E402


def _summary(index: FitmentIndex) -> dict[str, Any]:
    incomplete = [r.id for r in index.records if not (r.year and r.make and r.model)]
    return {
        "type_name": index.type_name,
        "records": len(index),
        "years": index.years(),
        "year_make_pairs": len(index.by_year_make),
        "year_make_models": len(index.by_year_make_model),
        "selection_keys": len(index.by_selection_key),
        "duplicate_selections": len(index) - len(index.by_selection_key),
        "incomplete_records": incomplete,
    }


async def _run(args: argparse.Namespace) -> int:
    config = FitmentConfig.from_env()
    try:
        async with FitmentClient(config) as client:
            load = await client.load_catalog()
    except FitmentError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    index = build_index(load.records, type_name=load.type_name)
    if args.json:
        payload: Any = [r.model_dump(exclude={"raw"}) for r in index.records]
    else:
        payload = _summary(index)
    text = json.dumps(payload, indent=2, ensure_ascii=False)

    if args.output:
        Path(args.output).write_text(text + "\n", encoding="utf-8")
    else:
        print(text)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Dump the Storefront vehicle catalog.")
    parser.add_argument("--json", action="store_true", help="Print every record instead of a summary")
    parser.add_argument("--output", help="Write output to FILE instead of stdout")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
