#!/usr/bin/env python3
"""Interactive Year/Make/Model lookup against a live Storefront.

Walks the same cascade a storefront visitor sees: pick a year, then a
make, a model and (when the catalog has them) a submodel and engine.
On a match the vehicle is saved to the garage file and the filtered
catalog URL is printed.

Usage
-----
::

    export FITMENT_STOREFRONT_TOKEN="..."
    export FITMENT_SHOP_URL="https://example.myshopify.com"
    python scripts/find_vehicle.py

Options::

    --collection HANDLE   Catalog collection to link to (default: all)
    --garage FILE         Garage JSON file (default: ./garage.json)
    --show-saved          Print the saved garage vehicle and exit
    -v, --verbose         Debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyfitment import (  # noqa: E402
    FitmentClient,
    FitmentConfig,
    FitmentConfigError,
    FitmentHandoff,
    JsonFileStorage,
    SelectorField,
    VehicleFinder,
    load_saved_context,
)


def _prompt(label: str, options: list[str], *, optional: bool) -> str | None:
    """Ask for one of *options* by number or value. Blank skips optional fields."""
    print(f"\n{label}:")
    for i, option in enumerate(options, 1):
        print(f"  {i:>3}. {option}")
    hint = " (blank to skip)" if optional else ""
    while True:
        answer = input(f"{label}{hint}> ").strip()
        if not answer:
            if optional:
                return None
            continue
        if answer.isdigit() and 1 <= int(answer) <= len(options):
            return options[int(answer) - 1]
        if answer in options:
            return answer
        print(f"  not an option: {answer!r}")


def _walk(finder: VehicleFinder) -> None:
    for name in (SelectorField.YEAR, SelectorField.MAKE, SelectorField.MODEL):
        options = finder.options(name)
        if not options:
            return
        finder.select(name, _prompt(name.value.title(), options, optional=False))
    # siblings: both come from the chosen model and are optional
    for name in (SelectorField.SUBMODEL, SelectorField.ENGINE):
        if name not in finder.visible_fields():
            continue
        finder.select(name, _prompt(name.value.title(), finder.options(name), optional=True))


async def _run(args: argparse.Namespace) -> int:
    overrides: dict[str, str] = {}
    if args.collection:
        overrides["collection_handle"] = args.collection
    config = FitmentConfig.from_env(**overrides)
    storage = JsonFileStorage(args.garage or config.storage_path or "garage.json")

    if args.show_saved:
        saved = load_saved_context(storage, config.storage_key)
        print(saved.model_dump_json(indent=2) if saved else "No saved vehicle.")
        return 0

    async with FitmentClient(config) as client:
        finder = VehicleFinder(client, FitmentHandoff(config, storage))
        try:
            index = await finder.load()
        except FitmentConfigError as exc:
            print(f"Error: {exc}. Set FITMENT_STOREFRONT_TOKEN.", file=sys.stderr)
            return 2

    if finder.status:
        print(finder.status, file=sys.stderr)
    if index.is_empty:
        return 1
    print(f"Loaded {len(index)} vehicles (type {index.type_name!r})")

    _walk(finder)
    url = finder.submit()
    if url is None:
        print(finder.status, file=sys.stderr)
        return 1
    print(f"\nSaved to {args.garage or config.storage_path or 'garage.json'}")
    print(url)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Find a vehicle and print its filtered catalog URL.")
    parser.add_argument("--collection", help="Catalog collection handle")
    parser.add_argument("--garage", help="Garage JSON file")
    parser.add_argument("--show-saved", action="store_true", help="Print the saved garage vehicle and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return asyncio.run(_run(args))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
