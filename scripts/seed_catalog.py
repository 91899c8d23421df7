#!/usr/bin/env python3
"""
Seed the map catalog (places, hotels, artisan shops) from a JSON file.
"""
import argparse
import sys
from pathlib import Path

from heritage_map.core.db import create_tables, db_session
from heritage_map.core.logging import configure_logging
from heritage_map.services.catalog_seed import load_catalog_file

DEFAULT_SEED = Path(__file__).parent.parent / "data" / "sample_catalog.json"


def main():
    parser = argparse.ArgumentParser(description="Load catalog data into the database")
    parser.add_argument("path", nargs="?", default=str(DEFAULT_SEED), help="Seed JSON file")
    parser.add_argument("--create-tables", action="store_true", help="Create missing tables first")
    args = parser.parse_args()

    configure_logging("INFO")

    if not Path(args.path).exists():
        print(f"✗ Seed file not found: {args.path}")
        sys.exit(1)

    if args.create_tables:
        create_tables()

    with db_session() as db:
        counts = load_catalog_file(db, args.path)

    print(f"✓ Loaded {counts['places']} places, {counts['hotels']} hotels, {counts['artisans']} artisans")


if __name__ == "__main__":
    main()
