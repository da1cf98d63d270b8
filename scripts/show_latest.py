#!/usr/bin/env python3
"""Print the latest earthquakes from the best available source.

Tries the live feed first and falls back to the legacy bulletin, exactly
as the HTTP endpoint does.

Usage:
    python scripts/show_latest.py
    python scripts/show_latest.py --limit 20 --min-magnitude 3.0
    python scripts/show_latest.py --json

Environment:
    CONFIG_PATH: Path to config file (default: config/config.yaml)
"""

import argparse
import json
import logging
import os
import sys
from datetime import datetime, timezone

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from afetnet.core.earthquake import format_time_ago_tr
from afetnet.core.severity import severity_label_tr
from afetnet.earthquake_service import EarthquakeDataUnavailableError, EarthquakeService
from afetnet.shell.config_loader import load_config

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Show the latest earthquakes")
    parser.add_argument("--limit", type=int, default=None, help="Maximum records to fetch")
    parser.add_argument("--min-magnitude", type=float, default=None, help="Minimum magnitude")
    parser.add_argument("--config", default=None, help="Path to config YAML")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    args = parser.parse_args()

    service = EarthquakeService(load_config(args.config))

    try:
        records = service.get_latest_earthquakes(
            limit=args.limit,
            min_magnitude=args.min_magnitude,
        )
    except EarthquakeDataUnavailableError as e:
        logger.error("%s", e)
        for error in e.errors:
            logger.error("  %s", error)
        return 1
    except ValueError as e:
        logger.error("Invalid arguments: %s", e)
        return 2

    if args.json:
        print(json.dumps([r.to_dict() for r in records], ensure_ascii=False, indent=2))
        return 0

    if not records:
        logger.info("No earthquakes match the filter")
        return 0

    source = service.last_source.value if service.last_source else "-"
    logger.info("%d earthquakes from %s", len(records), source)

    now = datetime.now(timezone.utc)
    for record in records:
        print(
            f"M{record.magnitude:.1f}  {record.depth_km:5.1f} km  "
            f"{format_time_ago_tr(record.occurred_at, now):>12}  "
            f"{severity_label_tr(record.magnitude):<10}  {record.location}"
        )

    return 0


if __name__ == "__main__":
    sys.exit(main())
