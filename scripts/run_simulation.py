#!/usr/bin/env python3
"""Run the simulated disaster broadcaster locally.

Events are logged as they are generated. Use short intervals to see
output quickly; the production defaults wait 30-300 seconds between
events.

Usage:
    python scripts/run_simulation.py --duration 60 --min-interval 2 --max-interval 5
    python scripts/run_simulation.py --seed 42 --json
"""

import argparse
import asyncio
import json
import logging
import os
import random
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from afetnet.broadcaster import DisasterBroadcaster
from afetnet.core.config import SimulationSettings
from afetnet.core.disaster import DisasterEvent

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


async def run(broadcaster: DisasterBroadcaster, duration: float) -> None:
    broadcaster.start_simulation()
    try:
        await asyncio.sleep(duration)
    finally:
        broadcaster.stop_simulation()

    logger.info("Active events: %d", len(broadcaster.get_active()))
    logger.info("Critical events: %d", len(broadcaster.get_critical()))


def main() -> int:
    parser = argparse.ArgumentParser(description="Run the disaster simulation")
    parser.add_argument("--duration", type=float, default=60.0, help="Seconds to run")
    parser.add_argument("--first-delay", type=float, default=2.0)
    parser.add_argument("--min-interval", type=float, default=30.0)
    parser.add_argument("--max-interval", type=float, default=300.0)
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs")
    parser.add_argument("--json", action="store_true", help="Print each event as JSON")
    args = parser.parse_args()

    if args.min_interval > args.max_interval:
        parser.error("--min-interval must not exceed --max-interval")

    settings = SimulationSettings(
        first_delay_seconds=args.first_delay,
        min_interval_seconds=args.min_interval,
        max_interval_seconds=args.max_interval,
    )
    broadcaster = DisasterBroadcaster(rng=random.Random(args.seed), settings=settings)

    def on_event(event: DisasterEvent) -> None:
        if args.json:
            print(json.dumps(event.to_dict(), ensure_ascii=False))
        else:
            logger.info("[%s] %s - %s", event.severity.value.upper(), event.title, event.description)

    broadcaster.add_listener(on_event)
    asyncio.run(run(broadcaster, args.duration))

    return 0


if __name__ == "__main__":
    sys.exit(main())
