#!/usr/bin/env python3
"""Seed the demo sensors and optionally backfill their history."""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import select

from techcity.database import async_session
from techcity.logging_config import setup_logging
from techcity.models import Sensor
from techcity.routes.deps import build_simulator


async def seed_sensors(backfill_days: int = 0) -> None:
    """Create demo sensors unless some already exist, then backfill if asked."""
    simulator = build_simulator()

    async with async_session() as session:
        result = await session.execute(select(Sensor).limit(1))
        has_sensors = result.scalar_one_or_none() is not None

    if has_sensors:
        print("Sensors already exist, skipping seed.")
    else:
        created = await simulator.seed_test_sensors()
        print(f"Created {len(created)} sensors.")

    if backfill_days > 0:
        backfilled = await simulator.backfill(backfill_days)
        print(
            f"Generated {backfilled.readings_written} readings "
            f"for {backfilled.sensors_processed} sensors."
        )


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--backfill-days", type=int, default=0, help="Days of history to generate")
    args = parser.parse_args()

    setup_logging()
    asyncio.run(seed_sensors(args.backfill_days))
