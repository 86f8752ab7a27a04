#!/usr/bin/env python3
"""One-shot database setup: init tables, seed sensors, generate history."""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from scripts.init_db import init_db
from scripts.seed_sensors import seed_sensors

BACKFILL_DAYS = 7


async def setup_all() -> None:
    """Run all setup steps."""
    print("=== Setting up TechCity database ===")
    print()

    print("Step 1: Creating tables...")
    await init_db()
    print()

    print(f"Step 2: Seeding sensors and generating {BACKFILL_DAYS} days of data...")
    await seed_sensors(BACKFILL_DAYS)
    print()

    print("=== Setup complete! ===")
    print("Start the server with: uvicorn techcity.main:app --reload --port 8000")


if __name__ == "__main__":
    asyncio.run(setup_all())
