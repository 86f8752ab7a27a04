"""Historical backfill: fabricate a dense past time series for demo data."""

import asyncio
import logging
import random
from dataclasses import dataclass
from datetime import datetime, timedelta

from techcity.simulator.generator import generate_value
from techcity.simulator.stores import ReadingStore, SensorInfo, SensorRegistry
from techcity.simulator.thresholds import get_threshold_config

logger = logging.getLogger(__name__)

STEP = timedelta(minutes=30)
POINTS_PER_DAY = 48


@dataclass
class BackfillResult:
    days: int
    sensors_processed: int = 0
    sensors_skipped: int = 0
    readings_written: int = 0


async def _backfill_sensor(
    sensor: SensorInfo,
    readings: ReadingStore,
    total_points: int,
    now: datetime,
    rng: random.Random | None,
    pause_every: int,
    pause_seconds: float,
) -> int | None:
    config = get_threshold_config(sensor.type)
    if config is None:
        logger.warning(f"Unknown sensor type {sensor.type!r} for sensor {sensor.id}, skipping")
        return None

    written = 0
    last_value: float | None = None
    for remaining in range(total_points, -1, -1):
        timestamp = now - remaining * STEP
        value = generate_value(sensor.type, last_value, hour=timestamp.hour, rng=rng)
        await readings.insert_reading(sensor.id, value, config.unit, timestamp)
        last_value = value
        written += 1

        if pause_every and remaining % pause_every == 0:
            await asyncio.sleep(pause_seconds)

    return written


async def generate_historical_data(
    sensors: SensorRegistry,
    readings: ReadingStore,
    days: int = 7,
    *,
    now: datetime | None = None,
    rng: random.Random | None = None,
    pause_every: int = 100,
    pause_seconds: float = 0.01,
) -> BackfillResult:
    """
    Write ``days * 48 + 1`` half-hourly readings per active sensor, ending at ``now``.

    Every sensor walks independently from a fresh first value. No alerts are
    evaluated. A failing sensor is logged and the run moves on to the next one.
    """
    if days < 1:
        raise ValueError("days must be at least 1")

    now = now or datetime.now()
    total_points = days * POINTS_PER_DAY
    result = BackfillResult(days=days)

    logger.info(f"Generating historical data for {days} days...")
    try:
        active = await sensors.list_active_sensors()
    except Exception:
        logger.exception("Could not load active sensors, backfill aborted")
        return result

    for sensor in active:
        logger.info(f"Backfilling {sensor.name} ({sensor.type})")
        try:
            written = await _backfill_sensor(
                sensor, readings, total_points, now, rng, pause_every, pause_seconds
            )
        except Exception:
            logger.exception(f"Backfill failed for sensor {sensor.id}")
            result.sensors_skipped += 1
            continue

        if written is None:
            result.sensors_skipped += 1
            continue
        result.sensors_processed += 1
        result.readings_written += written

    logger.info(
        f"Historical data complete: {result.readings_written} readings "
        f"for {result.sensors_processed} sensors ({result.sensors_skipped} skipped)"
    )
    return result
