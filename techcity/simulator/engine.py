"""Realtime simulation scheduler.

One ``DataSimulator`` drives every active sensor: each sensor gets its own
asyncio task that generates, stores and evaluates a reading once per
interval, plus a single heartbeat task that logs status every few minutes.
Owning the tasks keyed by sensor id lets ``stop()`` cancel exactly what
``start()`` created.
"""

import asyncio
import logging
import random
from collections.abc import Callable
from datetime import date, datetime

from techcity.config import HEARTBEAT_SECONDS, STAGGER_SECONDS
from techcity.schemas.simulator import SimulatorStatus
from techcity.simulator.alerts import AlertEvaluator
from techcity.simulator.backfill import BackfillResult, generate_historical_data
from techcity.simulator.generator import generate_value
from techcity.simulator.stores import AlertStore, Reading, ReadingStore, SensorInfo, SensorRegistry
from techcity.simulator.thresholds import get_threshold_config, threshold_table

logger = logging.getLogger(__name__)

# Demo sensors spread across Paris, one per supported type
TEST_SENSORS = [
    {
        "name": "Downtown Temperature Sensor",
        "sensor_type": "temperature",
        "location": "Place de la République",
        "latitude": 48.8566,
        "longitude": 2.3522,
    },
    {
        "name": "North District Air Station",
        "sensor_type": "air_quality",
        "location": "Avenue des Champs-Élysées",
        "latitude": 48.8848,
        "longitude": 2.3504,
    },
    {
        "name": "South Zone Noise Meter",
        "sensor_type": "noise",
        "location": "Rue de la Paix",
        "latitude": 48.8322,
        "longitude": 2.3509,
    },
    {
        "name": "East Traffic Counter",
        "sensor_type": "traffic",
        "location": "Boulevard de l'Est",
        "latitude": 48.8534,
        "longitude": 2.3776,
    },
    {
        "name": "Central Park Humidity",
        "sensor_type": "humidity",
        "location": "Parc Central",
        "latitude": 48.8629,
        "longitude": 2.3397,
    },
    {
        "name": "Industrial Pollution Monitor",
        "sensor_type": "pollution",
        "location": "Zone Industrielle",
        "latitude": 48.8456,
        "longitude": 2.3892,
    },
]


class DataSimulator:
    def __init__(
        self,
        sensors: SensorRegistry,
        readings: ReadingStore,
        alerts: AlertStore,
        *,
        heartbeat_seconds: float = HEARTBEAT_SECONDS,
        stagger_seconds: float = STAGGER_SECONDS,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._sensors = sensors
        self._readings = readings
        self._evaluator = AlertEvaluator(alerts, clock=clock)
        self._heartbeat_seconds = heartbeat_seconds
        self._stagger_seconds = stagger_seconds
        self._rng = rng
        self._clock = clock

        self._lock = asyncio.Lock()
        self._is_running = False
        self._interval_seconds: float | None = None
        self._sensor_tasks: dict[int, asyncio.Task] = {}
        self._heartbeat_task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._is_running

    async def start(self, interval_seconds: float = 30) -> bool:
        """Start simulating every active sensor. Returns False if nothing was started."""
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")

        async with self._lock:
            if self._is_running:
                logger.warning("Simulator already running")
                return False

            try:
                sensors = await self._sensors.list_active_sensors()
            except Exception:
                logger.exception("Could not load active sensors, simulator not started")
                return False

            active = []
            for sensor in sensors:
                if get_threshold_config(sensor.type) is None:
                    logger.warning(f"Unknown sensor type: {sensor.type} (sensor {sensor.id}), skipped")
                    continue
                active.append(sensor)
            if not active:
                logger.warning("No active sensors found, simulator not started")
                return False

            self._is_running = True
            self._interval_seconds = interval_seconds
            logger.info(f"Starting IoT simulator for {len(active)} sensors")
            logger.info(f"Interval: {interval_seconds} seconds")

            for index, sensor in enumerate(active):
                self._sensor_tasks[sensor.id] = asyncio.create_task(
                    self._run_sensor(sensor, interval_seconds, index * self._stagger_seconds),
                    name=f"simulator-sensor-{sensor.id}",
                )
            self._heartbeat_task = asyncio.create_task(
                self._heartbeat(), name="simulator-heartbeat"
            )
            return True

    async def stop(self) -> bool:
        """Cancel every scheduled task. Returns False if the simulator was not running."""
        async with self._lock:
            if not self._is_running:
                logger.warning("Simulator already stopped")
                return False

            tasks = list(self._sensor_tasks.values())
            if self._heartbeat_task is not None:
                tasks.append(self._heartbeat_task)
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

            self._sensor_tasks.clear()
            self._heartbeat_task = None
            self._is_running = False
            self._interval_seconds = None
            logger.info("IoT simulator stopped")
            return True

    def get_status(self) -> SimulatorStatus:
        timers = len(self._sensor_tasks) + (1 if self._heartbeat_task is not None else 0)
        return SimulatorStatus(
            is_running=self._is_running,
            active_timer_count=timers,
            sensor_count=len(self._sensor_tasks),
            interval_seconds=self._interval_seconds,
            thresholds=threshold_table(),
        )

    async def simulate_sensor(self, sensor: SensorInfo) -> Reading | None:
        """Run one generate/store/evaluate cycle for a sensor.

        Failures are logged and swallowed so sibling sensors keep running.
        """
        try:
            config = get_threshold_config(sensor.type)
            if config is None:
                logger.warning(f"Unknown sensor type: {sensor.type} (sensor {sensor.id})")
                return None

            now = self._clock()
            last = await self._readings.get_last_reading(sensor.id)
            value = generate_value(
                sensor.type,
                last.value if last else None,
                hour=now.hour,
                rng=self._rng,
            )
            if value is None:
                return None

            reading = await self._readings.insert_reading(
                sensor.id, value, config.unit, now
            )
            await self._evaluator.evaluate(sensor, value)

            logger.info(f"{sensor.name} ({sensor.type}): {value:.2f} {config.unit}")
            return reading
        except Exception:
            logger.exception(f"Simulation failed for sensor {sensor.id}")
            return None

    async def _run_sensor(self, sensor: SensorInfo, interval_seconds: float, delay: float) -> None:
        if delay:
            await asyncio.sleep(delay)
        while True:
            await self.simulate_sensor(sensor)
            await asyncio.sleep(interval_seconds)

    async def _heartbeat(self) -> None:
        while True:
            await asyncio.sleep(self._heartbeat_seconds)
            logger.info(f"Simulator active - {len(self._sensor_tasks)} sensors being simulated")

    async def backfill(self, days: int = 7) -> BackfillResult:
        """Write a historical series for all active sensors. Independent of start/stop."""
        return await generate_historical_data(
            self._sensors, self._readings, days, now=self._clock(), rng=self._rng
        )

    async def seed_test_sensors(self) -> list[SensorInfo]:
        """Register one active demo sensor per supported type."""
        logger.info("Creating test sensors...")
        created = []
        for spec in TEST_SENSORS:
            try:
                sensor = await self._sensors.add_sensor(**spec, installed_at=date.today())
            except Exception:
                logger.exception(f"Could not create test sensor {spec['name']!r}")
                continue
            created.append(sensor)
        logger.info(f"{len(created)} test sensors created")
        return created
