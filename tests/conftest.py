"""Shared fixtures: in-memory store doubles and a throwaway SQLite database."""

from collections import defaultdict
from datetime import date, datetime

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from techcity.database import create_tables, make_session_factory
from techcity.simulator import Reading, SensorInfo


class FakeSensorRegistry:
    def __init__(self, sensors: list[SensorInfo] | None = None):
        self.sensors = list(sensors or [])
        self.fail = False

    async def list_active_sensors(self) -> list[SensorInfo]:
        if self.fail:
            raise RuntimeError("database unavailable")
        return list(self.sensors)

    async def add_sensor(
        self,
        name: str,
        sensor_type: str,
        location: str,
        latitude: float | None = None,
        longitude: float | None = None,
        installed_at: date | None = None,
    ) -> SensorInfo:
        sensor = SensorInfo(
            id=len(self.sensors) + 1, type=sensor_type, name=name, location=location
        )
        self.sensors.append(sensor)
        return sensor


class FakeReadingStore:
    def __init__(self):
        self.readings: dict[int, list[Reading]] = defaultdict(list)
        self.failing_sensors: set[int] = set()

    async def get_last_reading(self, sensor_id: int) -> Reading | None:
        if sensor_id in self.failing_sensors:
            raise RuntimeError("database unavailable")
        rows = self.readings.get(sensor_id)
        return rows[-1] if rows else None

    async def insert_reading(
        self,
        sensor_id: int,
        value: float,
        unit: str,
        timestamp: datetime | None = None,
    ) -> Reading:
        if sensor_id in self.failing_sensors:
            raise RuntimeError("database unavailable")
        reading = Reading(sensor_id, value, unit, timestamp or datetime.now())
        self.readings[sensor_id].append(reading)
        return reading


class FakeAlertStore:
    def __init__(self, clock=datetime.now):
        self.alerts: list[dict] = []
        self.clock = clock
        self.fail = False

    async def has_recent_unresolved_alert(
        self, sensor_id: int, alert_type: str, since: datetime
    ) -> bool:
        if self.fail:
            raise RuntimeError("database unavailable")
        return any(
            a["sensor_id"] == sensor_id
            and a["alert_type"] == alert_type
            and a["resolved_at"] is None
            and a["created_at"] >= since
            for a in self.alerts
        )

    async def insert_alert(
        self,
        sensor_id: int,
        alert_type: str,
        threshold_value: float,
        current_value: float,
        message: str,
    ) -> None:
        self.alerts.append(
            {
                "sensor_id": sensor_id,
                "alert_type": alert_type,
                "threshold_value": threshold_value,
                "current_value": current_value,
                "message": message,
                "created_at": self.clock(),
                "resolved_at": None,
            }
        )


@pytest.fixture
def temperature_sensor() -> SensorInfo:
    return SensorInfo(id=1, type="temperature", name="Downtown Temp", location="Place de la République")


@pytest.fixture
def sensor_registry(temperature_sensor: SensorInfo) -> FakeSensorRegistry:
    return FakeSensorRegistry(
        [
            temperature_sensor,
            SensorInfo(id=2, type="traffic", name="East Counter", location="Boulevard de l'Est"),
        ]
    )


@pytest.fixture
def reading_store() -> FakeReadingStore:
    return FakeReadingStore()


@pytest.fixture
def alert_store() -> FakeAlertStore:
    return FakeAlertStore()


@pytest.fixture
async def session_factory(tmp_path):
    """Session factory bound to a fresh SQLite file with all tables created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await create_tables(engine)
    yield make_session_factory(engine)
    await engine.dispose()


@pytest.fixture
def alert_store_factory():
    """The fake alert store class, for tests that need a custom clock."""
    return FakeAlertStore
