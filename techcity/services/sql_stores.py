"""SQLAlchemy-backed implementations of the simulator's store protocols.

Each call opens its own short-lived session so that one sensor's cycle
never shares a transaction with another's.
"""

from datetime import date, datetime

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from techcity.database import async_session
from techcity.models import Sensor, SensorData
from techcity.services import alert_service, readings_service, sensor_service
from techcity.simulator.stores import Reading, SensorInfo


def to_sensor_info(sensor: Sensor) -> SensorInfo:
    return SensorInfo(id=sensor.id, type=sensor.type, name=sensor.name, location=sensor.location)


def to_reading(row: SensorData) -> Reading:
    return Reading(sensor_id=row.sensor_id, value=row.value, unit=row.unit, timestamp=row.timestamp)


class SqlSensorRegistry:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession] = async_session):
        self._session_factory = session_factory

    async def list_active_sensors(self) -> list[SensorInfo]:
        async with self._session_factory() as session:
            sensors = await sensor_service.list_active_sensors(session)
        return [to_sensor_info(s) for s in sensors]

    async def add_sensor(
        self,
        name: str,
        sensor_type: str,
        location: str,
        latitude: float | None = None,
        longitude: float | None = None,
        installed_at: date | None = None,
    ) -> SensorInfo:
        async with self._session_factory() as session:
            sensor = await sensor_service.create_sensor(
                session,
                name=name,
                sensor_type=sensor_type,
                location=location,
                latitude=latitude,
                longitude=longitude,
                installed_at=installed_at,
            )
        return to_sensor_info(sensor)


class SqlReadingStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession] = async_session):
        self._session_factory = session_factory

    async def get_last_reading(self, sensor_id: int) -> Reading | None:
        async with self._session_factory() as session:
            row = await readings_service.get_last_reading(session, sensor_id)
        return to_reading(row) if row else None

    async def insert_reading(
        self,
        sensor_id: int,
        value: float,
        unit: str,
        timestamp: datetime | None = None,
    ) -> Reading:
        async with self._session_factory() as session:
            row = await readings_service.insert_reading(session, sensor_id, value, unit, timestamp)
        return to_reading(row)


class SqlAlertStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession] = async_session):
        self._session_factory = session_factory

    async def has_recent_unresolved_alert(
        self, sensor_id: int, alert_type: str, since: datetime
    ) -> bool:
        async with self._session_factory() as session:
            return await alert_service.has_recent_unresolved_alert(
                session, sensor_id, alert_type, since
            )

    async def insert_alert(
        self,
        sensor_id: int,
        alert_type: str,
        threshold_value: float,
        current_value: float,
        message: str,
    ) -> None:
        async with self._session_factory() as session:
            await alert_service.insert_alert(
                session, sensor_id, alert_type, threshold_value, current_value, message
            )
