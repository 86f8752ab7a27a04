"""Sensor registry queries."""

from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from techcity.models import SENSOR_STATUS_ACTIVE, Sensor

__all__ = ["list_sensors", "list_active_sensors", "get_sensor", "create_sensor"]


async def list_sensors(
    session: AsyncSession,
    status: str | None = None,
    sensor_type: str | None = None,
) -> list[Sensor]:
    """Get all sensors, optionally filtered by status and type."""
    query = select(Sensor).order_by(Sensor.id)
    if status:
        query = query.where(Sensor.status == status)
    if sensor_type:
        query = query.where(Sensor.type == sensor_type)

    result = await session.execute(query)
    return list(result.scalars())


async def list_active_sensors(session: AsyncSession) -> list[Sensor]:
    """Get sensors eligible for simulation."""
    return await list_sensors(session, status=SENSOR_STATUS_ACTIVE)


async def get_sensor(session: AsyncSession, sensor_id: int) -> Sensor | None:
    result = await session.execute(select(Sensor).where(Sensor.id == sensor_id))
    return result.scalar_one_or_none()


async def create_sensor(
    session: AsyncSession,
    name: str,
    sensor_type: str,
    location: str,
    latitude: float | None = None,
    longitude: float | None = None,
    status: str = SENSOR_STATUS_ACTIVE,
    installed_at: date | None = None,
) -> Sensor:
    """Insert a sensor and commit."""
    sensor = Sensor(
        name=name,
        type=sensor_type,
        location=location,
        latitude=latitude,
        longitude=longitude,
        status=status,
        installed_at=installed_at or date.today(),
    )
    session.add(sensor)
    await session.commit()
    await session.refresh(sensor)
    return sensor
