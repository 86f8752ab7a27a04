"""Readings service layer: appends and fetches sensor readings."""

from datetime import datetime

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from techcity.models import SensorData

__all__ = [
    "get_last_reading",
    "get_latest_readings",
    "get_sensor_readings",
    "insert_reading",
]


async def get_last_reading(session: AsyncSession, sensor_id: int) -> SensorData | None:
    """Most recently timestamped reading for a sensor."""
    result = await session.execute(
        select(SensorData)
        .where(SensorData.sensor_id == sensor_id)
        .order_by(SensorData.timestamp.desc(), SensorData.id.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def get_latest_readings(
    session: AsyncSession,
    sensor_ids: list[int],
) -> dict[int, SensorData]:
    """Get the latest reading for many sensors in a single query.

    Returns dict mapping sensor_id -> reading; sensors without data are absent.
    """
    if not sensor_ids:
        return {}

    # Window function ranks each sensor's readings newest first
    subq = (
        select(
            SensorData.id,
            func.row_number()
            .over(
                partition_by=SensorData.sensor_id,
                order_by=[SensorData.timestamp.desc(), SensorData.id.desc()],
            )
            .label("rn"),
        )
        .where(SensorData.sensor_id.in_(sensor_ids))
        .subquery()
    )
    result = await session.execute(
        select(SensorData).join(subq, SensorData.id == subq.c.id).where(subq.c.rn == 1)
    )
    return {row.sensor_id: row for row in result.scalars()}


async def get_sensor_readings(
    session: AsyncSession,
    sensor_id: int,
    start: datetime,
    end: datetime,
    limit: int | None = None,
) -> list[SensorData]:
    """Readings for a sensor within ``[start, end]``, oldest first."""
    query = (
        select(SensorData)
        .where(
            and_(
                SensorData.sensor_id == sensor_id,
                SensorData.timestamp >= start,
                SensorData.timestamp <= end,
            )
        )
        .order_by(SensorData.timestamp)
    )
    if limit is not None:
        query = query.limit(limit)

    result = await session.execute(query)
    return list(result.scalars())


async def insert_reading(
    session: AsyncSession,
    sensor_id: int,
    value: float,
    unit: str,
    timestamp: datetime | None = None,
) -> SensorData:
    """Append a reading and commit. ``timestamp`` defaults to now."""
    reading = SensorData(
        sensor_id=sensor_id,
        value=value,
        unit=unit,
        timestamp=timestamp or datetime.now(),
    )
    session.add(reading)
    await session.commit()
    return reading
