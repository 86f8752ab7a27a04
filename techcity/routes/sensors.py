"""Sensor API routes."""

from datetime import datetime, timedelta

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from techcity.database import get_db
from techcity.models import Sensor, SensorData
from techcity.schemas import ReadingPoint, ReadingsResponse, SensorOut
from techcity.services import get_latest_readings, get_sensor, get_sensor_readings, list_sensors

# Maximum time range limits
MAX_READINGS_DAYS = 30
MAX_READINGS_LIMIT = 10_000

router = APIRouter(prefix="/api/sensors", tags=["sensors"])


def _to_sensor_out(sensor: Sensor, latest: SensorData | None) -> SensorOut:
    return SensorOut(
        id=sensor.id,
        name=sensor.name,
        type=sensor.type,
        location=sensor.location,
        latitude=sensor.latitude,
        longitude=sensor.longitude,
        status=sensor.status,
        installed_at=sensor.installed_at,
        latest_reading=ReadingPoint.model_validate(latest) if latest else None,
    )


@router.get("", response_model=list[SensorOut])
async def list_all_sensors(
    status: str | None = Query(None, description="Filter by status, e.g. active"),
    type: str | None = Query(None, description="Filter by sensor type"),
    session: AsyncSession = Depends(get_db),
) -> list[SensorOut]:
    """Get all sensors with their latest reading."""
    sensors = await list_sensors(session, status=status, sensor_type=type)
    latest = await get_latest_readings(session, [s.id for s in sensors])
    return [_to_sensor_out(s, latest.get(s.id)) for s in sensors]


@router.get("/{sensor_id}", response_model=SensorOut)
async def get_one_sensor(
    sensor_id: int,
    session: AsyncSession = Depends(get_db),
) -> SensorOut:
    """Get a single sensor by ID."""
    sensor = await get_sensor(session, sensor_id)
    if not sensor:
        raise HTTPException(status_code=404, detail="Sensor not found")
    latest = await get_latest_readings(session, [sensor.id])
    return _to_sensor_out(sensor, latest.get(sensor.id))


@router.get("/{sensor_id}/readings", response_model=ReadingsResponse)
async def get_readings(
    sensor_id: int,
    start: datetime | None = Query(None, description="Start of time range (ISO format)"),
    end: datetime | None = Query(None, description="End of time range (ISO format)"),
    limit: int = Query(1000, ge=1, le=MAX_READINGS_LIMIT),
    session: AsyncSession = Depends(get_db),
) -> ReadingsResponse:
    """Get historical readings for a sensor, defaulting to the last 24 hours."""
    if end is None:
        end = datetime.now()
    if start is None:
        start = end - timedelta(hours=24)

    # Validate time range
    if start >= end:
        raise HTTPException(status_code=400, detail="start must be before end")

    if end - start > timedelta(days=MAX_READINGS_DAYS):
        raise HTTPException(
            status_code=400,
            detail=f"Time range cannot exceed {MAX_READINGS_DAYS} days",
        )

    sensor = await get_sensor(session, sensor_id)
    if not sensor:
        raise HTTPException(status_code=404, detail="Sensor not found")

    rows = await get_sensor_readings(session, sensor_id, start, end, limit)
    return ReadingsResponse(
        sensor_id=sensor_id,
        sensor_type=sensor.type,
        readings=[ReadingPoint.model_validate(r) for r in rows],
    )
