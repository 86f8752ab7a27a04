"""Entry point for recording readings pushed by callers other than the simulator."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from techcity.database import get_db
from techcity.routes.deps import get_alert_evaluator
from techcity.schemas import ReadingCreate, ReadingCreated
from techcity.services import get_sensor, insert_reading
from techcity.services.sql_stores import to_sensor_info
from techcity.simulator import AlertEvaluator, get_threshold_config

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sensor-data", tags=["sensor-data"])


@router.post("", response_model=ReadingCreated, status_code=201)
async def record_reading(
    body: ReadingCreate,
    session: AsyncSession = Depends(get_db),
    evaluator: AlertEvaluator = Depends(get_alert_evaluator),
) -> ReadingCreated:
    """Store a reading, then run threshold alerting on it."""
    sensor = await get_sensor(session, body.sensor_id)
    if not sensor:
        raise HTTPException(status_code=404, detail="Sensor not found")

    config = get_threshold_config(sensor.type)
    if config is None:
        raise HTTPException(status_code=422, detail=f"Unknown sensor type: {sensor.type}")

    value = round(body.value, 2)
    reading = await insert_reading(session, sensor.id, value, config.unit, body.timestamp)
    alert_type = await evaluator.evaluate(to_sensor_info(sensor), value)
    logger.info(f"Recorded reading for sensor {sensor.id}: {value} {config.unit}")

    return ReadingCreated(
        sensor_id=sensor.id,
        value=reading.value,
        unit=reading.unit,
        timestamp=reading.timestamp,
        alert_created=alert_type.value if alert_type else None,
    )
