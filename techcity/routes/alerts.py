"""Alert API routes."""

from datetime import datetime
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from techcity.database import get_db
from techcity.models import Alert, Sensor
from techcity.schemas import AlertListResponse, AlertOut, Pagination
from techcity.services import get_alert, list_alerts, resolve_alert

router = APIRouter(prefix="/api/alerts", tags=["alerts"])


def _to_alert_out(alert: Alert, sensor: Sensor) -> AlertOut:
    return AlertOut(
        id=alert.id,
        sensor_id=alert.sensor_id,
        sensor_name=sensor.name,
        sensor_type=sensor.type,
        location=sensor.location,
        alert_type=alert.alert_type,
        threshold_value=alert.threshold_value,
        current_value=alert.current_value,
        message=alert.message,
        created_at=alert.created_at,
        resolved_at=alert.resolved_at,
    )


@router.get("", response_model=AlertListResponse)
async def list_all_alerts(
    type: Literal["warning", "critical"] | None = Query(None, description="Alert severity"),
    resolved: bool | None = Query(None, description="true for resolved, false for active"),
    sensor_id: int | None = Query(None),
    start: datetime | None = Query(None, description="Created at or after (ISO format)"),
    end: datetime | None = Query(None, description="Created at or before (ISO format)"),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_db),
) -> AlertListResponse:
    """List alerts newest first, with pagination."""
    rows, total = await list_alerts(
        session,
        alert_type=type,
        resolved=resolved,
        sensor_id=sensor_id,
        start=start,
        end=end,
        limit=limit,
        offset=offset,
    )
    return AlertListResponse(
        alerts=[_to_alert_out(alert, sensor) for alert, sensor in rows],
        pagination=Pagination(limit=limit, offset=offset, total=total),
    )


@router.get("/{alert_id}", response_model=AlertOut)
async def get_one_alert(alert_id: int, session: AsyncSession = Depends(get_db)) -> AlertOut:
    row = await get_alert(session, alert_id)
    if not row:
        raise HTTPException(status_code=404, detail="Alert not found")
    return _to_alert_out(*row)


@router.put("/{alert_id}/resolve", response_model=AlertOut)
async def resolve_one_alert(alert_id: int, session: AsyncSession = Depends(get_db)) -> AlertOut:
    """Mark an alert resolved. Resolving re-arms alerting for that sensor and severity."""
    row = await get_alert(session, alert_id)
    if not row:
        raise HTTPException(status_code=404, detail="Alert not found")
    alert, sensor = row
    if alert.resolved_at is not None:
        raise HTTPException(status_code=409, detail="Alert already resolved")

    alert = await resolve_alert(session, alert)
    return _to_alert_out(alert, sensor)
