"""Alert service layer: dedup lookups, creation, listing and resolution."""

from datetime import datetime

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from techcity.models import Alert, Sensor

__all__ = [
    "has_recent_unresolved_alert",
    "insert_alert",
    "list_alerts",
    "get_alert",
    "resolve_alert",
]


async def has_recent_unresolved_alert(
    session: AsyncSession,
    sensor_id: int,
    alert_type: str,
    since: datetime,
) -> bool:
    """True if an unresolved alert of this type was created for the sensor at or after ``since``."""
    result = await session.execute(
        select(Alert.id)
        .where(
            and_(
                Alert.sensor_id == sensor_id,
                Alert.alert_type == alert_type,
                Alert.resolved_at.is_(None),
                Alert.created_at >= since,
            )
        )
        .limit(1)
    )
    return result.scalar_one_or_none() is not None


async def insert_alert(
    session: AsyncSession,
    sensor_id: int,
    alert_type: str,
    threshold_value: float,
    current_value: float,
    message: str,
    created_at: datetime | None = None,
) -> Alert:
    """Create an active alert and commit."""
    alert = Alert(
        sensor_id=sensor_id,
        alert_type=alert_type,
        threshold_value=threshold_value,
        current_value=current_value,
        message=message,
        created_at=created_at or datetime.now(),
        resolved_at=None,
    )
    session.add(alert)
    await session.commit()
    return alert


def _alert_filters(
    alert_type: str | None,
    resolved: bool | None,
    sensor_id: int | None,
    start: datetime | None,
    end: datetime | None,
) -> list:
    filters = []
    if alert_type:
        filters.append(Alert.alert_type == alert_type)
    if resolved is True:
        filters.append(Alert.resolved_at.is_not(None))
    elif resolved is False:
        filters.append(Alert.resolved_at.is_(None))
    if sensor_id is not None:
        filters.append(Alert.sensor_id == sensor_id)
    if start is not None:
        filters.append(Alert.created_at >= start)
    if end is not None:
        filters.append(Alert.created_at <= end)
    return filters


async def list_alerts(
    session: AsyncSession,
    alert_type: str | None = None,
    resolved: bool | None = None,
    sensor_id: int | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
    limit: int = 50,
    offset: int = 0,
) -> tuple[list[tuple[Alert, Sensor]], int]:
    """
    Page through alerts, newest first, joined with their sensor.

    Returns (rows, total) where total ignores limit/offset.
    """
    filters = _alert_filters(alert_type, resolved, sensor_id, start, end)

    query = (
        select(Alert, Sensor)
        .join(Sensor, Alert.sensor_id == Sensor.id)
        .where(*filters)
        .order_by(Alert.created_at.desc(), Alert.id.desc())
        .limit(limit)
        .offset(offset)
    )
    result = await session.execute(query)
    rows = [(row[0], row[1]) for row in result.all()]

    count_result = await session.execute(select(func.count(Alert.id)).where(*filters))
    total = count_result.scalar_one()

    return rows, total


async def get_alert(session: AsyncSession, alert_id: int) -> tuple[Alert, Sensor] | None:
    result = await session.execute(
        select(Alert, Sensor).join(Sensor, Alert.sensor_id == Sensor.id).where(Alert.id == alert_id)
    )
    row = result.one_or_none()
    if not row:
        return None
    return row[0], row[1]


async def resolve_alert(
    session: AsyncSession,
    alert: Alert,
    resolved_at: datetime | None = None,
) -> Alert:
    """Mark an alert resolved and commit."""
    alert.resolved_at = resolved_at or datetime.now()
    await session.commit()
    return alert
