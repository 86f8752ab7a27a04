"""Persistence interfaces the simulator depends on.

The engine never touches SQLAlchemy directly; it is handed objects
implementing these protocols (SQL-backed in production, in-memory in tests).
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol


@dataclass(frozen=True)
class SensorInfo:
    """Identity snapshot of a registry sensor, taken when the simulator starts."""

    id: int
    type: str
    name: str
    location: str


@dataclass(frozen=True)
class Reading:
    sensor_id: int
    value: float
    unit: str
    timestamp: datetime


class SensorRegistry(Protocol):
    async def list_active_sensors(self) -> list[SensorInfo]: ...

    async def add_sensor(
        self,
        name: str,
        sensor_type: str,
        location: str,
        latitude: float | None = None,
        longitude: float | None = None,
        installed_at: date | None = None,
    ) -> SensorInfo: ...


class ReadingStore(Protocol):
    async def get_last_reading(self, sensor_id: int) -> Reading | None: ...

    async def insert_reading(
        self,
        sensor_id: int,
        value: float,
        unit: str,
        timestamp: datetime | None = None,
    ) -> Reading: ...


class AlertStore(Protocol):
    async def has_recent_unresolved_alert(
        self, sensor_id: int, alert_type: str, since: datetime
    ) -> bool: ...

    async def insert_alert(
        self,
        sensor_id: int,
        alert_type: str,
        threshold_value: float,
        current_value: float,
        message: str,
    ) -> None: ...
