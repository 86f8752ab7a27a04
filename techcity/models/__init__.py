"""SQLAlchemy models."""

from techcity.models.alert import Alert
from techcity.models.reading import SensorData
from techcity.models.sensor import (
    SENSOR_STATUS_ACTIVE,
    SENSOR_STATUS_INACTIVE,
    SENSOR_STATUS_MAINTENANCE,
    Sensor,
)

__all__ = [
    "Sensor",
    "SensorData",
    "Alert",
    "SENSOR_STATUS_ACTIVE",
    "SENSOR_STATUS_INACTIVE",
    "SENSOR_STATUS_MAINTENANCE",
]
