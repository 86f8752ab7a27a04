"""Service layer modules."""

from techcity.services.alert_service import (
    get_alert,
    has_recent_unresolved_alert,
    insert_alert,
    list_alerts,
    resolve_alert,
)
from techcity.services.readings_service import (
    get_last_reading,
    get_latest_readings,
    get_sensor_readings,
    insert_reading,
)
from techcity.services.sensor_service import (
    create_sensor,
    get_sensor,
    list_active_sensors,
    list_sensors,
)

__all__ = [
    "list_sensors",
    "list_active_sensors",
    "get_sensor",
    "create_sensor",
    "get_last_reading",
    "get_latest_readings",
    "get_sensor_readings",
    "insert_reading",
    "has_recent_unresolved_alert",
    "insert_alert",
    "list_alerts",
    "get_alert",
    "resolve_alert",
]
