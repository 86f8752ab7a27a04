"""Threshold classification and deduplicated alert creation."""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta
from enum import StrEnum

from techcity.simulator.stores import AlertStore, SensorInfo
from techcity.simulator.thresholds import ThresholdConfig, get_threshold_config

logger = logging.getLogger(__name__)

# An unresolved alert of the same type inside this window suppresses a new one
DEDUP_WINDOW = timedelta(hours=1)


class AlertType(StrEnum):
    WARNING = "warning"
    CRITICAL = "critical"


def classify(value: float, config: ThresholdConfig) -> tuple[AlertType, float] | None:
    """Return (alert_type, threshold crossed), or ``None`` below the warning level."""
    if value >= config.critical_level:
        return AlertType.CRITICAL, config.critical_level
    if value >= config.warning_level:
        return AlertType.WARNING, config.warning_level
    return None


def _format_threshold(threshold: float) -> str:
    return f"{threshold:g}"


def build_alert_message(
    alert_type: AlertType,
    sensor: SensorInfo,
    value: float,
    threshold: float,
    unit: str,
) -> str:
    label = "CRITICAL" if alert_type is AlertType.CRITICAL else "WARNING"
    return (
        f"{label}: {sensor.name} ({sensor.location}) - {sensor.type} at {value:.1f} {unit} "
        f"(threshold: {_format_threshold(threshold)} {unit})"
    )


class AlertEvaluator:
    """Raises warning/critical alerts for new readings, at most one per type per hour."""

    def __init__(self, store: AlertStore, clock: Callable[[], datetime] = datetime.now):
        self._store = store
        self._clock = clock

    async def evaluate(self, sensor: SensorInfo, value: float) -> AlertType | None:
        """Check ``value`` against the sensor's thresholds.

        Returns the type of the alert created, or ``None`` when nothing was
        created (below thresholds, suppressed duplicate, unknown type, or a
        store failure, which is logged).
        """
        config = get_threshold_config(sensor.type)
        if config is None:
            return None

        classified = classify(value, config)
        if classified is None:
            return None
        alert_type, threshold = classified

        try:
            since = self._clock() - DEDUP_WINDOW
            if await self._store.has_recent_unresolved_alert(sensor.id, alert_type.value, since):
                logger.debug(f"Suppressed duplicate {alert_type} alert for sensor {sensor.id}")
                return None

            message = build_alert_message(alert_type, sensor, value, threshold, config.unit)
            await self._store.insert_alert(
                sensor.id, alert_type.value, threshold, value, message
            )
        except Exception:
            logger.exception(f"Alert evaluation failed for sensor {sensor.id}")
            return None

        logger.warning(f"Alert {alert_type}: {message}")
        return alert_type
