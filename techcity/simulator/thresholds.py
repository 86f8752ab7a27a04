"""Per-sensor-type value ranges and alert thresholds."""

from dataclasses import asdict, dataclass
from enum import StrEnum
from typing import Any


class SensorType(StrEnum):
    TEMPERATURE = "temperature"
    AIR_QUALITY = "air_quality"
    NOISE = "noise"
    HUMIDITY = "humidity"
    TRAFFIC = "traffic"
    POLLUTION = "pollution"


@dataclass(frozen=True)
class ThresholdConfig:
    """Nominal instrument range plus warning/critical boundaries for a sensor type."""

    min: float
    max: float
    warning_level: float
    critical_level: float
    unit: str

    @property
    def span(self) -> float:
        return self.max - self.min


THRESHOLDS: dict[SensorType, ThresholdConfig] = {
    SensorType.TEMPERATURE: ThresholdConfig(
        min=15, max=35, warning_level=25, critical_level=30, unit="°C"
    ),
    SensorType.AIR_QUALITY: ThresholdConfig(
        min=20, max=200, warning_level=100, critical_level=150, unit="AQI"
    ),
    SensorType.NOISE: ThresholdConfig(min=30, max=80, warning_level=60, critical_level=70, unit="dB"),
    SensorType.HUMIDITY: ThresholdConfig(
        min=30, max=90, warning_level=80, critical_level=85, unit="%"
    ),
    SensorType.TRAFFIC: ThresholdConfig(
        min=50, max=500, warning_level=300, critical_level=400, unit="veh/h"
    ),
    SensorType.POLLUTION: ThresholdConfig(
        min=10, max=150, warning_level=80, critical_level=120, unit="µg/m³"
    ),
}


def parse_sensor_type(sensor_type: str | SensorType) -> SensorType | None:
    """Map a raw type string onto ``SensorType``; ``None`` when unknown."""
    try:
        return SensorType(sensor_type)
    except ValueError:
        return None


def get_threshold_config(sensor_type: str | SensorType) -> ThresholdConfig | None:
    """Get thresholds for a sensor type, or ``None`` for unknown types."""
    parsed = parse_sensor_type(sensor_type)
    if parsed is None:
        return None
    return THRESHOLDS.get(parsed)


def threshold_table() -> dict[str, dict[str, Any]]:
    """Serializable copy of the whole table, keyed by type name."""
    return {sensor_type.value: asdict(config) for sensor_type, config in THRESHOLDS.items()}
