"""Sensor telemetry simulation and threshold alerting."""

from techcity.simulator.alerts import AlertEvaluator, AlertType, build_alert_message, classify
from techcity.simulator.backfill import BackfillResult, generate_historical_data
from techcity.simulator.engine import DataSimulator
from techcity.simulator.generator import generate_value, time_pattern
from techcity.simulator.stores import (
    AlertStore,
    Reading,
    ReadingStore,
    SensorInfo,
    SensorRegistry,
)
from techcity.simulator.thresholds import (
    THRESHOLDS,
    SensorType,
    ThresholdConfig,
    get_threshold_config,
)

__all__ = [
    "DataSimulator",
    "AlertEvaluator",
    "AlertType",
    "classify",
    "build_alert_message",
    "BackfillResult",
    "generate_historical_data",
    "generate_value",
    "time_pattern",
    "SensorInfo",
    "Reading",
    "SensorRegistry",
    "ReadingStore",
    "AlertStore",
    "SensorType",
    "ThresholdConfig",
    "THRESHOLDS",
    "get_threshold_config",
]
