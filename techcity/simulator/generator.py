"""Synthetic value generation: bounded random walk shaped by the time of day."""

import math
import random
from datetime import datetime

from techcity.simulator.thresholds import SensorType, get_threshold_config, parse_sensor_type

# Maximum change per step as a fraction of the type's full range
WALK_STEP_FRACTION = 0.1


def is_rush_hour(hour: int) -> bool:
    return 7 <= hour <= 9 or 17 <= hour <= 19


def is_night(hour: int) -> bool:
    return hour >= 22 or hour <= 6


def time_pattern(sensor_type: str | SensorType, hour: int) -> float:
    """Multiplicative hour-of-day factor for a sensor type.

    - temperature: sinusoid peaking mid-afternoon
    - traffic: 1.5 during rush hours, 0.3 overnight
    - noise: 0.4 overnight
    - air_quality / pollution: 1.3 / 1.4 during rush hours
    - humidity and anything else: no modulation
    """
    parsed = parse_sensor_type(sensor_type)

    if parsed is SensorType.TEMPERATURE:
        return math.sin((hour - 6) * math.pi / 12) * 0.3 + 1
    if parsed is SensorType.TRAFFIC:
        if is_rush_hour(hour):
            return 1.5
        return 0.3 if is_night(hour) else 1.0
    if parsed is SensorType.NOISE:
        return 0.4 if is_night(hour) else 1.0
    if parsed is SensorType.AIR_QUALITY:
        return 1.3 if is_rush_hour(hour) else 1.0
    if parsed is SensorType.POLLUTION:
        return 1.4 if is_rush_hour(hour) else 1.0
    return 1.0


def generate_value(
    sensor_type: str | SensorType,
    last_value: float | None = None,
    *,
    hour: int | None = None,
    rng: random.Random | None = None,
) -> float | None:
    """
    Produce the next reading for a sensor.

    With a previous value the reading walks at most 10% of the type's range
    away from it; without one it is drawn uniformly from the range. The time
    pattern is applied afterwards and the result clamped back into
    ``[min, max]``, then rounded to 2 decimals.

    Returns ``None`` for unknown sensor types.
    """
    config = get_threshold_config(sensor_type)
    if config is None:
        return None

    rng = rng or random
    if hour is None:
        hour = datetime.now().hour

    if last_value is not None:
        max_change = config.span * WALK_STEP_FRACTION
        value = last_value + (rng.random() - 0.5) * max_change
    else:
        value = rng.random() * config.span + config.min

    adjusted = value * time_pattern(sensor_type, hour)
    clamped = max(config.min, min(config.max, adjusted))
    return round(clamped, 2)
