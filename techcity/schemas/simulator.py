"""Pydantic schemas for the simulator control surface."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from techcity.config import BACKFILL_MAX_DAYS, SIMULATION_INTERVAL_SECONDS


class SimulatorStatus(BaseModel):
    """Snapshot of the realtime simulator."""

    model_config = ConfigDict(populate_by_name=True)

    is_running: bool = Field(serialization_alias="isRunning")
    active_timer_count: int = Field(serialization_alias="activeTimerCount")
    sensor_count: int = Field(default=0, serialization_alias="sensorCount")
    interval_seconds: float | None = Field(default=None, serialization_alias="intervalSeconds")
    thresholds: dict[str, dict[str, Any]] = Field(default_factory=dict)


class StartRequest(BaseModel):
    interval_seconds: int = Field(default=SIMULATION_INTERVAL_SECONDS, ge=1, le=3600)


class BackfillRequest(BaseModel):
    days: int = Field(default=7, ge=1, le=BACKFILL_MAX_DAYS)


class BackfillResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    days: int
    sensors_processed: int = Field(serialization_alias="sensorsProcessed")
    sensors_skipped: int = Field(serialization_alias="sensorsSkipped")
    readings_written: int = Field(serialization_alias="readingsWritten")


class SeedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    created_count: int = Field(serialization_alias="createdCount")
    sensor_ids: list[int] = Field(serialization_alias="sensorIds")
