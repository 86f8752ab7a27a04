"""Pydantic schemas for alerts."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class AlertOut(BaseModel):
    """An alert joined with the sensor that raised it."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    sensor_id: int = Field(serialization_alias="sensorId")
    sensor_name: str = Field(serialization_alias="sensorName")
    sensor_type: str = Field(serialization_alias="sensorType")
    location: str
    alert_type: Literal["warning", "critical"] = Field(serialization_alias="alertType")
    threshold_value: float = Field(serialization_alias="thresholdValue")
    current_value: float = Field(serialization_alias="currentValue")
    message: str
    created_at: datetime = Field(serialization_alias="createdAt")
    resolved_at: datetime | None = Field(default=None, serialization_alias="resolvedAt")


class Pagination(BaseModel):
    limit: int
    offset: int
    total: int


class AlertListResponse(BaseModel):
    alerts: list[AlertOut]
    pagination: Pagination
