"""Pydantic schemas for sensors and their readings."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class ReadingPoint(BaseModel):
    """A single timestamped reading."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    timestamp: datetime
    value: float
    unit: str


class SensorOut(BaseModel):
    """Registry entry with its most recent reading, if any."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    type: str
    location: str
    latitude: float | None = None
    longitude: float | None = None
    status: str
    installed_at: date | None = Field(default=None, serialization_alias="installedAt")
    latest_reading: ReadingPoint | None = Field(default=None, serialization_alias="latestReading")


class ReadingsResponse(BaseModel):
    """Response for historical readings query."""

    model_config = ConfigDict(populate_by_name=True)

    sensor_id: int = Field(serialization_alias="sensorId")
    sensor_type: str = Field(serialization_alias="sensorType")
    readings: list[ReadingPoint]


class ReadingCreate(BaseModel):
    """Body for recording a reading from outside the simulator."""

    sensor_id: int
    value: float = Field(allow_inf_nan=False)
    timestamp: datetime | None = None


class ReadingCreated(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sensor_id: int = Field(serialization_alias="sensorId")
    value: float
    unit: str
    timestamp: datetime
    alert_created: str | None = Field(default=None, serialization_alias="alertCreated")
