"""Pydantic schemas for API request/response models."""

from techcity.schemas.alert import AlertListResponse, AlertOut, Pagination
from techcity.schemas.sensor import (
    ReadingCreate,
    ReadingCreated,
    ReadingPoint,
    ReadingsResponse,
    SensorOut,
)
from techcity.schemas.simulator import (
    BackfillRequest,
    BackfillResponse,
    SeedResponse,
    SimulatorStatus,
    StartRequest,
)

__all__ = [
    # Sensor schemas
    "SensorOut",
    "ReadingPoint",
    "ReadingsResponse",
    "ReadingCreate",
    "ReadingCreated",
    # Alert schemas
    "AlertOut",
    "AlertListResponse",
    "Pagination",
    # Simulator schemas
    "SimulatorStatus",
    "StartRequest",
    "BackfillRequest",
    "BackfillResponse",
    "SeedResponse",
]
