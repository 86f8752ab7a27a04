"""Sensor model."""

from datetime import date

from sqlalchemy import Date, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from techcity.database import Base

SENSOR_STATUS_ACTIVE = "active"
SENSOR_STATUS_INACTIVE = "inactive"
SENSOR_STATUS_MAINTENANCE = "maintenance"


class Sensor(Base):
    """IoT sensor deployed somewhere in the city."""

    __tablename__ = "sensors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    # Free-form on purpose: unknown types are stored and skipped by the simulator
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    location: Mapped[str] = mapped_column(String(200), nullable=False)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=SENSOR_STATUS_ACTIVE)
    installed_at: Mapped[date | None] = mapped_column(Date, nullable=True)

    readings: Mapped[list["SensorData"]] = relationship(back_populates="sensor")
    alerts: Mapped[list["Alert"]] = relationship(back_populates="sensor")


# Import here to avoid circular imports
from techcity.models.alert import Alert  # noqa: E402, F401
from techcity.models.reading import SensorData  # noqa: E402, F401
