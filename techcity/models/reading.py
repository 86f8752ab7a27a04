"""Sensor reading model."""

from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from techcity.database import Base


class SensorData(Base):
    """A single value recorded by a sensor. Rows are append-only."""

    __tablename__ = "sensor_data"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sensor_id: Mapped[int] = mapped_column(Integer, ForeignKey("sensors.id"), nullable=False)
    value: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[str] = mapped_column(String(20), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now)

    sensor: Mapped["Sensor"] = relationship(back_populates="readings")

    __table_args__ = (Index("ix_sensor_data_sensor_time", "sensor_id", "timestamp"),)


# Import here to avoid circular imports
from techcity.models.sensor import Sensor  # noqa: E402, F401
