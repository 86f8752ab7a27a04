"""Alert model."""

from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from techcity.database import Base


class Alert(Base):
    """Threshold crossing raised for a sensor. Active while ``resolved_at`` is NULL."""

    __tablename__ = "alerts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sensor_id: Mapped[int] = mapped_column(Integer, ForeignKey("sensors.id"), nullable=False)
    alert_type: Mapped[str] = mapped_column(String(20), nullable=False)  # warning | critical
    threshold_value: Mapped[float] = mapped_column(Float, nullable=False)
    current_value: Mapped[float] = mapped_column(Float, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now)
    resolved_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    sensor: Mapped["Sensor"] = relationship(back_populates="alerts")

    __table_args__ = (Index("ix_alerts_sensor_type_created", "sensor_id", "alert_type", "created_at"),)


# Import here to avoid circular imports
from techcity.models.sensor import Sensor  # noqa: E402, F401
