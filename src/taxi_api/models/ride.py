from sqlalchemy import String, DateTime, ForeignKey, Integer
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from datetime import datetime
from enum import Enum as PyEnum
from taxi_api.database.base import Base
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .passenger import Passenger
    from .driver import Driver


# ------------------------------
# Ride lifecycle
# ------------------------------
class RideStatus(PyEnum):
    """
    Lifecycle of a ride.

    REQUESTED -> ACCEPTED -> IN_PROGRESS -> COMPLETED, and any non-terminal
    state may move to CANCELLED. Nothing in the service performs these moves yet.
    """
    REQUESTED = "REQUESTED"       # waiting for a driver
    ACCEPTED = "ACCEPTED"         # a driver accepted the ride
    IN_PROGRESS = "IN_PROGRESS"   # passenger picked up
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


# ------------------------------
# Ride Model
# ------------------------------
class Ride(Base):
    """
    A ride requested by exactly one passenger and, once accepted, served by at most one driver.
    """
    __tablename__ = "rides"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True
    )

    pickup_location: Mapped[str] = mapped_column(
        String(100),
        nullable=False
    )

    dropoff_location: Mapped[str] = mapped_column(
        String(100),
        nullable=False
    )

    status: Mapped[RideStatus] = mapped_column(
        SQLEnum(RideStatus, length=15),
        default=RideStatus.REQUESTED,
        nullable=False,
        index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    passenger_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("passengers.id"),
        nullable=False,
        index=True
    )

    # Null until a driver accepts
    driver_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("drivers.id"),
        nullable=True,
        index=True
    )

    # --- Relationships ---

    passenger: Mapped["Passenger"] = relationship(
        "Passenger",
        back_populates="rides"
    )

    driver: Mapped[Optional["Driver"]] = relationship(
        "Driver",
        back_populates="rides"
    )

    def __repr__(self) -> str:
        return f"<Ride(id={self.id!r}, status={self.status.value!r}, passenger_id={self.passenger_id!r})>"
