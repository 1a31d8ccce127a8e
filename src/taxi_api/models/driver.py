from sqlalchemy import String, Boolean, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship
from taxi_api.database.base import Base
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .ride import Ride


class Driver(Base):
    """
    SQLAlchemy model for a Driver.

    `license_number` and `vehicle_plate` are globally unique.
    """
    __tablename__ = "drivers"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False
    )

    license_number: Mapped[str] = mapped_column(
        String(9),
        unique=True,
        index=True,
        nullable=False
    )

    address: Mapped[str] = mapped_column(
        String(100),
        nullable=False
    )

    phone: Mapped[str] = mapped_column(
        String(11),
        nullable=False
    )

    # Plates are exactly 7 characters; length is enforced by the request schema
    vehicle_plate: Mapped[str] = mapped_column(
        String(7),
        unique=True,
        index=True,
        nullable=False
    )

    available: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False
    )

    # --- Relationships ---

    rides: Mapped[list["Ride"]] = relationship(
        "Ride",
        back_populates="driver",
        lazy="select"
    )

    def __repr__(self) -> str:
        return f"<Driver(id={self.id!r}, license_number={self.license_number!r}, vehicle_plate={self.vehicle_plate!r})>"
