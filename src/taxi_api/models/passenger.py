from sqlalchemy import String, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from datetime import datetime
from taxi_api.database.base import Base
from typing import TYPE_CHECKING

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .ride import Ride


class Passenger(Base):
    """
    SQLAlchemy model for a Passenger.

    `username` and `email` are globally unique; each maps to at most one passenger.
    """
    __tablename__ = "passengers"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False
    )

    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False
    )

    address: Mapped[str] = mapped_column(
        String(100),
        nullable=False
    )

    phone: Mapped[str] = mapped_column(
        String(15),
        index=True,
        nullable=False
    )

    email: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False
    )

    # Set once by the database on insert; never part of an update
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    # --- Relationships ---

    rides: Mapped[list["Ride"]] = relationship(
        "Ride",
        back_populates="passenger",
        lazy="select"
    )

    def __repr__(self) -> str:
        return f"<Passenger(id={self.id!r}, username={self.username!r})>"
