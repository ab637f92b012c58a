from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .session import Base


class Unit(Base):
    """Unit (barbershop location) model; partition key of every report"""

    __tablename__ = "units"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    def __repr__(self):
        return f"<Unit(id={self.id}, name='{self.name}')>"


class Barber(Base):
    """Barber model; deactivated barbers keep their appointments"""

    __tablename__ = "barbers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    unit_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("units.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    # NULL means the shop-wide default rate applies
    commission_rate: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(5, 2), nullable=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    unit: Mapped["Unit"] = relationship("Unit", backref="barbers")

    def __repr__(self):
        return (
            f"<Barber(id={self.id}, name='{self.name}', unit_id={self.unit_id}, "
            f"commission_rate={self.commission_rate}, is_active={self.is_active})>"
        )


class Client(Base):
    """Client model for database persistence"""

    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    unit_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("units.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    birth_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    last_visit_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    # Incremented by the scheduling flow, read-only for reports
    total_visits: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    notes: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), onupdate=func.now()
    )

    unit: Mapped["Unit"] = relationship("Unit", backref="clients")

    def __repr__(self):
        return f"<Client(id={self.id}, name='{self.name}', unit_id={self.unit_id})>"


class Appointment(Base):
    """Appointment model; completed appointments are the report transactions"""

    __tablename__ = "appointments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    unit_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("units.id"), nullable=False, index=True
    )
    barber_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("barbers.id"), nullable=True, index=True
    )
    client_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("clients.id"), nullable=True, index=True
    )
    client_name: Mapped[str] = mapped_column(String(100), nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    total_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending"
    )  # pending, completed, cancelled
    # Rate frozen on the appointment; NULL falls back to the barber's rate
    commission_rate: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(5, 2), nullable=True
    )
    notes: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), onupdate=func.now()
    )

    unit: Mapped["Unit"] = relationship("Unit")
    barber: Mapped[Optional["Barber"]] = relationship("Barber", backref="appointments")
    client: Mapped[Optional["Client"]] = relationship("Client", backref="appointments")

    __table_args__ = (
        Index("ix_appointments_unit_status_start", "unit_id", "status", "start_time"),
    )

    def __repr__(self):
        return (
            f"<Appointment(id={self.id}, start_time={self.start_time}, "
            f"total_price={self.total_price}, barber_id={self.barber_id}, status={self.status})>"
        )
