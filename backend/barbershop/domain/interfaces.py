"""
Abstract interfaces for the report data store following Interface Segregation Principle.

These interfaces define contracts without implementation details,
enabling dependency injection and easier testing: report services only see
``IReportDataStore`` and never know whether records come from SQLAlchemy or
from an in-memory stub.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from .entities import Barber, Client, DateRange, Transaction, TransactionStatus, Unit


class ITransactionReader(ABC):
    """Interface for transaction read operations."""

    @abstractmethod
    def fetch_transactions(
        self,
        date_range: DateRange,
        unit_id: int,
        barber_id: Optional[int] = None,
        status: TransactionStatus = TransactionStatus.COMPLETED,
    ) -> List[Transaction]:
        """Get transactions with ``occurred_at`` inside the half-open range."""
        pass


class IClientReader(ABC):
    """Interface for client read operations."""

    @abstractmethod
    def fetch_clients(self, unit_ids: Iterable[int]) -> List[Client]:
        """Get every client belonging to the given units."""
        pass


class IBarberReader(ABC):
    """Interface for barber read operations."""

    @abstractmethod
    def fetch_barbers(self, unit_id: int) -> List[Barber]:
        """Get all barbers of a unit, deactivated ones included."""
        pass


class IUnitReader(ABC):
    """Interface for unit read operations."""

    @abstractmethod
    def fetch_units(self, unit_ids: Optional[Iterable[int]] = None) -> List[Unit]:
        """Get the given units, or all units when ``unit_ids`` is None."""
        pass


class IReportDataStore(ITransactionReader, IClientReader, IBarberReader, IUnitReader):
    """Complete read-only data store consumed by the report services."""

    pass
