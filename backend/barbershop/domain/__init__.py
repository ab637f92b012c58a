"""
Domain package - Pure business logic layer.

This package contains:
- entities.py: Domain entities and report value objects
- interfaces.py: Data store contracts consumed by the report services
"""

from .entities import (
    Barber,
    Client,
    ClientMetrics,
    CommissionSplit,
    DateRange,
    FinancialSummary,
    Transaction,
    TransactionStatus,
    Unit,
    UnitMetrics,
)
from .interfaces import (
    IBarberReader,
    IClientReader,
    IReportDataStore,
    ITransactionReader,
    IUnitReader,
)

__all__ = [
    # Domain entities
    "Barber",
    "Client",
    "Transaction",
    "TransactionStatus",
    "Unit",
    # Report values
    "ClientMetrics",
    "CommissionSplit",
    "DateRange",
    "FinancialSummary",
    "UnitMetrics",
    # Data store interfaces
    "IReportDataStore",
    "ITransactionReader",
    "IClientReader",
    "IBarberReader",
    "IUnitReader",
]
