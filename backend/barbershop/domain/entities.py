"""
Domain entities - Pure business logic, no framework dependencies.

Following SOLID principles:
- Single Responsibility: Each entity represents one business concept
- Open/Closed: Entities can be extended without modification

Money is always ``Decimal``. Optional attributes are explicit ``Optional``
fields; what "absent" means is decided by the service that reads them
(absent ``last_visit_at`` is "never visited", absent ``commission_rate`` is
"use the barber's or the default rate").
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional

from barbershop.core.exceptions import InvalidAmount, InvalidRate

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value: Any) -> Decimal:
    """Coerce int/float/str money or percentages to Decimal without float noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Not a numeric value: {value!r}")
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Not a numeric value: {value!r}") from e


def validate_rate(rate: Any) -> Optional[Decimal]:
    """Return the rate as Decimal (None stays None); reject values outside [0, 100]."""
    if rate is None:
        return None
    try:
        value = to_decimal(rate)
    except ValueError as e:
        raise InvalidRate(rate) from e
    if not value.is_finite() or value < ZERO or value > HUNDRED:
        raise InvalidRate(rate)
    return value


def validate_amount(amount: Any) -> Decimal:
    try:
        value = to_decimal(amount)
    except ValueError as e:
        raise InvalidAmount(amount) from e
    if not value.is_finite() or value < ZERO:
        raise InvalidAmount(amount)
    return value


class TransactionStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass
class Unit:
    """A barbershop location; every per-unit metric is partitioned by it."""

    id: int
    name: str = ""


@dataclass
class Barber:
    """Domain entity representing a Barber.

    Deactivated barbers keep owning their historical transactions, so they
    still appear in reports for past periods.
    """

    id: int
    name: str = ""
    unit_id: Optional[int] = None
    commission_rate: Optional[Decimal] = None
    is_active: bool = True

    def __post_init__(self):
        """Validate business rules."""
        self.commission_rate = validate_rate(self.commission_rate)


@dataclass
class Transaction:
    """A completed (or pending/cancelled) service appointment with its price."""

    id: int
    barber_id: Optional[int]
    unit_id: int
    total_price: Decimal
    occurred_at: datetime
    status: TransactionStatus = TransactionStatus.COMPLETED
    commission_rate: Optional[Decimal] = None
    client_name: Optional[str] = None

    def __post_init__(self):
        """Validate business rules."""
        self.total_price = validate_amount(self.total_price)
        self.commission_rate = validate_rate(self.commission_rate)
        self.status = TransactionStatus(self.status)


@dataclass
class Client:
    """Domain entity representing a Client of one unit.

    ``total_visits`` is maintained elsewhere (incremented on each completed
    appointment) and is only read here.
    """

    id: int
    unit_id: int
    created_at: datetime
    name: str = ""
    last_visit_at: Optional[datetime] = None
    birth_date: Optional[date] = None
    total_visits: int = 0

    def __post_init__(self):
        """Validate business rules."""
        if self.total_visits is None:
            self.total_visits = 0
        if self.total_visits < 0:
            raise ValueError("total_visits cannot be negative")


@dataclass(frozen=True)
class DateRange:
    """Half-open interval ``[start, end)``."""

    start: datetime
    end: datetime

    def __post_init__(self):
        if not self.start < self.end:
            raise ValueError("DateRange start must be before end")

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end


@dataclass(frozen=True)
class CommissionSplit:
    """Barber commission and shop profit of one transaction.

    ``commission + profit`` equals the transaction price exactly.
    """

    commission: Decimal
    profit: Decimal


@dataclass
class FinancialSummary:
    count: int = 0
    total_revenue: Decimal = ZERO
    total_commission: Decimal = ZERO
    total_profit: Decimal = ZERO


@dataclass
class ClientMetrics:
    """Client activity buckets of one unit (or the sum of several units)."""

    active: int = 0
    inactive: int = 0
    birthday_this_month: int = 0
    new_this_month: int = 0
    total_visits: int = 0
    total_clients: int = 0

    def __add__(self, other: "ClientMetrics") -> "ClientMetrics":
        if not isinstance(other, ClientMetrics):
            return NotImplemented
        return ClientMetrics(
            active=self.active + other.active,
            inactive=self.inactive + other.inactive,
            birthday_this_month=self.birthday_this_month + other.birthday_this_month,
            new_this_month=self.new_this_month + other.new_this_month,
            total_visits=self.total_visits + other.total_visits,
            total_clients=self.total_clients + other.total_clients,
        )


@dataclass
class UnitMetrics:
    unit_id: int
    unit_name: str
    metrics: ClientMetrics = field(default_factory=ClientMetrics)
