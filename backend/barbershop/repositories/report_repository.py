"""Report data store implementation following SOLID principles.

Read-only SQLAlchemy adapter behind ``IReportDataStore``: loads units,
barbers, clients and appointments and maps them to domain entities. All
timestamps leave this module as aware datetimes in ``APP_TZ`` (SQLite hands
back naive values, which are stored as ``APP_TZ`` wall-clock time).
"""

import logging
from datetime import datetime
from typing import Iterable, List, Optional

from barbershop.core import config
from barbershop.db.base import Appointment as DbAppointment
from barbershop.db.base import Barber as DbBarber
from barbershop.db.base import Client as DbClient
from barbershop.db.base import Unit as DbUnit
from barbershop.domain.entities import (
    Barber,
    Client,
    DateRange,
    Transaction,
    TransactionStatus,
    Unit,
)
from barbershop.domain.interfaces import IReportDataStore

logger = logging.getLogger(__name__)


def as_app_tz(value: Optional[datetime]) -> Optional[datetime]:
    """Attach APP_TZ to naive values and convert aware ones to APP_TZ."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=config.APP_TZ)
    return value.astimezone(config.APP_TZ)


class ReportRepository(IReportDataStore):
    """Repository for report read operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def fetch_transactions(
        self,
        date_range: DateRange,
        unit_id: int,
        barber_id: Optional[int] = None,
        status: TransactionStatus = TransactionStatus.COMPLETED,
    ) -> List[Transaction]:
        start = as_app_tz(date_range.start)
        end = as_app_tz(date_range.end)
        query = self.db.query(DbAppointment).filter(
            DbAppointment.unit_id == unit_id,
            DbAppointment.status == TransactionStatus(status).value,
            DbAppointment.start_time >= start,
            DbAppointment.start_time < end,
        )
        if barber_id is not None:
            query = query.filter(DbAppointment.barber_id == barber_id)

        rows = query.order_by(DbAppointment.start_time.desc()).all()
        logger.debug(
            "Transactions fetched",
            extra={
                "context": {
                    "unit_id": unit_id,
                    "barber_id": barber_id,
                    "start": start.isoformat(),
                    "end": end.isoformat(),
                    "count": len(rows),
                }
            },
        )
        return [self._transaction_to_domain(row) for row in rows]

    def fetch_clients(self, unit_ids: Iterable[int]) -> List[Client]:
        ids = set(unit_ids)
        if not ids:
            return []
        rows = (
            self.db.query(DbClient)
            .filter(DbClient.unit_id.in_(ids))
            .order_by(DbClient.name)
            .all()
        )
        return [self._client_to_domain(row) for row in rows]

    def fetch_barbers(self, unit_id: int) -> List[Barber]:
        rows = (
            self.db.query(DbBarber)
            .filter(DbBarber.unit_id == unit_id)
            .order_by(DbBarber.name)
            .all()
        )
        return [self._barber_to_domain(row) for row in rows]

    def fetch_units(self, unit_ids: Optional[Iterable[int]] = None) -> List[Unit]:
        query = self.db.query(DbUnit)
        if unit_ids is not None:
            query = query.filter(DbUnit.id.in_(set(unit_ids)))
        return [Unit(id=row.id, name=row.name) for row in query.order_by(DbUnit.name).all()]

    def _transaction_to_domain(self, row: DbAppointment) -> Transaction:
        """Convert DB appointment to a domain transaction."""
        return Transaction(
            id=row.id,
            barber_id=row.barber_id,
            unit_id=row.unit_id,
            total_price=row.total_price,
            occurred_at=as_app_tz(row.start_time),
            status=TransactionStatus(row.status),
            commission_rate=row.commission_rate,
            client_name=row.client_name,
        )

    def _client_to_domain(self, row: DbClient) -> Client:
        """Convert DB client to domain entity."""
        return Client(
            id=row.id,
            unit_id=row.unit_id,
            name=row.name,
            created_at=as_app_tz(row.created_at),
            last_visit_at=as_app_tz(row.last_visit_at),
            birth_date=row.birth_date,
            total_visits=row.total_visits or 0,
        )

    def _barber_to_domain(self, row: DbBarber) -> Barber:
        """Convert DB barber to domain entity."""
        return Barber(
            id=row.id,
            name=row.name,
            unit_id=row.unit_id,
            commission_rate=row.commission_rate,
            is_active=bool(row.is_active),
        )
