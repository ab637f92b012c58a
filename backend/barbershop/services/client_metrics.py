"""
Client Metrics Service - per-unit client activity buckets.

Classifies the clients of a unit into active / inactive, counts birthdays
and new sign-ups of the current month, and totals visits. Multi-unit grand
totals are the sum of the per-unit rows; raw clients are never classified a
second time.

``now`` must have the same awareness as the stored timestamps (the data
store returns aware datetimes in ``APP_TZ``).
"""

import logging
import time
from dataclasses import asdict
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

from barbershop.core import config
from barbershop.core.logging_config import log_performance
from barbershop.domain.entities import Client, ClientMetrics, Unit, UnitMetrics
from barbershop.domain.interfaces import IReportDataStore
from barbershop.services.date_ranges import first_instant_of_month

logger = logging.getLogger(__name__)


def is_active(client: Client, now: datetime, window_days: Optional[int] = None) -> bool:
    """A client is active when the last visit falls in the trailing window."""
    if client.last_visit_at is None:
        return False
    if window_days is None:
        window_days = config.ACTIVE_WINDOW_DAYS
    return client.last_visit_at >= now - timedelta(days=window_days)


def has_birthday_in_month(client: Client, now: datetime) -> bool:
    # Recurring match, the birth year is irrelevant
    return client.birth_date is not None and client.birth_date.month == now.month


def classify(clients: Iterable[Client], now: datetime) -> ClientMetrics:
    """
    Reduce one unit's clients into activity buckets.

    Args:
        clients: Every client of a single unit
        now: Evaluation instant shared by all buckets

    Returns:
        ClientMetrics: active + inactive always equals total_clients
    """
    metrics = ClientMetrics()
    month_start = first_instant_of_month(now)
    window_days = config.ACTIVE_WINDOW_DAYS

    for client in clients:
        metrics.total_clients += 1
        if is_active(client, now, window_days):
            metrics.active += 1
        else:
            metrics.inactive += 1
        if has_birthday_in_month(client, now):
            metrics.birthday_this_month += 1
        if client.created_at is not None and client.created_at >= month_start:
            metrics.new_this_month += 1
        metrics.total_visits += client.total_visits or 0

    return metrics


def unit_metrics(
    units: Iterable[Unit], clients: Iterable[Client], now: datetime
) -> List[UnitMetrics]:
    """Classify each unit's clients once, one row per unit (empty units included)."""
    units = list(units)
    by_unit: Dict[int, List[Client]] = {unit.id: [] for unit in units}
    orphans = 0
    for client in clients:
        bucket = by_unit.get(client.unit_id)
        if bucket is None:
            orphans += 1
            continue
        bucket.append(client)

    if orphans:
        logger.warning(
            "Clients of unlisted units ignored in unit metrics",
            extra={"context": {"ignored_clients": orphans}},
        )

    return [
        UnitMetrics(
            unit_id=unit.id,
            unit_name=unit.name,
            metrics=classify(by_unit[unit.id], now),
        )
        for unit in units
    ]


def rollup(rows: Iterable[UnitMetrics]) -> ClientMetrics:
    """Grand totals across units, summed from the already computed rows."""
    return sum((row.metrics for row in rows), ClientMetrics())


def build_unit_report(
    store: IReportDataStore,
    now: datetime,
    unit_ids: Optional[Iterable[int]] = None,
) -> Dict[str, Any]:
    """
    Build the per-unit client report with grand totals.

    Returns:
        dict: ``{"units": [row, ...], "totals": {...}}`` where each row is
        ``{"unit_id", "unit_name", "active", "inactive", ...}``
    """
    started = time.perf_counter()
    units = store.fetch_units(unit_ids)
    clients = store.fetch_clients([unit.id for unit in units]) if units else []
    rows = unit_metrics(units, clients, now)
    totals = rollup(rows)

    log_performance(
        "build_unit_report",
        (time.perf_counter() - started) * 1000,
        unit_count=len(rows),
        record_count=len(clients),
    )

    return {
        "generated_at": now,
        "units": [
            {"unit_id": row.unit_id, "unit_name": row.unit_name, **asdict(row.metrics)}
            for row in rows
        ],
        "totals": asdict(totals),
    }
