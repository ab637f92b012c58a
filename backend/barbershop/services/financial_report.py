"""
Financial Report Service - revenue, commission and profit aggregation.

This module reduces an already-filtered collection of transactions into the
totals shown on the cash-flow and commission screens, and composes those
screens from the data store.

Filtering is never done here: the caller fetches exactly the population to
summarize (one period, optionally one barber). Each named period is fetched
and summarized on its own, never derived from another period's total.
"""

import logging
import time
from dataclasses import asdict
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, List, Optional

from barbershop.core.exceptions import InvalidPeriod, ReportingError
from barbershop.core.logging_config import log_performance
from barbershop.domain.entities import (
    ZERO,
    Barber,
    DateRange,
    FinancialSummary,
    Transaction,
)
from barbershop.domain.interfaces import IReportDataStore
from barbershop.services.commission import effective_rate, split_of
from barbershop.services.date_ranges import (
    PERIOD_MONTH,
    PERIODS,
    month_options,
    resolve_month,
    resolve_named,
    year_options,
)

logger = logging.getLogger(__name__)

RateLookup = Callable[[Transaction], Optional[Decimal]]


def transaction_rate(transaction: Transaction) -> Optional[Decimal]:
    """Rate stored on the transaction itself (None means default rate)."""
    return transaction.commission_rate


def barber_rate_lookup(barbers: Iterable[Barber]) -> RateLookup:
    """Build a lookup preferring the transaction's rate, then its barber's."""
    rates = {barber.id: barber.commission_rate for barber in barbers}

    def lookup(transaction: Transaction) -> Optional[Decimal]:
        if transaction.commission_rate is not None:
            return transaction.commission_rate
        return rates.get(transaction.barber_id)

    return lookup


def summarize(
    transactions: Iterable[Transaction], rate_lookup: RateLookup = transaction_rate
) -> FinancialSummary:
    """
    Reduce transactions into count, revenue, commission and profit totals.

    Args:
        transactions: The exact population to summarize
        rate_lookup: Resolves the commission rate of each transaction
            (None in return means the default rate)

    Returns:
        FinancialSummary: All zeros for an empty collection

    Raises:
        InvalidRate / InvalidAmount: propagated from the per-row split
    """
    count = 0
    total_revenue = ZERO
    total_commission = ZERO
    total_profit = ZERO

    for transaction in transactions:
        split = split_of(transaction.total_price, rate_lookup(transaction))
        count += 1
        total_revenue += transaction.total_price
        total_commission += split.commission
        total_profit += split.profit

    if total_commission + total_profit != total_revenue:
        logger.error(
            "Commission and profit do not add up to revenue",
            extra={
                "context": {
                    "count": count,
                    "total_revenue": str(total_revenue),
                    "total_commission": str(total_commission),
                    "total_profit": str(total_profit),
                }
            },
        )

    return FinancialSummary(
        count=count,
        total_revenue=total_revenue,
        total_commission=total_commission,
        total_profit=total_profit,
    )


def summarize_by_barber(
    transactions: Iterable[Transaction],
    barbers: Iterable[Barber],
    rate_lookup: Optional[RateLookup] = None,
) -> List[Dict[str, Any]]:
    """
    Break the totals down per barber.

    Only barbers that own at least one transaction appear (deactivated ones
    included). Transactions whose barber is unknown are grouped under a
    ``None`` barber so the rows still add up to the overall summary.

    Returns:
        list: ``[{"barber_id", "barber_name", "is_active", "summary"}, ...]``
        ordered by barber name, unknown barber last.
    """
    barbers = list(barbers)
    if rate_lookup is None:
        rate_lookup = barber_rate_lookup(barbers)
    by_id = {barber.id: barber for barber in barbers}

    grouped: Dict[Optional[int], List[Transaction]] = {}
    for transaction in transactions:
        key = transaction.barber_id if transaction.barber_id in by_id else None
        grouped.setdefault(key, []).append(transaction)

    rows = []
    for barber_id, items in grouped.items():
        barber = by_id.get(barber_id) if barber_id is not None else None
        rows.append(
            {
                "barber_id": barber_id,
                "barber_name": barber.name if barber else None,
                "is_active": barber.is_active if barber else None,
                "summary": summarize(items, rate_lookup),
            }
        )

    rows.sort(key=lambda row: (row["barber_name"] is None, row["barber_name"] or ""))
    return rows


def detail_rows(
    transactions: Iterable[Transaction], rate_lookup: RateLookup = transaction_rate
) -> List[Dict[str, Any]]:
    """Per-transaction split for the detail tables."""
    rows = []
    for transaction in transactions:
        rate = rate_lookup(transaction)
        split = split_of(transaction.total_price, rate)
        rows.append(
            {
                "id": transaction.id,
                "occurred_at": transaction.occurred_at,
                "client_name": transaction.client_name,
                "barber_id": transaction.barber_id,
                "total_price": transaction.total_price,
                "rate": effective_rate(rate),
                "commission": split.commission,
                "profit": split.profit,
            }
        )
    return rows


def _range_dict(date_range: DateRange) -> Dict[str, datetime]:
    return {"start": date_range.start, "end": date_range.end}


def build_cash_flow(
    store: IReportDataStore,
    unit_id: int,
    now: datetime,
    period: str = PERIOD_MONTH,
) -> Dict[str, Any]:
    """
    Build the cash-flow overview of one unit.

    Today, this week and this month are each fetched and summarized
    independently. The transactions of ``period`` are returned as detail
    rows.

    Raises:
        InvalidPeriod: for an unknown ``period``.
    """
    if period not in PERIODS:
        raise InvalidPeriod(period)

    started = time.perf_counter()
    barbers = store.fetch_barbers(unit_id)
    rate_lookup = barber_rate_lookup(barbers)

    periods: Dict[str, Dict[str, Any]] = {}
    selected: List[Transaction] = []
    for tag in PERIODS:
        date_range = resolve_named(tag, now)
        transactions = store.fetch_transactions(date_range, unit_id)
        periods[tag] = {
            "range": _range_dict(date_range),
            "summary": asdict(summarize(transactions, rate_lookup)),
        }
        if tag == period:
            selected = transactions

    log_performance(
        "build_cash_flow",
        (time.perf_counter() - started) * 1000,
        unit_id=unit_id,
        period=period,
        record_count=len(selected),
    )

    return {
        "unit_id": unit_id,
        "generated_at": now,
        "periods": periods,
        "selected_period": period,
        "completed_this_month": periods[PERIOD_MONTH]["summary"]["count"],
        "transactions": detail_rows(selected, rate_lookup),
    }


def build_commission_report(
    store: IReportDataStore,
    unit_id: int,
    year: int,
    month_index: int,
    now: datetime,
    barber_id: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Build the monthly commission report of one unit.

    Args:
        store: Data store to fetch barbers and transactions from
        unit_id: Unit being reported
        year: Calendar year
        month_index: 0-based month (0 = January)
        now: Evaluation instant (timezone and picker options)
        barber_id: Restrict the report to one barber; None means all

    Raises:
        InvalidMonth: for a month index outside [0, 11]
        ReportingError: if ``barber_id`` does not belong to the unit
    """
    date_range = resolve_month(year, month_index, now)

    started = time.perf_counter()
    barbers = store.fetch_barbers(unit_id)
    selected_barber = None
    if barber_id is not None:
        selected_barber = next((b for b in barbers if b.id == barber_id), None)
        if selected_barber is None:
            raise ReportingError(f"Barber {barber_id} not found in unit {unit_id}")

    transactions = store.fetch_transactions(date_range, unit_id, barber_id=barber_id)
    rate_lookup = barber_rate_lookup(barbers)
    summary = summarize(transactions, rate_lookup)

    log_performance(
        "build_commission_report",
        (time.perf_counter() - started) * 1000,
        unit_id=unit_id,
        year=year,
        month_index=month_index,
        barber_id=barber_id,
        record_count=summary.count,
    )

    return {
        "unit_id": unit_id,
        "year": year,
        "month_index": month_index,
        "range": _range_dict(date_range),
        "barber": (
            {
                "id": selected_barber.id,
                "name": selected_barber.name,
                "is_active": selected_barber.is_active,
            }
            if selected_barber
            else None
        ),
        "rate": (
            effective_rate(selected_barber.commission_rate) if selected_barber else None
        ),
        "summary": asdict(summary),
        "by_barber": [
            {**row, "summary": asdict(row["summary"])}
            for row in summarize_by_barber(transactions, barbers, rate_lookup)
        ],
        "transactions": detail_rows(transactions, rate_lookup),
        "month_options": month_options(),
        "year_options": year_options(now),
    }
