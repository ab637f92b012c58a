"""Management commands for the Barbershop reporting backend."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Optional, Tuple

import click

from barbershop.core import config
from barbershop.core.api_utils import to_json
from barbershop.core.exceptions import ReportingError
from barbershop.db.session import SessionLocal, create_tables
from barbershop.main import create_app
from barbershop.repositories.report_repository import ReportRepository
from barbershop.services.client_metrics import build_unit_report
from barbershop.services.date_ranges import PERIODS, PERIOD_MONTH
from barbershop.services.financial_report import (
    build_cash_flow,
    build_commission_report,
)

# Create the Flask application once so commands can share configuration.
app = create_app()


def _echo_json(payload) -> None:
    click.echo(json.dumps(to_json(payload), ensure_ascii=False, indent=2))


def _run_report(builder) -> None:
    """Open a session, build a report with it and print it as JSON."""
    with app.app_context():
        session = SessionLocal()
        try:
            _echo_json(builder(ReportRepository(session)))
        except ReportingError as e:
            raise click.ClickException(str(e))
        finally:
            session.close()


@click.group()
def cli() -> None:
    """Entry point for management commands."""


@cli.command("init_db")
def init_db() -> None:
    """Create the database tables if they do not exist."""
    create_tables()
    logging.getLogger(__name__).info("Database tables ensured")


@cli.command("cash_flow")
@click.option("--unidade", "unit_id", type=int, required=True, help="Unit id.")
@click.option(
    "--periodo",
    "period",
    type=click.Choice(PERIODS),
    default=PERIOD_MONTH,
    show_default=True,
    help="Period whose transactions are listed.",
)
def cash_flow(unit_id: int, period: str) -> None:
    """Print today/week/month revenue of a unit."""
    now = datetime.now(config.APP_TZ)
    _run_report(lambda store: build_cash_flow(store, unit_id, now, period))


@cli.command("commission_report")
@click.option("--unidade", "unit_id", type=int, required=True, help="Unit id.")
@click.option("--ano", "year", type=int, default=None, help="Year (default: current).")
@click.option(
    "--mes",
    "month",
    type=click.IntRange(1, 12),
    default=None,
    help="Month 1-12 (default: current).",
)
@click.option("--barbeiro", "barber_id", type=int, default=None, help="Barber id.")
def commission_report(
    unit_id: int, year: Optional[int], month: Optional[int], barber_id: Optional[int]
) -> None:
    """Print the monthly commission report of a unit."""
    now = datetime.now(config.APP_TZ)
    year = now.year if year is None else year
    month = now.month if month is None else month
    _run_report(
        lambda store: build_commission_report(
            store, unit_id, year, month - 1, now, barber_id=barber_id
        )
    )


@cli.command("unit_metrics")
@click.option(
    "--unidade",
    "unit_ids",
    type=int,
    multiple=True,
    help="Unit id, repeatable (default: every unit).",
)
def unit_metrics(unit_ids: Tuple[int, ...]) -> None:
    """Print client metrics per unit with grand totals."""
    now = datetime.now(config.APP_TZ)
    _run_report(lambda store: build_unit_report(store, now, list(unit_ids) or None))


if __name__ == "__main__":
    cli()
