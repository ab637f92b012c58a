"""
Financeiro API - cash flow and commission report endpoints.

JSON endpoints consumed by the Financeiro screen:
- /financeiro/api/fluxo-caixa - today/week/month revenue cards and the
  completed transactions of the selected period
- /financeiro/api/comissoes - monthly commission report, optionally for a
  single barber
"""

import logging
from datetime import datetime

from flask import Blueprint, request

from barbershop.core import config
from barbershop.core.api_utils import api_response, get_int_arg, require_int_arg
from barbershop.core.exceptions import ReportingError
from barbershop.db.session import SessionLocal
from barbershop.repositories.report_repository import ReportRepository
from barbershop.services.date_ranges import PERIOD_MONTH
from barbershop.services.financial_report import (
    build_cash_flow,
    build_commission_report,
)

logger = logging.getLogger(__name__)

financeiro_bp: Blueprint = Blueprint("financeiro", __name__, url_prefix="/financeiro")


def _now() -> datetime:
    """Evaluation instant of the request, shared by every figure it renders."""
    return datetime.now(config.APP_TZ)


@financeiro_bp.route("/api/fluxo-caixa", methods=["GET"])
def api_fluxo_caixa():
    """
    Cash flow of one unit.

    Query parameters:
    - unidade_id: Unit id (required)
    - periodo: today | week | month (default: month)
    """
    db = None
    try:
        unit_id = require_int_arg("unidade_id")
        period = request.args.get("periodo", PERIOD_MONTH)

        db = SessionLocal()
        report = build_cash_flow(ReportRepository(db), unit_id, _now(), period)
        return api_response(True, "Fluxo de caixa gerado com sucesso", report)
    except ReportingError as e:
        logger.warning(
            "Invalid cash flow request",
            extra={"context": {"args": request.args.to_dict(), "error": str(e)}},
        )
        return api_response(False, str(e), status_code=400)
    except Exception as e:
        logger.error(
            "Error building cash flow",
            extra={"context": {"args": request.args.to_dict(), "error": str(e)}},
            exc_info=True,
        )
        return api_response(False, "Erro ao gerar fluxo de caixa", status_code=500)
    finally:
        if db is not None:
            db.close()


@financeiro_bp.route("/api/comissoes", methods=["GET"])
def api_comissoes():
    """
    Monthly commission report of one unit.

    Query parameters:
    - unidade_id: Unit id (required)
    - ano: Year (default: current year)
    - mes: Month 1-12 (default: current month)
    - barbeiro_id: Restrict to one barber (default: all barbers)
    """
    db = None
    try:
        now = _now()
        unit_id = require_int_arg("unidade_id")
        year = get_int_arg("ano", now.year)
        month = get_int_arg("mes", now.month)
        if not 1 <= month <= 12:
            raise ReportingError("Parâmetro 'mes' deve estar entre 1 e 12")
        barber_id = get_int_arg("barbeiro_id")

        db = SessionLocal()
        report = build_commission_report(
            ReportRepository(db),
            unit_id,
            year,
            month - 1,
            now,
            barber_id=barber_id,
        )
        return api_response(True, "Relatório de comissões gerado com sucesso", report)
    except ReportingError as e:
        logger.warning(
            "Invalid commission report request",
            extra={"context": {"args": request.args.to_dict(), "error": str(e)}},
        )
        return api_response(False, str(e), status_code=400)
    except Exception as e:
        logger.error(
            "Error building commission report",
            extra={"context": {"args": request.args.to_dict(), "error": str(e)}},
            exc_info=True,
        )
        return api_response(
            False, "Erro ao gerar relatório de comissões", status_code=500
        )
    finally:
        if db is not None:
            db.close()
