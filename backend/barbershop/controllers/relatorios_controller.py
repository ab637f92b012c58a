"""
Relatorios API - client metrics per unit.

Provides the per-unit client table (active, inactive, birthdays, new
clients, visits) and the grand totals shown on the summary cards.
"""

import logging
from datetime import datetime

from flask import Blueprint, request

from barbershop.core import config
from barbershop.core.api_utils import api_response
from barbershop.core.exceptions import ReportingError
from barbershop.db.session import SessionLocal
from barbershop.repositories.report_repository import ReportRepository
from barbershop.services.client_metrics import build_unit_report

logger = logging.getLogger(__name__)

relatorios_bp = Blueprint("relatorios", __name__, url_prefix="/relatorios")


def _now() -> datetime:
    return datetime.now(config.APP_TZ)


def _unit_ids_arg():
    raw_ids = request.args.getlist("unidade_id")
    if not raw_ids:
        return None
    try:
        return [int(raw) for raw in raw_ids]
    except ValueError:
        raise ReportingError("Parâmetro 'unidade_id' deve ser um número inteiro")


@relatorios_bp.route("/api/unidades", methods=["GET"])
def api_unidades():
    """
    Client metrics per unit plus grand totals.

    Query parameters:
    - unidade_id: Unit id, repeatable (default: every unit)
    """
    db = None
    try:
        unit_ids = _unit_ids_arg()

        db = SessionLocal()
        report = build_unit_report(ReportRepository(db), _now(), unit_ids)
        return api_response(True, "Métricas por unidade geradas com sucesso", report)
    except ReportingError as e:
        logger.warning(
            "Invalid unit metrics request",
            extra={"context": {"args": request.args.to_dict(flat=False), "error": str(e)}},
        )
        return api_response(False, str(e), status_code=400)
    except Exception as e:
        logger.error(
            "Error building unit metrics",
            extra={"context": {"error": str(e)}},
            exc_info=True,
        )
        return api_response(False, "Erro ao gerar métricas por unidade", status_code=500)
    finally:
        if db is not None:
            db.close()
