"""
Common API utilities for consistent response formatting across all controllers.
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from flask import jsonify, request

from barbershop.core.exceptions import ReportingError


def api_response(
    success: bool, message: str, data: Optional[Any] = None, status_code: int = 200
) -> tuple:
    """
    Standardized API response format for all endpoints.

    Args:
        success: Whether the operation was successful
        message: Human-readable message about the operation
        data: Optional data payload
        status_code: HTTP status code

    Returns:
        Tuple of (json_response, status_code)
    """
    response = {"success": success, "message": message}

    if data is not None:
        response["data"] = to_json(data)

    return jsonify(response), status_code


def to_json(value: Any) -> Any:
    """Convert report payloads (Decimal money, datetimes) into JSON-safe values."""
    if isinstance(value, Decimal):
        return float(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: to_json(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(item) for item in value]
    return value


def get_int_arg(name: str, default: Optional[int] = None) -> Optional[int]:
    """Read an integer query parameter, raising ReportingError when malformed."""
    raw = request.args.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ReportingError(f"Parâmetro '{name}' deve ser um número inteiro")


def require_int_arg(name: str) -> int:
    value = get_int_arg(name)
    if value is None:
        raise ReportingError(f"Parâmetro '{name}' é obrigatório")
    return value
