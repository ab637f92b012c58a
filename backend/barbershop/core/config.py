"""
Centralized configuration module for application-wide settings.

This module provides centralized configuration for timezone handling and
the business rules used by the reporting engine (default commission rate,
active-client window, report year range), ensuring consistency across all
reports in the application.
"""

import logging
import os
from decimal import Decimal, InvalidOperation
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)

# ===========================
# Timezone Configuration
# ===========================


def get_app_timezone() -> ZoneInfo:
    """
    Get the application timezone from environment variable.

    Returns:
        ZoneInfo: Application timezone (defaults to UTC if not configured)

    Environment Variables:
        TZ: Timezone identifier (e.g., 'America/Sao_Paulo', 'UTC')
            Default: 'UTC' (safe fallback)
            Production: Should be set to 'America/Sao_Paulo'

    Examples:
        >>> # In .env file:
        >>> # TZ=America/Sao_Paulo
        >>> tz = get_app_timezone()
        >>> print(tz)  # America/Sao_Paulo
    """
    tz_name = os.getenv("TZ", "UTC")

    try:
        return ZoneInfo(tz_name)
    except Exception as e:
        logger.warning(
            f"Invalid timezone '{tz_name}' specified in TZ environment variable. "
            f"Falling back to UTC. Error: {e}"
        )
        return ZoneInfo("UTC")


# Global timezone instance - initialized once at import time
APP_TZ = get_app_timezone()


def log_timezone_config():
    """
    Log the active timezone configuration.

    Should be called during application startup to provide visibility
    into the timezone being used for report periods.
    """
    logger.info(
        "Timezone configuration initialized",
        extra={
            "context": {
                "timezone": str(APP_TZ),
                "tz_env_var": os.getenv("TZ", "UTC"),
            }
        },
    )


# ===========================
# Commission Configuration
# ===========================

FALLBACK_COMMISSION_RATE = Decimal("50")


def get_default_commission_rate() -> Decimal:
    """
    Get the commission rate applied when neither the appointment nor its
    barber carries one.

    Returns:
        Decimal: Percentage in [0, 100]. The business default is 50 (half of
        the price goes to the barber); the variable only exists to override it
        per deployment.

    Environment Variables:
        COMMISSION_DEFAULT_RATE: Percentage paid to the barber
            Default: '50'

    Examples:
        >>> # In .env file:
        >>> # COMMISSION_DEFAULT_RATE=40
        >>> rate = get_default_commission_rate()  # Decimal('40')
    """
    raw = os.getenv("COMMISSION_DEFAULT_RATE", "50")

    try:
        rate = Decimal(raw.strip())
    except (InvalidOperation, AttributeError):
        logger.warning(
            f"Invalid COMMISSION_DEFAULT_RATE '{raw}'. Falling back to "
            f"{FALLBACK_COMMISSION_RATE}."
        )
        return FALLBACK_COMMISSION_RATE

    if not rate.is_finite() or rate < 0 or rate > 100:
        logger.warning(
            f"COMMISSION_DEFAULT_RATE '{raw}' is outside [0, 100]. Falling back to "
            f"{FALLBACK_COMMISSION_RATE}."
        )
        return FALLBACK_COMMISSION_RATE

    return rate


# Global default rate - cached at module load time
DEFAULT_COMMISSION_RATE = get_default_commission_rate()


# ===========================
# Client Metrics Configuration
# ===========================


def _get_positive_int(env_var: str, default: int) -> int:
    raw = os.getenv(env_var, str(default))
    try:
        value = int(raw)
    except (TypeError, ValueError):
        logger.warning(f"Invalid {env_var} '{raw}'. Falling back to {default}.")
        return default
    if value < 1:
        logger.warning(f"{env_var} must be >= 1, got {value}. Falling back to {default}.")
        return default
    return value


def get_active_window_days() -> int:
    """
    Get the trailing window (in days) used to classify a client as active.

    Environment Variables:
        ACTIVE_CLIENT_WINDOW_DAYS: Days since the last visit
            Default: '30'
    """
    return _get_positive_int("ACTIVE_CLIENT_WINDOW_DAYS", 30)


ACTIVE_WINDOW_DAYS = get_active_window_days()


def get_report_years_back() -> int:
    """
    Get how many years (current one included) the report year picker offers.

    Environment Variables:
        REPORT_YEARS_BACK: Number of years
            Default: '3'
    """
    return _get_positive_int("REPORT_YEARS_BACK", 3)


REPORT_YEARS_BACK = get_report_years_back()


def log_report_config():
    """
    Log the active reporting configuration.

    Should be called during application startup to provide visibility
    into the business rules that shape every report.
    """
    logger.info(
        "Report configuration initialized",
        extra={
            "context": {
                "default_commission_rate": str(DEFAULT_COMMISSION_RATE),
                "active_window_days": ACTIVE_WINDOW_DAYS,
                "report_years_back": REPORT_YEARS_BACK,
            }
        },
    )
