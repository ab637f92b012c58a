# Services package initialization
# This file makes the services directory a Python package
# and allows importing service modules

from . import client_metrics
from . import commission
from . import date_ranges
from . import financial_report

__all__ = [
    "client_metrics",
    "commission",
    "date_ranges",
    "financial_report",
]
