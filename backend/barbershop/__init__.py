"""Barbershop reporting service: commission splits, cash flow and client metrics."""

__version__ = "1.0.0"
