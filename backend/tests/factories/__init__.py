"""Test data factories for reports."""
