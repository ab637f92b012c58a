"""
Unit tests package.

Contains isolated unit tests for services, configuration, controllers
and management commands that run without a database.
"""
