"""
Integration tests package.

Contains integration tests that run the repository and the HTTP endpoints
against the in-memory SQLite database.
"""
