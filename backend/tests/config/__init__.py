"""
Test configuration package.

Holds the pytest marker registration shared by the whole suite.
"""
