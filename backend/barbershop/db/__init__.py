# Database package: SQLAlchemy models and lazy engine/session helpers
