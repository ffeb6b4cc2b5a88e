"""Infrastructure: SQLAlchemy persistence, Redis cache and DB-backed services."""
