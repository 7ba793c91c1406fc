"""Infrastructure Layer - SQLAlchemy adapter and logging setup."""
