"""Service Layer - public hydration entry points wiring core to SQLAlchemy and settings."""
