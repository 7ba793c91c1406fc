"""graphload - eager object-graph materialization for SQLAlchemy ORM sessions.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: callers import from graphload.services.hydrate explicitly
"""
