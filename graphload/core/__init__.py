"""Core Layer - traversal engine, metadata cache, key extraction. No sqlalchemy, no config.

Invariants:
    - No module in core/ imports from services/, infrastructure/, db/ or config
    - All store access goes through the PersistenceContext protocol
"""
