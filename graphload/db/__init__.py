"""Database helpers - session factories."""
