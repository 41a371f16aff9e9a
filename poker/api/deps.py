"""Shared API dependencies."""
from poker.db import get_db, get_db_context

__all__ = ["get_db", "get_db_context"]
