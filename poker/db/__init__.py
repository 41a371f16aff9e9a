"""Database package."""
from poker.db.session import engine, SessionLocal, get_db, get_db_context, init_db
from poker.db.base import Base

__all__ = ["engine", "SessionLocal", "get_db", "get_db_context", "init_db", "Base"]
