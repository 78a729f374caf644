"""Database module for the URL shortener application."""
from app.db.base import engine, get_engine, init_db, dispose_engine
from app.db.session import get_db, db_transaction

__all__ = [
    "engine",
    "get_engine",
    "init_db",
    "dispose_engine",
    "get_db",
    "db_transaction",
]
