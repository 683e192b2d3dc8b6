"""Infra layer utilities (SQLite storage)."""

from .storage import HotIndex, SQLiteManager

__all__ = ["HotIndex", "SQLiteManager"]
