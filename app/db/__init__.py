"""
Database module - the in-memory catalog and its demo data.
"""
from app.db.catalog import InMemoryCatalog, get_catalog

__all__ = [
    "InMemoryCatalog",
    "get_catalog",
]
