"""Persistence for Gratitude."""

from gratitude.db.store import DataStore, StoreTransaction

__all__ = ["DataStore", "StoreTransaction"]
