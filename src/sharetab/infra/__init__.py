"""Persistence infrastructure: engine/session wiring, repositories and the store handle."""

from .store import EntityStore, open_store

__all__ = ["EntityStore", "open_store"]
