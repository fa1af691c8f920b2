"""sharetab: shared-expense tracking for groups of people."""

from __future__ import annotations

from .config import BaseConfig, DevConfig
from .infra import EntityStore, open_store

__all__ = ["BaseConfig", "DevConfig", "EntityStore", "open_store"]
