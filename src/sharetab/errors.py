"""
Domain-specific exceptions for sharetab.

Every error raised by the store or the services derives from
``SharetabError`` so callers can catch the whole family at once.
"""

from __future__ import annotations


class SharetabError(Exception):
    """Base exception for all sharetab errors."""


class ValidationError(SharetabError, ValueError):
    """Raised when submitted data fails validation before reaching the store."""

    def __init__(self, message: str, errors: dict[str, list[str]] | None = None):
        super().__init__(message)
        self.errors = errors or {}


class NotFoundError(SharetabError, LookupError):
    """Raised when an update targets a record that no longer exists."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} {entity_id!r} not found")
        self.entity = entity
        self.entity_id = entity_id


class ReferentialError(SharetabError):
    """Raised when a split or payment references something outside its scope."""


class DegenerateRatioError(SharetabError, ZeroDivisionError):
    """Raised when rescaling splits of a transaction whose prior total is zero."""
