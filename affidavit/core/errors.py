"""Exceptions raised when an affidavit cannot be produced."""
from __future__ import annotations


class AffidavitError(Exception):
    """Base class for fatal affidavit generation failures."""


class TemplateLoadError(AffidavitError):
    """The fillable template could not be fetched, read, or parsed."""

    def __init__(self, location: str, reason: str) -> None:
        self.location = location
        self.reason = reason
        super().__init__(f"Could not load affidavit template from {location}: {reason}")


class DocumentSerializationError(AffidavitError):
    """The filled template could not be written out as PDF bytes."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to serialize affidavit document: {reason}")
