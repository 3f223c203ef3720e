"""Core building blocks for the affidavit package."""
from affidavit.core.config import Settings, load_settings
from affidavit.core.errors import AffidavitError, DocumentSerializationError, TemplateLoadError
from affidavit.core.logging import configure_logging
from affidavit.core.models import (
    AffidavitInput,
    AttemptSlot,
    CaseRecord,
    ClientRecord,
    PhysicalDescription,
    ServeRecord,
    ServiceDetails,
)

__all__ = [
    "Settings",
    "load_settings",
    "AffidavitError",
    "DocumentSerializationError",
    "TemplateLoadError",
    "configure_logging",
    "AffidavitInput",
    "AttemptSlot",
    "CaseRecord",
    "ClientRecord",
    "PhysicalDescription",
    "ServeRecord",
    "ServiceDetails",
]
