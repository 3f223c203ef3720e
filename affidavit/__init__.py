"""Affidavit-of-service generation from process-serving case records."""
from affidavit.core import (
    AffidavitError,
    AffidavitInput,
    CaseRecord,
    ClientRecord,
    DocumentSerializationError,
    ServeRecord,
    ServiceDetails,
    TemplateLoadError,
    configure_logging,
)
from affidavit.export import TemplateDocument, fill_template, load_template
from affidavit.ingestion import load_records, normalize_serve, normalize_serves
from affidavit.processing import generate_affidavit, resolve_affidavit_input, run_pipeline

__all__ = [
    "AffidavitError",
    "AffidavitInput",
    "CaseRecord",
    "ClientRecord",
    "DocumentSerializationError",
    "ServeRecord",
    "ServiceDetails",
    "TemplateLoadError",
    "configure_logging",
    "TemplateDocument",
    "fill_template",
    "load_template",
    "load_records",
    "normalize_serve",
    "normalize_serves",
    "generate_affidavit",
    "resolve_affidavit_input",
    "run_pipeline",
]
