"""Ingestion package for loading and normalizing stored records."""
from affidavit.ingestion.edits import apply_serve_edits
from affidavit.ingestion.loader import RecordSet, load_records, read_documents
from affidavit.ingestion.normalizer import (
    add_client_names,
    merge_serve_and_case,
    normalize_case,
    normalize_cases,
    normalize_client,
    normalize_clients,
    normalize_physical_description,
    normalize_serve,
    normalize_serves,
)

__all__ = [
    "apply_serve_edits",
    "RecordSet",
    "load_records",
    "read_documents",
    "add_client_names",
    "merge_serve_and_case",
    "normalize_case",
    "normalize_cases",
    "normalize_client",
    "normalize_clients",
    "normalize_physical_description",
    "normalize_serve",
    "normalize_serves",
]
