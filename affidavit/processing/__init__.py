"""Resolution of affidavit values and pipeline orchestration."""
from affidavit.processing.pipeline import GeneratedAffidavit, generate_affidavit, run_pipeline
from affidavit.processing.resolver import (
    aggregate_notes,
    attempts_for_case,
    classify_service_location,
    derive_city_state,
    order_attempts,
    resolve_affidavit_input,
    resolve_service_address,
    select_primary_serve,
)
from affidavit.processing.templates import REPORT_HEADERS, serves_to_report_rows

__all__ = [
    "GeneratedAffidavit",
    "generate_affidavit",
    "run_pipeline",
    "aggregate_notes",
    "attempts_for_case",
    "classify_service_location",
    "derive_city_state",
    "order_attempts",
    "resolve_affidavit_input",
    "resolve_service_address",
    "select_primary_serve",
    "REPORT_HEADERS",
    "serves_to_report_rows",
]
