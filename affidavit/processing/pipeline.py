"""Pipeline orchestration: normalize, resolve, fill, emit."""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional

from affidavit.core.config import load_settings
from affidavit.core.models import AffidavitInput, ServiceDetails
from affidavit.export.document import load_template
from affidavit.export.emitter import emit_document
from affidavit.export.filler import FillReport, fill_template
from affidavit.export.sinks import write_csv, write_excel, write_pdf
from affidavit.ingestion.loader import load_records
from affidavit.ingestion.normalizer import (
    merge_serve_and_case,
    normalize_cases,
    normalize_client,
    normalize_serves,
)
from affidavit.processing.resolver import resolve_affidavit_input
from affidavit.processing.templates import (
    REPORT_HEADERS,
    affidavit_checkbox_values,
    affidavit_text_values,
    serves_to_report_rows,
)

logger = logging.getLogger(__name__)


@dataclass
class GeneratedAffidavit:
    """Filled PDF bytes handed back to the caller, plus what went into them."""

    data: bytes
    filename: str
    affidavit: AffidavitInput
    report: FillReport


def generate_affidavit(
    client: Any,
    cases: Iterable[Any] = (),
    serves: Iterable[Any] = (),
    details: Optional[ServiceDetails] = None,
    template_location: Optional[str] = None,
    timeout: Optional[float] = None,
) -> GeneratedAffidavit:
    """Produce one filled affidavit from raw or already-normalized records.

    Any stage failure propagates to the caller; nothing is retried.
    """

    settings = load_settings()
    location = template_location or settings.template_location

    client_record = normalize_client(client) if client else None
    case_records = normalize_cases(cases)
    serve_records = merge_serve_and_case(normalize_serves(serves), case_records)
    logger.info(
        "Normalized %d case(s) and %d serve attempt(s)", len(case_records), len(serve_records)
    )

    affidavit = resolve_affidavit_input(client_record, case_records, serve_records, details)
    if affidavit.is_empty():
        message = "No client, case, or serve data was resolved; nothing to put on the affidavit."
        logger.error(message)
        raise ValueError(message)

    document = load_template(location, timeout or settings.fetch_timeout)
    report = fill_template(
        document,
        affidavit_text_values(affidavit),
        affidavit_checkbox_values(affidavit),
    )
    emitted = emit_document(document, affidavit.case_number)
    return GeneratedAffidavit(
        data=emitted.data,
        filename=emitted.filename,
        affidavit=affidavit,
        report=report,
    )


def run_pipeline(
    data_dir: Path,
    client_id: str,
    output_dir: Path,
    case_number: str | None = None,
    details: ServiceDetails | None = None,
    template_location: str | None = None,
    report_sink: str = "none",
) -> Path:
    """Load a data directory, generate the affidavit for one client/case, and write it out."""

    logger.info("Pipeline starting for data dir %s", data_dir)
    records, alerts = load_records(data_dir)
    if alerts:
        logger.warning("Encountered %d ingestion alerts during loading", len(alerts))
        for alert in alerts:
            logger.warning("Alert: %s", alert)

    client = records.client(client_id)
    if client is None:
        message = f"No client with id {client_id!r} found under {data_dir}."
        logger.error(message)
        raise ValueError(message)

    serves = records.serves_for(client_id, case_number)
    cases = records.cases_for(client_id, case_number)
    result = generate_affidavit(
        client,
        cases,
        serves,
        details=details,
        template_location=template_location,
    )
    output_path = write_pdf(result.data, output_dir / result.filename)
    logger.info("Wrote affidavit to %s", output_path)

    if report_sink != "none":
        rows = serves_to_report_rows(result.affidavit.attempts, client.name)
        report_stem = f"{Path(result.filename).stem}_service_report"
        if report_sink == "excel":
            report_path = output_dir / f"{report_stem}.xlsx"
            write_excel(rows, report_path)
        else:
            report_path = output_dir / f"{report_stem}.csv"
            write_csv(rows, report_path, REPORT_HEADERS)
        logger.info("Wrote %s service report to %s", report_sink, report_path)
    return output_path
