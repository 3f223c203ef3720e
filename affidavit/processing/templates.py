"""Mapping utilities that turn a resolved affidavit into form values and report rows."""
from typing import Any, Dict, Iterable, List

from affidavit.core.models import AffidavitInput, AttemptSlot, ServeRecord
from affidavit.core.utils import format_date, format_time
from affidavit.processing.resolver import BUSINESS, RESIDENCE, order_attempts


REPORT_HEADERS = [
    "Attempt",
    "Client_Name",
    "Case_Number",
    "Case_Name",
    "Date",
    "Time",
    "Status",
    "Service_Address",
    "Notes",
]


def _clean_text(value: str | None) -> str:
    if not value:
        return ""
    return " ".join(value.split())


def affidavit_text_values(affidavit: AffidavitInput) -> Dict[str, str]:
    """Logical text values keyed by the names the filler knows candidates for."""

    details = affidavit.details
    description = affidavit.physical_description
    values = {
        "case_name": affidavit.case_name,
        "case_number": affidavit.case_number,
        "court_name": affidavit.court_name,
        "plaintiff_petitioner": affidavit.plaintiff_petitioner,
        "defendant_respondent": affidavit.defendant_respondent,
        "person_served": affidavit.person_being_served,
        "client_name": affidavit.client_name,
        "client_address": affidavit.client_address,
        "documents_served": affidavit.documents_served,
        "server_name": details.server_name,
        "server_address": details.server_address,
        "relationship_to_defendant": details.relationship_to_defendant,
        "service_date": affidavit.service_date,
        "service_time": affidavit.service_time,
        "service_address": affidavit.service_address,
        "service_method": affidavit.service_method,
        "city_state": affidavit.city_state,
        "notes": affidavit.notes,
        "military_inquiry_date": details.military_inquiry_date,
        "military_inquiry_address": details.military_inquiry_address,
        "substitute_service_location": details.substitute_service_location,
        "substitute_service_person": details.substitute_service_person,
    }
    if description is not None:
        values.update(
            {
                "age": description.age,
                "sex": description.sex,
                "race": description.ethnicity,
                "height": description.height(),
                "weight": description.weight,
                "hair_color": description.hair,
                "beard": description.beard,
                "glasses": description.glasses,
            }
        )
    for slot in affidavit.attempt_slots:
        values[AttemptSlot.field_name(slot.number, "date")] = slot.date
        values[AttemptSlot.field_name(slot.number, "time")] = slot.time
    return values


def affidavit_checkbox_values(affidavit: AffidavitInput) -> Dict[str, bool]:
    """Checkbox states; boxes with nothing to say are left out entirely."""

    checks: Dict[str, bool] = {}
    if affidavit.service_location:
        checks["residence_service"] = affidavit.service_location == RESIDENCE
        checks["business_service"] = affidavit.service_location == BUSINESS
    if affidavit.details.military_service_inquired is not None:
        checks["military_service_inquired"] = affidavit.details.military_service_inquired
    return checks


def serve_to_report_row(number: int, serve: ServeRecord, client_name: str = "") -> Dict[str, Any]:
    """Convert one serve attempt into a service report row."""

    moment = serve.timestamp or serve.created_at
    status = "Successful" if serve.is_completed else "Failed" if serve.status == "failed" else serve.status.title()
    return {
        "Attempt": number,
        "Client_Name": _clean_text(serve.client_name or client_name),
        "Case_Number": serve.case_number,
        "Case_Name": _clean_text(serve.case_name),
        "Date": format_date(moment),
        "Time": format_time(moment),
        "Status": status,
        "Service_Address": _clean_text(serve.service_address),
        "Notes": _clean_text(serve.notes or serve.description),
    }


def serves_to_report_rows(serves: Iterable[ServeRecord], client_name: str = "") -> List[Dict[str, Any]]:
    """Chronological service report rows for a client's attempts."""

    return [
        serve_to_report_row(number, serve, client_name)
        for number, serve in enumerate(order_attempts(serves), start=1)
    ]
