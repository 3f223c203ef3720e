"""Write resolved affidavit values into whichever form fields the template has.

Each logical value carries an ordered list of field-name spellings seen across
template revisions. The first spelling present in the document receives the
value; a value with no matching field is logged and left out.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from affidavit.core.models import MAX_ATTEMPT_SLOTS, AttemptSlot
from affidavit.export.document import TemplateDocument

logger = logging.getLogger(__name__)

PLACEHOLDER_VALUES = {"not specified", "n/a", "unknown"}


def _attempt_names(number: int, part: str) -> tuple:
    title = part.title()
    return (
        f"attempt{number}_{part}",
        f"attempt_{number}_{part}",
        f"Attempt{number}{title}",
        f"ATTEMPT{number}_{part.upper()}",
        f"Attempt {number} {title}",
    )


TEXT_FIELD_CANDIDATES: Dict[str, Sequence[str]] = {
    "case_name": ("caseName", "case_name", "Case Name", "Case_Name", "CASE_NAME"),
    "case_number": ("caseNumber", "case_number", "Case Number", "Case_Number", "CASE_NUMBER", "Case No"),
    "court_name": ("courtName", "court_name", "Court Name", "Court_Name", "COURT_NAME", "Court"),
    "plaintiff_petitioner": (
        "plaintiffPetitioner", "plaintiff_petitioner", "Plaintiff", "Plaintiff/Petitioner", "PLAINTIFF"
    ),
    "defendant_respondent": (
        "defendantRespondent", "defendant_respondent", "Defendant", "Defendant/Respondent", "DEFENDANT"
    ),
    "person_served": (
        "personServedName",
        "person_served_name",
        "Person Served",
        "Person_Served",
        "PERSON_SERVED",
        "personEntityBeingServed",
        "Person/Entity Being Served",
    ),
    "client_name": ("clientName", "client_name", "Client Name", "Client_Name", "CLIENT_NAME"),
    "client_address": ("clientAddress", "client_address", "Client Address", "CLIENT_ADDRESS"),
    "documents_served": (
        "documentsToServe", "documents_to_serve", "Documents", "Documents Served", "DOCUMENTS"
    ),
    "server_name": ("serverName", "server_name", "Server Name", "Server_Name", "SERVER_NAME"),
    "server_address": (
        "serverAddress", "server_address", "Server Address", "Server_Address", "SERVER_ADDRESS"
    ),
    "relationship_to_defendant": (
        "relationshipToDefendant", "relationship", "Relationship", "RELATIONSHIP"
    ),
    "service_date": (
        "serviceDate", "service_date", "Service Date", "Service_Date", "SERVICE_DATE", "date_served", "Date Served"
    ),
    "service_time": (
        "serviceTime", "service_time", "Service Time", "Service_Time", "SERVICE_TIME", "time_served", "Time Served"
    ),
    "service_address": (
        "serviceAddress", "service_address", "Service Address", "Service_Address", "SERVICE_ADDRESS"
    ),
    "service_method": (
        "serviceMethod", "service_method", "Service Method", "Service_Method", "SERVICE_METHOD"
    ),
    "city_state": ("cityState", "city_state", "City State", "City, State", "City/State", "CITY_STATE"),
    "notes": ("notes", "Notes", "NOTES", "comments", "Comments", "Additional Information"),
    "age": ("age", "Age", "AGE"),
    "sex": ("sex", "Sex", "SEX", "gender", "Gender"),
    "race": ("race", "Race", "RACE", "ethnicity", "Ethnicity"),
    "height": ("height", "Height", "HEIGHT"),
    "weight": ("weight", "Weight", "WEIGHT"),
    "hair_color": ("hairColor", "hair_color", "Hair Color", "Hair_Color", "HAIR_COLOR", "Hair"),
    "beard": ("beard", "Beard", "BEARD"),
    "glasses": ("glasses", "Glasses", "GLASSES"),
    "military_inquiry_date": (
        "militaryInquiryDate", "military_inquiry_date", "Military Date", "MILITARY_DATE"
    ),
    "military_inquiry_address": (
        "militaryInquiryAddress", "military_inquiry_address", "Military Address", "MILITARY_ADDRESS"
    ),
    "substitute_service_location": (
        "substituteServiceLocation", "substitute_service_location", "Substitute Service Location"
    ),
    "substitute_service_person": (
        "substituteServicePerson", "substitute_service_person", "Substitute Service Person"
    ),
}
for _number in range(1, MAX_ATTEMPT_SLOTS + 1):
    for _part in ("date", "time"):
        TEXT_FIELD_CANDIDATES[AttemptSlot.field_name(_number, _part)] = _attempt_names(_number, _part)

CHECKBOX_CANDIDATES: Dict[str, Sequence[str]] = {
    "military_service_inquired": (
        "militaryServiceInquired", "military_service_inquired", "Military Inquiry", "MILITARY_INQUIRY"
    ),
    "residence_service": (
        "residenceService", "residence_service", "Residence", "RESIDENCE", "Home", "Dwelling"
    ),
    "business_service": (
        "businessService", "business_service", "Business", "BUSINESS", "Place of Business", "Work"
    ),
}


@dataclass
class FillReport:
    """Which logical values landed in which field, and which found no field."""

    filled: Dict[str, str] = field(default_factory=dict)
    missing: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def filled_count(self) -> int:
        return len(self.filled)


def is_printable(value: Optional[str]) -> bool:
    """Reject empty, whitespace-only, and placeholder values."""

    if value is None:
        return False
    text = value.strip()
    return bool(text) and text.casefold() not in PLACEHOLDER_VALUES


def first_existing(candidates: Iterable[str], exists) -> Optional[str]:
    """Return the first candidate name the document reports as present."""

    return next((name for name in candidates if exists(name)), None)


def fill_template(
    document: TemplateDocument,
    text_values: Mapping[str, Optional[str]],
    checkbox_values: Optional[Mapping[str, bool]] = None,
) -> FillReport:
    """Fill text fields and checkboxes in place, returning what happened to each value."""

    report = FillReport()

    for logical, value in text_values.items():
        if not is_printable(value):
            report.skipped.append(logical)
            continue
        candidates = TEXT_FIELD_CANDIDATES.get(logical, ())
        target = first_existing(candidates, document.has_text_field)
        if target is None:
            logger.warning("No form field for %s (tried: %s)", logical, ", ".join(candidates) or "none")
            report.missing.append(logical)
            continue
        document.set_text(target, value.strip())
        logger.debug("Filled %r with %s", target, logical)
        report.filled[logical] = target

    for logical, checked in (checkbox_values or {}).items():
        candidates = CHECKBOX_CANDIDATES.get(logical, ())
        target = first_existing(candidates, document.has_checkbox)
        if target is None:
            logger.warning("No checkbox for %s (tried: %s)", logical, ", ".join(candidates) or "none")
            report.missing.append(logical)
            continue
        document.set_checkbox(target, checked)
        logger.debug("Set checkbox %r to %s for %s", target, checked, logical)
        report.filled[logical] = target

    logger.info(
        "Filled %d form fields (%d without a matching field, %d left blank)",
        report.filled_count,
        len(report.missing),
        len(report.skipped),
    )
    return report
