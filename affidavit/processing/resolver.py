"""Derive the affidavit's logical values from normalized records.

Nothing here performs I/O or raises for missing optional data: every rule
falls back to an empty value so the filler can simply skip it.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from affidavit.core.models import (
    MAX_ATTEMPT_SLOTS,
    UNKNOWN,
    AffidavitInput,
    AttemptSlot,
    CaseRecord,
    ClientRecord,
    ServeRecord,
    ServiceDetails,
)
from affidavit.core.utils import format_date, format_time

logger = logging.getLogger(__name__)

BUSINESS_KEYWORDS = ("work", "office", "business", "corp", "llc", "inc")
RESIDENCE = "residence"
BUSINESS = "business"


def _known(value: str) -> str:
    """Blank out the normalizer's ``unknown`` sentinel."""

    return "" if value == UNKNOWN else value


def _first_present(*candidates: Optional[str]) -> str:
    for candidate in candidates:
        if candidate and candidate.strip():
            return candidate.strip()
    return ""


def order_attempts(serves: Iterable[ServeRecord]) -> List[ServeRecord]:
    """Sort attempts oldest first by timestamp, then created-at; undated ones lead."""

    return sorted(serves, key=lambda serve: serve.sort_time)


def select_primary_serve(ordered: Sequence[ServeRecord]) -> Optional[ServeRecord]:
    """Return the last completed attempt, or the last attempt of any status."""

    for serve in reversed(ordered):
        if serve.is_completed:
            return serve
    return ordered[-1] if ordered else None


def find_case(
    cases: Iterable[CaseRecord], serve: Optional[ServeRecord], client: Optional[ClientRecord] = None
) -> Optional[CaseRecord]:
    """Pick the case matching the serve's case number (and client when known).

    A serve naming a case number that no case carries gets no case at all;
    only serves without a case number fall back to the first case.
    """

    cases = list(cases)
    if not cases:
        return None
    if serve is not None and serve.case_number != UNKNOWN:
        client_id = client.id if client else serve.client_id
        for case in cases:
            if case.case_number == serve.case_number and client_id in (case.client_id, UNKNOWN):
                return case
        for case in cases:
            if case.case_number == serve.case_number:
                return case
        logger.warning(
            "No case record for case number %s; case details are left blank", serve.case_number
        )
        return None
    return cases[0]


def attempts_for_case(
    ordered: Sequence[ServeRecord], case_number: str, client_id: str = UNKNOWN
) -> List[ServeRecord]:
    """Keep the attempts belonging to one case.

    Attempts without a case number (or client) cannot belong to another case
    and are kept.
    """

    if case_number == UNKNOWN:
        return list(ordered)
    kept = [
        serve
        for serve in ordered
        if serve.case_number in (case_number, UNKNOWN)
        and (client_id == UNKNOWN or serve.client_id in (client_id, UNKNOWN))
    ]
    if len(kept) < len(ordered):
        logger.info(
            "Left out %d attempt(s) belonging to cases other than %s", len(ordered) - len(kept), case_number
        )
    return kept


def resolve_person_served(case: Optional[CaseRecord], serve: Optional[ServeRecord] = None) -> str:
    """Explicit person/entity being served, else the case name, else empty."""

    if case is not None:
        return _first_present(case.person_entity_being_served, case.case_name)
    if serve is not None:
        return _first_present(serve.person_entity_being_served, serve.case_name)
    return ""


def resolve_service_address(
    serve: Optional[ServeRecord],
    case: Optional[CaseRecord],
    client: Optional[ClientRecord],
) -> str:
    """First non-empty of serve address, case home, case work, client address.

    Without a case record, the case addresses merged onto the serve stand in.
    """

    addresses = case if case is not None else serve
    return _first_present(
        serve.service_address if serve else None,
        addresses.home_address if addresses else None,
        addresses.work_address if addresses else None,
        client.address if client else None,
    )


def classify_service_location(address: str, home_address: str = "", work_address: str = "") -> str:
    """Best-effort residence/business guess for the service address.

    Work-address containment wins over home-address containment, which wins
    over the keyword check. Returns an empty string when no address resolved.
    """

    haystack = address.strip().casefold()
    if not haystack:
        return ""
    work = work_address.strip().casefold()
    if work and work in haystack:
        return BUSINESS
    home = home_address.strip().casefold()
    if home and home in haystack:
        return RESIDENCE
    if any(keyword in haystack for keyword in BUSINESS_KEYWORDS):
        return BUSINESS
    return RESIDENCE


def derive_city_state(address: str) -> str:
    """Return ``"City, State"`` from the last two comma-separated segments."""

    segments = [segment.strip() for segment in address.split(",")]
    if len(segments) < 2:
        return ""
    city, state = segments[-2], segments[-1]
    if not city or not state:
        return ""
    return f"{city}, {state}"


def build_attempt_slots(ordered: Sequence[ServeRecord]) -> List[AttemptSlot]:
    """Date/time rows for the first five chronological attempts."""

    slots: List[AttemptSlot] = []
    for number, serve in enumerate(ordered[:MAX_ATTEMPT_SLOTS], start=1):
        moment = serve.timestamp or serve.created_at
        slots.append(AttemptSlot(number=number, date=format_date(moment), time=format_time(moment)))
    if len(ordered) > MAX_ATTEMPT_SLOTS:
        logger.info(
            "Only the first %d of %d attempts get dedicated date/time fields",
            MAX_ATTEMPT_SLOTS,
            len(ordered),
        )
    return slots


def aggregate_notes(ordered: Sequence[ServeRecord]) -> str:
    """Join attempt notes chronologically, numbering them when several exist.

    Numbers follow the attempt's position in the ordered history, so a note on
    the third attempt reads ``Attempt 3:`` even if earlier attempts had none.
    """

    entries = []
    for number, serve in enumerate(ordered, start=1):
        text = _first_present(serve.notes, serve.description)
        if text:
            entries.append((number, text))
    if len(entries) > 1:
        return "\n\n".join(f"Attempt {number}: {text}" for number, text in entries)
    return entries[0][1] if entries else ""


def resolve_affidavit_input(
    client: Optional[ClientRecord],
    cases: Iterable[CaseRecord] = (),
    serves: Iterable[ServeRecord] = (),
    details: Optional[ServiceDetails] = None,
) -> AffidavitInput:
    """Assemble the reconciled :class:`AffidavitInput` for one generation call."""

    ordered = order_attempts(serves)
    primary = select_primary_serve(ordered)
    case = find_case(cases, primary, client)
    if case is not None:
        ordered = attempts_for_case(ordered, case.case_number, case.client_id)
    elif primary is not None:
        ordered = attempts_for_case(ordered, primary.case_number, primary.client_id)
    primary = select_primary_serve(ordered)
    details = details or ServiceDetails()

    service_address = resolve_service_address(primary, case, client)
    home_address = _first_present(case.home_address if case else None, primary.home_address if primary else None)
    work_address = _first_present(case.work_address if case else None, primary.work_address if primary else None)

    moment = (primary.timestamp or primary.created_at) if primary else None
    if primary is None:
        method = ""
    elif primary.is_completed:
        method = "Personal Service"
    else:
        method = "Attempted Service"

    affidavit = AffidavitInput(
        client_name=_first_present(client.name if client else None, primary.client_name if primary else None),
        client_address=client.address if client else "",
        case_number=_known(
            _first_present(case.case_number if case else None, primary.case_number if primary else None)
        ),
        case_name=_first_present(case.case_name if case else None, primary.case_name if primary else None),
        court_name=_first_present(case.court_name if case else None, primary.court_name if primary else None),
        plaintiff_petitioner=_first_present(
            case.plaintiff_petitioner if case else None, primary.plaintiff_petitioner if primary else None
        ),
        defendant_respondent=_first_present(
            case.defendant_respondent if case else None, primary.defendant_respondent if primary else None
        ),
        person_being_served=resolve_person_served(case, primary),
        service_address=service_address,
        service_location=classify_service_location(service_address, home_address, work_address),
        city_state=derive_city_state(service_address) if service_address else "",
        attempts=list(ordered),
        primary_serve=primary,
        service_date=format_date(moment),
        service_time=format_time(moment),
        service_method=method,
        attempt_slots=build_attempt_slots(ordered),
        notes=aggregate_notes(ordered),
        physical_description=primary.physical_description if primary else None,
        documents_served=_first_present(details.documents_served, case.documents_to_serve if case else None),
        details=details,
    )
    logger.debug(
        "Resolved affidavit for case %s: address=%r location=%s attempts=%d",
        affidavit.case_number or "?",
        affidavit.service_address,
        affidavit.service_location or "-",
        len(ordered),
    )
    return affidavit
