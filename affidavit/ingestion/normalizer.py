"""Normalize serve, case, and client records from either naming convention.

Records arrive from the storage layer with persistence-style keys
(``case_number``, ``$id``) or from the app with camelCase keys
(``caseNumber``, ``id``). Each canonical field lists the source keys it
accepts, in priority order; the canonical key always comes first so that
normalizing an already-normalized record is a no-op.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, is_dataclass, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from affidavit.core.models import (
    UNKNOWN,
    CaseRecord,
    ClientRecord,
    PhysicalDescription,
    ServeRecord,
)
from affidavit.core.utils import parse_timestamp

logger = logging.getLogger(__name__)

SERVE_KEYS: Dict[str, Sequence[str]] = {
    "id": ("id", "$id"),
    "client_id": ("client_id", "clientId"),
    "client_name": ("client_name", "clientName"),
    "client_email": ("client_email", "clientEmail"),
    "case_number": ("case_number", "caseNumber"),
    "case_name": ("case_name", "caseName"),
    "service_address": ("service_address", "serviceAddress", "address"),
    "notes": ("notes",),
    "description": ("description",),
    "status": ("status",),
    "timestamp": ("timestamp",),
    "created_at": ("created_at", "createdAt", "$createdAt"),
    "attempt_number": ("attempt_number", "attemptNumber"),
    "image_data": ("image_data", "imageData"),
    "coordinates": ("coordinates",),
    "person_entity_being_served": ("person_entity_being_served", "personEntityBeingServed"),
    "physical_description": ("physical_description", "physicalDescription"),
    "court_name": ("court_name", "courtName"),
    "plaintiff_petitioner": ("plaintiff_petitioner", "plaintiffPetitioner"),
    "defendant_respondent": ("defendant_respondent", "defendantRespondent"),
    "home_address": ("home_address", "homeAddress"),
    "work_address": ("work_address", "workAddress"),
}

CASE_KEYS: Dict[str, Sequence[str]] = {
    "id": ("id", "$id"),
    "client_id": ("client_id", "clientId"),
    "case_number": ("case_number", "caseNumber"),
    "case_name": ("case_name", "caseName"),
    "court_name": ("court_name", "courtName"),
    "plaintiff_petitioner": ("plaintiff_petitioner", "plaintiffPetitioner"),
    "defendant_respondent": ("defendant_respondent", "defendantRespondent"),
    "home_address": ("home_address", "homeAddress"),
    "work_address": ("work_address", "workAddress"),
    "person_entity_being_served": ("person_entity_being_served", "personEntityBeingServed"),
    "documents_to_serve": ("documents_to_serve", "documentsToServe"),
    "status": ("status",),
}

CLIENT_KEYS: Dict[str, Sequence[str]] = {
    "id": ("id", "$id"),
    "name": ("name", "client_name", "clientName"),
    "email": ("email",),
    "address": ("address",),
    "phone": ("phone",),
    "additional_emails": ("additional_emails", "additionalEmails"),
}

PHYSICAL_KEYS: Dict[str, Sequence[str]] = {
    "age": ("age",),
    "sex": ("sex", "gender"),
    "ethnicity": ("ethnicity", "race"),
    "height_feet": ("height_feet", "heightFeet"),
    "height_inches": ("height_inches", "heightInches"),
    "weight": ("weight",),
    "hair": ("hair", "hair_color", "hairColor"),
    "beard": ("beard",),
    "glasses": ("glasses",),
}

_IDENTIFIERS = {"id", "client_id", "case_number"}
_STRUCTURED_SERVE_FIELDS = _IDENTIFIERS | {
    "status",
    "timestamp",
    "created_at",
    "attempt_number",
    "image_data",
    "coordinates",
    "physical_description",
}


def _as_mapping(raw: Any) -> Mapping[str, Any]:
    if is_dataclass(raw) and not isinstance(raw, type):
        return asdict(raw)
    if isinstance(raw, Mapping):
        return raw
    raise TypeError(f"Cannot normalize record of type {type(raw).__name__}")


def _pick(raw: Mapping[str, Any], keys: Sequence[str]) -> Any:
    """Return the first truthy value among the accepted source keys."""

    for key in keys:
        value = raw.get(key)
        if value:
            return value
    return None


def _text(value: Any) -> str:
    if value is None or value is False:
        return ""
    return str(value).strip()


def _identifier(value: Any) -> str:
    text = _text(value)
    return text or UNKNOWN


def _coordinates(value: Any) -> Optional[Dict[str, float]]:
    """Accept ``{"latitude", "longitude"}`` mappings or ``"lat,lng"`` strings."""

    if not value:
        return None
    try:
        if isinstance(value, Mapping):
            return {"latitude": float(value["latitude"]), "longitude": float(value["longitude"])}
        if isinstance(value, str) and "," in value:
            lat, lng = value.split(",", 1)
            return {"latitude": float(lat), "longitude": float(lng)}
    except (KeyError, TypeError, ValueError):
        logger.debug("Ignoring malformed coordinates %r", value)
    return None


def _attempt_number(value: Any) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return 1
    return number if number > 0 else 1


def normalize_physical_description(raw: Any) -> Optional[PhysicalDescription]:
    """Canonicalize a physical description; ``None`` when nothing was recorded."""

    if not raw:
        return None
    source = _as_mapping(raw)
    values = {name: _text(_pick(source, keys)) for name, keys in PHYSICAL_KEYS.items()}
    if not any(values.values()):
        return None
    return PhysicalDescription(**values)


def normalize_serve(raw: Any) -> Optional[ServeRecord]:
    """Convert one serve attempt into a canonical :class:`ServeRecord`.

    Returns ``None`` only when no identifier can be recovered.
    """

    if not raw:
        return None
    source = _as_mapping(raw)
    values = {name: _pick(source, keys) for name, keys in SERVE_KEYS.items()}

    record_id = _text(values["id"])
    if not record_id:
        return None

    text_fields = {name: _text(values[name]) for name in SERVE_KEYS if name not in _STRUCTURED_SERVE_FIELDS}
    return ServeRecord(
        id=record_id,
        client_id=_identifier(values["client_id"]),
        case_number=_identifier(values["case_number"]),
        status=_text(values["status"]).lower() or UNKNOWN,
        timestamp=parse_timestamp(values["timestamp"]),
        created_at=parse_timestamp(values["created_at"]),
        attempt_number=_attempt_number(values["attempt_number"]),
        image_data=values["image_data"] or None,
        coordinates=_coordinates(values["coordinates"]),
        physical_description=normalize_physical_description(values["physical_description"]),
        **text_fields,
    )


def normalize_serves(records: Iterable[Any]) -> List[ServeRecord]:
    """Normalize a batch, dropping (and logging) non-object records and those without an id."""

    normalized: List[ServeRecord] = []
    for raw in records:
        try:
            record = normalize_serve(raw)
        except TypeError as exc:
            logger.warning("Skipping serve record: %s", exc)
            continue
        if record is None:
            logger.warning("Skipping serve record without an id: %r", raw)
            continue
        normalized.append(record)
    return normalized


def normalize_case(raw: Any) -> CaseRecord:
    """Convert a case record into a canonical :class:`CaseRecord`."""

    source = _as_mapping(raw or {})
    values = {name: _pick(source, keys) for name, keys in CASE_KEYS.items()}
    fields = {
        name: _identifier(value) if name in _IDENTIFIERS else _text(value)
        for name, value in values.items()
    }
    fields["status"] = fields["status"].lower() or "open"
    return CaseRecord(**fields)


def normalize_cases(records: Iterable[Any]) -> List[CaseRecord]:
    normalized: List[CaseRecord] = []
    for raw in records:
        try:
            record = normalize_case(raw)
        except TypeError as exc:
            logger.warning("Skipping case record: %s", exc)
            continue
        if record.id == UNKNOWN and record.case_number == UNKNOWN:
            logger.warning("Skipping case record without an id or case number: %r", raw)
            continue
        normalized.append(record)
    return normalized


def normalize_client(raw: Any) -> ClientRecord:
    """Convert a client record into a canonical :class:`ClientRecord`."""

    source = _as_mapping(raw or {})
    extra = _pick(source, CLIENT_KEYS["additional_emails"]) or []
    if isinstance(extra, str):
        extra = [item for item in (part.strip() for part in extra.split(",")) if item]
    return ClientRecord(
        id=_identifier(_pick(source, CLIENT_KEYS["id"])),
        name=_text(_pick(source, CLIENT_KEYS["name"])),
        email=_text(_pick(source, CLIENT_KEYS["email"])),
        address=_text(_pick(source, CLIENT_KEYS["address"])),
        phone=_text(_pick(source, CLIENT_KEYS["phone"])),
        additional_emails=[_text(item) for item in extra if _text(item)],
    )


def normalize_clients(records: Iterable[Any]) -> List[ClientRecord]:
    normalized: List[ClientRecord] = []
    for raw in records:
        try:
            record = normalize_client(raw)
        except TypeError as exc:
            logger.warning("Skipping client record: %s", exc)
            continue
        if record.id == UNKNOWN:
            logger.warning("Skipping client record without an id: %r", raw)
            continue
        normalized.append(record)
    return normalized


def add_client_names(serves: Iterable[ServeRecord], clients: Iterable[ClientRecord]) -> List[ServeRecord]:
    """Fill in missing client names on serves by matching ``client_id``."""

    names = {client.id: client.name for client in clients if client.name}
    updated: List[ServeRecord] = []
    for serve in serves:
        if not serve.client_name and serve.client_id in names:
            serve = replace(serve, client_name=names[serve.client_id])
        updated.append(serve)
    return updated


def merge_serve_and_case(serves: Iterable[ServeRecord], cases: Iterable[CaseRecord]) -> List[ServeRecord]:
    """Copy court, party, and address data from each serve's case onto the serve."""

    case_map = {
        (case.client_id, case.case_number): case
        for case in cases
        if case.client_id != UNKNOWN and case.case_number != UNKNOWN
    }
    merged: List[ServeRecord] = []
    for serve in serves:
        case = case_map.get((serve.client_id, serve.case_number))
        if case is None:
            merged.append(serve)
            continue
        merged.append(
            replace(
                serve,
                court_name=case.court_name,
                plaintiff_petitioner=case.plaintiff_petitioner,
                defendant_respondent=case.defendant_respondent,
                home_address=case.home_address,
                work_address=case.work_address,
                case_name=serve.case_name or case.case_name,
                person_entity_being_served=serve.person_entity_being_served
                or case.person_entity_being_served,
            )
        )
    return merged
