"""Data models for clients, cases, serve attempts, and the reconciled affidavit view."""
from dataclasses import dataclass, asdict, field
from datetime import datetime
from typing import Optional, Dict, Any, List

UNKNOWN = "unknown"
MAX_ATTEMPT_SLOTS = 5


@dataclass
class PhysicalDescription:
    """Appearance of the person served, as captured with the serve attempt."""

    age: str = ""
    sex: str = ""
    ethnicity: str = ""
    height_feet: str = ""
    height_inches: str = ""
    weight: str = ""
    hair: str = ""
    beard: str = ""
    glasses: str = ""

    def height(self) -> str:
        """Return a display height such as ``5'6"`` (empty when no feet were recorded)."""

        if not self.height_feet:
            return ""
        if not self.height_inches:
            return f"{self.height_feet}'"
        return f"{self.height_feet}'{self.height_inches}\""


@dataclass
class ClientRecord:
    id: str = UNKNOWN
    name: str = ""
    email: str = ""
    address: str = ""
    phone: str = ""
    additional_emails: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CaseRecord:
    """A legal matter owned by a client; read-only input to the affidavit."""

    id: str = UNKNOWN
    client_id: str = UNKNOWN
    case_number: str = UNKNOWN
    case_name: str = ""
    court_name: str = ""
    plaintiff_petitioner: str = ""
    defendant_respondent: str = ""
    home_address: str = ""
    work_address: str = ""
    person_entity_being_served: str = ""
    documents_to_serve: str = ""
    status: str = "open"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ServeRecord:
    """One serve attempt in canonical form."""

    id: str
    client_id: str = UNKNOWN
    client_name: str = ""
    client_email: str = ""
    case_number: str = UNKNOWN
    case_name: str = ""
    service_address: str = ""
    notes: str = ""
    description: str = ""
    status: str = UNKNOWN
    timestamp: Optional[datetime] = None
    created_at: Optional[datetime] = None
    attempt_number: int = 1
    image_data: Optional[str] = None
    coordinates: Optional[Dict[str, float]] = None
    person_entity_being_served: str = ""
    physical_description: Optional[PhysicalDescription] = None
    court_name: str = ""
    plaintiff_petitioner: str = ""
    defendant_respondent: str = ""
    home_address: str = ""
    work_address: str = ""

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"

    @property
    def sort_time(self) -> datetime:
        """Timestamp used for chronological ordering; records with neither time sort first."""

        return self.timestamp or self.created_at or datetime.min

    def to_dict(self) -> Dict[str, Any]:
        """Return a plain dictionary keyed by canonical field names."""

        return asdict(self)


@dataclass
class ServiceDetails:
    """Values the process server types in when generating an affidavit."""

    server_name: str = ""
    server_address: str = ""
    documents_served: str = ""
    relationship_to_defendant: str = ""
    military_service_inquired: Optional[bool] = None
    military_inquiry_date: str = ""
    military_inquiry_address: str = ""
    substitute_service_location: str = ""
    substitute_service_person: str = ""


@dataclass
class AttemptSlot:
    """Date and time printed in one of the affidavit's numbered attempt rows."""

    number: int
    date: str
    time: str

    @staticmethod
    def field_name(number: int, part: str) -> str:
        """Logical value name of a numbered attempt row, e.g. ``attempt2_time``."""

        return f"attempt{number}_{part}"


@dataclass
class AffidavitInput:
    """Reconciled view of one client, one case, and its serve attempts.

    Built fresh for a single generation call and never stored.
    """

    client_name: str = ""
    client_address: str = ""
    case_number: str = ""
    case_name: str = ""
    court_name: str = ""
    plaintiff_petitioner: str = ""
    defendant_respondent: str = ""
    person_being_served: str = ""
    service_address: str = ""
    service_location: str = ""
    city_state: str = ""
    attempts: List[ServeRecord] = field(default_factory=list)
    primary_serve: Optional[ServeRecord] = None
    service_date: str = ""
    service_time: str = ""
    service_method: str = ""
    attempt_slots: List[AttemptSlot] = field(default_factory=list)
    notes: str = ""
    physical_description: Optional[PhysicalDescription] = None
    documents_served: str = ""
    details: ServiceDetails = field(default_factory=ServiceDetails)

    def is_empty(self) -> bool:
        """True when neither case, client, nor serve data produced any value."""

        texts = [
            self.client_name,
            self.client_address,
            self.case_number,
            self.case_name,
            self.person_being_served,
            self.service_address,
            self.notes,
        ]
        return not any(text.strip() for text in texts) and not self.attempts
