"""Load client, case, and serve exports from a data directory."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Tuple

from affidavit.core.models import CaseRecord, ClientRecord, ServeRecord
from affidavit.ingestion.normalizer import (
    add_client_names,
    merge_serve_and_case,
    normalize_cases,
    normalize_clients,
    normalize_serves,
)

logger = logging.getLogger(__name__)

CLIENTS_FILE = "clients.json"
CASES_FILE = "client_cases.json"
SERVES_FILE = "serve_attempts.json"


@dataclass
class RecordSet:
    """Normalized records loaded from one data directory."""

    clients: List[ClientRecord] = field(default_factory=list)
    cases: List[CaseRecord] = field(default_factory=list)
    serves: List[ServeRecord] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.clients) + len(self.cases) + len(self.serves)

    def client(self, client_id: str) -> Optional[ClientRecord]:
        return next((client for client in self.clients if client.id == client_id), None)

    def cases_for(self, client_id: str, case_number: str | None = None) -> List[CaseRecord]:
        return [
            case
            for case in self.cases
            if case.client_id == client_id and (case_number is None or case.case_number == case_number)
        ]

    def serves_for(self, client_id: str, case_number: str | None = None) -> List[ServeRecord]:
        return [
            serve
            for serve in self.serves
            if serve.client_id == client_id and (case_number is None or serve.case_number == case_number)
        ]


def read_documents(path: Path) -> List[Any]:
    """Read a JSON export: either a bare list or a ``{"documents": [...]}`` listing."""

    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("documents", [])
    if not isinstance(payload, list):
        raise ValueError(f"{path.name} does not contain a list of documents")
    return payload


def load_records(data_dir: Path) -> Tuple[RecordSet, List[str]]:
    """Parse and normalize all exports under a data directory.

    A file that is missing or cannot be parsed is logged and reported as an
    alert; the remaining files still load.
    """

    alerts: List[str] = []
    raw: dict[str, List[Any]] = {}

    logger.info("Loading records from %s", data_dir)

    for name in (CLIENTS_FILE, CASES_FILE, SERVES_FILE):
        path = data_dir / name
        if not path.exists():
            logger.warning("Missing export %s", path)
            alerts.append(f"Missing export {name}")
            raw[name] = []
            continue
        try:
            raw[name] = read_documents(path)
        except Exception:
            logger.exception("Failed to parse export %s", path)
            alerts.append(f"Failed to parse export {name}")
            raw[name] = []

    clients = normalize_clients(raw[CLIENTS_FILE])
    cases = normalize_cases(raw[CASES_FILE])
    serves = normalize_serves(raw[SERVES_FILE])
    batches = (
        (CLIENTS_FILE, "client", clients),
        (CASES_FILE, "case", cases),
        (SERVES_FILE, "serve", serves),
    )
    for name, kind, kept in batches:
        dropped = len(raw[name]) - len(kept)
        if dropped:
            alerts.append(f"Skipped {dropped} unusable {kind} record(s) in {name}")

    serves = merge_serve_and_case(add_client_names(serves, clients), cases)
    records = RecordSet(clients=clients, cases=cases, serves=serves)
    logger.info(
        "Loaded %d clients, %d cases, %d serve attempts",
        len(clients),
        len(cases),
        len(serves),
    )
    return records, alerts
