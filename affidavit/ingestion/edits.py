"""Edits allowed on a serve attempt after it has been captured."""
from __future__ import annotations

from dataclasses import replace
from typing import Dict, Optional

from affidavit.core.models import ServeRecord

EDITABLE_FIELDS = {"notes", "status"}
SERVE_STATUSES = {"completed", "failed"}


def apply_serve_edits(serve: ServeRecord, updates: Dict[str, Optional[str]]) -> ServeRecord:
    """Return a copy of the serve with notes and/or status changed.

    Everything else on a serve is evidence recorded at capture time and cannot
    be edited; ``None`` values are ignored.
    """

    changes = {key: value for key, value in updates.items() if value is not None}
    locked = sorted(set(changes) - EDITABLE_FIELDS)
    if locked:
        raise ValueError(f"Serve attempts only allow notes/status edits, not: {', '.join(locked)}")

    if "status" in changes:
        status = changes["status"].strip().lower()
        if status not in SERVE_STATUSES:
            raise ValueError(f"Unsupported serve status {changes['status']!r}")
        changes["status"] = status
    if "notes" in changes:
        changes["notes"] = changes["notes"].strip()
    return replace(serve, **changes)
