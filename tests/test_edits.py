"""Tests for the notes/status edits allowed on captured serve attempts."""
from datetime import datetime

import pytest

from affidavit.core.models import ServeRecord
from affidavit.ingestion.edits import apply_serve_edits


def test_apply_serve_edits_updates_notes_and_status():
    serve = ServeRecord(id="s1", status="failed", notes="Old", timestamp=datetime(2024, 1, 1))

    updated = apply_serve_edits(serve, {"notes": " Left at door ", "status": "Completed"})

    assert updated.notes == "Left at door"
    assert updated.status == "completed"
    # untouched fields remain as-is
    assert updated.timestamp == serve.timestamp
    assert serve.notes == "Old"


def test_apply_serve_edits_ignores_none_values():
    serve = ServeRecord(id="s1", status="failed", notes="Keep me")

    updated = apply_serve_edits(serve, {"notes": None, "status": "completed"})

    assert updated.notes == "Keep me"
    assert updated.status == "completed"


def test_apply_serve_edits_rejects_evidence_fields():
    serve = ServeRecord(id="s1", service_address="1 Main St")

    with pytest.raises(ValueError, match="service_address"):
        apply_serve_edits(serve, {"service_address": "2 Main St"})


def test_apply_serve_edits_rejects_unknown_status():
    with pytest.raises(ValueError, match="Unsupported serve status"):
        apply_serve_edits(ServeRecord(id="s1"), {"status": "pending"})
