"""Tests for running the generation pipeline end-to-end."""
import csv
import json
from datetime import date
from io import BytesIO
from pathlib import Path

import pytest
from pypdf import PdfReader

import affidavit.processing.pipeline as pipeline
from affidavit.core.errors import TemplateLoadError
from affidavit.core.models import ServiceDetails
from affidavit.processing.pipeline import generate_affidavit, run_pipeline
from affidavit.processing.templates import REPORT_HEADERS


def _values(data: bytes) -> dict:
    return {name: field.get("/V") for name, field in (PdfReader(BytesIO(data)).get_fields() or {}).items()}


CLIENT = {"$id": "c1", "name": "Ace Legal", "address": "123 Main St"}
CASE = {"$id": "k1", "clientId": "c1", "caseNumber": "CV-7", "home_address": "", "workAddress": "456 Work Ave"}
SERVE = {
    "id": "s1",
    "client_id": "c1",
    "caseNumber": "CV-7",
    "serviceAddress": "456 Work Ave Suite 9",
    "status": "completed",
    "timestamp": "2024-05-01T14:30:00",
    "notes": "Handed to defendant",
}


def test_generate_affidavit_fills_resolved_values(template_path: Path):
    result = generate_affidavit(
        CLIENT,
        [CASE],
        [SERVE],
        details=ServiceDetails(server_name="Pat Server", military_service_inquired=True),
        template_location=str(template_path),
    )
    values = _values(result.data)

    assert result.filename == f"Affidavit_CV-7_{date.today().isoformat()}.pdf"
    assert values["Case Number"] == "CV-7"
    assert values["Service Address"] == "456 Work Ave Suite 9"
    assert values["Service Date"] == "5/1/2024"
    assert values["Service Time"] == "2:30 PM"
    assert values["Service Method"] == "Personal Service"
    assert values["Notes"] == "Handed to defendant"
    assert values["Server Name"] == "Pat Server"
    assert values["attempt1_date"] == "5/1/2024"
    assert values["Business"] == "/Yes"
    assert values["Residence"] == "/Off"
    assert values["Military Inquiry"] == "/Yes"
    assert values["City/State"] in (None, "")
    assert values["Court Name"] in (None, "")


def test_generate_affidavit_rejects_empty_input(template_path: Path):
    with pytest.raises(ValueError, match="nothing to put on the affidavit"):
        generate_affidavit(None, [], [], template_location=str(template_path))


def test_generate_affidavit_propagates_template_failure(tmp_path: Path):
    with pytest.raises(TemplateLoadError):
        generate_affidavit(CLIENT, [CASE], [SERVE], template_location=str(tmp_path / "absent.pdf"))


def test_each_call_loads_its_own_template(template_path: Path, monkeypatch: pytest.MonkeyPatch):
    loads = []
    original = pipeline.load_template

    def counting_load(location, timeout):
        loads.append(location)
        return original(location, timeout)

    monkeypatch.setattr(pipeline, "load_template", counting_load)

    first = generate_affidavit(CLIENT, [CASE], [SERVE], template_location=str(template_path))
    second = generate_affidavit(
        {"$id": "c2", "name": "Other", "address": "9 Side St"}, [], [], template_location=str(template_path)
    )

    assert len(loads) == 2
    assert _values(first.data)["Case Number"] == "CV-7"
    assert _values(second.data)["Case Number"] in (None, "")
    assert _values(second.data)["Service Address"] == "9 Side St"


def test_template_location_comes_from_environment(template_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("AFFIDAVIT_TEMPLATE", str(template_path))

    result = generate_affidavit(CLIENT, [CASE], [SERVE])

    assert _values(result.data)["Case Number"] == "CV-7"


def test_run_pipeline_writes_affidavit_and_csv_report(tmp_path: Path, dummy_data_dir: Path, template_path: Path):
    output_dir = tmp_path / "out"

    output_path = run_pipeline(
        dummy_data_dir,
        "client-ace",
        output_dir,
        template_location=str(template_path),
        report_sink="csv",
    )
    values = _values(output_path.read_bytes())

    assert output_path.parent == output_dir
    assert values["Case Number"] == "CJ-2024-1187"
    assert values["Person Served"] == "Marcus Webb"
    assert values["Court Name"] == "District Court of Tulsa County"
    assert values["City/State"] == "Broken Arrow, OK 74012"
    assert values["Residence"] == "/Yes"
    assert values["Height"] == "6'1\""
    assert values["Service Date"] == "3/8/2024"
    assert values["Documents"] == "Summons and Petition"
    assert values["Notes"].startswith("Attempt 1: No answer at the door")
    assert values["attempt3_time"] == "7:05 PM"

    report_path = output_dir / f"{output_path.stem}_service_report.csv"
    rows = list(csv.DictReader(report_path.read_text(encoding="utf-8").splitlines()))
    assert list(rows[0].keys()) == REPORT_HEADERS
    assert [row["Status"] for row in rows] == ["Failed", "Failed", "Successful"]
    assert rows[0]["Client_Name"] == "Ace Legal Group"


def test_run_pipeline_for_business_service_by_case(tmp_path: Path, dummy_data_dir: Path, template_path: Path):
    output_path = run_pipeline(
        dummy_data_dir,
        "client-rivera",
        tmp_path,
        case_number="SC-2024-0042",
        template_location=str(template_path),
    )
    values = _values(output_path.read_bytes())

    assert values["Business"] == "/Yes"
    assert values["Person Served"] == "Northside Storage Inc, c/o Registered Agent"
    assert values["Notes"] == "Served registered agent at front desk."
    assert values["Service Date"] == "4/2/2024"


def test_run_pipeline_errors_for_unknown_client(tmp_path: Path, dummy_data_dir: Path, template_path: Path):
    with pytest.raises(ValueError, match="No client with id"):
        run_pipeline(dummy_data_dir, "client-missing", tmp_path, template_location=str(template_path))

    assert not list(tmp_path.glob("*.pdf"))


def test_run_pipeline_without_case_number_keeps_other_cases_out(tmp_path: Path, template_path: Path):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    exports = {
        "clients.json": [{"id": "c1", "name": "Solo Law"}],
        "client_cases.json": [
            {"id": "k1", "client_id": "c1", "case_number": "A-1", "court_name": "Court A"},
            {"id": "k2", "client_id": "c1", "case_number": "B-2", "court_name": "Court B"},
        ],
        "serve_attempts.json": [
            {
                "id": "a1",
                "client_id": "c1",
                "case_number": "A-1",
                "status": "completed",
                "timestamp": "2024-06-01T10:00:00",
                "notes": "served A",
            },
            {
                "id": "b1",
                "client_id": "c1",
                "case_number": "B-2",
                "status": "failed",
                "timestamp": "2024-06-02T10:00:00",
                "notes": "tried B",
            },
        ],
    }
    for name, records in exports.items():
        (data_dir / name).write_text(json.dumps(records), encoding="utf-8")

    output_path = run_pipeline(data_dir, "c1", tmp_path / "out", template_location=str(template_path))
    values = _values(output_path.read_bytes())

    assert output_path.name.startswith("Affidavit_A-1_")
    assert values["Notes"] == "served A"
    assert values["Court Name"] == "Court A"
    assert values["Service Date"] == "6/1/2024"
    assert values["attempt2_date"] == ""
