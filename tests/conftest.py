"""Pytest configuration to make the local package importable without installation."""
import sys
from io import BytesIO
from pathlib import Path
from typing import Iterable

import pytest
from pypdf import PdfWriter
from pypdf.generic import (
    ArrayObject,
    DictionaryObject,
    FloatObject,
    NameObject,
    NumberObject,
    TextStringObject,
)

# Ensure repository root is on sys.path for module resolution
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from affidavit.cli import main as cli_main

TEMPLATE_TEXT_FIELDS = [
    "Case Number",
    "CASE_NUMBER",
    "Case Name",
    "Court Name",
    "Plaintiff",
    "Defendant",
    "Person Served",
    "Service Date",
    "Service Time",
    "Service Address",
    "City/State",
    "Service Method",
    "Notes",
    "Server Name",
    "Documents",
    "Age",
    "Sex",
    "Race",
    "Height",
    "Weight",
    "Hair Color",
] + [f"attempt{n}_{part}" for n in range(1, 6) for part in ("date", "time")]

TEMPLATE_CHECKBOXES = ["Residence", "Business", "Military Inquiry"]


def _widget(name: str, field_type: str, y: float) -> DictionaryObject:
    widget = DictionaryObject(
        {
            NameObject("/Type"): NameObject("/Annot"),
            NameObject("/Subtype"): NameObject("/Widget"),
            NameObject("/FT"): NameObject(field_type),
            NameObject("/T"): TextStringObject(name),
            NameObject("/Rect"): ArrayObject(
                [FloatObject(50), FloatObject(y), FloatObject(400), FloatObject(y + 14)]
            ),
            NameObject("/F"): NumberObject(4),
        }
    )
    if field_type == "/Btn":
        widget[NameObject("/V")] = NameObject("/Off")
        widget[NameObject("/AS")] = NameObject("/Off")
    else:
        widget[NameObject("/V")] = TextStringObject("")
        widget[NameObject("/DA")] = TextStringObject("/Helv 10 Tf 0 g")
    return widget


def build_fillable_pdf(text_fields: Iterable[str] = (), checkboxes: Iterable[str] = ()) -> bytes:
    """Create a one-page PDF whose AcroForm exposes the given field names."""

    writer = PdfWriter()
    page = writer.add_blank_page(width=612, height=792)
    annots = ArrayObject()
    y = 760.0
    for name in text_fields:
        annots.append(writer._add_object(_widget(name, "/Tx", y)))
        y -= 18
    for name in checkboxes:
        annots.append(writer._add_object(_widget(name, "/Btn", y)))
        y -= 18
    page[NameObject("/Annots")] = annots
    writer._root_object[NameObject("/AcroForm")] = DictionaryObject(
        {NameObject("/Fields"): ArrayObject(list(annots))}
    )
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep developer env files and variables out of test runs."""

    for name in ("AFFIDAVIT_TEMPLATE", "AFFIDAVIT_OUTPUT_DIR", "AFFIDAVIT_FETCH_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AFFIDAVIT_ENV_FILE", str(tmp_path / "missing.env"))


@pytest.fixture
def dummy_data_dir() -> Path:
    """Return the built-in dummy data directory for tests."""

    return ROOT / "dummy_data"


@pytest.fixture
def template_bytes() -> bytes:
    return build_fillable_pdf(TEMPLATE_TEXT_FIELDS, TEMPLATE_CHECKBOXES)


@pytest.fixture
def template_path(tmp_path: Path, template_bytes: bytes) -> Path:
    """Write the standard test template to disk."""

    path = tmp_path / "templates" / "affidavit.pdf"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(template_bytes)
    return path


@pytest.fixture
def run_cli(monkeypatch: pytest.MonkeyPatch):
    """Helper to invoke the CLI with custom arguments inside tests."""

    def _run(args: list[str]) -> None:
        monkeypatch.setattr(sys, "argv", ["affidavit.cli", *args])
        cli_main()

    return _run


@pytest.fixture
def make_template():
    """Factory for templates with an arbitrary field set."""

    return build_fillable_pdf
