"""Helper sinks for writing generated affidavits and service reports to disk."""
from __future__ import annotations

import base64
import csv
from pathlib import Path
from typing import Any, Dict, Iterable, List


def ensure_output_dir(output_path: Path) -> None:
    """Create parent folders for sink outputs when missing."""

    output_path.parent.mkdir(parents=True, exist_ok=True)


def write_pdf(data: bytes, output_path: Path) -> Path:
    """Persist PDF bytes produced by the emitter."""

    ensure_output_dir(output_path)
    output_path.write_bytes(data)
    return output_path


def write_csv(rows: Iterable[Dict[str, Any]], output_path: Path, headers: List[str]) -> None:
    """Write rows to a CSV file with a fixed header order."""

    ensure_output_dir(output_path)
    with output_path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=headers)
        writer.writeheader()
        for row in rows:
            writer.writerow({header: row.get(header, "") for header in headers})


def write_excel(rows: Iterable[Dict[str, Any]], output_path: Path) -> None:
    """Write rows to an Excel workbook using openpyxl."""

    rows = list(rows)
    if not rows:
        return

    from openpyxl import Workbook

    ensure_output_dir(output_path)
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "service_report"
    headers: List[str] = list(rows[0].keys())
    sheet.append(headers)
    for row in rows:
        sheet.append([row.get(header, "") for header in headers])
    workbook.save(output_path)


def build_attachment(data: bytes, filename: str) -> Dict[str, str]:
    """Base64 mail-attachment payload for a byte buffer (affidavit or serve photo)."""

    return {
        "filename": filename,
        "content": base64.b64encode(data).decode("ascii"),
        "encoding": "base64",
    }
