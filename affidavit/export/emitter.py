"""Serialize a filled template to bytes with a suggested download name."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from io import BytesIO
from typing import Optional

from affidavit.core.errors import DocumentSerializationError
from affidavit.export.document import TemplateDocument

logger = logging.getLogger(__name__)


@dataclass
class EmittedDocument:
    data: bytes
    filename: str


def suggested_filename(case_number: str, today: Optional[date] = None) -> str:
    """``Affidavit_<case>_<YYYY-MM-DD>.pdf`` with filesystem-unsafe characters replaced."""

    today = today or date.today()
    safe_case = re.sub(r"[^A-Za-z0-9._-]+", "-", case_number.strip()).strip("-") or "unknown-case"
    return f"Affidavit_{safe_case}_{today.isoformat()}.pdf"


def emit_document(document: TemplateDocument, case_number: str = "", today: Optional[date] = None) -> EmittedDocument:
    """Write the filled form into memory; failures surface as DocumentSerializationError."""

    buffer = BytesIO()
    try:
        document.write(buffer)
    except Exception as exc:
        logger.error("Could not serialize template %s: %s", document.location, exc)
        raise DocumentSerializationError(str(exc) or exc.__class__.__name__) from exc

    data = buffer.getvalue()
    logger.info("Serialized affidavit (%d bytes)", len(data))
    return EmittedDocument(data=data, filename=suggested_filename(case_number, today))
