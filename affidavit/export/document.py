"""Fillable PDF template access built on pypdf.

The template is authored outside this project and its field names drift
between revisions, so the document only answers "does this field exist" and
"write this value"; it never assumes a particular field set.
"""
from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Dict, List

import requests
from pypdf import PdfReader, PdfWriter
from pypdf.generic import BooleanObject, DictionaryObject, NameObject, TextStringObject

from affidavit.core.config import DEFAULT_FETCH_TIMEOUT
from affidavit.core.errors import TemplateLoadError

logger = logging.getLogger(__name__)

TEXT_FIELD = "text"
CHECKBOX_FIELD = "checkbox"
OTHER_FIELD = "other"

_RADIO_FLAG = 1 << 15
_PUSHBUTTON_FLAG = 1 << 16


def _inherited(annot, key: str):
    """Look up a field attribute on the widget or the nearest parent defining it."""

    value = annot.get(key)
    parent = annot.get("/Parent")
    while value is None and parent is not None:
        po = parent.get_object()
        value = po.get(key)
        parent = po.get("/Parent")
    return value


def _field_kind(annot) -> str:
    ft = str(_inherited(annot, "/FT") or "")
    if ft == "/Tx":
        return TEXT_FIELD
    if ft == "/Btn":
        flags = int(_inherited(annot, "/Ff") or 0)
        if flags & (_RADIO_FLAG | _PUSHBUTTON_FLAG):
            return OTHER_FIELD
        return CHECKBOX_FIELD
    return OTHER_FIELD


def _qualified_name(annot) -> str:
    """Build fully qualified field name by walking parent chain."""
    t = annot.get("/T", "")
    parts = [str(t)] if t else []
    parent = annot.get("/Parent")
    while parent:
        po = parent.get_object()
        pt = po.get("/T", "")
        if pt:
            parts.insert(0, str(pt))
        parent = po.get("/Parent")
    return ".".join(parts)


def _checkbox_on_state(annot) -> str:
    """Find the 'on' state name from a checkbox's appearance dict."""
    ap = annot.get("/AP")
    if not ap:
        return "/Yes"
    normal = ap.get_object().get("/N")
    if normal is not None:
        for key in normal.get_object().keys():
            if str(key) != "/Off":
                return str(key)
    return "/Yes"


def _value_holder(annot) -> DictionaryObject:
    """Widgets without their own ``/T`` store the value on the parent field."""

    if "/T" in annot or "/Parent" not in annot:
        return annot
    return annot["/Parent"].get_object()


class TemplateDocument:
    """An in-memory fillable form that can be written back out as PDF bytes."""

    def __init__(self, writer: PdfWriter, location: str = "<memory>") -> None:
        self.writer = writer
        self.location = location
        self._widgets: Dict[str, List[DictionaryObject]] = {}
        self._kinds: Dict[str, str] = {}
        self._index_fields()

    @classmethod
    def from_bytes(cls, data: bytes, location: str = "<memory>") -> "TemplateDocument":
        try:
            reader = PdfReader(BytesIO(data))
            writer = PdfWriter()
            writer.clone_document_from_reader(reader)
        except Exception as exc:
            raise TemplateLoadError(location, str(exc) or exc.__class__.__name__) from exc
        return cls(writer, location)

    def _index_fields(self) -> None:
        for page in self.writer.pages:
            if "/Annots" not in page:
                continue
            for annot_ref in page["/Annots"]:
                annot = annot_ref.get_object()
                if annot.get("/Subtype") != "/Widget":
                    continue
                name = _qualified_name(annot)
                if not name:
                    continue
                self._widgets.setdefault(name, []).append(annot)
                self._kinds.setdefault(name, _field_kind(annot))
                short_name = str(annot.get("/T", ""))
                if short_name and short_name != name:
                    self._widgets.setdefault(short_name, []).append(annot)
                    self._kinds.setdefault(short_name, self._kinds[name])

    def field_names(self) -> List[str]:
        """Every addressable field name, qualified and short forms alike."""

        return sorted(self._widgets)

    def field_kinds(self) -> Dict[str, str]:
        return dict(sorted(self._kinds.items()))

    def has_text_field(self, name: str) -> bool:
        return self._kinds.get(name) == TEXT_FIELD

    def has_checkbox(self, name: str) -> bool:
        return self._kinds.get(name) == CHECKBOX_FIELD

    def get_value(self, name: str) -> str:
        widgets = self._widgets.get(name)
        if not widgets:
            return ""
        value = _value_holder(widgets[0]).get("/V")
        return "" if value is None else str(value)

    def set_text(self, name: str, value: str) -> bool:
        """Write a text value; returns False when no such text field exists."""

        if not self.has_text_field(name):
            return False
        for annot in self._widgets[name]:
            _value_holder(annot).update({NameObject("/V"): TextStringObject(value)})
            if "/AP" in annot:
                del annot["/AP"]
        return True

    def set_checkbox(self, name: str, checked: bool) -> bool:
        """Check or clear a checkbox; returns False when no such checkbox exists."""

        if not self.has_checkbox(name):
            return False
        for annot in self._widgets[name]:
            state = NameObject(_checkbox_on_state(annot) if checked else "/Off")
            _value_holder(annot).update({NameObject("/V"): state})
            annot.update({NameObject("/AS"): state})
        return True

    def write(self, stream: BinaryIO) -> None:
        """Serialize the form, asking viewers to regenerate field appearances."""

        if "/AcroForm" in self.writer._root_object:
            self.writer._root_object["/AcroForm"].get_object().update(
                {NameObject("/NeedAppearances"): BooleanObject(True)}
            )
        self.writer.write(stream)


def load_template(location: str, timeout: float = DEFAULT_FETCH_TIMEOUT) -> TemplateDocument:
    """Fetch (http/https) or read (filesystem) the template and parse it.

    Every call returns a fresh document; nothing is cached between calls.
    """

    logger.info("Loading affidavit template from %s", location)
    if location.startswith(("http://", "https://")):
        try:
            response = requests.get(location, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise TemplateLoadError(location, str(exc)) from exc
        data = response.content
    else:
        try:
            data = Path(location).read_bytes()
        except OSError as exc:
            raise TemplateLoadError(location, exc.strerror or str(exc)) from exc

    document = TemplateDocument.from_bytes(data, location)
    logger.info("Template %s exposes %d form fields", location, len(document.field_names()))
    return document
