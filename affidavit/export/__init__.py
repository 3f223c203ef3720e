"""Template filling and output destinations for generated affidavits."""
from affidavit.export.document import TemplateDocument, load_template
from affidavit.export.emitter import EmittedDocument, emit_document, suggested_filename
from affidavit.export.filler import FillReport, fill_template
from affidavit.export.sinks import build_attachment, ensure_output_dir, write_csv, write_excel, write_pdf

__all__ = [
    "TemplateDocument",
    "load_template",
    "EmittedDocument",
    "emit_document",
    "suggested_filename",
    "FillReport",
    "fill_template",
    "build_attachment",
    "ensure_output_dir",
    "write_csv",
    "write_excel",
    "write_pdf",
]
