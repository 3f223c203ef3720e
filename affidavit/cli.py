"""Command-line entry point for generating an affidavit from exported records."""
import argparse
import sys
from pathlib import Path

from affidavit.core.config import load_settings
from affidavit.core.errors import AffidavitError
from affidavit.core.logging import configure_logging
from affidavit.core.models import ServiceDetails
from affidavit.export.document import load_template
from affidavit.processing.pipeline import run_pipeline


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI entry point."""

    parser = argparse.ArgumentParser(description="Fill an affidavit of service from case records")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=Path("dummy_data"),
        help="Directory holding clients.json, client_cases.json and serve_attempts.json",
    )
    parser.add_argument("--client-id", help="Client whose serve attempts go on the affidavit")
    parser.add_argument("--case-number", help="Limit the affidavit to one case")
    parser.add_argument(
        "--template",
        help="Path or http(s) URL of the fillable affidavit PDF (defaults to AFFIDAVIT_TEMPLATE)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Folder for the generated PDF (defaults to AFFIDAVIT_OUTPUT_DIR)",
    )
    parser.add_argument(
        "--report",
        choices=["none", "csv", "excel"],
        default="none",
        help="Also write a service report listing every attempt",
    )
    parser.add_argument(
        "--list-fields",
        action="store_true",
        help="Print the template's form fields and exit",
    )

    details = parser.add_argument_group("process server details")
    details.add_argument("--server-name", default="")
    details.add_argument("--server-address", default="")
    details.add_argument("--documents-served", default="")
    details.add_argument("--relationship", default="", help="Relationship of the person served to the defendant")
    details.add_argument(
        "--military-inquired",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Check (or clear) the military service inquiry box",
    )
    details.add_argument("--military-inquiry-date", default="")
    details.add_argument("--military-inquiry-address", default="")
    details.add_argument("--substitute-location", default="")
    details.add_argument("--substitute-person", default="")
    return parser


def _details_from_args(args: argparse.Namespace) -> ServiceDetails:
    return ServiceDetails(
        server_name=args.server_name,
        server_address=args.server_address,
        documents_served=args.documents_served,
        relationship_to_defendant=args.relationship,
        military_service_inquired=args.military_inquired,
        military_inquiry_date=args.military_inquiry_date,
        military_inquiry_address=args.military_inquiry_address,
        substitute_service_location=args.substitute_location,
        substitute_service_person=args.substitute_person,
    )


def main() -> None:
    """Entrypoint for running the pipeline from the command line."""

    configure_logging()
    parser = build_parser()
    args = parser.parse_args()

    try:
        settings = load_settings()
        template = args.template or settings.template_location
        if args.list_fields:
            document = load_template(template, settings.fetch_timeout)
            for name, kind in document.field_kinds().items():
                print(f"{kind:9} {name}")
            return

        if not args.client_id:
            parser.error("--client-id is required unless --list-fields is given")

        output_path = run_pipeline(
            args.data_dir,
            args.client_id,
            args.output_dir or settings.output_dir,
            case_number=args.case_number,
            details=_details_from_args(args),
            template_location=template,
            report_sink=args.report,
        )
    except (AffidavitError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    print(f"Wrote {output_path}")


if __name__ == "__main__":
    main()
