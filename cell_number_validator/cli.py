import argparse
import logging
from pathlib import Path

from .bootstrap import initialize
from .config import Settings, get_settings
from .domain.classifier import LineTypeClassifier
from .domain.models import OUTPUT_FORMATS, BatchReport
from .exceptions import ConfigurationError, RemoteServiceError
from .formats import parse_national_number
from .infrastructure.twilio_lookup import TwilioLineTypeClassifier
from .logging_config import configure_logging
from .service import CellNumberValidator
from .utils import read_phone_list, write_numbers

logger = logging.getLogger(__name__)

USAGE = (
    "Usage: validate phone_number                (to validate phone_number)\n"
    "   or  validate input_file output_file      (to validate list of phone numbers)"
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="validate",
        description="Check whether US phone numbers are valid cellphone numbers",
    )
    parser.add_argument(
        "targets",
        nargs="*",
        help="A phone number, or an input file and an output file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log the verdict for every number",
    )
    parser.add_argument(
        "-w",
        "--workers",
        type=int,
        default=None,
        help="Number of parallel lookups (defaults to WORKER_COUNT)",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output number format (defaults to OUTPUT_FORMAT)",
    )
    return parser.parse_args(argv)


def build_classifier(settings: Settings) -> LineTypeClassifier:
    """Create the line type classifier from the application settings."""
    return TwilioLineTypeClassifier.from_settings(settings)


def validate_single(validator: CellNumberValidator, raw: str, fmt: str) -> int:
    try:
        is_cell = validator.is_cell_number(raw)
    except RemoteServiceError as exc:
        logger.error(f"Lookup failed for {raw}: {exc}")
        return 1

    if is_cell:
        number = parse_national_number(raw, validator.region, validator.strict_region)
        print("Valid cellphone number")
        print(number.format(fmt))
    else:
        print("Invalid cellphone number")
    return 0


def validate_file(
    validator: CellNumberValidator,
    input_path: Path,
    output_path: Path,
    fmt: str,
    verbose: bool = False,
) -> int:
    if not input_path.exists():
        logger.error(f"Input file not found: {input_path}")
        return 1

    try:
        phones = read_phone_list(input_path)
        # must open before any lookup runs
        out = output_path.open("w", encoding="utf-8")
    except OSError as exc:
        logger.error(f"Cannot use {input_path} -> {output_path}: {exc}")
        return 1
    logger.info(f"Loaded {len(phones)} unique numbers from {input_path}")

    with out:
        report = validator.validate_batch(phones)
        if verbose:
            _log_verdicts(report)
        written = write_numbers(out, report.numbers, fmt)
    logger.info(f"{written} cellphone numbers saved to {output_path}")

    print(f"Cell number validation took {report.elapsed_ms} milliseconds.")
    if report.errors:
        print(f"{report.errors} number(s) could not be classified.")
    print("Done!")
    return 0


def _log_verdicts(report: BatchReport) -> None:
    for raw in sorted(report.verdicts):
        verdict = report.verdicts[raw]
        line_type = verdict.line_type.value if verdict.line_type else "-"
        logger.info(f"{raw!r}: {verdict.reason.value} ({line_type})")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if len(args.targets) not in (1, 2):
        print(USAGE)
        return 0

    try:
        settings = get_settings()
    except ConfigurationError as exc:
        configure_logging()
        logger.error(f"Invalid configuration: {exc}")
        return 1

    initialize(settings, verbose=args.verbose)
    fmt = args.format or settings.output_format
    validator = CellNumberValidator(
        build_classifier(settings),
        region=settings.lookup_region,
        workers=args.workers or settings.worker_count,
        strict_region=settings.strict_region,
    )

    if len(args.targets) == 1:
        return validate_single(validator, args.targets[0], fmt)
    return validate_file(
        validator,
        Path(args.targets[0]),
        Path(args.targets[1]),
        fmt,
        verbose=args.verbose,
    )
