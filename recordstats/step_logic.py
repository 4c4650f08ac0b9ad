from collections.abc import Iterable, Iterator
from datetime import datetime
from decimal import ROUND_HALF_UP, Context, Decimal
import math
from pathlib import Path
import re

from recordstats.schemas import EXPECTED_FIELDS, Record, RejectReason, Statistics, ValidationError


BANNER = "=" * 60
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
# ASCII decimals plus the nan/inf spellings float() understands.
_DECIMAL_PATTERN = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|nan|inf|infinity)",
    re.IGNORECASE,
)
_TWO_PLACES = Decimal("0.01")
# Wide enough for every finite float rendered to two places.
_DECIMAL_CONTEXT = Context(prec=400)


def parse_line(line: str | None, line_number: int, delimiter: str) -> Record | ValidationError:
    """Turn one input line into a ``Record`` or the first rule it breaks.

    Rules run in a fixed order and stop at the first failure: blank line,
    field count, empty fields (id, name, value), identifier, value.
    """
    if not delimiter:
        raise ValueError("delimiter must not be empty")

    if line is None or not line.strip():
        return ValidationError.build(line_number, line, RejectReason.EMPTY_LINE)

    fields = line.strip().split(delimiter)
    if len(fields) != EXPECTED_FIELDS:
        return ValidationError.build(
            line_number,
            line,
            RejectReason.WRONG_FIELD_COUNT,
            f"wrong field count: expected {EXPECTED_FIELDS}, got {len(fields)}",
        )

    id_raw, name, value_raw = (part.strip() for part in fields)

    if not id_raw:
        return ValidationError.build(line_number, line, RejectReason.EMPTY_IDENTIFIER)
    if not name:
        return ValidationError.build(line_number, line, RejectReason.EMPTY_NAME)
    if not value_raw:
        return ValidationError.build(line_number, line, RejectReason.EMPTY_VALUE)

    if not _INTEGER_PATTERN.fullmatch(id_raw):
        return ValidationError.build(line_number, line, RejectReason.IDENTIFIER_NOT_INTEGER)
    record_id = int(id_raw)
    if record_id <= 0:
        return ValidationError.build(line_number, line, RejectReason.IDENTIFIER_NOT_POSITIVE)

    if not _DECIMAL_PATTERN.fullmatch(value_raw):
        return ValidationError.build(line_number, line, RejectReason.VALUE_NOT_NUMBER)
    value = float(value_raw)
    # "nan", "Infinity" and overflowing literals like "1e999" all parse.
    if not math.isfinite(value):
        return ValidationError.build(line_number, line, RejectReason.VALUE_NOT_FINITE)

    return Record(record_id=record_id, name=name, value=value)


def validate_line(line: str | None, line_number: int, delimiter: str) -> ValidationError | None:
    outcome = parse_line(line, line_number, delimiter)
    if isinstance(outcome, ValidationError):
        return outcome
    return None


def read_lines(input_path: Path) -> Iterator[str]:
    with input_path.open("r", encoding="utf-8", errors="replace") as infile:
        for line in infile:
            yield line.rstrip("\n")


def aggregate_lines(
    lines: Iterable[str],
    delimiter: str,
    stats: Statistics | None = None,
) -> Statistics:
    if stats is None:
        stats = Statistics()

    for line_number, line in enumerate(lines, start=1):
        stats.increment_total()
        outcome = parse_line(line, line_number, delimiter)
        if isinstance(outcome, ValidationError):
            stats.add_error(outcome)
        else:
            stats.add_valid_record(outcome.value)

    return stats


def process_file(input_path: Path, delimiter: str) -> Statistics:
    return aggregate_lines(read_lines(input_path), delimiter, Statistics())


def format_decimal(value: float) -> str:
    if not math.isfinite(value):
        # A sum of huge finite values can still overflow.
        return repr(value)
    # repr() keeps the shortest round-tripping digits, so 150.625 rounds up.
    return str(Decimal(repr(value)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP, context=_DECIMAL_CONTEXT))


def format_report(stats: Statistics, generated_at: datetime | None = None) -> str:
    generated_at = generated_at or datetime.now()

    lines = [
        BANNER,
        "DATA PROCESSING REPORT",
        BANNER,
        "",
        f"Total records: {stats.total_records}",
        f"Valid records: {stats.valid_records}",
        f"Invalid records: {stats.invalid_records}",
        "",
    ]

    if stats.valid_records > 0:
        lines.extend(
            [
                f"Sum: {format_decimal(stats.sum)}",
                f"Min: {format_decimal(stats.min)}",
                f"Max: {format_decimal(stats.max)}",
                f"Average: {format_decimal(stats.average)}",
                "",
            ]
        )

    errors = stats.errors
    if errors:
        lines.append("Errors found:")
        lines.extend(f"  {index}. {error}" for index, error in enumerate(errors, start=1))
    else:
        lines.append("No errors found. All records are valid.")

    lines.extend(
        [
            "",
            BANNER,
            f"Report generated: {generated_at.isoformat()}",
            BANNER,
        ]
    )
    return "\n".join(lines)


def write_report(path: Path, report: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as outfile:
        outfile.write(report)
