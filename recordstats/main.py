import argparse
import logging
import os
from pathlib import Path
import sys
from typing import NoReturn

from recordstats.config import Settings, get_settings
from recordstats.pipeline import ReportRunner


TAB_ESCAPE = "\\t"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate delimited records and write a summary report")
    parser.add_argument("-i", "--input", help="Path to the input file; prompts interactively when omitted")
    parser.add_argument("-o", "--output", help="Path of the report file (default: report.txt)")
    parser.add_argument(
        "-d",
        "--delimiter",
        help="Field delimiter (default: ','); the two characters \\t mean a tab",
    )
    return parser.parse_args(argv)


def normalize_delimiter(raw: str | None, default: str) -> str:
    delimiter = (raw or "").strip()
    if not delimiter:
        return default
    if delimiter == TAB_ESCAPE:
        return "\t"
    return delimiter


def fail(message: str) -> NoReturn:
    print(message, file=sys.stderr)
    raise SystemExit(1)


def prompt_options(settings: Settings) -> tuple[str, str, str]:
    print("=== Record processing utility ===")
    input_path = input("Enter the input file path: ").strip()
    if not input_path:
        fail("Error: input path must not be empty.")
    output_path = input(f"Enter the output file path (Enter for '{settings.default_output_path}'): ").strip()
    delimiter = input(f"Enter the delimiter (Enter for '{settings.default_delimiter}'): ")
    return input_path, output_path, delimiter


def check_input_path(input_path: str) -> str | None:
    path = Path(input_path)
    if not path.exists():
        return f"Error: file not found - {input_path}"
    if not path.is_file():
        return f"Error: path is not a file - {input_path}"
    if not os.access(path, os.R_OK):
        return f"Error: no read permission for file - {input_path}"
    return None


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    if args.input is None:
        input_path, output_path, raw_delimiter = prompt_options(settings)
    else:
        input_path, output_path, raw_delimiter = args.input.strip(), (args.output or "").strip(), args.delimiter

    if not input_path:
        fail("Error: input path must not be empty.")

    problem = check_input_path(input_path)
    if problem:
        fail(problem)

    runner = ReportRunner(settings)
    result = runner.run(
        input_path=input_path,
        output_path=output_path or settings.default_output_path,
        delimiter=normalize_delimiter(raw_delimiter, settings.default_delimiter),
    )

    if result.report is not None:
        print()
        print(result.report)

    if result.status == "failed":
        if result.failed_step == "publish_report":
            fail(f"I/O error while writing report: {result.error}")
        fail(f"I/O error while reading input: {result.error}")

    print()
    print(f"Report saved to: {Path(result.output_path).resolve()}")


if __name__ == "__main__":
    main()
