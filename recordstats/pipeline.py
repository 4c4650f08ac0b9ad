from collections.abc import Callable
import logging
from pathlib import Path
from typing import TypeVar

from recordstats.config import Settings
from recordstats.schemas import RunResult, Statistics
from recordstats.step_logic import format_report, process_file, write_report


logger = logging.getLogger(__name__)
T = TypeVar("T")


class StepFailedError(RuntimeError):
    def __init__(self, step_name: str, cause: Exception) -> None:
        super().__init__(f"step '{step_name}' failed: {cause}")
        self.step_name = step_name
        self.cause = cause


class ReportRunner:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def run(
        self,
        *,
        input_path: str,
        output_path: str | None = None,
        delimiter: str | None = None,
    ) -> RunResult:
        output_path = output_path or self.settings.default_output_path
        delimiter = delimiter or self.settings.default_delimiter
        context = {"input_path": input_path, "output_path": output_path}

        stats: Statistics | None = None
        report: str | None = None

        try:
            stats = self._run_step("ingest", lambda: process_file(Path(input_path), delimiter))
            report = self._run_step("format_report", lambda: format_report(stats))
            self._run_step("publish_report", lambda: write_report(Path(output_path), report))
        except StepFailedError as exc:
            logger.exception("report run failed", extra={**context, "step": exc.step_name})
            return RunResult(
                status="failed",
                input_path=input_path,
                output_path=output_path,
                delimiter=delimiter,
                statistics=stats,
                report=report,
                error=str(exc.cause),
                failed_step=exc.step_name,
            )

        logger.info(
            "report run succeeded",
            extra={
                **context,
                "total_records": stats.total_records,
                "valid_records": stats.valid_records,
                "invalid_records": stats.invalid_records,
            },
        )
        return RunResult(
            status="succeeded",
            input_path=input_path,
            output_path=output_path,
            delimiter=delimiter,
            statistics=stats,
            report=report,
        )

    def _run_step(self, step_name: str, fn: Callable[[], T]) -> T:
        logger.debug("step started", extra={"step": step_name})
        # Per-line problems are data, so only I/O failures end a run.
        try:
            result = fn()
        except OSError as exc:
            raise StepFailedError(step_name, exc) from exc
        logger.debug("step finished", extra={"step": step_name})
        return result
