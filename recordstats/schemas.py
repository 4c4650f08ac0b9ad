from dataclasses import dataclass, field
from enum import Enum


EXPECTED_FIELDS = 3


class RejectReason(str, Enum):
    """Closed set of reasons a line can be rejected for."""

    EMPTY_LINE = "empty line"
    WRONG_FIELD_COUNT = "wrong field count"
    EMPTY_IDENTIFIER = "empty identifier"
    EMPTY_NAME = "empty name"
    EMPTY_VALUE = "empty numeric value"
    IDENTIFIER_NOT_INTEGER = "identifier is not an integer"
    IDENTIFIER_NOT_POSITIVE = "identifier must be a positive integer"
    VALUE_NOT_NUMBER = "numeric value is not a valid number"
    VALUE_NOT_FINITE = "numeric value is NaN or infinite"


@dataclass(frozen=True)
class ValidationError:
    line_number: int
    line_content: str
    code: RejectReason
    reason: str

    @classmethod
    def build(
        cls,
        line_number: int,
        line: str | None,
        code: RejectReason,
        reason: str | None = None,
    ) -> "ValidationError":
        return cls(
            line_number=line_number,
            line_content="" if line is None else line.strip(),
            code=code,
            reason=reason or code.value,
        )

    def __str__(self) -> str:
        return f'Line {self.line_number}: "{self.line_content}" - {self.reason}'


@dataclass(frozen=True)
class Record:
    record_id: int
    name: str
    value: float


@dataclass
class Statistics:
    """Running totals for one processed input.

    ``min``, ``max`` and ``average`` read as 0.0 until at least one valid
    record has been added.
    """

    total_records: int = 0
    valid_records: int = 0
    invalid_records: int = 0
    sum: float = 0.0
    _min: float | None = field(default=None, repr=False)
    _max: float | None = field(default=None, repr=False)
    _errors: list[ValidationError] = field(default_factory=list, repr=False)

    def increment_total(self) -> None:
        self.total_records += 1

    def add_valid_record(self, value: float) -> None:
        self.valid_records += 1
        self.sum += value
        if self._min is None or value < self._min:
            self._min = value
        if self._max is None or value > self._max:
            self._max = value

    def add_error(self, error: ValidationError) -> None:
        self.invalid_records += 1
        self._errors.append(error)

    @property
    def min(self) -> float:
        return self._min if self.valid_records > 0 else 0.0

    @property
    def max(self) -> float:
        return self._max if self.valid_records > 0 else 0.0

    @property
    def average(self) -> float:
        if self.valid_records > 0:
            return self.sum / self.valid_records
        return 0.0

    @property
    def errors(self) -> list[ValidationError]:
        return list(self._errors)


@dataclass(frozen=True)
class RunResult:
    status: str
    input_path: str
    output_path: str
    delimiter: str
    statistics: Statistics | None
    report: str | None
    error: str | None = None
    failed_step: str | None = None
