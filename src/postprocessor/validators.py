"""
DTR Validators Module.

Checks run on a draft after normalization. A failed check never
raises; it is reported so the post-processor can flag the draft for
review.

Author: HR Systems Team
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Tuple

from config import get_config
from src.utils.logger import get_logger
from .normalizers import time_to_minutes

logger = get_logger(__name__)

# (passed, message) pairs returned by every check
Check = Tuple[bool, str]


class DateValidator:
    """
    Accepts ISO dates whose year falls inside the configured window.

    Example:
        >>> DateValidator().validate("1899-01-01")
        (False, 'Year 1899 is too old')
    """

    def __init__(self) -> None:
        self.date_format = get_config("postprocessing.date.output_format", "%Y-%m-%d")
        self.year_range = (
            get_config("postprocessing.validation.min_year", 2000),
            get_config("postprocessing.validation.max_year", 2100),
        )

    def is_valid(self, date_str: str) -> bool:
        return self.validate(date_str)[0]

    def validate(self, date_str: str) -> Check:
        if not date_str:
            return False, "Date is empty"

        try:
            year = datetime.strptime(date_str, self.date_format).year
        except ValueError:
            return False, f"Date is not {self.date_format}: {date_str}"

        earliest, latest = self.year_range
        if year < earliest:
            return False, f"Year {year} is too old"
        if year > latest:
            return False, f"Year {year} is too far in future"
        return True, "Valid date"


class TimeValidator:
    """
    Accepts 24-hour ``HH:MM`` clock times.

    Example:
        >>> TimeValidator().is_out_after_in("08:00", "17:00")
        (True, 'Valid time range')
    """

    CLOCK = re.compile(r'^([01]?\d|2[0-3]):[0-5]\d$')

    def is_valid(self, time_str: str) -> bool:
        return self.validate(time_str)[0]

    def validate(self, time_str: str) -> Check:
        if not time_str:
            return False, "Time is empty"
        if self.CLOCK.match(time_str) is None:
            return False, f"Invalid time format: {time_str}"
        return True, "Valid time"

    def is_out_after_in(self, time_in: str, time_out: str) -> Check:
        """
        Same-day ordering check for a time-in/time-out pair.

        Pairs that are not both valid clock times are left to
        validate() and pass here.
        """
        if not (self.is_valid(time_in) and self.is_valid(time_out)):
            return True, "Could not validate time range"

        if time_to_minutes(time_out) > time_to_minutes(time_in):
            return True, "Valid time range"
        return False, "Time out must be after time in"


class FieldValidator:
    """
    Per-field format checks and the required-field list of a DTR.

    ``employee`` in the required list is met by either an employee id
    or a name.

    Example:
        >>> FieldValidator().check_required_fields({"employee_id": "7"})
        (False, ['date', 'time_in', 'time_out'])
    """

    def __init__(self) -> None:
        self.required_fields: List[str] = get_config(
            "postprocessing.validation.required_fields",
            ["employee", "date", "time_in", "time_out"]
        )
        date_validator = DateValidator()
        time_validator = TimeValidator()

        self._checks: Dict[str, Callable[[str], Check]] = {
            'date': date_validator.validate,
            'time_in': time_validator.validate,
            'time_out': time_validator.validate,
        }

        logger.debug(f"Required DTR fields: {', '.join(self.required_fields)}")

    def validate_field(self, field_name: str, value: str) -> Check:
        check = self._checks.get(field_name)
        if check is not None:
            return check(value)
        return (True, "Field has value") if value else (False, "Field is empty")

    @staticmethod
    def _present(fields: Dict[str, Any], name: str) -> bool:
        if name == 'employee':
            return any(_has_text(fields.get(key)) for key in ('employee_id', 'employee_name'))
        return _has_text(fields.get(name))

    def check_required_fields(self, fields: Dict[str, Any]) -> Tuple[bool, List[str]]:
        """
        Args:
            fields: Draft field names mapped to values.

        Returns:
            Tuple of (all_present, missing field names in configured order).
        """
        missing = [name for name in self.required_fields if not self._present(fields, name)]
        return not missing, missing


def _has_text(value: Any) -> bool:
    return value is not None and str(value).strip() != ""


@dataclass
class ValidationResult:
    """Outcome of validating one draft; any error makes it invalid."""

    errors: List[str] = field(default_factory=list)
    field_results: Dict[str, Check] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def add_field_result(self, field_name: str, is_valid: bool, message: str) -> None:
        self.field_results[field_name] = (is_valid, message)
        if not is_valid:
            self.add_error(f"{field_name}: {message}")
