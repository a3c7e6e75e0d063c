"""
Data Normalizers Module.

This module provides normalization for the raw tokens the extractor
returns:
    - Date tokens to ISO format (YYYY-MM-DD)
    - Time tokens to 24-hour HH:MM
    - Worked-hours arithmetic on normalized times

Author: HR Systems Team
"""

import re
from datetime import datetime
from typing import Optional

from dateutil import parser as date_parser

from config import get_config
from src.utils.logger import get_logger

logger = get_logger(__name__)


class DateNormalizer:
    """
    Normalizes date strings to a standard format.

    DTR dates are read month-first (01/02/2024 is January 2nd), which
    is how the supported timesheets print them. Year-first tokens are
    also accepted.

    Attributes:
        output_format: Target date format string
        input_formats: List of recognized input format strings

    Example:
        >>> normalizer = DateNormalizer()
        >>> normalizer.normalize("01/15/2024")
        "2024-01-15"
        >>> normalizer.normalize("2024/1/5")
        "2024-01-05"
    """

    def __init__(self) -> None:
        """Initialize the date normalizer with configuration."""
        self.output_format = get_config(
            "postprocessing.date.output_format",
            "%Y-%m-%d"
        )
        self.input_formats = get_config(
            "postprocessing.date.input_formats",
            [
                "%m/%d/%Y",
                "%m-%d-%Y",
                "%m/%d/%y",
                "%Y-%m-%d",
                "%Y/%m/%d"
            ]
        )

        logger.debug(f"DateNormalizer initialized (output: {self.output_format})")

    def normalize(self, date_str: str) -> Optional[str]:
        """
        Normalize a date string to the configured output format.

        Args:
            date_str: Input date string in any recognized format.

        Returns:
            Normalized date string, or None if it is not a real date.
        """
        if not date_str:
            return None

        date_str = ' '.join(date_str.split())

        parsed_date = self._try_explicit_formats(date_str)

        if parsed_date is None:
            parsed_date = self._try_dateutil_parser(date_str)

        if parsed_date:
            return parsed_date.strftime(self.output_format)

        logger.debug(f"Could not parse date: {date_str}")
        return None

    def _try_explicit_formats(self, date_str: str) -> Optional[datetime]:
        for fmt in self.input_formats:
            try:
                return datetime.strptime(date_str, fmt)
            except ValueError:
                continue
        return None

    def _try_dateutil_parser(self, date_str: str) -> Optional[datetime]:
        try:
            return date_parser.parse(date_str, dayfirst=False)
        except (ValueError, OverflowError):
            return None


class TimeNormalizer:
    """
    Normalizes time tokens to 24-hour ``HH:MM``.

    Seconds are dropped. Tokens without a meridiem are taken as
    24-hour clock values.

    Example:
        >>> normalizer = TimeNormalizer()
        >>> normalizer.normalize("5:30 PM")
        "17:30"
        >>> normalizer.normalize("12:05am")
        "00:05"
        >>> normalizer.normalize("8:01:33")
        "08:01"
    """

    TIME_PATTERN = re.compile(
        r'(\d{1,2}):(\d{2})(?::\d{2})?\s*([ap])?\.?\s*m?\.?',
        re.IGNORECASE
    )

    def normalize(self, time_str: str) -> Optional[str]:
        """
        Args:
            time_str: Raw time token (e.g. "8:30am", "17:00").

        Returns:
            ``HH:MM`` string, or None when the token is not a valid time.
        """
        if not time_str:
            return None

        match = self.TIME_PATTERN.search(time_str)
        if not match:
            logger.debug(f"Could not parse time: {time_str}")
            return None

        hours = int(match.group(1))
        minutes = int(match.group(2))
        meridiem = (match.group(3) or '').lower()

        if minutes > 59:
            return None

        if meridiem:
            if hours > 12:
                return None
            if meridiem == 'p' and hours < 12:
                hours += 12
            elif meridiem == 'a' and hours == 12:
                hours = 0
        elif hours > 23:
            return None

        return f"{hours:02d}:{minutes:02d}"


def time_to_minutes(time_str: str) -> int:
    """Convert ``HH:MM`` to minutes after midnight."""
    hours, minutes = time_str.split(':')
    return int(hours) * 60 + int(minutes)


def calculate_regular_hours(time_in: str, time_out: str, break_hours: float) -> float:
    """
    Regular hours worked between two ``HH:MM`` times, minus the break.

    A time-out earlier than the time-in is treated as the next day.
    The result never goes below zero.

    Example:
        >>> calculate_regular_hours("08:00", "17:00", 1.0)
        8.0
        >>> calculate_regular_hours("22:00", "06:00", 0.5)
        7.5
    """
    start = time_to_minutes(time_in)
    end = time_to_minutes(time_out)

    if end >= start:
        total_minutes = end - start
    else:
        total_minutes = (24 * 60 - start) + end

    total_minutes -= break_hours * 60

    return max(0.0, round(total_minutes / 60, 2))
