"""
Field Extractors Module.

Stateless, regex-based extractors for the three data categories a DTR
is expected to carry: employee identity, dates and time-in/time-out
values. Each extractor scans the same list of OCR lines and never
raises on noisy input; a missing pattern just yields an empty field.

Author: HR Systems Team
"""

import re
from typing import Callable, Dict, List, Union

from src.utils.logger import get_logger
from .extraction_result import EmployeeInfo, FormatType, TimeCandidates

logger = get_logger(__name__)

# OCR output is matched as ASCII; fullwidth digits and letter look-alikes are noise
_ASCII_I = re.IGNORECASE | re.ASCII


class EmployeeInfoExtractor:
    """
    Finds the employee id and name on a DTR.

    All lines are searched as one buffer so that a label on one line
    can pick up its value from the next line. A captured value stops
    at the end of its own line.

    Example:
        >>> extractor = EmployeeInfoExtractor()
        >>> extractor.extract(["Employee No. 00123", "Name: Ana Reyes"])
        EmployeeInfo(employee_id='00123', name='Ana Reyes')
    """

    # "number" is listed before "no" so that "Employee Number" is consumed whole
    EMPLOYEE_ID_PATTERN = re.compile(
        r'employee\s*(?:number|no|id)?[\s:.#]*([a-z0-9-]+)',
        _ASCII_I
    )

    NAME_PATTERN = re.compile(
        r'name[\s:]*([a-z \t.]+)',
        _ASCII_I
    )

    def extract(self, lines: List[str]) -> EmployeeInfo:
        """
        Extract employee information.

        Args:
            lines: Non-blank OCR lines of one document.

        Returns:
            EmployeeInfo; fields not found are None.
        """
        buffer = '\n'.join(lines)

        info = EmployeeInfo(
            employee_id=self._first_capture(self.EMPLOYEE_ID_PATTERN, buffer),
            name=self._first_capture(self.NAME_PATTERN, buffer)
        )

        logger.debug(f"Employee info: id={info.employee_id!r}, name={info.name!r}")
        return info

    @staticmethod
    def _first_capture(pattern, text: str):
        match = pattern.search(text)
        if match:
            value = match.group(1).strip()
            if value:
                return value
        return None


class DateExtractor:
    """
    Collects date-like tokens in reading order.

    Both day/month-first (01/15/2024) and year-first (2024-01-15)
    layouts are recognized. Tokens are returned verbatim: no calendar
    validation, no deduplication.

    Example:
        >>> DateExtractor().extract(["01/15/2024 to 01/16/2024"])
        ['01/15/2024', '01/16/2024']
    """

    DATE_PATTERN = re.compile(
        r'\d{1,2}[-/]\d{1,2}[-/]\d{2,4}|\d{2,4}[-/]\d{1,2}[-/]\d{1,2}',
        re.ASCII
    )

    def extract(self, lines: List[str]) -> List[str]:
        dates = [
            match.group(0)
            for line in lines
            for match in self.DATE_PATTERN.finditer(line)
        ]
        logger.debug(f"Found {len(dates)} date candidate(s)")
        return dates


class TimeExtractor:
    """
    Splits time tokens into time-in and time-out candidates.

    How a line is read depends on the detected layout:

    - standard: lines labelled "Time In" / "Time Out" give their first
      time token to the matching list. A line carrying both labels
      feeds both lists.
    - biometric: a line with two or more tokens gives its first token
      to time-in and its second to time-out.
    - anything else: a line with two or more tokens gives its first
      token to time-in and its last to time-out. A lone token goes to
      time-in if the line mentions "in"/"arrival", otherwise to
      time-out if it mentions "out"/"departure", otherwise nowhere.

    Example:
        >>> extractor = TimeExtractor()
        >>> extractor.extract(["8:01am 5:03pm"], FormatType.BIOMETRIC)
        TimeCandidates(time_in=['8:01am'], time_out=['5:03pm'])
    """

    # H:MM with optional meridiem, used on labelled lines
    LABELED_TIME_PATTERN = re.compile(r'\d{1,2}:\d{2}(?:\s*[ap]m)?', _ASCII_I)

    # H:MM[:SS] with optional meridiem, used on unlabelled lines
    TIME_PATTERN = re.compile(r'\d{1,2}:\d{2}(?::\d{2})?(?:\s*[ap]m)?', _ASCII_I)

    TIME_IN_LABEL = re.compile(r'time\s*in', _ASCII_I)
    TIME_OUT_LABEL = re.compile(r'time\s*out', _ASCII_I)

    IN_CONTEXT_WORDS = ('in', 'arrival')
    OUT_CONTEXT_WORDS = ('out', 'departure')

    def __init__(self) -> None:
        self._handlers: Dict[FormatType, Callable[[List[str]], TimeCandidates]] = {
            FormatType.STANDARD: self._extract_labeled,
            FormatType.BIOMETRIC: self._extract_paired,
        }

    def extract(
        self,
        lines: List[str],
        format_type: Union[FormatType, str]
    ) -> TimeCandidates:
        """
        Extract time candidates for a document of the given layout.

        Args:
            lines: Non-blank OCR lines of one document.
            format_type: Detected layout (enum member or its value).

        Returns:
            TimeCandidates with raw tokens.

        Raises:
            ValueError: If format_type is not a known layout value.
        """
        format_type = FormatType(format_type)
        handler = self._handlers.get(format_type, self._extract_generic)
        times = handler(lines)

        logger.debug(
            f"Times ({format_type.value}): "
            f"{len(times.time_in)} in, {len(times.time_out)} out"
        )
        return times

    def _extract_labeled(self, lines: List[str]) -> TimeCandidates:
        times = TimeCandidates()

        for line in lines:
            if self.TIME_IN_LABEL.search(line):
                match = self.LABELED_TIME_PATTERN.search(line)
                if match:
                    times.time_in.append(match.group(0))

            if self.TIME_OUT_LABEL.search(line):
                match = self.LABELED_TIME_PATTERN.search(line)
                if match:
                    times.time_out.append(match.group(0))

        return times

    def _extract_paired(self, lines: List[str]) -> TimeCandidates:
        times = TimeCandidates()

        for line in lines:
            tokens = self.TIME_PATTERN.findall(line)
            if len(tokens) >= 2:
                times.time_in.append(tokens[0])
                times.time_out.append(tokens[1])

        return times

    def _extract_generic(self, lines: List[str]) -> TimeCandidates:
        times = TimeCandidates()

        for line in lines:
            tokens = self.TIME_PATTERN.findall(line)

            if len(tokens) >= 2:
                times.time_in.append(tokens[0])
                times.time_out.append(tokens[-1])
            elif len(tokens) == 1:
                lowered = line.lower()
                # "in" is checked first, so a line with both contexts counts as time-in
                if any(word in lowered for word in self.IN_CONTEXT_WORDS):
                    times.time_in.append(tokens[0])
                elif any(word in lowered for word in self.OUT_CONTEXT_WORDS):
                    times.time_out.append(tokens[0])

        return times
