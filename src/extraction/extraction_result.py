"""
Extraction Result Data Classes.

This module defines the data structures produced by the DTR text
extractor: the detected layout tag, the employee identity, raw date
and time candidates, and the aggregated per-document result.

Author: HR Systems Team
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional
import json


# Documents scoring below this are flagged for manual format review
NEW_FORMAT_THRESHOLD = 0.6


class FormatType(str, Enum):
    """Known DTR layout categories."""

    STANDARD = "standard"
    TIMESHEET = "timesheet"
    ATTENDANCE_LOG = "attendance-log"
    BIOMETRIC = "biometric"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


@dataclass
class EmployeeInfo:
    """
    Employee identity found on a DTR.

    Attributes:
        employee_id: Employee number/code as printed (e.g. "EMP-042")
        name: Employee name as printed
    """
    employee_id: Optional[str] = None
    name: Optional[str] = None

    @property
    def is_present(self) -> bool:
        """True when either the id or the name was found."""
        return bool(self.employee_id) or bool(self.name)

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {'employee_id': self.employee_id, 'name': self.name}


@dataclass
class TimeCandidates:
    """
    Raw time tokens split into time-in and time-out candidates.

    The two lists are filled independently, so their lengths may differ.
    Values are kept exactly as recognized (e.g. "8:30am").
    """
    time_in: List[str] = field(default_factory=list)
    time_out: List[str] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """True when at least one time-in and one time-out were found."""
        return len(self.time_in) > 0 and len(self.time_out) > 0

    def to_dict(self) -> Dict[str, List[str]]:
        return {'time_in': list(self.time_in), 'time_out': list(self.time_out)}


@dataclass
class ExtractionResult:
    """
    Best-guess structured record extracted from one DTR's OCR text.

    A fresh instance is created per extraction call. Nothing in it is
    persisted; the DTR submission workflow decides what to store.

    Attributes:
        employee_info: Employee id and name, either may be absent
        dates: Date-like substrings in order of appearance
        times: Time-in / time-out candidates
        format_type: Detected layout category
        confidence_score: Share of the three expected data categories
                          (employee, dates, times) that were found
        company_id: Company identifier supplied by the caller, if any
        source_file: Originating file, if the text came from one

    Example:
        >>> result = extract_dtr("Time In: 8:00am\\nTime Out: 5:00pm")
        >>> result.format_type
        <FormatType.STANDARD: 'standard'>
        >>> result.is_new_format
        True
    """
    employee_info: EmployeeInfo = field(default_factory=EmployeeInfo)
    dates: List[str] = field(default_factory=list)
    times: TimeCandidates = field(default_factory=TimeCandidates)
    format_type: FormatType = FormatType.UNKNOWN
    confidence_score: float = 0.0
    company_id: Optional[Any] = None
    source_file: Optional[str] = None

    @property
    def is_new_format(self) -> bool:
        """Whether the document looks like a layout the extractor does not know."""
        return self.confidence_score < NEW_FORMAT_THRESHOLD

    @property
    def employee_id(self) -> Optional[str]:
        return self.employee_info.employee_id

    @property
    def name(self) -> Optional[str]:
        return self.employee_info.name

    @property
    def time_in(self) -> List[str]:
        return self.times.time_in

    @property
    def time_out(self) -> List[str]:
        return self.times.time_out

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary format.

        Returns:
            Dictionary representation of the extraction result.
        """
        return {
            'employee_info': self.employee_info.to_dict(),
            'dates': list(self.dates),
            'times': self.times.to_dict(),
            'format_type': self.format_type.value,
            'confidence_score': self.confidence_score,
            'is_new_format': self.is_new_format,
            'company_id': self.company_id,
            'source_file': self.source_file
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def to_flat_dict(self) -> Dict[str, Any]:
        """
        Convert to a flat dictionary suitable for spreadsheets.

        List values are joined with ", ".
        """
        return {
            'source_file': self.source_file or '',
            'company_id': self.company_id if self.company_id is not None else '',
            'format_type': self.format_type.value,
            'employee_id': self.employee_id or '',
            'name': self.name or '',
            'dates': ', '.join(self.dates),
            'time_in': ', '.join(self.time_in),
            'time_out': ', '.join(self.time_out),
            'confidence_score': round(self.confidence_score, 2),
            'is_new_format': self.is_new_format
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ExtractionResult':
        """
        Create ExtractionResult from a dictionary produced by to_dict().

        Args:
            data: Dictionary with extraction data.

        Returns:
            ExtractionResult instance.
        """
        employee = data.get('employee_info') or {}
        times = data.get('times') or {}

        return cls(
            employee_info=EmployeeInfo(
                employee_id=employee.get('employee_id'),
                name=employee.get('name')
            ),
            dates=list(data.get('dates', [])),
            times=TimeCandidates(
                time_in=list(times.get('time_in', [])),
                time_out=list(times.get('time_out', []))
            ),
            format_type=FormatType(data.get('format_type', FormatType.UNKNOWN.value)),
            confidence_score=data.get('confidence_score', 0.0),
            company_id=data.get('company_id'),
            source_file=data.get('source_file')
        )

    def __repr__(self) -> str:
        return (
            f"ExtractionResult("
            f"format={self.format_type.value}, "
            f"employee={self.employee_id or self.name}, "
            f"dates={len(self.dates)}, "
            f"in/out={len(self.time_in)}/{len(self.time_out)}, "
            f"confidence={self.confidence_score:.2f})"
        )
