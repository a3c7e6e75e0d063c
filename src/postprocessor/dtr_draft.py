"""
DTR Draft Data Class.

A DTRDraft is the single-day record proposed for submission after an
extraction result has been normalized and validated.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import json


@dataclass
class DTRDraft:
    """
    Normalized DTR entry ready for review or submission.

    Attributes:
        employee_id: Employee id as extracted
        employee_name: Employee name as extracted
        date: ISO date (YYYY-MM-DD)
        time_in: 24-hour HH:MM
        time_out: 24-hour HH:MM
        break_hours: Unpaid break deducted from the day
        regular_hours: Hours worked after the break
        format_type: Detected DTR layout value
        confidence: Extraction confidence score (0-1)
        needs_review: Whether a person must check the record
        auto_submit: Whether the record can be submitted without review
        source_file: Originating file, if any
        warnings: Problems found while normalizing or validating
    """
    employee_id: Optional[str] = None
    employee_name: Optional[str] = None
    date: Optional[str] = None
    time_in: Optional[str] = None
    time_out: Optional[str] = None
    break_hours: float = 1.0
    regular_hours: Optional[float] = None
    format_type: str = "unknown"
    confidence: float = 0.0
    needs_review: bool = True
    auto_submit: bool = False
    source_file: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def fields(self) -> Dict[str, Optional[str]]:
        """Core DTR fields as a dictionary."""
        return {
            'employee_id': self.employee_id,
            'employee_name': self.employee_name,
            'date': self.date,
            'time_in': self.time_in,
            'time_out': self.time_out
        }

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.fields,
            'break_hours': self.break_hours,
            'regular_hours': self.regular_hours,
            'format_type': self.format_type,
            'confidence': self.confidence,
            'needs_review': self.needs_review,
            'auto_submit': self.auto_submit,
            'source_file': self.source_file,
            'warnings': list(self.warnings)
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
