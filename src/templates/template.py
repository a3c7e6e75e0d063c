"""
DTR Template Data Classes.

A DTRTemplate describes one company's printed DTR layout as a single
regular expression plus a map from record field to capture group.
ParsedDTR is the single-day record produced by applying a template.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Pattern
import re
import json

from src.utils.exceptions import TemplateError


TEMPLATE_FLAGS = re.IGNORECASE | re.DOTALL

RULE_FIELDS = (
    'employee_name',
    'employee_id',
    'date',
    'time_in',
    'time_out',
    'break_hours',
    'overtime_hours',
)


@dataclass
class DTRTemplate:
    """
    A known company DTR layout.

    Attributes:
        template_id: Registry-assigned identifier
        name: Human-readable layout name
        company_id: Company the layout belongs to
        pattern: Compiled layout regex
        rules: Field name -> capture group number
        example: Sample text the layout recognizes
    """
    template_id: int
    name: str
    company_id: int
    pattern: Pattern
    rules: Dict[str, int] = field(default_factory=dict)
    example: str = ""

    @classmethod
    def build(
        cls,
        template_id: int,
        name: str,
        company_id: int,
        pattern: str,
        rules: Dict[str, int],
        example: str = ""
    ) -> 'DTRTemplate':
        """
        Compile and check a template definition.

        Raises:
            TemplateError: If the regex does not compile, or a rule names
                an unknown field or a group the regex does not have.
        """
        try:
            compiled = re.compile(pattern, TEMPLATE_FLAGS)
        except re.error as e:
            raise TemplateError(name, f"invalid pattern: {e}")

        checked_rules = {}
        for field_name, group in (rules or {}).items():
            if field_name not in RULE_FIELDS:
                raise TemplateError(name, f"unknown field '{field_name}'")
            group = int(group)
            if group < 1 or group > compiled.groups:
                raise TemplateError(
                    name,
                    f"field '{field_name}' refers to group {group}, "
                    f"pattern has {compiled.groups}"
                )
            checked_rules[field_name] = group

        return cls(
            template_id=template_id,
            name=name,
            company_id=int(company_id),
            pattern=compiled,
            rules=checked_rules,
            example=example
        )

    def match(self, text: str) -> Optional[re.Match]:
        return self.pattern.search(text)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'template_id': self.template_id,
            'name': self.name,
            'company_id': self.company_id,
            'pattern': self.pattern.pattern,
            'rules': dict(self.rules),
            'example': self.example
        }


@dataclass
class ParsedDTR:
    """
    Single-day DTR record read with a company template.

    Attributes:
        employee_id: Employee id (digits as printed)
        employee_name: Employee name
        date: ISO date
        time_in: 24-hour HH:MM
        time_out: 24-hour HH:MM
        break_hours: Break taken, 1.0 when the layout has none
        overtime_hours: Overtime, 0.0 when the layout has none
        company_id: Company of the matched layout
        dtr_type: Record period type
        template_name: Name of the matched layout
        confidence: Confidence of the template read
        needs_review: Whether a person must check the record
        remarks: Note shown to reviewers
        raw_text: Text the record was read from
    """
    employee_id: Optional[str] = None
    employee_name: Optional[str] = None
    date: Optional[str] = None
    time_in: Optional[str] = None
    time_out: Optional[str] = None
    break_hours: Optional[float] = None
    overtime_hours: Optional[float] = None
    company_id: Optional[int] = None
    dtr_type: Optional[str] = None
    template_name: Optional[str] = None
    confidence: float = 0.0
    needs_review: bool = True
    remarks: Optional[str] = None
    raw_text: str = ""

    @property
    def is_matched(self) -> bool:
        return self.template_name is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'employee_id': self.employee_id,
            'employee_name': self.employee_name,
            'date': self.date,
            'time_in': self.time_in,
            'time_out': self.time_out,
            'break_hours': self.break_hours,
            'overtime_hours': self.overtime_hours,
            'company_id': self.company_id,
            'dtr_type': self.dtr_type,
            'template_name': self.template_name,
            'confidence': self.confidence,
            'needs_review': self.needs_review,
            'remarks': self.remarks,
            'raw_text': self.raw_text
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
